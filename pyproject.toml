[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "gopherkit"
version = "0.1.0"
description = "Gopher menus, Gopher+ blocks, a text pager model and a command-line fetch filter"
requires-python = ">=3.10"
dependencies = []
keywords = ["gopher", "gopher+", "protocol", "menu", "pager", "client"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
gophfilt = "gopherkit.gophfilt:main"

[tool.hatch.build.targets.wheel]
packages = ["gopherkit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
