"""Gopher menus, Gopher+ blocks, a text pager model and a fetch filter."""

__version__ = "0.1.0"

__all__ = ["blocks", "debug", "directory", "gophfilt", "pager"]