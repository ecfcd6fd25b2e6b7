import pytest

from gopherkit import debug


@pytest.fixture(autouse=True)
def _restore_flag():
    previous = debug.is_debug()
    yield
    debug.set_debug(previous)


def test_debugf_formats_to_stderr(capsys):
    debug.debugf("value=%d name=%s\n", 5, "menu")
    captured = capsys.readouterr()
    assert captured.err == "value=5 name=menu\n"
    assert captured.out == ""


def test_debugf_without_arguments_collapses_percent(capsys):
    debug.debugf("100%% done\n")
    assert capsys.readouterr().err == "100% done\n"


def test_debugf_rejects_mismatched_arguments():
    with pytest.raises(TypeError):
        debug.debugf("%d %d\n", 1)


def test_set_debug_returns_previous_setting():
    debug.set_debug(False)
    assert debug.set_debug(True) is False
    assert debug.is_debug() is True
    assert debug.set_debug(False) is True
    assert debug.is_debug() is False


def test_set_debug_coerces_to_bool():
    debug.set_debug(1)
    assert debug.is_debug() is True
    debug.set_debug(0)
    assert debug.is_debug() is False