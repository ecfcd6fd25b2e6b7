import io

import pytest

from gopherkit.directory import GopherDirectory, ItemType, MenuItem, ProtocolError


def make(path, title="t", num=0, item_type=ItemType.FILE):
    return MenuItem(type=item_type, title=title, path=path, host="example.com", port=70, num=num)


def test_from_line_parses_fields():
    item = MenuItem.from_line("1Docs\t/docs\texample.com\t70\r\n")
    assert item.type is ItemType.DIRECTORY
    assert item.title == "Docs"
    assert item.path == "/docs"
    assert item.host == "example.com"
    assert item.port == 70
    assert item.plus is False


def test_from_line_plus_flag():
    item = MenuItem.from_line("0Readme\t0/readme\texample.com\t70\t+")
    assert item.plus is True


def test_to_line_round_trip():
    line = "0Readme\t0/readme\texample.com\t7070\t+\r\n"
    assert MenuItem.from_line(line).to_line() == line


def test_from_line_errors():
    with pytest.raises(ProtocolError):
        MenuItem.from_line("")
    with pytest.raises(ProtocolError):
        MenuItem.from_line("QBad\tx\th\t70")
    with pytest.raises(ProtocolError):
        MenuItem.from_line("0Title only")
    with pytest.raises(ProtocolError):
        MenuItem.from_line("0T\tp\th\tnotaport")


def test_info_line_may_be_short():
    item = MenuItem.from_line("iJust text")
    assert item.type is ItemType.INFO
    assert item.title == "Just text"
    assert item.port == 0


def test_merge_overlays_non_empty_fields():
    base = make("0/a", title="Old")
    base.merge(MenuItem(type=ItemType.DIRECTORY, title="New", path="", host="", port=0))
    assert base.title == "New"
    assert base.type is ItemType.DIRECTORY
    assert base.host == "example.com"
    assert base.port == 70


def test_add_skips_ignored_and_copies():
    gd = GopherDirectory()
    item = make("0/a")
    gd.add(item)
    gd.add(make("0/b", item_type=ItemType.IGNORE))
    assert len(gd) == 1
    item.title = "changed"
    assert gd[0].title == "t"


def test_search_ignores_first_character():
    gd = GopherDirectory()
    gd.add(make("0/a"))
    gd.add(make("1/b"))
    assert gd.search("9/b") == 1
    assert gd.search("0/zzz") is None
    assert gd.search("x") is None
    assert gd.search(None) is None


def test_add_merge_merges_and_deletes():
    gd = GopherDirectory()
    gd.add(make("0/a", title="A"))
    gd.add(make("0/b", title="B"))
    gd.add_merge(make("1/a", title="A2"))
    assert len(gd) == 2
    assert gd[0].title == "A2"
    gd.add_merge(make("X/a", item_type=ItemType.IGNORE))
    assert [i.path for i in gd] == ["0/b"]
    gd.add_merge(make("0/c"))
    assert [i.path for i in gd] == ["0/b", "0/c"]


def test_delete_shifts_items_and_current():
    gd = GopherDirectory()
    for p in ("0/a", "0/b", "0/c"):
        gd.add(make(p))
    gd.current_item = 2
    gd.delete(0)
    assert [i.path for i in gd] == ["0/b", "0/c"]
    assert gd.current_item == 1
    gd.delete(1)
    assert [i.path for i in gd] == ["0/b"]
    with pytest.raises(IndexError):
        gd.delete(5)


def test_sort_numbers_then_titles():
    gd = GopherDirectory()
    gd.add(make("0/b", title="b"))
    gd.add(make("0/n-1", title="neg", num=-1))
    gd.add(make("0/n2", title="two", num=2))
    gd.add(make("0/a", title="a"))
    gd.add(make("0/n1", title="one", num=1))
    gd.add(make("0/n-2", title="negtwo", num=-2))
    gd.sort()
    assert [i.path for i in gd] == ["0/n1", "0/n2", "0/a", "0/b", "0/n-2", "0/n-1"]


def test_from_net_stops_at_dot_and_skips_bad_lines():
    data = (
        b"0One\t/one\texample.com\t70\r\n"
        b"QBad\t/bad\texample.com\t70\r\n"
        b"1Two\t/two\texample.com\t70\r\n"
        b".\r\n"
        b"0After\t/after\texample.com\t70\r\n"
    )
    calls = []
    gd = GopherDirectory()
    count = gd.from_net(io.BytesIO(data), lambda: calls.append(1))
    assert count == 2
    assert len(calls) == 2
    assert [i.title for i in gd] == ["One", "Two"]


def test_to_net_round_trip():
    gd = GopherDirectory()
    gd.add(make("0/a", title="A"))
    gd.add(make("1/b", title="B", item_type=ItemType.DIRECTORY))
    out = io.BytesIO()
    gd.to_net(out)
    again = GopherDirectory()
    again.from_net(io.BytesIO(out.getvalue()))
    assert [(i.type, i.title, i.path, i.port) for i in again] == [
        (i.type, i.title, i.path, i.port) for i in gd
    ]


def test_to_net_html_wrapper_and_prefix():
    gd = GopherDirectory()
    gd.add(make("0/a", title="A"))
    out = io.BytesIO()
    seen = []
    gd.to_net(out, html=True, prefix=lambda item, stream: seen.append(item.path))
    data = out.getvalue()
    assert data.startswith(b"<DL COMPACT>\r\n<DT>")
    assert data.endswith(b"</DL>\r\n")
    assert seen == ["0/a"]


def test_set_location_stores_copy():
    gd = GopherDirectory()
    loc = make("1/x")
    gd.set_location(loc)
    loc.path = "1/y"
    assert gd.location.path == "1/x"