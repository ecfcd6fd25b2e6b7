"""Gopher menu items and directories: parsing, merging, sorting and serialising."""

from __future__ import annotations

import dataclasses
import functools
import html
import locale
from dataclasses import dataclass, field
from enum import Enum
from typing import BinaryIO, Callable, Iterator, Optional
from urllib.parse import quote

_ENCODING = "latin-1"


class ProtocolError(ValueError):
    """A menu line could not be understood."""


class ItemType(str, Enum):
    """Gopher item type characters."""

    FILE = "0"
    DIRECTORY = "1"
    CSO = "2"
    ERROR = "3"
    MACHEX = "4"
    PCBIN = "5"
    UUENCODED = "6"
    INDEX = "7"
    TELNET = "8"
    UNIXBIN = "9"
    REDUNDANT = "+"
    TN3270 = "T"
    GIF = "g"
    IMAGE = "I"
    SOUND = "s"
    HTML = "h"
    INFO = "i"
    MIME = "M"
    EVENT = "e"
    IGNORE = "X"


@dataclass
class MenuItem:
    """One entry of a gopher menu."""

    type: ItemType = ItemType.FILE
    title: Optional[str] = ""
    path: str = ""
    host: str = ""
    port: int = 0
    plus: bool = False
    num: int = 0

    @classmethod
    def from_line(cls, line: str) -> "MenuItem":
        """Parse a single menu line (with or without its line ending)."""
        line = line.rstrip("\r\n")
        if not line:
            raise ProtocolError("empty menu line")
        try:
            item_type = ItemType(line[0])
        except ValueError:
            raise ProtocolError(f"unknown item type {line[0]!r}") from None

        fields = line[1:].split("\t")
        if len(fields) < 4 and item_type is not ItemType.INFO:
            raise ProtocolError(f"too few fields in menu line {line!r}")
        fields += [""] * (4 - len(fields))

        port_text = fields[3].strip()
        try:
            port = int(port_text) if port_text else 0
        except ValueError:
            raise ProtocolError(f"bad port {port_text!r}") from None

        plus = len(fields) > 4 and fields[4].startswith("+")
        return cls(
            type=item_type,
            title=fields[0],
            path=fields[1],
            host=fields[2],
            port=port,
            plus=plus,
        )

    def to_line(self) -> str:
        """Render the item as a menu line ending in CRLF."""
        line = f"{self.type.value}{self.title or ''}\t{self.path}\t{self.host}\t{self.port}"
        if self.plus:
            line += "\t+"
        return line + "\r\n"

    def to_html(self) -> str:
        """Render the item as an HTML anchor line."""
        title = html.escape(self.title or "")
        if self.type is ItemType.INFO:
            return f"{title}\r\n"
        url = f"gopher://{self.host}:{self.port}/{self.type.value}{quote(self.path)}"
        return f'<A HREF="{html.escape(url)}">{title}</A>\r\n'

    def merge(self, other: "MenuItem") -> None:
        """Overlay the non-empty fields of ``other`` onto this item."""
        self.type = other.type
        if other.title:
            self.title = other.title
        if other.path:
            self.path = other.path
        if other.host:
            self.host = other.host
        if other.port:
            self.port = other.port
        if other.num:
            self.num = other.num
        self.plus = self.plus or other.plus


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


def _compare(a: MenuItem, b: MenuItem) -> int:
    if a.title is None:
        return 1
    if b.title is None:
        return -1
    if a.num == b.num:
        return locale.strcoll(a.title, b.title)
    if _sign(a.num) == _sign(b.num):
        return -1 if a.num < b.num else 1
    # Signs differ: positive numbers come first, negatives last.
    return -1 if a.num > b.num else 1


def _split_error_item(item: MenuItem) -> Iterator[MenuItem]:
    """Split an error item whose title spans several lines into info items."""
    if item.type is not ItemType.ERROR or not item.title or "\n" not in item.title:
        yield item
        return
    first, *rest = item.title.split("\n")
    yield dataclasses.replace(item, title=first)
    for text in rest:
        yield dataclasses.replace(item, type=ItemType.INFO, title=text)


@dataclass
class GopherDirectory:
    """An ordered collection of menu items."""

    title: str = ""
    location: Optional[MenuItem] = None
    current_item: int = 1
    _items: list[MenuItem] = field(default_factory=list, repr=False)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[MenuItem]:
        return iter(self._items)

    def __getitem__(self, index: int) -> MenuItem:
        return self._items[index]

    def set_location(self, item: MenuItem) -> None:
        """Record where this directory came from (stores a copy)."""
        self.location = dataclasses.replace(item)

    def add(self, item: MenuItem) -> None:
        """Append a copy of ``item``; items of the ignore type are dropped."""
        if item.type is not ItemType.IGNORE:
            self._items.append(dataclasses.replace(item))

    def add_merge(self, item: MenuItem) -> None:
        """Add ``item``, merging with or deleting an entry of the same path."""
        index = self.search(item.path)
        if index is None:
            self.add(item)
        elif item.type is ItemType.IGNORE:
            self.delete(index)
        else:
            self._items[index].merge(item)

    def search(self, path: Optional[str]) -> Optional[int]:
        """Find the item whose path matches, ignoring the first character."""
        if path is None or len(path) <= 1:
            return None
        for index, item in enumerate(self._items):
            if item.path and len(item.path) > 1 and item.path[1:] == path[1:]:
                return index
        return None

    def delete(self, index: int) -> None:
        """Remove the item at ``index``, keeping the current item in range."""
        if not 0 <= index < len(self._items):
            raise IndexError("directory index out of range")
        was_last = index == len(self._items) - 1
        del self._items[index]
        if was_last:
            return
        if self.current_item > len(self._items) - 1:
            self.current_item -= 1

    def sort(self) -> None:
        """Sort by number (positives first, then unnumbered, then negatives), then title."""
        self._items.sort(key=functools.cmp_to_key(_compare))

    def from_net(
        self,
        stream: BinaryIO,
        each_item: Optional[Callable[[], object]] = None,
    ) -> int:
        """Read menu lines until a lone '.' or end of stream; return lines accepted."""
        count = 0
        for raw in iter(stream.readline, b""):
            line = raw.decode(_ENCODING).rstrip("\r\n")
            if line == ".":
                break
            try:
                item = MenuItem.from_line(line)
            except ProtocolError:
                continue
            for piece in _split_error_item(item):
                self.add(piece)
            if each_item is not None:
                each_item()
            count += 1
        return count

    def to_net(
        self,
        stream: BinaryIO,
        html: bool = False,
        prefix: Optional[Callable[[MenuItem, BinaryIO], object]] = None,
    ) -> None:
        """Write every item to ``stream``, optionally as an HTML definition list."""
        if html:
            stream.write(b"<DL COMPACT>\r\n")
        for item in self._items:
            if html:
                stream.write(b"<DT>")
            if prefix is not None:
                prefix(item, stream)
            text = item.to_html() if html else item.to_line()
            stream.write(text.encode(_ENCODING))
        if html:
            stream.write(b"</DL>\r\n")