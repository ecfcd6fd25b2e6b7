"""Gopher+ attribute blocks: named chunks of text, file references or menu items."""

from __future__ import annotations

import copy as _copy
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import BinaryIO, Iterable, Optional, Sequence, Union

from gopherkit.directory import MenuItem

_ENCODING = "latin-1"


class BlockType(IntEnum):
    """The kinds of gopher+ block."""

    UNKNOWN = 0
    VIEW = 1
    ASK = 2
    ABSTRACT = 3
    ADMIN = 4


class BlockDataType(Enum):
    """What a block's data holds."""

    NONE = 0
    FILE = 1
    TEXT = 2
    GREF = 3


BlockData = Union[None, str, list, MenuItem]


@dataclass
class Block:
    """A named gopher+ block holding text lines, a filename or a menu item."""

    name: str = ""
    btype: BlockType = BlockType.UNKNOWN
    datatype: BlockDataType = BlockDataType.NONE
    data: BlockData = None

    def set_file(self, filename: str) -> None:
        """Make the block refer to a file whose lines are sent on output."""
        self.datatype = BlockDataType.FILE
        self.data = filename

    def set_text(self, lines: Optional[Iterable[str]] = None) -> None:
        """Make the block hold text; if ``lines`` is given it replaces the text."""
        if self.datatype is not BlockDataType.TEXT:
            self.datatype = BlockDataType.TEXT
            self.data = []
        if lines is not None:
            self.data = list(lines)

    def add_text(self, text: str) -> None:
        """Append a line of text, turning the block into a text block if needed."""
        self.set_text()
        self.data.append(text)

    def set_reference(self, item: MenuItem) -> None:
        """Make the block hold a copy of a gopher menu item."""
        self.datatype = BlockDataType.GREF
        self.data = _copy.copy(item)

    def line_count(self) -> Optional[int]:
        """Number of text lines, or None if this is not a text block."""
        if self.datatype is BlockDataType.TEXT:
            return len(self.data)
        return None

    def line(self, lineno: int) -> Optional[str]:
        """The text line at ``lineno``, or None if this is not a text block."""
        if self.datatype is BlockDataType.TEXT:
            return self.data[lineno]
        return None

    def copy(self) -> "Block":
        """An independent copy of this block."""
        return Block(
            name=self.name,
            btype=self.btype,
            datatype=self.datatype,
            data=_copy.deepcopy(self.data),
        )

    def to_net(self, stream: BinaryIO, show_header: bool = True) -> None:
        """Write the block in gopher+ wire form."""
        if show_header:
            stream.write(f"+{self.name}:".encode(_ENCODING))

        if self.datatype is BlockDataType.GREF:
            stream.write(b" ")
            stream.write(self.data.to_line().encode(_ENCODING))
        elif self.datatype is BlockDataType.TEXT:
            stream.write(b"\r\n")
            for text in self.data:
                stream.write(b" " + text.encode(_ENCODING) + b"\r\n")
        elif self.datatype is BlockDataType.FILE:
            stream.write(b"\r\n")
            try:
                handle = open(self.data, "rb")
            except OSError:
                return
            with handle:
                for raw in handle:
                    stream.write(b" " + raw.rstrip(b"\r\n") + b"\r\n")


def _read_line(stream: BinaryIO) -> Optional[str]:
    raw = stream.readline()
    if not raw:
        return None
    return raw.decode(_ENCODING).rstrip("\r\n")


def read_block(stream: BinaryIO, name: str) -> tuple[Block, bool]:
    """Read one block body whose leading '+' and ``name:`` were already consumed.

    Returns the block and whether another block follows (its '+' has then
    been consumed). A malformed menu item in a reference block raises
    ``ProtocolError``.
    """
    block = Block(name=name)

    first = stream.read(1)
    if not first:
        return block, False

    if first == b" ":
        line = _read_line(stream)
        block.set_reference(MenuItem.from_line(line or ""))
        while True:
            char = stream.read(1)
            if not char:
                return block, False
            if char == b"+":
                return block, True
            if _read_line(stream) is None:
                return block, False

    # Discard the rest of the header line.
    if first != b"\n":
        _read_line(stream)

    while True:
        char = stream.read(1)
        if not char:
            return block, False
        if char == b"+":
            return block, True
        if char == b".":
            _read_line(stream)
            return block, False
        line = _read_line(stream)
        if char == b" ":
            block.add_text(line or "")
        elif line is None:
            return block, False


def find_block(blocks: Optional[Sequence[Block]], name: str) -> Optional[int]:
    """Index of the first block called ``name``, or None."""
    if blocks is None:
        return None
    for index, block in enumerate(blocks):
        if block.name == name:
            return index
    return None