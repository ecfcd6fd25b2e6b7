"""A command-line filter that fetches one gopher item and writes it to stdout."""

from __future__ import annotations

import getopt
import re
import socket
import sys
from dataclasses import dataclass
from typing import BinaryIO, Optional
from urllib.parse import unquote, urlsplit

from gopherkit.directory import ItemType, MenuItem, ProtocolError

_ENCODING = "latin-1"
_DEFAULT_HOST = "localhost"
_DEFAULT_PORT = 70
_DEFAULT_TIMEOUT = 10
_CHUNK = 1024

_TEXT_TYPES = frozenset(
    t.value for t in (ItemType.FILE, ItemType.DIRECTORY, ItemType.MACHEX, ItemType.INDEX)
)
_BINARY_TYPES = frozenset(
    t.value
    for t in (ItemType.SOUND, ItemType.IMAGE, ItemType.GIF, ItemType.UNIXBIN, ItemType.PCBIN)
)
_SUPPORTED_TYPES = _TEXT_TYPES | _BINARY_TYPES | frozenset(
    t.value for t in (ItemType.CSO, ItemType.HTML, ItemType.MIME)
)


class FilterError(Exception):
    """A failure of the filter, carrying the process exit code."""

    def __init__(self, code: int, message: str) -> None:
        super().__init__(message)
        self.code = code


@dataclass
class FilterRequest:
    """What to fetch and where from."""

    host: str = _DEFAULT_HOST
    port: int = _DEFAULT_PORT
    type: Optional[str] = None
    path: Optional[str] = None
    item: str = ""
    timeout: float = _DEFAULT_TIMEOUT
    from_stdin: bool = False


def _atoi(text: str) -> int:
    match = re.match(r"\s*([+-]?\d+)", text)
    return int(match.group(1)) if match else 0


def parse_url(url: str) -> dict:
    """Split a gopher URL into its host, port, type and path."""
    parts = urlsplit(url)
    if parts.scheme.lower() != "gopher" or not parts.hostname:
        raise FilterError(-1, f"not a gopher URL: {url!r}")
    try:
        port = parts.port or _DEFAULT_PORT
    except ValueError:
        raise FilterError(-1, f"bad port in URL: {url!r}") from None

    selector = unquote(parts.path, encoding=_ENCODING)
    if parts.query:
        selector += "?" + unquote(parts.query, encoding=_ENCODING)
    selector = selector[1:] if selector.startswith("/") else selector

    if selector:
        kind, path = selector[0], selector[1:]
    else:
        kind, path = ItemType.DIRECTORY.value, ""
    return {"host": parts.hostname, "port": port, "type": kind, "path": path}


def parse_args(argv: list[str]) -> FilterRequest:
    """Build a request from command-line arguments."""
    try:
        options, rest = getopt.getopt(argv, "h:s:p:i:t:T:")
    except getopt.GetoptError as exc:
        raise FilterError(-1, str(exc)) from None

    request = FilterRequest()
    manual = False
    has_path = has_type = False

    for option, value in options:
        if option == "-s":
            request.port = _atoi(value)
            manual = True
        elif option == "-p":
            request.path = value
            manual = has_path = True
        elif option == "-h":
            request.host = value
            manual = True
        elif option == "-T":
            request.timeout = _atoi(value)
        elif option == "-t":
            request.type = value[:1]
            manual = has_type = True
        elif option == "-i":
            request.item = value
            manual = True

    if rest and ":" in rest[0]:
        found = parse_url(rest[0])
        manual = manual or bool(found)
        request.host = found["host"]
        request.port = found["port"]
        request.type = found["type"]
        request.path = found["path"]
        has_path = has_type = True

    if manual and not (has_path and has_type):
        raise FilterError(-2, "manual operation needs both a path and a type")

    request.from_stdin = not manual
    return request


def build_request(path: str, item: str = "") -> bytes:
    """The selector line sent to the server."""
    text = path + ("\t" + item if item else "") + "\r\n"
    return text.encode(_ENCODING)


def _copy_text(sock: socket.socket, out: BinaryIO) -> None:
    with sock.makefile("rb") as reader:
        for raw in iter(reader.readline, b""):
            line = raw.rstrip(b"\r\n")
            if line == b".":
                break
            out.write(line + b"\n")


def _copy_binary(sock: socket.socket, out: BinaryIO) -> None:
    while True:
        chunk = sock.recv(_CHUNK)
        if not chunk:
            break
        try:
            out.write(chunk)
        except OSError as exc:
            raise FilterError(-6, f"cannot write output: {exc}") from None


def fetch(request: FilterRequest, out: BinaryIO) -> None:
    """Send the request and copy the reply to ``out``."""
    kind = request.type or ""
    if kind not in _SUPPORTED_TYPES:
        raise FilterError(-4, f"unsupported item type {kind!r}")

    try:
        sock = socket.create_connection((request.host, request.port))
    except OSError as exc:
        raise FilterError(-5, f"cannot connect: {exc}") from None

    with sock:
        sock.sendall(build_request(request.path or "", request.item))
        sock.settimeout(request.timeout if request.timeout else None)
        try:
            if kind in _TEXT_TYPES:
                _copy_text(sock, out)
            elif kind in _BINARY_TYPES:
                _copy_binary(sock, out)
        except TimeoutError:
            raise FilterError(-7, "timed out waiting for data") from None


def _read_stdin_item(request: FilterRequest) -> None:
    raw = sys.stdin.buffer.readline()
    try:
        item = MenuItem.from_line(raw.decode(_ENCODING))
    except ProtocolError:
        raise FilterError(-3, "cannot read a selector from standard input") from None
    request.type = item.type.value
    request.path = item.path
    request.host = item.host
    request.port = item.port


def main(argv: Optional[list[str]] = None) -> int:
    """Run the filter; return the exit status."""
    if argv is None:
        argv = sys.argv[1:]
    try:
        request = parse_args(argv)
        if request.from_stdin:
            _read_stdin_item(request)
        out = sys.stdout.buffer
        fetch(request, out)
        out.flush()
    except FilterError as exc:
        return exc.code
    return 0


if __name__ == "__main__":
    sys.exit(main())