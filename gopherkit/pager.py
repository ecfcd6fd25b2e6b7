"""A screen-oriented text pager model with paging, searching and term highlighting."""

from __future__ import annotations

from typing import Iterable, Optional

_ENCODING = "latin-1"
_MAX_WORDS = 40
_CONNECTIVES = frozenset({"and", "or", "not"})

_HELP_LINES = (
    "u, ^G, left : Return to menu",
    "space, down : Move to the next page",
    "b, up       : Move to the previous page",
    "/           : Search for text",
    "m           : mail current document",
    "s           : save current document",
    "p           : print current document",
    "D           : download current document",
)


def help_text() -> list[str]:
    """The lines of the pager help dialog."""
    return list(_HELP_LINES)


def parse_search_string(text: Optional[str]) -> list[str]:
    """Split a search string into words, dropping the connectives and/or/not."""
    if text is None:
        return []
    words: list[str] = []
    for word in text.split():
        if len(words) >= _MAX_WORDS:
            break
        if word.lower() in _CONNECTIVES:
            continue
        words.append(word)
    return words


def highlight_segments(
    line: str, words: Iterable[str], slash: str = ""
) -> list[tuple[str, bool]]:
    """Split ``line`` into (text, highlighted) pieces marking search matches.

    The search text ``slash`` wins a tie with a word starting at the same
    place; among words, the earlier one in ``words`` wins.
    """
    terms = [word for word in words if word]
    if not terms and not slash:
        return [(line, False)] if line else []

    lowered_terms = [term.lower() for term in terms]
    lowered_slash = slash.lower()
    segments: list[tuple[str, bool]] = []

    while line:
        lowered = line.lower()
        best: Optional[int] = None
        best_len = 0
        if slash:
            found = lowered.find(lowered_slash)
            if found >= 0:
                best, best_len = found, len(slash)
        for term, lowered_term in zip(terms, lowered_terms):
            found = lowered.find(lowered_term)
            if found >= 0 and (best is None or found < best):
                best, best_len = found, len(term)

        if best is None:
            segments.append((line, False))
            break
        if best:
            segments.append((line[:best], False))
        segments.append((line[best : best + best_len], True))
        line = line[best + best_len :]

    return segments


def percent_text(position: int, total: int) -> str:
    """The progress indicator shown at the top right of the pager."""
    per = (100 * position) // total if total else 0
    text = f"{per}%" if total else ""
    if per < 100:
        text += " "
    if per < 10:
        text += " "
    return text


class Pager:
    """Pages through a text file a screenful at a time.

    ``lines`` and ``cols`` describe the screen: four lines are taken by the
    title and button bars, and a file line longer than ``cols`` is shown
    across several screen lines.
    """

    def __init__(self, path: str, lines: int, cols: int) -> None:
        if lines - 4 <= 0:
            raise ValueError("screen too short to page")
        if cols <= 0:
            raise ValueError("screen too narrow to page")
        with open(path, "rb") as handle:
            self._data = handle.read()
        self.path = path
        self.page_lines = lines - 4
        self.cols = cols
        self.total = len(self._data)
        self.position = 0
        self.current_page = 0
        self.words: list[str] = []
        self.slash = ""
        self.page: list[str] = []
        self._positions: list[int] = []
        self._display()

    def _read_line(self) -> Optional[bytes]:
        start = self.position
        limit = start + self.cols
        newline = self._data.find(b"\n", start, limit)
        end = limit if newline < 0 else newline + 1
        chunk = self._data[start:end]
        if not chunk:
            return None
        self.position += len(chunk)
        return chunk

    def _mark_page(self) -> None:
        if self.current_page < len(self._positions):
            self._positions[self.current_page] = self.position
        else:
            self._positions.append(self.position)
        self.current_page += 1

    def _seek(self, page: int) -> None:
        if page < self.current_page:
            self.position = self._positions[page]
            self.current_page = page

    def _display(self) -> list[str]:
        self._mark_page()
        shown: list[str] = []
        for _ in range(self.page_lines):
            chunk = self._read_line()
            if chunk is None:
                break
            shown.append(chunk.decode(_ENCODING).rstrip("\r\n"))
        self.page = shown
        return shown

    def next_page(self) -> list[str]:
        """Show the next page, if there is more of the file."""
        if self.position < self.total:
            self._display()
        return self.page

    def previous_page(self) -> list[str]:
        """Show the previous page, if there is one."""
        if self.current_page > 1:
            self._seek(self.current_page - 2)
            self._display()
        return self.page

    def first_page(self) -> list[str]:
        """Go back to the first page."""
        if self.current_page > 1:
            self._seek(0)
            self._display()
        return self.page

    def last_page(self) -> list[str]:
        """Page forward until the end of the file is shown."""
        while self.position < self.total:
            self._display()
        return self.page

    def reload_page(self) -> list[str]:
        """Redraw the page currently shown."""
        self._seek(self.current_page - 1)
        return self._display()

    def _scan(self, text: str) -> bool:
        needle = text.lower()
        while True:
            self._mark_page()
            for _ in range(self.page_lines):
                chunk = self._read_line()
                if chunk is None:
                    return False
                if needle in chunk.decode(_ENCODING).lower():
                    return True

    def search(self, text: Optional[str] = None, from_current: bool = False) -> bool:
        """Show the page holding the next occurrence of ``text``.

        With ``text`` None the previous search text is used. With
        ``from_current`` the search starts at the top of the current page,
        otherwise after it. If nothing is found the current page stays shown.
        """
        if text is not None:
            self.slash = text
        if not self.slash:
            raise ValueError("no search text defined")

        saved = self.current_page
        if from_current:
            self._seek(self.current_page - 1)

        if not self._scan(self.slash):
            self._seek(saved - 1)
            self._display()
            return False

        self._seek(self.current_page - 1)
        self._display()
        return True

    def percent(self) -> str:
        """The progress indicator for the current position."""
        return percent_text(self.position, self.total)

    def page_segments(self) -> list[list[tuple[str, bool]]]:
        """The current page with search terms marked for highlighting."""
        return [highlight_segments(line, self.words, self.slash) for line in self.page]