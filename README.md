# gopherkit

Building blocks for Gopher and Gopher+ programs: menu items and directories,
Gopher+ attribute blocks, a page-by-page text viewer model, and a small
command that fetches one Gopher item to standard output.

It needs nothing outside the Python standard library (Python 3.10 or later).

## Installing

```
pip install .
```

## Modules

### `gopherkit.directory`

- `ItemType`: the Gopher item type characters (`FILE` is `"0"`,
  `DIRECTORY` is `"1"`, `INFO` is `"i"`, `IGNORE` is `"X"`, and so on).
- `MenuItem`: one menu entry with `type`, `title`, `path`, `host`, `port`,
  `plus` and `num`.
  - `MenuItem.from_line(line)` parses a tab-separated menu line. It raises
    `ProtocolError` for an empty line, an unknown type, too few fields or a
    bad port.
  - `to_line()` renders the item as a CRLF-terminated menu line. A Gopher+
    item gets a trailing `\t+`.
  - `to_html()` renders the item as an HTML anchor line.
  - `merge(other)` lays the non-empty fields of `other` over this item.
- `GopherDirectory`: an ordered list of items with `title`, `location` and
  `current_item`. It supports `len()`, iteration and indexing.
  - `add(item)` stores a copy. Items of type `IGNORE` are dropped.
  - `add_merge(item)` merges the item into an entry with the same path. When
    the item's type is `IGNORE`, that entry is deleted instead. When no entry
    matches, the item is added.
  - `search(path)` returns the index of the entry whose path matches,
    ignoring the first character, or `None`.
  - `delete(index)` removes an entry.
  - `sort()` puts positively numbered items first, then unnumbered ones, then
    negatively numbered ones. Items with the same number are ordered by title
    using the locale's collation.
  - `from_net(stream, each_item)` reads menu lines from a binary stream. It
    stops at a lone `.` or at the end of the stream, skips lines it cannot
    parse, and returns the number of lines it accepted. An error item (`3`)
    whose title spans several lines is split into one error item followed by
    info items. `each_item`, if given, is called once for each accepted line.
  - `to_net(stream, html=False, prefix=None)` writes the items as menu lines,
    or as an HTML `<DL COMPACT>` list. `prefix(item, stream)`, if given, is
    called before each item is written.

```python
import io
from gopherkit.directory import GopherDirectory

menu = GopherDirectory()
menu.from_net(io.BytesIO(b"0About\t/about\texample.com\t70\r\n.\r\n"))
for item in menu:
    print(item.title, item.path)
```

### `gopherkit.blocks`

- `Block`: a named Gopher+ block with a `btype` (`BlockType`) and a
  `datatype` (`BlockDataType`: `NONE`, `FILE`, `TEXT` or `GREF`).
  - `set_text(lines)` and `add_text(text)` make the block hold text.
  - `set_file(filename)` makes it refer to a file.
  - `set_reference(item)` makes it hold a copy of a `MenuItem`.
  - `line_count()` and `line(lineno)` read the text lines. Both return `None`
    when the block does not hold text.
  - `copy()` returns an independent copy of the block.
  - `to_net(stream, show_header=True)` writes `+NAME:` and then the data.
    Each text or file line is written with a leading space, and a reference
    is written as a menu line. A file that cannot be opened contributes no
    lines.
- `read_block(stream, name)` reads a block body after its `+NAME:` has been
  consumed. It returns `(block, more)`, where `more` tells whether another
  block follows.
- `find_block(blocks, name)` returns the index of the first block with that
  name, or `None`.

### `gopherkit.pager`

- `Pager(path, lines, cols)` loads a file and shows it one page at a time. A
  page is `lines - 4` screen lines, and a file line longer than `cols` is
  split across several screen lines. The current page's lines are in
  `page`.
  - `next_page()`, `previous_page()`, `first_page()` and `last_page()` move
    through the file. `reload_page()` redraws the current page.
  - `search(text=None, from_current=False)` shows the page holding the next
    case-insensitive match and returns `True`. When there is no match, the
    current page stays shown and it returns `False`. With `text=None` the
    previous search text is used. If no search text has been given yet, it
    raises `ValueError`.
  - `percent()` returns the progress indicator, for example `"42% "`.
  - `page_segments()` returns the current page split into
    `(text, highlighted)` pieces. The pieces mark matches of the words in
    `words` and of the search text.
- `parse_search_string(text)` splits a search string into at most 40 words,
  dropping `and`, `or` and `not`.
- `highlight_segments(line, words, slash)` splits one line into highlighted
  and plain pieces.
- `percent_text(position, total)` builds the progress indicator.
- `help_text()` returns the lines of the pager's key help.

### `gopherkit.debug`

- `set_debug(enabled)` sets a process-wide flag and returns the previous
  setting. `is_debug()` reads the flag.
- `debugf(fmt, *args)` writes `fmt % args` to standard error. It writes
  whatever the flag says; callers check `is_debug()` themselves.

### `gopherkit.gophfilt`

`parse_args`, `parse_url`, `build_request` and `fetch` are the pieces behind
the `gophfilt` command described below. Failures raise `FilterError`, whose
`code` is the exit status.

## The `gophfilt` command

```
gophfilt -h gopher.example.com -s 70 -t 0 -p /about.txt
gophfilt gopher://gopher.example.com:70/0/about.txt
```

| Option | Meaning |
| --- | --- |
| `-h` | host name (default `localhost`) |
| `-s` | port (default 70) |
| `-p` | selector path |
| `-t` | item type |
| `-i` | search terms, sent after a tab |
| `-T` | read timeout in seconds (default 10) |

If any of `-h`, `-s`, `-p`, `-t`, `-i` or a URL is given, both a path and a
type are required. If none of them is given, the command reads one menu line
from standard input and fetches that item.

Text types (`0`, `1`, `4`, `7`) are written line by line with `\n` endings
and stop at the lone `.` line. Binary types (`s`, `I`, `g`, `9`, `5`) are
copied until the server closes the connection. The types `2`, `h` and `M` are
accepted, but the command writes nothing for them.

The statuses that `gopherkit.gophfilt.main()` returns:

| Status | Cause |
| --- | --- |
| 0 | success |
| -1 | bad option or bad URL |
| -2 | path or type missing |
| -3 | no selector on standard input |
| -4 | unsupported type |
| -5 | connection failed |
| -6 | write error |
| -7 | timed out waiting for data |

## What this package does not do

There is no interactive Gopher client here. The pager is a model with no
screen drawing and no key handling. It does not mail, save, print or
download documents. The package contains no Gopher server, and nothing here
fetches Gopher+ attributes or views over the network. `gophfilt` is the only
command.