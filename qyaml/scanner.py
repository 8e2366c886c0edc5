"""Line-level helpers: indentation, comments and the name/value delimiter."""
from __future__ import annotations

DOCUMENT_MARKERS = frozenset({"---", "..."})


def count_indent(line: str) -> int:
  """Return the width of leading whitespace; a tab counts as one unit."""
  return len(line) - len(line.lstrip(" \t"))


def is_skippable(text: str) -> bool:
  """True for blank lines, comment lines and document markers (``text`` is trimmed)."""
  return not text or text[0] == "#" or text in DOCUMENT_MARKERS


def is_sequence_entry(text: str) -> bool:
  return text[:1] == "-" and (len(text) == 1 or text[1] == " ")


def _quoted_end(text: str) -> int:
  """Index just past a leading double-quoted run, 0 if ``text`` is not quoted."""
  if not text.startswith('"'):
    return 0
  escaped = False
  for index in range(1, len(text)):
    char = text[index]
    if escaped:
      escaped = False
    elif char == "\\":
      escaped = True
    elif char == '"':
      return index + 1
  return len(text)


def strip_comment(text: str) -> str:
  """Drop a trailing ``# comment``; a ``#`` only starts one after whitespace."""
  for index in range(_quoted_end(text), len(text)):
    if text[index] == "#" and (index == 0 or text[index - 1] in " \t"):
      return text[:index].rstrip()
  return text


def find_delimiter(text: str) -> int:
  """Locate the first unquoted ``: `` or a trailing ``:``.

  Returns:
    Index of the colon, or -1 if the line has no name delimiter
  """
  for index in range(_quoted_end(text), len(text)):
    if text[index] != ":":
      continue
    if index + 1 == len(text) or text[index + 1] in " \t":
      return index
  return -1
