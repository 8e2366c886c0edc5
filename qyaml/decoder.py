"""Indentation-driven decoder for the qyaml text notation.

A document is read as nested *sections*: runs of sibling lines that share one
indentation width. Each section becomes either a list (``- item`` lines) or a
dict (``name: value`` lines). Empty values open a nested section on the
following lines.
"""
from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

from qyaml.errors import (
  IndentationChangeError,
  InvalidQuotedStringError,
  MissingNameError,
  MixedKindsError,
  TrailingInputError,
)
from qyaml.scalars import coerce
from qyaml.scanner import (
  count_indent,
  find_delimiter,
  is_sequence_entry,
  is_skippable,
  strip_comment,
)


@dataclass
class Cursor:
  """Remaining input lines for one decode call."""

  lines: list[str]
  index: int = 0

  @property
  def line_number(self) -> int:
    """1-based number of the most recently consumed line."""
    return self.index

  @property
  def exhausted(self) -> bool:
    return self.index >= len(self.lines)

  def peek(self) -> str | None:
    if self.exhausted:
      return None
    return self.lines[self.index]

  def peek_substantive(self) -> str | None:
    """Next line that is not blank, a comment or a document marker."""
    for index in range(self.index, len(self.lines)):
      line = self.lines[index]
      if not is_skippable(line.strip()):
        return line
    return None

  def advance(self) -> None:
    self.index += 1


def _decode_quoted(text: str, line_number: int) -> str:
  try:
    return json.loads(text)
  except json.JSONDecodeError as exc:
    raise InvalidQuotedStringError(line_number, "invalid quoted string", text) from exc


def _resolve(value_text: str, cursor: Cursor, nested_indent: int, line_number: int) -> Any:
  if not value_text:
    return decode_section(cursor, nested_indent)
  if value_text[0] == '"':
    return _decode_quoted(value_text, line_number)
  return coerce(value_text)


def _decode_entry(
  text: str, cursor: Cursor, indent: int, min_indent: int, line_number: int
) -> tuple[str, Any]:
  delimiter = find_delimiter(text)
  if delimiter < 0:
    raise MissingNameError(line_number, "missing property name")
  name = text[:delimiter].strip()
  if name.startswith('"'):
    name = _decode_quoted(name, line_number)
  value_text = strip_comment(text[delimiter + 1:].strip())

  if not value_text:
    # a list may hang at its name's indentation, but not below this section
    following = cursor.peek_substantive()
    if following is not None and is_sequence_entry(following.strip()):
      following_indent = count_indent(following)
      if min_indent <= following_indent <= indent:
        return name, decode_section(cursor, following_indent)

  return name, _resolve(value_text, cursor, indent + 1, line_number)


def decode_section(cursor: Cursor, min_indent: int = 0) -> list[Any] | dict[str, Any]:
  """Decode one section starting at the cursor.

  The first substantive line fixes the section's baseline indentation. The
  section ends, leaving the line unconsumed, at the first line indented less
  than the baseline or ``min_indent``, or at a ``name:`` line that follows
  sequence entries.

  Args:
    cursor: Shared cursor for the current decode call
    min_indent: Lines indented less than this belong to an enclosing section

  Returns:
    A list for a sequence section, otherwise a dict (empty if no lines matched)
  """
  baseline: int | None = None
  items: list[Any] = []
  mapping: dict[str, Any] = {}
  count = 0
  as_sequence = False

  while True:
    line = cursor.peek()
    if line is None:
      break
    text = line.strip()
    if is_skippable(text):
      cursor.advance()
      continue

    indent = count_indent(line)
    if indent < min_indent or (baseline is not None and indent < baseline):
      break
    if baseline is None:
      baseline = indent

    line_number = cursor.index + 1
    if indent > baseline and count:
      raise IndentationChangeError(line_number, "unexpected change in indentation")

    if is_sequence_entry(text):
      if count and not as_sequence:
        raise MixedKindsError(line_number, "unexpected array element in hash")
      cursor.advance()
      value_text = strip_comment(text[1:].strip())
      items.append(_resolve(value_text, cursor, indent + 1, line_number))
      as_sequence = True
    else:
      if as_sequence:
        # end of a hang-indented list; the name belongs to the parent
        break
      cursor.advance()
      name, value = _decode_entry(text, cursor, indent, min_indent, line_number)
      mapping[name] = value
    count += 1

  return items if as_sequence else mapping


def decode(text: str | bytes) -> list[Any] | dict[str, Any]:
  """Decode a whole document.

  Args:
    text: Newline separated document

  Returns:
    The decoded list or dict; ``{}`` for a document with no content

  Raises:
    QyamlError: On malformed input, with the offending line number
  """
  if isinstance(text, bytes):
    text = text.decode("utf-8")
  cursor = Cursor(str(text).split("\n"))
  value = decode_section(cursor)
  if not cursor.exhausted:
    raise TrailingInputError(cursor.index + 1, "unexpected trailing lines")
  return value
