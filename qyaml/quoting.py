"""Decide when an emitted string needs double quotes, and produce them."""
from __future__ import annotations

import json
import re

from qyaml.scalars import coerce

# punctuation that means something else at the start of a bare token
_RESERVED_FIRST = frozenset("'\"[]{}>|*&!%#`@,")
# control chars, quotes, colons, non-ASCII, and what the decoder reads as a comment
_NEEDS_ESCAPE = re.compile(r'[\x00-\x1f":\x7f-\U0010ffff]| #')


def must_quote(text: str) -> bool:
  """Return True if ``text`` cannot be emitted bare."""
  if not text:
    return True
  if text[0].isspace() or text[-1].isspace():
    return True
  if text[0] in _RESERVED_FIRST:
    return True
  return _NEEDS_ESCAPE.search(text) is not None


def quote(text: str) -> str:
  """JSON-style double-quoted form, with non-ASCII escaped as ``\\uXXXX``."""
  return json.dumps(text, ensure_ascii=True)


def encode_string(text: str, key: bool = False) -> str:
  """Render a string for output, quoting it only when a bare form would misread.

  Args:
    text: The string to emit
    key: True for mapping names, which are never coerced on decode but
      must not look like a sequence entry

  Returns:
    The bare or quoted string
  """
  if must_quote(text):
    return quote(text)
  if key:
    if text == "-" or text.startswith("- "):
      return quote(text)
  elif not isinstance(coerce(text), str):
    # "true", "12", "undefined" ... would come back as something else
    return quote(text)
  return text
