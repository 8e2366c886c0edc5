"""Tree encoder: lists and dicts to indented qyaml lines."""
from __future__ import annotations

from collections.abc import Iterator
from typing import Any

from qyaml.errors import DepthLimitExceededError, UnencodableValueError
from qyaml.quoting import encode_string
from qyaml.scalars import format_number
from qyaml.values import ABSENT, is_compound, is_mapping, to_scalar

MAX_DEPTH = 1000


def format_scalar(value: Any) -> str:
  value = to_scalar(value)
  if value is None:
    return "null"
  if value is ABSENT:
    return "undefined"
  if isinstance(value, bool):
    return "true" if value else "false"
  if isinstance(value, str):
    return encode_string(value)
  return format_number(value)


def _entries(node: Any, prefix: str) -> Iterator[tuple[str, str, Any]]:
  """Yield (compound header, scalar prefix, child) for each emitted child."""
  if is_mapping(node):
    for key, value in node.items():
      # absent values are dropped from mappings but kept in lists
      if value is ABSENT:
        continue
      name = encode_string(str(key), key=True)
      yield f"{prefix}{name}:", f"{prefix}{name}: ", value
  else:
    for item in node:
      yield f"{prefix}-", f"{prefix}- ", item


def encode_lines(value: Any, indent: int = 2) -> list[str]:
  """Encode a list or dict into output lines without trailing newlines.

  Nesting is walked with an explicit stack, so a cyclic structure hits the
  depth ceiling instead of the interpreter's recursion limit.

  Args:
    value: Root list, tuple or mapping
    indent: Spaces added per nesting level

  Returns:
    The encoded lines

  Raises:
    UnencodableValueError: If the root is not compound or a leaf is unsupported
    DepthLimitExceededError: If nesting goes deeper than MAX_DEPTH
  """
  if not is_compound(value):
    raise UnencodableValueError(None, "cannot encode simple value", repr(value))

  step = " " * indent
  lines: list[str] = []
  stack = [_entries(value, "")]
  while stack:
    for header, scalar_prefix, child in stack[-1]:
      if is_compound(child):
        if len(stack) >= MAX_DEPTH:
          raise DepthLimitExceededError(None, "depth limit of %d exceeded", len(stack) + 1)
        lines.append(header)
        stack.append(_entries(child, step * len(stack)))
        break
      lines.append(scalar_prefix + format_scalar(child))
    else:
      stack.pop()
  return lines


def encode(value: Any, indent: int = 2) -> str:
  return "\n".join(encode_lines(value, indent)) + "\n"
