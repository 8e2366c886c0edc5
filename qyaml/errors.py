"""Error taxonomy and line-numbered messages for the qyaml codec."""
from __future__ import annotations

import re
from typing import Any

_PLACEHOLDER = re.compile(r"%[sdr%]")


def format_error(line: int | None = None, message: str | None = None, *args: Any) -> str:
  """Build a failure description such as ``qyaml: line 3: missing property name``.

  Placeholders (``%s``, ``%d``, ``%r``) are filled in order. Arguments left
  over once the placeholders are used up are appended, separated by spaces;
  placeholders that run out of arguments stay in the text as written.

  Args:
    line: 1-based line number, or None for errors not tied to an input line
    message: Message template
    *args: Values for the template

  Returns:
    The formatted message
  """
  if line is None and message is None:
    return "error"
  prefix = "qyaml:" if line is None else f"qyaml: line {line}:"
  if message is None:
    return prefix

  pending = list(args)

  def fill(match: re.Match[str]) -> str:
    spec = match.group(0)
    if spec == "%%":
      return "%"
    if not pending:
      return spec
    arg = pending.pop(0)
    if spec == "%r":
      return repr(arg)
    if spec == "%d" and isinstance(arg, float) and arg.is_integer():
      return str(int(arg))
    return str(arg)

  text = _PLACEHOLDER.sub(fill, message)
  if pending:
    text = " ".join([text, *(str(arg) for arg in pending)])
  return f"{prefix} {text}"


class QyamlError(ValueError):
  """Base class for every decode and encode failure."""

  def __init__(self, line: int | None = None, message: str | None = None, *args: Any) -> None:
    self.line = line
    super().__init__(format_error(line, message, *args))


class MissingNameError(QyamlError):
  """A mapping line has no ``name: value`` delimiter."""


class IndentationChangeError(QyamlError):
  """Indentation grew inside a section after siblings were established."""


class MixedKindsError(QyamlError):
  """A sequence entry showed up inside a mapping section."""


class InvalidQuotedStringError(QyamlError):
  """A double-quoted scalar could not be decoded."""


class TrailingInputError(QyamlError):
  """Lines were left over after the top-level section ended."""


class UnencodableValueError(QyamlError):
  """The encoder was handed a root or leaf it cannot represent."""


class DepthLimitExceededError(QyamlError):
  """Nesting went past the encoder's depth ceiling, usually a cycle."""
