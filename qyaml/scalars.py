"""Scalar coercion: turn a bare token into a typed leaf, and back for numbers."""
from __future__ import annotations

import math
import re
from typing import Any

from qyaml.values import ABSENT

_LITERALS: dict[str, Any] = {
  "null": None,
  "Null": None,
  "NULL": None,
  "true": True,
  "True": True,
  "TRUE": True,
  "false": False,
  "False": False,
  "FALSE": False,
  # decoded, but never produced by the encoder for mapping values
  "undefined": ABSENT,
  ".inf": math.inf,
  ".Inf": math.inf,
  ".INF": math.inf,
  "+.inf": math.inf,
  "+.Inf": math.inf,
  "+.INF": math.inf,
  "-.inf": -math.inf,
  "-.Inf": -math.inf,
  "-.INF": -math.inf,
}

_INFINITY = {"Infinity": math.inf, "+Infinity": math.inf, "-Infinity": -math.inf}

_NUMERIC_START = frozenset("0123456789+-.I")
_INTEGER = re.compile(r"[+-]?[0-9]+")
_DECIMAL = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_HEX = re.compile(r"0[xX][0-9a-fA-F]+")


def parse_number(token: str) -> int | float | None:
  """Parse ``token`` as a number, or return None if it is not one.

  Leading zeros are decimal, so ``010`` is 10. Only ``0x`` hex is accepted
  as an alternate base.
  """
  if _INTEGER.fullmatch(token):
    return int(token, 10)
  if _HEX.fullmatch(token):
    return int(token, 16)
  if _DECIMAL.fullmatch(token):
    return float(token)
  return _INFINITY.get(token)


def coerce(token: str) -> Any:
  """Map a trimmed, comment-stripped token to its scalar value.

  Tokens matching no literal and no number come back unchanged as barewords.
  Quoted tokens are handled by the decoder before this is reached.
  """
  if token in _LITERALS:
    return _LITERALS[token]
  if token.lower() == ".nan":
    return math.nan
  if token and token[0] in _NUMERIC_START:
    number = parse_number(token)
    if number is not None:
      return number
  return token


def format_number(value: int | float) -> str:
  if isinstance(value, float):
    if math.isnan(value):
      return ".NaN"
    if math.isinf(value):
      return ".Inf" if value > 0 else "-.Inf"
    return repr(value)
  return str(value)
