"""Value model shared by the decoder and encoder.

Decoded trees are built from plain Python objects: ``dict`` for mappings,
``list`` for sequences, and ``None``/``bool``/``int``/``float``/``str`` for
leaves. ``ABSENT`` marks a value that is present but undefined.

Host objects handed to the encoder are reduced to that closed set here and
nowhere else.
"""
from __future__ import annotations

import math
import numbers
import re
from collections.abc import Mapping
from datetime import date, datetime, time, timezone
from decimal import Decimal
from enum import Enum
from pathlib import PurePath
from typing import Any
from uuid import UUID

from qyaml.errors import UnencodableValueError


class _Absent:
  _instance: _Absent | None = None

  def __new__(cls) -> _Absent:
    if cls._instance is None:
      cls._instance = super().__new__(cls)
    return cls._instance

  def __repr__(self) -> str:
    return "undefined"

  def __bool__(self) -> bool:
    return False


ABSENT = _Absent()


def is_sequence(value: Any) -> bool:
  return isinstance(value, (list, tuple))


def is_mapping(value: Any) -> bool:
  return isinstance(value, Mapping)


def is_compound(value: Any) -> bool:
  return is_sequence(value) or is_mapping(value)


def _timestamp(value: datetime) -> str:
  if value.tzinfo is None:
    return value.isoformat(timespec="milliseconds")
  utc = value.astimezone(timezone.utc).replace(tzinfo=None)
  return utc.isoformat(timespec="milliseconds") + "Z"


def to_scalar(value: Any) -> Any:
  """Reduce a host leaf to ``None``, ``bool``, ``int``, ``float``, ``str`` or ``ABSENT``.

  Args:
    value: Any leaf found while walking a tree

  Returns:
    The equivalent leaf from the value model

  Raises:
    UnencodableValueError: If the type has no textual form in the model
  """
  if value is None or value is ABSENT:
    return value
  if isinstance(value, Enum):
    return to_scalar(value.value)
  if isinstance(value, bool):
    return value
  if isinstance(value, str):
    return str(value)
  if isinstance(value, numbers.Integral):
    return int(value)
  if isinstance(value, Decimal):
    # float() refuses signaling NaN
    if value.is_nan():
      return math.nan
    if value.is_finite() and value == value.to_integral_value():
      return int(value)
    return float(value)
  if isinstance(value, numbers.Real):
    return float(value)
  if isinstance(value, datetime):
    return _timestamp(value)
  if isinstance(value, (date, time)):
    return value.isoformat()
  if isinstance(value, re.Pattern) and isinstance(value.pattern, str):
    return value.pattern
  if isinstance(value, (UUID, PurePath)):
    return str(value)
  raise UnencodableValueError(None, "cannot encode simple value", repr(value))
