"""Public entry points: ``decode``, ``encode``, ``defaults`` and ``Coder``."""
from __future__ import annotations

from typing import Any

from qyaml import decoder, encoder
from qyaml.config import Options, default_options


class Coder:
  """Decode and encode with one fixed set of options.

  A coder keeps no per-call state, so one instance can serve many threads.
  """

  def __init__(self, options: Options | None = None) -> None:
    self.options = options if options is not None else default_options()

  def decode(self, text: str | bytes) -> list[Any] | dict[str, Any]:
    return decoder.decode(text)

  def encode(self, value: Any) -> str:
    return encoder.encode(value, self.options.indent)

  def defaults(self, **overrides: Any) -> Coder:
    """Derive a coder whose options are these with ``overrides`` on top."""
    return Coder(self.options.overlay(**overrides))

  def __repr__(self) -> str:
    return f"Coder({self.options!r})"


def defaults(**overrides: Any) -> Coder:
  return Coder(default_options().overlay(**overrides))


def decode(text: str | bytes) -> list[Any] | dict[str, Any]:
  """Decode a document; indentation width is read from the text itself."""
  return decoder.decode(text)


def encode(value: Any, **overrides: Any) -> str:
  """Encode a list or mapping with the environment defaults plus ``overrides``."""
  return defaults(**overrides).encode(value)
