"""Coder options and file helpers for qyaml."""
from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from qyaml.decoder import decode
from qyaml.encoder import encode

INDENT_ENV = "QYAML_INDENT"
DEFAULT_INDENT = 2


class Options(BaseModel):
    """Per-coder settings.

    Unknown keys are kept so that option sets pass through ``overlay``
    chains untouched.
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    indent: int = Field(default=DEFAULT_INDENT, ge=1)

    def overlay(self, **overrides: Any) -> Options:
        """Return new options with ``overrides`` applied on top of these."""
        return Options(**{**self.model_dump(), **overrides})


def default_options() -> Options:
    """Build options from the environment.

    Returns:
        Options with ``indent`` taken from QYAML_INDENT when set
    """
    indent = os.environ.get(INDENT_ENV)
    if indent is None or not indent.strip():
        return Options()
    return Options(indent=indent.strip())


def load_yaml(path: Path) -> list[Any] | dict[str, Any]:
    """Load a qyaml file.

    Args:
        path: Path to the file (UTF-8)

    Returns:
        Decoded content; ``{}`` for an empty file
    """
    return decode(Path(path).read_text(encoding="utf-8"))


def dump_yaml(path: Path, data: Any, options: Options | None = None) -> None:
    """Write ``data`` to ``path`` in qyaml notation.

    Args:
        path: Destination file, overwritten if present
        data: Root list or mapping
        options: Encoding options, defaults from the environment
    """
    options = options or default_options()
    Path(path).write_text(encode(data, options.indent), encoding="utf-8")
