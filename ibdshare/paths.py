"""Helpers for building output paths."""

from __future__ import annotations

import os
from pathlib import Path


def from_prefix(prefix: str | os.PathLike[str], suffix: str) -> Path:
    """Strip every extension from ``prefix`` and add ``suffix`` as the extension."""
    path = Path(prefix)
    while path.suffix:
        path = path.with_suffix("")
    return path.with_suffix(f".{suffix}") if suffix else path