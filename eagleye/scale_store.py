"""Saving and restoring the velocity scale factor between runs.

The file holds four lines: ``estimated_number``, its value,
``velocity_scale_factor`` and its value.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

_PathLike = Union[str, Path]


@dataclass(frozen=True)
class SavedScaleFactor:
    """What a saved file held; ``scale_factor`` is None if it was absent."""

    estimated_number: float = 0.0
    scale_factor: Optional[float] = None


def _number(row: str, path: _PathLike) -> float:
    try:
        return float(row.strip())
    except ValueError:
        raise ValueError(f"invalid number {row!r} in {path}") from None


def load_scale_factor(path: _PathLike) -> Optional[SavedScaleFactor]:
    """Read a saved scale factor, or None when the file cannot be opened."""
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError:
        return None
    rows = text.splitlines()
    estimated_number = _number(rows[1], path) if len(rows) > 1 else 0.0
    scale_factor = _number(rows[3], path) if len(rows) > 3 else None
    return SavedScaleFactor(estimated_number, scale_factor)


def save_scale_factor(path: _PathLike, estimated_number: int, scale_factor: float) -> None:
    """Write the estimate count and scale factor, replacing the file."""
    Path(path).write_text(
        f"estimated_number\n{estimated_number}\n"
        f"velocity_scale_factor\n{scale_factor:g}\n",
        encoding="utf-8",
    )


class ScaleFactorSaver:
    """Periodically stores the scale factor once new estimates exist."""

    def __init__(self, path: _PathLike, saved_number: float = 0.0) -> None:
        self.path = path
        self.saved_number = saved_number

    def on_timer(self, enabled: bool, estimated_number: int, scale_factor: float) -> bool:
        """Save if the estimate is enabled or newer than the saved one.

        Otherwise the file is left empty. Returns whether data was written.
        """
        if not enabled and self.saved_number >= estimated_number:
            Path(self.path).write_text("", encoding="utf-8")
            return False
        save_scale_factor(self.path, estimated_number, scale_factor)
        self.saved_number = estimated_number
        return True