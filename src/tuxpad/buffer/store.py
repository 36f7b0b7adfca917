"""Reading and writing the backing store of a document."""

from __future__ import annotations

import os
from collections import Counter
from dataclasses import dataclass
from pathlib import Path
from typing import List, Sequence

ENCODING = "utf-8"
# Undecodable bytes survive a load/save round trip as lone surrogates.
ERRORS = "surrogateescape"


class StoreError(RuntimeError):
    """Raised when the backing store cannot be read or written."""

    def __init__(self, message: str, *, path: Path | None = None) -> None:
        super().__init__(message)
        self.path = path


@dataclass(slots=True)
class StoreContent:
    lines: List[str]
    newline: str = "\n"
    exists: bool = True


def split_lines(text: str) -> tuple[List[str], str]:
    """Split on ``\\n``, dropping a ``\\r`` before each one.

    Returns the lines and the terminator most of them used, so mixed endings
    are written back in the dominant style.
    """

    lines = text.split("\n")
    endings: Counter[str] = Counter()
    for index, line in enumerate(lines[:-1]):
        if line.endswith("\r"):
            lines[index] = line[:-1]
            endings["\r\n"] += 1
        else:
            endings["\n"] += 1
    newline = "\r\n" if endings["\r\n"] > endings["\n"] else "\n"
    return lines, newline


def read_store(path: Path) -> StoreContent:
    """Read every line of ``path``; a missing file reads as one empty line."""

    try:
        with open(path, encoding=ENCODING, errors=ERRORS, newline="") as handle:
            text = handle.read()
    except FileNotFoundError:
        return StoreContent(lines=[""], exists=False)
    except OSError as exc:
        raise StoreError(str(exc), path=path) from exc

    lines, newline = split_lines(text)
    return StoreContent(lines=lines, newline=newline)


def write_store(path: Path, lines: Sequence[str], *, newline: str = "\n") -> None:
    """Write ``lines`` joined by ``newline``; the last line stays unterminated."""

    try:
        parent = path.parent
        if str(parent) and not parent.exists():
            os.makedirs(parent, exist_ok=True)
        with open(path, "w", encoding=ENCODING, errors=ERRORS, newline="") as handle:
            handle.write(newline.join(lines))
    except OSError as exc:
        raise StoreError(str(exc), path=path) from exc


__all__ = ["StoreContent", "StoreError", "read_store", "split_lines", "write_store"]
