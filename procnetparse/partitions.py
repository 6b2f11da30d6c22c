"""Entries of ``/proc/partitions``."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from itertools import islice

from .errors import InternalError


@dataclass(frozen=True)
class PartitionEntry:
    """One block device: major and minor numbers, size in 1024 byte blocks, and name."""

    major: int
    minor: int
    blocks: int
    name: str


def _uint(text: str, bits: int, field: str) -> int:
    digits = text[1:] if text.startswith("+") else text
    if not digits or not (digits.isascii() and digits.isdigit()):
        raise InternalError(f"unable to parse {field} from {text!r}")
    value = int(digits)
    if value >= 1 << bits:
        raise InternalError(f"{field} {text!r} is out of range")
    return value


def _lines(source: str | Iterable[str]) -> Iterator[str]:
    if isinstance(source, str):
        yield from source.splitlines()
    else:
        for line in source:
            yield line.rstrip("\r\n")


def parse_partitions(source: str | Iterable[str]) -> list[PartitionEntry]:
    """Parse the text of ``/proc/partitions``; the first two lines are headers."""
    entries = []
    for line in islice(_lines(source), 2, None):
        fields = line.split()
        if len(fields) < 4:
            raise InternalError(f"partition line is missing fields: {line!r}")
        major, minor, blocks, name = fields[:4]
        entries.append(
            PartitionEntry(
                major=_uint(major, 16, "major"),
                minor=_uint(minor, 16, "minor"),
                blocks=_uint(blocks, 64, "blocks"),
                name=name,
            )
        )
    return entries