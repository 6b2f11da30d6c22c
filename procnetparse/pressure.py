"""Pressure stall information from ``/proc/pressure/{cpu,memory,io}``."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from .errors import IncompleteError

Source = str | Iterable[str]


@dataclass(frozen=True)
class PressureRecord:
    """Stall percentages over 10, 60 and 300 second windows, plus total stall time in microseconds."""

    avg10: float
    avg60: float
    avg300: float
    total: int


@dataclass(frozen=True)
class CpuPressure:
    """CPU pressure; at system level ``full`` is zero."""

    some: PressureRecord
    full: PressureRecord


@dataclass(frozen=True)
class MemoryPressure:
    """Memory pressure."""

    some: PressureRecord
    full: PressureRecord


@dataclass(frozen=True)
class IoPressure:
    """IO pressure."""

    some: PressureRecord
    full: PressureRecord


def _to_float(fields: dict[str, str], key: str) -> float:
    try:
        text = fields[key]
    except KeyError:
        raise IncompleteError() from None
    if "_" in text:
        raise IncompleteError()
    try:
        return float(text)
    except ValueError:
        raise IncompleteError() from None


def _to_total(fields: dict[str, str]) -> int:
    try:
        text = fields["total"]
    except KeyError:
        raise IncompleteError() from None
    digits = text[1:] if text.startswith("+") else text
    if not digits or not (digits.isascii() and digits.isdigit()):
        raise IncompleteError()
    value = int(digits)
    if value >= 1 << 64:
        raise IncompleteError()
    return value


def parse_pressure_record(line: str) -> PressureRecord:
    """Parse one record such as ``full avg10=2.10 avg60=0.12 avg300=0.00 total=391926``."""
    if not (line.startswith("some") or line.startswith("full")):
        raise IncompleteError()

    fields: dict[str, str] = {}
    for pair in line[5:].split():
        parts = pair.split("=")
        if len(parts) == 2:
            fields[parts[0]] = parts[1]

    return PressureRecord(
        avg10=_to_float(fields, "avg10"),
        avg60=_to_float(fields, "avg60"),
        avg300=_to_float(fields, "avg300"),
        total=_to_total(fields),
    )


def get_pressure(source: Source) -> tuple[PressureRecord, PressureRecord]:
    """Read the ``some`` record and then the ``full`` record from text or an iterable of lines."""
    lines = iter(source.splitlines() if isinstance(source, str) else source)
    some = next(lines, "")
    full = next(lines, "")
    return parse_pressure_record(some), parse_pressure_record(full)


def parse_cpu_pressure(source: Source) -> CpuPressure:
    """Parse the contents of ``/proc/pressure/cpu``."""
    return CpuPressure(*get_pressure(source))


def parse_memory_pressure(source: Source) -> MemoryPressure:
    """Parse the contents of ``/proc/pressure/memory``."""
    return MemoryPressure(*get_pressure(source))


def parse_io_pressure(source: Source) -> IoPressure:
    """Parse the contents of ``/proc/pressure/io``."""
    return IoPressure(*get_pressure(source))