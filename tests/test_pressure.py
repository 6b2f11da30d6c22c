import io

import pytest

from procnetparse.errors import IncompleteError
from procnetparse.pressure import (
    CpuPressure,
    IoPressure,
    MemoryPressure,
    PressureRecord,
    get_pressure,
    parse_cpu_pressure,
    parse_io_pressure,
    parse_memory_pressure,
    parse_pressure_record,
)

SAMPLE = (
    "some avg10=4.50 avg60=0.91 avg300=0.00 total=681245\n"
    "full avg10=2.10 avg60=0.12 avg300=0.00 total=391926\n"
)


def test_parse_pressure_record():
    record = parse_pressure_record("full avg10=2.10 avg60=0.12 avg300=0.00 total=391926")
    assert record.avg10 == pytest.approx(2.10)
    assert record.avg60 == pytest.approx(0.12)
    assert record.avg300 == pytest.approx(0.00)
    assert record.total == 391_926


@pytest.mark.parametrize(
    "line",
    [
        "avg10=2.10 avg60=0.12 avg300=0.00 total=391926",
        "some avg10=2.10 avg300=0.00 total=391926",
        "some avg10=2.10 avg60=0.00 avg300=0.00",
    ],
)
def test_parse_pressure_record_errs(line):
    with pytest.raises(IncompleteError):
        parse_pressure_record(line)


def test_bad_number_is_incomplete():
    with pytest.raises(IncompleteError):
        parse_pressure_record("some avg10=x avg60=0.12 avg300=0.00 total=1")
    with pytest.raises(IncompleteError):
        parse_pressure_record("some avg10=1 avg60=0.12 avg300=0.00 total=-1")


def test_get_pressure_from_text():
    some, full = get_pressure(SAMPLE)
    assert some == PressureRecord(4.50, 0.91, 0.00, 681245)
    assert full.total == 391926
    assert full.avg10 == pytest.approx(2.10)


def test_get_pressure_from_file_object():
    some, full = get_pressure(io.StringIO(SAMPLE))
    assert some.total == 681245
    assert full.total == 391926


def test_get_pressure_missing_full_line():
    with pytest.raises(IncompleteError):
        get_pressure("some avg10=4.50 avg60=0.91 avg300=0.00 total=681245\n")


def test_get_pressure_empty():
    with pytest.raises(IncompleteError):
        get_pressure("")


def test_typed_wrappers():
    cpu = parse_cpu_pressure(SAMPLE)
    mem = parse_memory_pressure(SAMPLE)
    iop = parse_io_pressure(SAMPLE)
    assert isinstance(cpu, CpuPressure) and cpu.some.total == 681245
    assert isinstance(mem, MemoryPressure) and mem.full.total == 391926
    assert isinstance(iop, IoPressure) and iop.some == cpu.some