import pytest

from procnetparse.errors import IncompleteError, InternalError, ProcError
from procnetparse.pressure import parse_pressure_record
from procnetparse.partitions import parse_partitions


def test_incomplete_is_proc_error():
    with pytest.raises(IncompleteError) as info:
        parse_pressure_record("bogus")
    assert isinstance(info.value, ProcError)
    assert isinstance(info.value, Exception)


def test_internal_is_proc_error():
    err = InternalError("unexpected value")
    assert isinstance(err, ProcError)
    assert err.message == "unexpected value"


def test_incomplete_default_path_is_none():
    err = IncompleteError()
    assert err.path is None


def test_incomplete_keeps_path():
    err = IncompleteError("/proc/pressure/cpu")
    assert err.path == "/proc/pressure/cpu"
    assert "/proc/pressure/cpu" in str(err)


def test_internal_keeps_message():
    err = InternalError("bad field")
    assert err.message == "bad field"
    assert str(err) == "bad field"


def test_parsers_raise_proc_error_family():
    with pytest.raises(ProcError):
        parse_pressure_record("bogus")
    with pytest.raises(ProcError):
        parse_partitions("header\n\n 8 x 10 sda\n")


def test_missing_field_caught_as_base():
    with pytest.raises(ProcError) as info:
        parse_pressure_record("some avg10=2.10 avg300=0.00 total=391926")
    assert isinstance(info.value, IncompleteError)
    assert info.value.path is None