from __future__ import annotations

import sys

import pytest

from pqcbind import InvalidArgumentError, InvalidLengthError, PQCBindError
from pqcbind._validate import (
    require_bytes,
    require_count,
    require_length,
    require_max_length,
    require_min_length,
    require_name,
)


@pytest.mark.parametrize("value", [b"abc", bytearray(b"abc"), memoryview(b"abc")])
def test_bytes_like_values_become_bytes(value):
    out = require_bytes(value, "Buffer")
    assert out == b"abc"
    assert type(out) is bytes


@pytest.mark.parametrize("value", ["abc", 3, None, [1, 2, 3]])
def test_non_bytes_are_rejected(value):
    with pytest.raises(InvalidArgumentError, match="Buffer must be a bytes-like object"):
        require_bytes(value, "Buffer")


def test_errors_are_also_builtin_exceptions():
    with pytest.raises(TypeError):
        require_name(1)
    with pytest.raises(ValueError):
        require_length(b"ab", 3, "Key")
    assert issubclass(InvalidLengthError, PQCBindError)


def test_length_error_details():
    with pytest.raises(InvalidLengthError) as excinfo:
        require_length(b"ab", 3, "Key")
    err = excinfo.value
    assert err.field == "Key"
    assert err.actual == 2
    assert "exactly 3 bytes" in str(err)


def test_min_and_max_lengths():
    require_min_length(b"a" * 48, 48, "P")
    require_min_length(b"a" * 64, 48, "P")
    with pytest.raises(InvalidLengthError):
        require_min_length(b"a" * 47, 48, "P")
    require_max_length(b"a" * 10, 10, "S")
    with pytest.raises(InvalidLengthError):
        require_max_length(b"a" * 11, 10, "S")


def test_counts():
    assert require_count(0) == 0
    assert require_count(7) == 7
    for bad in (-1, 1.0, "1", None, False, sys.maxsize + 1):
        with pytest.raises(InvalidArgumentError):
            require_count(bad)
