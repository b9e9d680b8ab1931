"""Tests for hf.core.result module."""

from __future__ import annotations

import pytest

from hf.core.result import Err, Ok, Result


def _half(n: int) -> Result[int, str]:
    if n % 2:
        return Err(f"odd: {n}")
    return Ok(n // 2)


def test_ok_holds_value() -> None:
    r = _half(4)
    assert isinstance(r, Ok)
    assert r.value == 2
    assert repr(r) == "Ok(2)"


def test_err_holds_error() -> None:
    r = _half(3)
    assert isinstance(r, Err)
    assert r.error == "odd: 3"
    assert repr(r) == "Err('odd: 3')"


def test_equality_and_matching() -> None:
    assert Ok(1) == Ok(1)
    assert Ok(1) != Err(1)
    match _half(3):
        case Err(error=message):
            assert message.startswith("odd")
        case Ok():
            pytest.fail("expected Err")


def test_is_frozen() -> None:
    r = Ok(1)
    with pytest.raises(AttributeError):
        r.value = 2  # type: ignore[misc]
