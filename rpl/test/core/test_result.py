"""Tests for rpl.core.result module."""

from __future__ import annotations

from rpl.core.result import Err, Ok, Result


def _half(n: int) -> Result[int, str]:
    if n % 2:
        return Err(f"{n} is odd")
    return Ok(n // 2)


def _describe(result: Result[int, str]) -> str:
    match result:
        case Ok(value):
            return f"value {value}"
        case Err(error):
            return f"error {error}"


class TestResult:
    def test_match_on_ok(self) -> None:
        assert _describe(_half(4)) == "value 2"

    def test_match_on_err(self) -> None:
        assert _describe(_half(3)) == "error 3 is odd"

    def test_equality_and_repr(self) -> None:
        assert Ok(1) == Ok(1)
        assert Ok(1) != Err(1)
        assert repr(Err("boom")) == "Err('boom')"
