"""Tests for mrel.core.result module."""

import pytest

from mrel.core.result import Err, Ok, Result, is_err, is_ok


class TestOk:
    """Tests for Ok type."""

    def test_ok_unwrap(self) -> None:
        assert Ok(42).unwrap() == 42

    def test_ok_unwrap_or_ignores_default(self) -> None:
        assert Ok(42).unwrap_or(0) == 42

    def test_ok_unwrap_err_raises(self) -> None:
        with pytest.raises(ValueError, match="called unwrap_err on Ok"):
            Ok(42).unwrap_err()

    def test_ok_map(self) -> None:
        assert Ok(21).map(lambda x: x * 2) == Ok(42)

    def test_ok_map_err_is_identity(self) -> None:
        assert Ok(42).map_err(lambda e: f"error: {e}") == Ok(42)

    def test_ok_frozen(self) -> None:
        result = Ok(42)
        with pytest.raises(AttributeError):
            result.value = 43  # type: ignore[misc]


class TestErr:
    """Tests for Err type."""

    def test_err_unwrap_raises(self) -> None:
        with pytest.raises(ValueError, match="called unwrap on Err"):
            Err("boom").unwrap()

    def test_err_unwrap_or(self) -> None:
        assert Err("boom").unwrap_or(0) == 0

    def test_err_unwrap_err(self) -> None:
        assert Err("boom").unwrap_err() == "boom"

    def test_err_map_is_identity(self) -> None:
        assert Err("boom").map(lambda x: x * 2) == Err("boom")

    def test_err_map_err(self) -> None:
        assert Err("boom").map_err(str.upper) == Err("BOOM")

    def test_err_repr(self) -> None:
        assert repr(Err("boom")) == "Err('boom')"


class TestTypeGuards:
    def test_is_ok(self) -> None:
        assert is_ok(Ok(1))
        assert not is_ok(Err("x"))

    def test_is_err(self) -> None:
        assert is_err(Err("x"))
        assert not is_err(Ok(1))


class TestPatternMatching:
    def test_match_ok(self) -> None:
        result: Result[int, str] = Ok(42)
        match result:
            case Ok(value):
                assert value == 42
            case Err(_):
                pytest.fail("expected Ok")

    def test_match_err(self) -> None:
        result: Result[int, str] = Err("boom")
        match result:
            case Ok(_):
                pytest.fail("expected Err")
            case Err(error):
                assert error == "boom"
