"""Tests for restohub.core.result module."""

import pytest

from restohub.core.errors import ValidationError
from restohub.core.result import Err, Ok, Result, try_result


class TestOk:
    """Test Ok class."""

    def test_create_ok(self):
        result = Ok(42)
        assert result.value == 42
        assert result.is_ok() is True
        assert result.is_err() is False

    def test_unwrap(self):
        assert Ok("hello").unwrap() == "hello"

    def test_flat_map(self):
        """flat_map chains Result-returning functions."""
        def double_if_even(x: int) -> Result[int]:
            if x % 2 == 0:
                return Ok(x * 2)
            return Err(ValueError("Odd number"))

        assert Ok(4).flat_map(double_if_even).unwrap() == 8
        assert Ok(3).flat_map(double_if_even).is_err()

    def test_map_err_leaves_ok_alone(self):
        result = Ok(1)
        assert result.map_err(lambda e: ValidationError(str(e))) is result


class TestErr:
    """Test Err class."""

    def test_unwrap_raises_contained_error(self):
        error = ValidationError("bad payload")
        with pytest.raises(ValidationError, match="bad payload"):
            Err(error).unwrap()

    def test_flat_map_passes_error_through(self):
        error = ValueError("x")
        result = Err(error).flat_map(lambda v: Ok(v * 2))
        assert result.is_err()
        assert result.error is error

    def test_map_err(self):
        result = Err(ValueError("x")).map_err(lambda e: ValidationError(str(e)))
        assert isinstance(result.error, ValidationError)


class TestMatching:
    """Results are usable in match statements."""

    def test_match(self):
        def describe(result: Result[int]) -> str:
            match result:
                case Ok(value):
                    return f"ok {value}"
                case Err(error):
                    return f"err {error}"
            return "unreachable"

        assert describe(Ok(1)) == "ok 1"
        assert describe(Err(ValueError("x"))) == "err x"


class TestTryResult:
    def test_value_and_exception(self):
        assert try_result(lambda: int("7")).unwrap() == 7
        assert isinstance(try_result(lambda: int("x")).error, ValueError)

    def test_chains_with_flat_map_and_map_err(self):
        result = Ok("x").flat_map(lambda s: try_result(lambda: int(s)))
        result = result.map_err(lambda e: ValidationError(str(e)))
        assert isinstance(result.error, ValidationError)
