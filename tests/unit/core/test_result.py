"""Unit tests for the Ok/Err result values."""

import dataclasses

import pytest

from userdesk.core.exceptions import InvalidPasswordError
from userdesk.core.result import Err, Ok, Result


def _check(flag: bool) -> Result[int]:
    if not flag:
        return Err(InvalidPasswordError("Passwords did not match"))
    return Ok(42)


@pytest.mark.unit
class TestResult:
    """Test Ok and Err."""

    def test_ok_unwraps_value(self) -> None:
        """Ok hands back its value."""
        result = _check(True)

        assert result.is_ok() is True
        assert result.unwrap() == 42

    def test_err_unwrap_raises_carried_error(self) -> None:
        """Err raises the exact error it carries."""
        result = _check(False)

        assert result.is_ok() is False
        with pytest.raises(InvalidPasswordError, match="Passwords did not match"):
            result.unwrap()

    def test_pattern_matching(self) -> None:
        """Results destructure with match statements."""
        match _check(False):
            case Ok(value):
                pytest.fail(f"unexpected success: {value}")
            case Err(error):
                assert error.message == "Passwords did not match"

    def test_values_are_immutable(self) -> None:
        """Results cannot be altered after creation."""
        result = Ok(1)

        with pytest.raises(dataclasses.FrozenInstanceError):
            result.value = 2  # type: ignore[misc]

    def test_equality(self) -> None:
        """Ok values compare by content."""
        assert Ok("a") == Ok("a")
        assert Ok("a") != Ok("b")
