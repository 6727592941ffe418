"""Tests for method definitions."""

import pytest

from roots_lab.data.methods import (
    DERIVATIVE_STEP,
    MAX_ITERATIONS,
    STATUS_OK,
    Method,
    get_display_name,
    get_spec,
    list_methods,
    parse_method,
)


class TestMethod:
    """Tests for Method enum."""

    def test_all_methods_defined(self) -> None:
        """Verify all four methods exist."""
        expected = {"bisection", "false_position", "secant", "newton"}
        actual = {m.value for m in Method}
        assert actual == expected

    def test_comparison_order(self) -> None:
        """list_methods() should follow the fixed comparison order."""
        assert list_methods() == [
            Method.BISECTION,
            Method.FALSE_POSITION,
            Method.SECANT,
            Method.NEWTON,
        ]


class TestGetSpec:
    """Tests for get_spec function."""

    @pytest.mark.parametrize(
        "method,requires_bracket",
        [
            (Method.BISECTION, True),
            (Method.FALSE_POSITION, True),
            (Method.SECANT, False),
            (Method.NEWTON, False),
            ("bisection", True),
            ("Newton", False),
        ],
    )
    def test_requires_bracket(self, method: Method | str, requires_bracket: bool) -> None:
        """Only the bracketing methods need a sign change."""
        assert get_spec(method).requires_bracket is requires_bracket

    def test_newton_uses_single_point(self) -> None:
        """Newton ignores the upper bound."""
        spec = get_spec(Method.NEWTON)
        assert not spec.uses_upper
        assert spec.initial_points == 1

    def test_two_point_methods(self) -> None:
        """All other methods consume two starting points."""
        for method in (Method.BISECTION, Method.FALSE_POSITION, Method.SECANT):
            assert get_spec(method).initial_points == 2

    def test_spec_immutable(self) -> None:
        """MethodSpec should be immutable."""
        spec = get_spec(Method.SECANT)
        with pytest.raises(AttributeError):
            spec.display_name = "Other"  # type: ignore[misc]

    def test_display_names(self) -> None:
        """Display names are used in tables and messages."""
        assert get_display_name(Method.NEWTON) == "Newton-Raphson"
        assert get_display_name("false_position") == "False position"


class TestParseMethod:
    """Tests for parse_method function."""

    @pytest.mark.parametrize(
        "name,expected",
        [
            ("bisection", Method.BISECTION),
            ("BISECTION", Method.BISECTION),
            ("false-position", Method.FALSE_POSITION),
            ("false position", Method.FALSE_POSITION),
            ("regula-falsi", Method.FALSE_POSITION),
            ("newton-raphson", Method.NEWTON),
            (" secant ", Method.SECANT),
        ],
    )
    def test_parse_names(self, name: str, expected: Method) -> None:
        """Names are case-insensitive and accept separators and aliases."""
        assert parse_method(name) is expected

    def test_enum_passthrough(self) -> None:
        """An enum member is returned unchanged."""
        assert parse_method(Method.SECANT) is Method.SECANT

    def test_unknown_method(self) -> None:
        """Unknown names raise ValueError listing valid values."""
        with pytest.raises(ValueError, match="Unknown method"):
            parse_method("brent")


class TestConstants:
    """Tests for engine constants."""

    def test_iteration_cap(self) -> None:
        assert MAX_ITERATIONS == 1000

    def test_derivative_step(self) -> None:
        assert DERIVATIVE_STEP == 2.0**-26

    def test_status_ok(self) -> None:
        assert STATUS_OK == "OK"
