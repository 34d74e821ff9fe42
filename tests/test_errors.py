"""Tests for the case_combinator error hierarchy."""

from __future__ import annotations

import pytest

from case_combinator.errors import (
    CombinatorError,
    ConfigLoadError,
    ConfigValidationError,
    ErrorCode,
    ErrorContext,
    TargetLoadError,
    UnhashableValueError,
)


class TestErrorCode:
    """Tests for ErrorCode categories."""

    @pytest.mark.parametrize(
        "code,category",
        [
            (ErrorCode.UNHASHABLE_VALUE, "generation"),
            (ErrorCode.INVALID_CONFIG, "config"),
            (ErrorCode.CONFIG_LOAD_FAILED, "config"),
            (ErrorCode.TARGET_NOT_FOUND, "cli"),
            (ErrorCode.TARGET_INVALID, "cli"),
            (ErrorCode.UNKNOWN, "unknown"),
        ],
    )
    def test_category(self, code, category):
        assert code.category == category


class TestErrorContext:
    """Tests for ErrorContext."""

    def test_format_location_empty(self):
        assert ErrorContext().format_location() == "unknown location"

    def test_format_location(self):
        context = ErrorContext(target="mod:attr", value="[1]")
        assert context.format_location() == "target=mod:attr > value=[1]"

    def test_to_dict_drops_none(self):
        data = ErrorContext(value="x").to_dict()
        assert data["value"] == "x"
        assert "target" not in data
        assert "timestamp" in data


class TestCombinatorError:
    """Tests for the CombinatorError base class."""

    def test_defaults(self):
        error = CombinatorError()
        assert error.message == "An unexpected error occurred"
        assert error.error_code is ErrorCode.UNKNOWN
        assert error.suggestions == []

    def test_str_includes_code_and_location(self):
        error = UnhashableValueError("bad", context=ErrorContext(value="[1]"))
        assert str(error) == "[E101] bad | at value=[1]"

    def test_str_without_location(self):
        assert str(TargetLoadError("nope")) == "[E301] nope"

    def test_extra_context_kwargs(self):
        error = CombinatorError("boom", attempt=3)
        assert error.context.extra == {"attempt": 3}

    def test_default_suggestions_are_copied(self):
        error = UnhashableValueError()
        error.suggestions.append("mutated")
        assert "mutated" not in UnhashableValueError().suggestions

    def test_explicit_suggestions_override(self):
        error = TargetLoadError(suggestions=["try harder"])
        assert error.suggestions == ["try harder"]

    def test_format_verbose(self):
        cause = TypeError("unhashable type: 'list'")
        error = UnhashableValueError("bad input", cause=cause)
        text = error.format_verbose()

        assert text.startswith("Error [E101]: bad input")
        assert "Caused by: TypeError: unhashable type: 'list'" in text
        assert "Suggestions:" in text

    def test_to_dict(self):
        error = ConfigLoadError("missing", context=ErrorContext(target="x.yaml"))
        data = error.to_dict()

        assert data["error_code"] == "E202"
        assert data["error_type"] == "ConfigLoadError"
        assert data["context"]["target"] == "x.yaml"
        assert data["cause"] is None


class TestConfigValidationError:
    """Tests for ConfigValidationError."""

    def test_is_value_error(self):
        error = ConfigValidationError("bad", field="output_format", value="xml")
        assert isinstance(error, ValueError)
        assert isinstance(error, CombinatorError)

    def test_records_field(self):
        error = ConfigValidationError("bad", field="output_format", value="xml")
        assert error.field == "output_format"
        assert error.value == "xml"
        assert error.context.extra["field"] == "output_format"
