"""Tests for the storyfit exception hierarchy."""

from storyfit.exceptions import MeasurementError, StoryFitError, StoryLoadError, StyleError


class TestExceptions:
    """Test suite for exceptions."""

    def test_hierarchy(self):
        for error_cls in (MeasurementError, StyleError, StoryLoadError):
            assert issubclass(error_cls, StoryFitError)

    def test_error_info(self):
        cause = ValueError("bad")
        error = StyleError("Font size must be positive", field_name="size", value=0, cause=cause)
        info = error.get_error_info()

        assert info["error_code"] == "invalid_style"
        assert info["cause"] == "bad"
        assert info["field_name"] == "size"
        assert info["value"] == "0"

    def test_str(self):
        assert str(StoryLoadError("missing", source="a.json")) == "StoryLoadError: missing"

    def test_custom_error_code(self):
        error = MeasurementError("no provider", error_code="custom")

        assert error.error_code == "custom"
        assert error.get_error_info()["provider"] is None
