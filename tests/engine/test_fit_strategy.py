"""Tests for fit strategies."""

import pytest

from storyfit.engine.fit_strategy import MIN_FONT_SIZE_PX, FitStrategy, fit
from storyfit.engine.text_metrics import TextMetrics, classify_overflow
from storyfit.models.story import ContainerBox


def make_metrics(estimated_text_height, available_height, line_height_px=12.0, lines=None):
    """Build metrics directly from heights."""
    lines = lines if lines is not None else max(1, int(estimated_text_height // line_height_px))
    return TextMetrics(
        estimated_lines=lines,
        estimated_text_height=estimated_text_height,
        line_height_px=line_height_px,
        available_height=available_height,
        will_overflow=estimated_text_height > available_height,
        overfill_ratio=estimated_text_height / available_height,
        overflow_severity=classify_overflow(estimated_text_height, available_height),
    )


@pytest.fixture
def base_style():
    return {"font_size": 20.0, "line_height": 1.2, "color": "black", "overflow": "visible"}


class TestFastPath:
    """Text that fits is never adjusted."""

    @pytest.mark.parametrize("strategy", list(FitStrategy) + ["bogus"])
    def test_no_overflow_returns_copy(self, base_style, strategy):
        metrics = make_metrics(40, 100)
        result = fit(base_style, metrics, ContainerBox(100, 104), strategy)

        assert result.was_adjusted is False
        assert result.adjustment is None
        assert result.style == base_style
        assert result.style is not base_style

    def test_base_style_not_mutated(self, base_style):
        snapshot = dict(base_style)
        fit(base_style, make_metrics(200, 100), strategy=FitStrategy.AUTO_SCALE)
        assert base_style == snapshot


class TestAutoScale:
    """Test suite for AUTO_SCALE."""

    def test_severe_overflow_capped_at_seventy_percent(self, base_style):
        result = fit(base_style, make_metrics(200, 100), strategy=FitStrategy.AUTO_SCALE)

        assert result.was_adjusted is True
        assert result.adjustment.type == "font_scaled"
        assert result.adjustment["scale_factor"] == pytest.approx(0.7)
        assert result.style["font_size"] == pytest.approx(14)
        assert result.style["line_height"] == pytest.approx(0.9)
        assert result.style["overflow"] == "hidden"

    def test_minor_overflow_scales_to_fit(self, base_style):
        result = fit(base_style, make_metrics(110, 100), strategy=FitStrategy.AUTO_SCALE)

        assert result.adjustment["scale_factor"] == pytest.approx(100 / 110)
        assert result.adjustment["original_size"] == 20
        assert result.font_size == pytest.approx(20 * 100 / 110)

    def test_font_size_floor(self):
        result = fit({"font_size": 10, "line_height": 1.2}, make_metrics(300, 100), strategy="auto_scale")

        assert result.style["font_size"] == MIN_FONT_SIZE_PX
        assert result.adjustment["new_size"] == MIN_FONT_SIZE_PX


class TestTruncate:
    """Test suite for TRUNCATE."""

    def test_clamps_to_fitting_lines(self, base_style):
        result = fit(base_style, make_metrics(72, 46, lines=6), strategy=FitStrategy.TRUNCATE)

        assert result.adjustment.type == "text_truncated"
        assert result.adjustment["visible_lines"] == 3
        assert result.adjustment["total_lines"] == 6
        assert result.style["line_clamp"] == 3
        assert result.style["text_overflow"] == "ellipsis"
        assert result.style["overflow"] == "hidden"
        assert result.style["font_size"] == 20.0

    def test_at_least_one_line_visible(self, base_style):
        result = fit(base_style, make_metrics(24, 5, lines=2), strategy=FitStrategy.TRUNCATE)
        assert result.style["line_clamp"] == 1


class TestCompressLines:
    """Test suite for COMPRESS_LINES."""

    def test_light_compression_changes_line_height_only(self, base_style):
        result = fit(base_style, make_metrics(100, 90), strategy=FitStrategy.COMPRESS_LINES)

        assert result.adjustment.type == "line_height_compressed"
        assert result.style["line_height"] == pytest.approx(1.08)
        assert result.style["font_size"] == 20.0

    def test_threshold_is_exclusive(self, base_style):
        result = fit(base_style, make_metrics(100, 80), strategy=FitStrategy.COMPRESS_LINES)
        assert result.adjustment.type == "full_compression"

    def test_full_compression(self, base_style):
        result = fit(base_style, make_metrics(100, 50), strategy=FitStrategy.COMPRESS_LINES)

        assert result.adjustment["font_reduction"] == pytest.approx(0.8)
        assert result.adjustment["line_height_reduction"] == pytest.approx(0.5)
        assert result.style["font_size"] == pytest.approx(16)
        assert result.style["line_height"] == pytest.approx(0.8)


class TestPreciseFit:
    """Test suite for the default PRECISE_FIT tiers."""

    @pytest.mark.parametrize("available", [95, 99])
    def test_near_fit_is_left_alone(self, base_style, available):
        result = fit(base_style, make_metrics(100, available))

        assert result.was_adjusted is False
        assert result.adjustment.type == "no_adjustment_needed"
        assert result.style["overflow"] == "hidden"
        assert result.style["font_size"] == 20.0
        assert result.style["line_height"] == 1.2

    def test_minor_line_height_adjustment(self, base_style):
        result = fit(base_style, make_metrics(100, 90))

        assert result.adjustment.type == "minor_line_height_adjustment"
        assert result.adjustment["line_height_reduction"] == pytest.approx(0.945)
        assert result.style["line_height"] == pytest.approx(1.2 * 0.945)
        assert result.style["font_size"] == 20.0

    def test_moderate_dual_adjustment_at_lower_tier_boundary(self, base_style):
        result = fit(base_style, make_metrics(100, 85))

        assert result.adjustment.type == "moderate_dual_adjustment"
        assert result.adjustment["font_scale"] == pytest.approx(0.85 ** 0.5)
        assert result.style["font_size"] == pytest.approx(20 * 0.85 ** 0.5)

    def test_major_adjustment_at_boundary(self, base_style):
        result = fit(base_style, make_metrics(100, 70))

        assert result.adjustment.type == "major_adjustment_with_overflow"
        assert result.adjustment["allowed_overflow"] is True
        assert result.style["font_size"] == pytest.approx(17)
        assert result.style["line_height"] == pytest.approx(0.96)
        assert result.style["max_height"] == 70

    def test_major_adjustment_respects_font_floor(self):
        result = fit({"font_size": 8, "line_height": 1.2}, make_metrics(100, 40))
        assert result.style["font_size"] == MIN_FONT_SIZE_PX

    def test_px_string_font_size(self):
        result = fit({"font_size": "20px", "line_height": "1.2"}, make_metrics(100, 70))
        assert result.font_size == pytest.approx(17)


class TestAllowOverflow:
    """Test suite for ALLOW_OVERFLOW and unknown tokens."""

    @pytest.mark.parametrize("strategy", [FitStrategy.ALLOW_OVERFLOW, "bogus", None])
    def test_overflow_visible(self, base_style, strategy):
        result = fit(base_style, make_metrics(300, 100), strategy=strategy)

        assert result.was_adjusted is False
        assert result.adjustment.type == "overflow_allowed"
        assert result.style["overflow"] == "visible"
        assert result.style["font_size"] == 20.0

    def test_to_dict(self, base_style):
        data = fit(base_style, make_metrics(300, 100), strategy="allow_overflow").to_dict()
        assert data["adjustment"] == {"type": "overflow_allowed"}


class TestFitStrategyParse:
    """Test suite for strategy token parsing."""

    @pytest.mark.parametrize("token, expected", [
        ("auto_scale", FitStrategy.AUTO_SCALE),
        ("Auto-Scale", FitStrategy.AUTO_SCALE),
        (" truncate ", FitStrategy.TRUNCATE),
        (FitStrategy.COMPRESS_LINES, FitStrategy.COMPRESS_LINES),
        ("shrink", None),
        (None, None),
        (3, None),
    ])
    def test_parse(self, token, expected):
        assert FitStrategy.parse(token) is expected
