"""Tests for measurement providers and font variant mapping."""

import pytest
from unittest.mock import patch

from storyfit.engine.measurement import MeasurementProvider, ReportLabMeasurementProvider, TextMeasurement
from storyfit.engine.utils.font_utils import is_bold_weight, normalize_base_font, resolve_font_variant
from storyfit.models.story import FontDescriptor


class TestReportLabMeasurementProvider:
    """Test suite for the ReportLab-backed provider."""

    def test_satisfies_protocol(self, provider):
        assert isinstance(ReportLabMeasurementProvider(), MeasurementProvider)
        assert isinstance(provider, MeasurementProvider)

    def test_measure_returns_positive_width(self):
        measurement = ReportLabMeasurementProvider().measure("Hello", FontDescriptor("Arial", 12))

        assert isinstance(measurement, TextMeasurement)
        assert measurement.advance_width > 0

    def test_empty_string_has_no_width(self):
        assert ReportLabMeasurementProvider().measure("", FontDescriptor("Arial", 12)).advance_width == 0

    def test_width_scales_with_size(self):
        provider = ReportLabMeasurementProvider()
        small = provider.measure("Hello", FontDescriptor("Arial", 12)).advance_width
        large = provider.measure("Hello", FontDescriptor("Arial", 24)).advance_width

        assert large == pytest.approx(2 * small)

    def test_bold_is_wider(self):
        provider = ReportLabMeasurementProvider()
        regular = provider.measure("Hello", FontDescriptor("Arial", 12)).advance_width
        bold = provider.measure("Hello", FontDescriptor("Arial", 12, weight="700")).advance_width

        assert bold > regular

    @pytest.mark.parametrize("family, weight, style, expected", [
        ("Arial", "400", "normal", "Helvetica"),
        ("Arial", "700", "normal", "Helvetica-Bold"),
        ("Georgia", "400", "italic", "Times-Italic"),
        ("Courier New", "bold", "italic", "Courier-BoldOblique"),
        ("Fancy Display", "400", "normal", "Helvetica"),
    ])
    def test_font_name_for(self, family, weight, style, expected):
        font = FontDescriptor(family, 12, weight=weight, style=style)
        assert ReportLabMeasurementProvider().font_name_for(font) == expected

    def test_font_names_are_cached(self):
        provider = ReportLabMeasurementProvider()
        font = FontDescriptor("Arial", 12)

        with patch(
            "storyfit.engine.measurement.resolve_font_variant", return_value="Helvetica"
        ) as resolve:
            provider.measure("a", font)
            provider.measure("b", font)

        assert resolve.call_count == 1


class TestFontUtils:
    """Test suite for font variant helpers."""

    def test_font_family_list_tries_each_candidate(self):
        assert normalize_base_font("'Unknown Face', Georgia, serif") == "Times-Roman"

    def test_empty_family_defaults_to_helvetica(self):
        assert normalize_base_font(None) == "Helvetica"

    def test_concrete_variant_kept(self):
        assert resolve_font_variant("Times-Bold", bold=False, italic=True) == "Times-Bold"

    @pytest.mark.parametrize("weight, expected", [
        ("400", False),
        ("600", True),
        ("Bold", True),
        ("black", True),
        (None, False),
    ])
    def test_is_bold_weight(self, weight, expected):
        assert is_bold_weight(weight) is expected
