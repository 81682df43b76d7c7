"""Tests for the story data model."""

import pytest

from storyfit.models.story import ContainerBox, Run, RunFormatting, Story, StoryDefaults
from storyfit.utils.enums import BreakType


class TestRunFormatting:
    """Test suite for RunFormatting."""

    def test_from_camel_case(self):
        formatting = RunFormatting.from_dict({
            "fontFamily": "Arial",
            "fontSize": 14,
            "fillColorRef": "Color/Black",
            "strikeThrough": True,
            "paragraphStyle": "Body",
            "unknownKey": 1,
        })

        assert formatting.font_family == "Arial"
        assert formatting.font_size == 14
        assert formatting.fill_color == "Color/Black"
        assert formatting.strikethrough is True
        assert formatting.paragraph_style == "Body"

    def test_complete_styles_flattened(self):
        formatting = RunFormatting.from_dict({"completeStyles": {"baselineShift": 3, "horizontalScale": 90}})

        assert formatting.baseline_shift == 3
        assert formatting.horizontal_scale == 90

    def test_explicit_key_beats_complete_styles(self):
        formatting = RunFormatting.from_dict({"baselineShift": 1, "completeStyles": {"baselineShift": 3}})
        assert formatting.baseline_shift == 1

    @pytest.mark.parametrize("value, expected", [
        ("paragraph", BreakType.PARAGRAPH),
        ("Paragraph", BreakType.PARAGRAPH),
        ("line", BreakType.LINE),
        ("column", BreakType.LINE),
    ])
    def test_break_type_coerced(self, value, expected):
        assert RunFormatting(is_break=True, break_type=value).break_type is expected


class TestRun:
    """Test suite for Run."""

    def test_from_dict(self):
        run = Run.from_dict({"text": "Hi", "formatting": {"isBreak": False, "fontSize": 10}})

        assert run.text == "Hi"
        assert run.is_break is False
        assert run.formatting.font_size == 10

    def test_missing_text_and_formatting(self):
        run = Run.from_dict({})

        assert run.text == ""
        assert run.formatting == RunFormatting()

    def test_non_mapping_rejected(self):
        with pytest.raises(TypeError):
            Run.from_dict(["Hi"])

    def test_coerce_keeps_runs(self):
        run = Run("Hi")
        assert Run.coerce(run) is run


class TestStory:
    """Test suite for Story."""

    def test_from_dict(self, story):
        assert story.text == "Hello World"
        assert story.defaults.font_size == 12
        assert story.units is None
        assert [run.text for run in story.runs()] == ["Hello", "World"]

    def test_runs_none_for_non_list(self):
        assert Story(formatted_content="text").runs() is None

    def test_plain_text_prefers_raw_text(self, story):
        assert story.plain_text() == "Hello World"

    def test_plain_text_from_runs(self):
        story = Story(formatted_content=[
            {"text": "One"},
            {"text": "", "formatting": {"isBreak": True}},
            {"text": "Two"},
            "junk",
        ])
        assert story.plain_text() == "One\nTwo"

    def test_defaults_from_styling(self):
        defaults = StoryDefaults.from_dict({"fontFamily": "Georgia", "isBreak": True})

        assert defaults.font_family == "Georgia"
        assert not hasattr(defaults, "is_break")

    def test_non_mapping_rejected(self):
        with pytest.raises(TypeError):
            Story.from_dict("story")


class TestContainerBox:
    """Test suite for ContainerBox."""

    @pytest.mark.parametrize("width, height, expected", [
        (100, 50, True),
        (0.5, 0.5, True),
        (0, 50, False),
        (100, -5, False),
        (None, 50, False),
        (True, 50, False),
    ])
    def test_is_valid(self, width, height, expected):
        assert ContainerBox(width, height).is_valid is expected


class TestFieldCoercion:
    """Field values are normalized when formatting is built from a mapping."""

    def test_formatting_must_be_a_mapping(self):
        for formatting in ("bold", [1, 2], 7):
            with pytest.raises(TypeError):
                Run.from_dict({"text": "a", "formatting": formatting})

    def test_styling_must_be_a_mapping(self):
        with pytest.raises(TypeError):
            Story.from_dict({"text": "a", "styling": "Body"})

    def test_numeric_strings_parsed(self):
        formatting = RunFormatting.from_dict({"horizontalScale": "120", "fontSize": "14px", "tracking": " 50 "})

        assert formatting.horizontal_scale == 120
        assert formatting.font_size == 14
        assert formatting.tracking == 50

    def test_non_numeric_values_dropped(self):
        formatting = RunFormatting.from_dict({
            "tracking": "wide",
            "leftIndent": [3],
            "baselineShift": True,
            "completeStyles": {"horizontalScale": "narrow"},
        })

        assert formatting.tracking is None
        assert formatting.left_indent is None
        assert formatting.baseline_shift is None
        assert formatting.horizontal_scale is None

    def test_text_fields_stringified(self):
        formatting = RunFormatting.from_dict({"fontStyle": 700, "alignment": ["LeftAlign"]})

        assert formatting.font_style == "700"
        assert formatting.alignment is None

    def test_line_height_fields_keep_numbers_and_keywords(self):
        formatting = RunFormatting.from_dict({"leading": "auto", "effectiveLineHeight": {"value": 18}})

        assert formatting.leading == "auto"
        assert formatting.effective_line_height is None

    def test_non_string_units_ignored(self):
        assert Story.from_dict({"text": "a", "units": 72}).units is None
