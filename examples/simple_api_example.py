#!/usr/bin/env python3
"""
Example of the high-level storyfit API.

Fits the sample story into a small text frame with each strategy and prints
what changed.
"""

from pathlib import Path

from storyfit import ContainerBox, ReportLabMeasurementProvider, RenderConfig, fit_story, load_story
from storyfit.engine.fit_strategy import FitStrategy


def main():
    """Run every fit strategy over the sample story."""
    story = load_story(Path(__file__).parent / "sample_story.json")
    provider = ReportLabMeasurementProvider()
    frame = ContainerBox(width=120, height=40)

    for strategy in FitStrategy:
        result = fit_story(story, frame, provider, RenderConfig(strategy=strategy))
        adjustment = result.fit.adjustment.type if result.fit.adjustment else "none"
        print(f"{strategy.value:>15}: {result.metrics.estimated_lines} lines, "
              f"severity={result.metrics.overflow_severity.value}, adjustment={adjustment}, "
              f"font_size={result.fit.font_size:.1f}")

    print()
    print("Segments (precise_fit):")
    for segment in fit_story(story, frame, provider).plan:
        print(f"   {segment.to_dict()}")


if __name__ == "__main__":
    main()
