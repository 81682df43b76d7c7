"""
Command-line interface for storyfit.

Usage:
    storyfit render story.json --width 300 --height 120 --strategy precise_fit
    storyfit metrics story.json --width 300 --height 120
    storyfit version
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .engine.fit_strategy import FitStrategy


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="storyfit",
        description="storyfit - fit styled text stories into fixed page boxes",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  storyfit render story.json --width 300 --height 120
  storyfit render story.json -W 300 -H 120 --strategy auto_scale -o plan.json
  storyfit metrics story.json --width 300 --height 120
  storyfit version
        """,
    )
    parser.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Increase log verbosity (-v info, -vv debug)"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    def add_story_arguments(sub: argparse.ArgumentParser) -> None:
        sub.add_argument("input", help="Story JSON file")
        sub.add_argument("-W", "--width", type=float, required=True, help="Container width (px)")
        sub.add_argument("-H", "--height", type=float, required=True, help="Container height (px)")
        sub.add_argument(
            "--unit",
            help="Unit of the story's sizes when the file does not say (e.g. Points)"
        )
        sub.add_argument(
            "-o", "--output",
            help="Write JSON to this file instead of stdout"
        )
        sub.add_argument(
            "-v", "--verbose",
            action="count",
            default=argparse.SUPPRESS,
            help="Increase log verbosity"
        )

    render_parser = subparsers.add_parser("render", help="Fit a story and print its render plan")
    add_story_arguments(render_parser)
    render_parser.add_argument(
        "-s", "--strategy",
        choices=[strategy.value for strategy in FitStrategy],
        default=FitStrategy.PRECISE_FIT.value,
        help="Fit strategy (default: precise_fit)"
    )
    render_parser.add_argument(
        "--background",
        default="white",
        help="Background color for the contrast check (default: white)"
    )

    metrics_parser = subparsers.add_parser("metrics", help="Print text metrics for a story")
    add_story_arguments(metrics_parser)

    subparsers.add_parser("version", help="Show version information")

    return parser


def _write_json(payload, output: Optional[str]) -> None:
    text = json.dumps(payload, indent=2, ensure_ascii=False, default=str)
    if output:
        Path(output).write_text(text + "\n", encoding="utf-8")
        print(f"Saved: {output}", file=sys.stderr)
    else:
        print(text)


def cmd_render(args) -> int:
    """Handle render command."""
    from .api import fit_story, load_story
    from .config import RenderConfig
    from .engine.measurement import ReportLabMeasurementProvider
    from .models.story import ContainerBox

    story = load_story(args.input)
    config = RenderConfig(
        strategy=args.strategy,
        background_color=args.background,
        source_unit=args.unit,
    )
    result = fit_story(story, ContainerBox(args.width, args.height), ReportLabMeasurementProvider(), config)
    _write_json(result.to_dict(), args.output)
    return 0


def cmd_metrics(args) -> int:
    """Handle metrics command."""
    from .api import fit_story, load_story
    from .config import RenderConfig
    from .engine.measurement import ReportLabMeasurementProvider
    from .models.story import ContainerBox

    story = load_story(args.input)
    config = RenderConfig(strategy=FitStrategy.ALLOW_OVERFLOW, source_unit=args.unit)
    result = fit_story(story, ContainerBox(args.width, args.height), ReportLabMeasurementProvider(), config)
    _write_json(result.metrics.to_dict(), args.output)
    return 0


def cmd_version(args=None) -> int:
    """Handle version command."""
    from .version import __version__
    print(f"storyfit v{__version__}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for CLI."""
    from .exceptions import StoryFitError
    from .utils.logger import setup_logging

    parser = create_parser()
    args = parser.parse_args(argv)

    level = {0: logging.WARNING, 1: logging.INFO}.get(args.verbose, logging.DEBUG)
    setup_logging(level)

    commands = {
        "render": cmd_render,
        "metrics": cmd_metrics,
        "version": cmd_version,
    }
    handler = commands.get(args.command)
    if handler is None:
        parser.print_help()
        return 0

    try:
        return handler(args)
    except StoryFitError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
