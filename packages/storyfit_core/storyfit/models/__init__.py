"""Story data model."""

from .story import (
    ContainerBox,
    FontDescriptor,
    Run,
    RunFormatting,
    Story,
    StoryDefaults,
)

__all__ = [
    "ContainerBox",
    "FontDescriptor",
    "Run",
    "RunFormatting",
    "Story",
    "StoryDefaults",
]
