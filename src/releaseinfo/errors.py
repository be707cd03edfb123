"""
errors.py — Exceptions raised by the parser and the classifier tables.

TitleNotFoundError is the only error the extraction engine raises for a
well-formed registry. Classification errors belong to the lookup tables in
classifier.py and never block extraction.
"""

from __future__ import annotations

from typing import List, Optional, Tuple


class ReleaseInfoError(Exception):
    pass


class TitleNotFoundError(ReleaseInfoError):
    """The title region collapsed after every pattern was applied."""

    def __init__(self, matches: List[Tuple[str, Optional[str]]]) -> None:
        self.matches = matches
        super().__init__(f"Couldn't find a title; matches: {matches!r}")

    @property
    def matched(self) -> List[Tuple[str, str]]:
        """Only the descriptors that actually matched something."""
        return [(name, text) for name, text in self.matches if text is not None]


class ClassificationError(ReleaseInfoError):
    field = "value"

    def __init__(self, raw: str) -> None:
        self.raw = raw
        super().__init__(f"Invalid {self.field}: {raw}")


class InvalidResolution(ClassificationError):
    field = "resolution"


class InvalidQuality(ClassificationError):
    field = "quality"


class InvalidCodec(ClassificationError):
    field = "codec"


class InvalidAudio(ClassificationError):
    field = "audio"
