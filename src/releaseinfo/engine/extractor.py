"""
extractor.py — Field extraction and title-boundary resolution.

Each pattern in the registry is searched against the full release name. A
match yields (a) an optional field value and (b) a constraint on where the
title can lie:
  - before_title matches raise the title start to the end of the match
  - all other matches lower the title end to the start of the match

The title region is what is left once every constraint has been applied.
Because the bounds only move through max/min against the same original
string, the result does not depend on the order of the registry.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from releaseinfo.engine.title import normalize_title
from releaseinfo.errors import TitleNotFoundError
from releaseinfo.misc.logger import logger
from releaseinfo.models import Flags, MetadataRef, Span
from releaseinfo.patterns import REGISTRY, Pattern


# ── Boundary ─────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Boundary:
    start: int
    end: int

    @classmethod
    def of(cls, name: str) -> Boundary:
        return cls(0, len(name))

    @property
    def collapsed(self) -> bool:
        return self.start >= self.end

    def narrow(self, pattern: Pattern, match: re.Match) -> Boundary:
        if pattern.before_title:
            return Boundary(max(self.start, match.end()), self.end)
        return Boundary(self.start, min(self.end, match.start()))


# ── Per-pattern result ───────────────────────────────────────────────────────

@dataclass(frozen=True)
class FieldMatch:
    pattern: Pattern
    span: Optional[Span] = None
    value: Optional[Span] = None

    @property
    def name(self) -> str:
        return self.pattern.name

    @property
    def matched(self) -> bool:
        return self.span is not None

    def text(self, source: str) -> Optional[str]:
        """Extracted value for value patterns, whole match for flag/marker patterns."""
        if self.pattern.capture:
            return self.value.of(source) if self.value is not None else None
        return self.span.of(source) if self.span is not None else None


@dataclass(frozen=True)
class Extraction:
    source: str
    boundary: Boundary
    fields: Tuple[FieldMatch, ...]
    history: Tuple[Boundary, ...]

    @property
    def title_region(self) -> str:
        return self.source[self.boundary.start:self.boundary.end]

    def field(self, name: str) -> Optional[FieldMatch]:
        for field_match in self.fields:
            if field_match.name == name:
                return field_match
        return None

    def value(self, name: str) -> Optional[Span]:
        field_match = self.field(name)
        return field_match.value if field_match is not None else None

    def text(self, name: str) -> Optional[str]:
        field_match = self.field(name)
        return field_match.text(self.source) if field_match is not None else None

    def flags(self) -> Flags:
        flags = Flags.NONE
        for field_match in self.fields:
            if field_match.matched and field_match.pattern.flag is not None:
                flags |= field_match.pattern.flag
        return flags

    def diagnostics(self) -> List[Tuple[str, Optional[str]]]:
        return [(f.name, f.text(self.source)) for f in self.fields]


# ── Engine ───────────────────────────────────────────────────────────────────

def _apply(pattern: Pattern, name: str, boundary: Boundary) -> Tuple[FieldMatch, Boundary]:
    match = pattern.search(name)
    if match is None:
        return FieldMatch(pattern), boundary

    narrowed = boundary.narrow(pattern, match)
    if narrowed != boundary:
        logger.trace(
            "%s matched %r at %d:%d title [%d:%d]->[%d:%d]",
            pattern.name, match.group(0), match.start(), match.end(),
            boundary.start, boundary.end, narrowed.start, narrowed.end,
        )
    return FieldMatch(pattern, Span(*match.span()), pattern.value_span(match)), narrowed


def extract(name: str, registry: Sequence[Pattern] = REGISTRY) -> Extraction:
    """Apply every pattern to `name` and fold the matches into a title boundary."""
    boundary = Boundary.of(name)
    history = [boundary]
    fields = []
    for pattern in registry:
        field_match, boundary = _apply(pattern, name, boundary)
        fields.append(field_match)
        history.append(boundary)
    return Extraction(name, boundary, tuple(fields), tuple(history))


def _number(extraction: Extraction, name: str) -> Optional[int]:
    # Numeric patterns only capture short digit runs; a failure here is a registry bug.
    text = extraction.text(name)
    return int(text) if text is not None else None


def parse(name: str, registry: Sequence[Pattern] = REGISTRY) -> MetadataRef:
    """
    Parse a release name into a borrowing MetadataRef.

    Raises TitleNotFoundError when the patterns leave no room for a title.
    """
    extraction = extract(name, registry)
    if extraction.boundary.collapsed:
        logger.debug(
            "no title in %r: region [%d:%d]",
            name, extraction.boundary.start, extraction.boundary.end,
        )
        raise TitleNotFoundError(extraction.diagnostics())

    return MetadataRef(
        source=name,
        title=normalize_title(extraction.title_region),
        season=_number(extraction, "season"),
        episode=_number(extraction, "episode"),
        year=_number(extraction, "year"),
        resolution_span=extraction.value("resolution"),
        quality_span=extraction.value("quality"),
        codec_span=extraction.value("codec"),
        audio_span=extraction.value("audio"),
        group_span=extraction.value("group"),
        imdb_tag_span=extraction.value("imdb"),
        flags=extraction.flags(),
    )
