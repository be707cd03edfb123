"""
models.py — Result records for a parsed release name.

Two views of the same result:
  - MetadataRef: borrowing view. Holds the caller's string plus the span of
    every raw text field; text is sliced out on access.
  - Metadata: owning view. Plain strings, detached from the input. Only ever
    built from a MetadataRef via to_owned().
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Flag
from typing import NamedTuple, Optional


# ── Enums ────────────────────────────────────────────────────────────────────

class Flags(Flag):
    NONE = 0
    EXTENDED = 0x01
    HARDCODED = 0x02
    PROPER = 0x04
    REPACK = 0x08
    WIDESCREEN = 0x10
    UNRATED = 0x20
    THREE_D = 0x40


TEXT_FIELDS = ("resolution", "quality", "codec", "audio", "group", "imdb_tag")


class Span(NamedTuple):
    start: int
    end: int

    def of(self, source: str) -> str:
        return source[self.start:self.end]


# ── Shared flag accessors ────────────────────────────────────────────────────

class _FlagAccessors:
    flags: Flags

    @property
    def extended(self) -> bool:
        return Flags.EXTENDED in self.flags

    @property
    def hardcoded(self) -> bool:
        return Flags.HARDCODED in self.flags

    @property
    def proper(self) -> bool:
        return Flags.PROPER in self.flags

    @property
    def repack(self) -> bool:
        return Flags.REPACK in self.flags

    @property
    def widescreen(self) -> bool:
        return Flags.WIDESCREEN in self.flags

    @property
    def unrated(self) -> bool:
        return Flags.UNRATED in self.flags

    @property
    def three_d(self) -> bool:
        return Flags.THREE_D in self.flags


# ── Borrowing view ───────────────────────────────────────────────────────────

@dataclass(frozen=True)
class MetadataRef(_FlagAccessors):
    """
    Parse result that refers back to the input string.

    The raw text fields are stored as spans into `source`; valid as long as
    the caller keeps `source` around, which Python guarantees by reference.
    """
    source: str
    title: str
    season: Optional[int] = None
    episode: Optional[int] = None
    year: Optional[int] = None
    resolution_span: Optional[Span] = None
    quality_span: Optional[Span] = None
    codec_span: Optional[Span] = None
    audio_span: Optional[Span] = None
    group_span: Optional[Span] = None
    imdb_tag_span: Optional[Span] = None
    flags: Flags = Flags.NONE

    def _slice(self, span: Optional[Span]) -> Optional[str]:
        return span.of(self.source) if span is not None else None

    @property
    def resolution(self) -> Optional[str]:
        return self._slice(self.resolution_span)

    @property
    def quality(self) -> Optional[str]:
        return self._slice(self.quality_span)

    @property
    def codec(self) -> Optional[str]:
        return self._slice(self.codec_span)

    @property
    def audio(self) -> Optional[str]:
        return self._slice(self.audio_span)

    @property
    def group(self) -> Optional[str]:
        return self._slice(self.group_span)

    @property
    def imdb_tag(self) -> Optional[str]:
        return self._slice(self.imdb_tag_span)

    def to_owned(self) -> Metadata:
        return Metadata(
            title=self.title,
            season=self.season,
            episode=self.episode,
            year=self.year,
            resolution=self.resolution,
            quality=self.quality,
            codec=self.codec,
            audio=self.audio,
            group=self.group,
            imdb_tag=self.imdb_tag,
            flags=self.flags,
        )


# ── Owning view ──────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Metadata(_FlagAccessors):
    """Detached parse result; safe to keep after the input is gone."""
    title: str
    season: Optional[int] = None
    episode: Optional[int] = None
    year: Optional[int] = None
    resolution: Optional[str] = None
    quality: Optional[str] = None
    codec: Optional[str] = None
    audio: Optional[str] = None
    group: Optional[str] = None
    imdb_tag: Optional[str] = None
    flags: Flags = Flags.NONE

    def to_dict(self) -> dict:
        return {
            "title": self.title,
            "season": self.season,
            "episode": self.episode,
            "year": self.year,
            "resolution": self.resolution,
            "quality": self.quality,
            "codec": self.codec,
            "audio": self.audio,
            "group": self.group,
            "imdb_tag": self.imdb_tag,
            "extended": self.extended,
            "hardcoded": self.hardcoded,
            "proper": self.proper,
            "repack": self.repack,
            "widescreen": self.widescreen,
            "unrated": self.unrated,
            "three_d": self.three_d,
        }
