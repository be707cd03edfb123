"""
releaseinfo — Extract structured metadata from media release names.

    >>> meta = parse("Show.Name.S02E04.1080p.WEB-DL.x264-GROUP")
    >>> meta.title, meta.season, meta.episode
    ('Show Name', 2, 4)
"""

from releaseinfo.classifier import Audio, Classification, Codec, Quality, Resolution, classify
from releaseinfo.engine.extractor import extract, parse
from releaseinfo.errors import (
    ClassificationError,
    InvalidAudio,
    InvalidCodec,
    InvalidQuality,
    InvalidResolution,
    ReleaseInfoError,
    TitleNotFoundError,
)
from releaseinfo.models import Flags, Metadata, MetadataRef, Span

__version__ = "0.1.0"


def parse_owned(name: str) -> Metadata:
    """Parse `name` and detach the result from the input string."""
    return parse(name).to_owned()


__all__ = [
    "Audio",
    "Classification",
    "ClassificationError",
    "Codec",
    "Flags",
    "InvalidAudio",
    "InvalidCodec",
    "InvalidQuality",
    "InvalidResolution",
    "Metadata",
    "MetadataRef",
    "Quality",
    "ReleaseInfoError",
    "Resolution",
    "Span",
    "TitleNotFoundError",
    "classify",
    "extract",
    "parse",
    "parse_owned",
]
