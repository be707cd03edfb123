"""
classifier.py — Map raw extracted tokens to closed vocabularies.

Two ways in:
  - Resolution/Quality/Codec/Audio.from_str: strict, raise a field-specific
    ClassificationError on an unknown token
  - classify(record): lenient, a field that fails to classify is left as None
    and does not affect other fields
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Callable, Dict, Optional, TypeVar, Union

from releaseinfo.errors import (
    ClassificationError,
    InvalidAudio,
    InvalidCodec,
    InvalidQuality,
    InvalidResolution,
)
from releaseinfo.misc.logger import logger
from releaseinfo.models import Metadata, MetadataRef


# ── Enums ────────────────────────────────────────────────────────────────────

class Resolution(StrEnum):
    R240I = "240i"
    R240P = "240p"
    R320I = "320i"
    R320P = "320p"
    R480I = "480i"
    R480P = "480p"
    R576I = "576i"
    R576P = "576p"
    R720I = "720i"
    R720P = "720p"
    R1080I = "1080i"
    R1080P = "1080p"
    R2160I = "2160i"
    R2160P = "2160p"
    R4K = "4k"

    @classmethod
    def from_str(cls, raw: str) -> Resolution:
        # 240i/240I ... 4k/4K; the scan letter is the only case-insensitive part
        if raw[-1:] in ("I", "P", "K"):
            candidate = raw[:-1] + raw[-1].lower()
        else:
            candidate = raw
        try:
            return cls(candidate)
        except ValueError:
            raise InvalidResolution(raw) from None


class Quality(StrEnum):
    HDTV = "hdtv"
    CAM = "cam"
    BLURAY = "bluray"
    TS = "ts"
    HD = "hd"
    DVD = "dvd"
    WEB = "web"

    @classmethod
    def from_str(cls, raw: str) -> Quality:
        try:
            return _QUALITIES[raw]
        except KeyError:
            raise InvalidQuality(raw) from None


class Codec(StrEnum):
    X264 = "x264"
    X265 = "x265"
    XVID = "xvid"

    @classmethod
    def from_str(cls, raw: str) -> Codec:
        codec = _CODECS.get(raw) or _CODECS_ANY_CASE.get(raw.lower())
        if codec is None:
            raise InvalidCodec(raw)
        return codec


class Audio(StrEnum):
    MP3 = "mp3"
    DOLBY51 = "dd5.1"
    DUAL = "dual"
    LINE = "line"
    DTS = "dts"
    AAC = "aac"
    AC3 = "ac3"

    @classmethod
    def from_str(cls, raw: str) -> Audio:
        try:
            return _AUDIO[raw]
        except KeyError:
            raise InvalidAudio(raw) from None


# ── Lookup tables ────────────────────────────────────────────────────────────

_WEB_PREFIXES = ("WEB", "WEB-", "WEB-DL", "WEBDL")

_QUALITIES: Dict[str, Quality] = {
    **dict.fromkeys(("HDTV", "PPV.HDTV", "PDTV", "PPV.PDTV", "hdtv"), Quality.HDTV),
    **dict.fromkeys(("CAM", "HDCAM", "CamRip"), Quality.CAM),
    **dict.fromkeys(("BrRip", "BRRip", "BluRay", "Bluray", "bluRay", "bluray"), Quality.BLURAY),
    "TS": Quality.TS,
    **dict.fromkeys(_WEB_PREFIXES, Quality.WEB),
    **dict.fromkeys((f"PPV {p}" for p in _WEB_PREFIXES), Quality.WEB),
    **dict.fromkeys((f"{p} DVDRip" for p in _WEB_PREFIXES), Quality.WEB),
    **dict.fromkeys((f"PPV {p} DVDRip" for p in _WEB_PREFIXES), Quality.WEB),
    **dict.fromkeys(("WEBRip", "WEBrip", "WBBRip", "WBBrip"), Quality.WEB),
    **dict.fromkeys(("HDRip", "HdRip"), Quality.HD),
    **dict.fromkeys(("DVDRip", "DVDRiP", "DVDRIP", "DvDScr"), Quality.DVD),
}

_CODECS: Dict[str, Codec] = {
    **dict.fromkeys(("X264", "x264", "H264", "h264", "H.264", "h.264"), Codec.X264),
    **dict.fromkeys(("X265", "x265", "H265", "h265", "H.265", "h.265"), Codec.X265),
}

# any capitalisation of these is accepted
_CODECS_ANY_CASE: Dict[str, Codec] = {
    "hevc": Codec.X265,
    "xvid": Codec.XVID,
}

_AUDIO: Dict[str, Audio] = {
    "MP3": Audio.MP3,
    "DD51": Audio.DOLBY51,
    "DD5.1": Audio.DOLBY51,
    "Dual-Audio": Audio.DUAL,
    "Dual Audio": Audio.DUAL,
    "LiNE": Audio.LINE,
    "DTS": Audio.DTS,
    **dict.fromkeys(("AAC", "AAC2.0", "AAC.2.0"), Audio.AAC),
    **dict.fromkeys(("AC3", "AC35.1", "AC3.5.1"), Audio.AC3),
}


# ── Lenient classification ───────────────────────────────────────────────────

E = TypeVar("E", Resolution, Quality, Codec, Audio)


@dataclass(frozen=True)
class Classification:
    resolution: Optional[Resolution] = None
    quality: Optional[Quality] = None
    codec: Optional[Codec] = None
    audio: Optional[Audio] = None

    def to_dict(self) -> dict:
        return {
            "resolution": self.resolution.value if self.resolution else None,
            "quality": self.quality.value if self.quality else None,
            "codec": self.codec.value if self.codec else None,
            "audio": self.audio.value if self.audio else None,
        }


def _lenient(lookup: Callable[[str], E], raw: Optional[str]) -> Optional[E]:
    if raw is None:
        return None
    try:
        return lookup(raw)
    except ClassificationError as exc:
        logger.debug("classification skipped: %s", exc)
        return None


def classify(record: Union[Metadata, MetadataRef]) -> Classification:
    """Classify every raw field of a parse result; unknown tokens become None."""
    return Classification(
        resolution=_lenient(Resolution.from_str, record.resolution),
        quality=_lenient(Quality.from_str, record.quality),
        codec=_lenient(Codec.from_str, record.codec),
        audio=_lenient(Audio.from_str, record.audio),
    )
