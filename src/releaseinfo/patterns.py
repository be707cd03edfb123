"""
patterns.py — Registry of release-name pattern descriptors.

Every descriptor is matched against the full, original release name. A match
of a `before_title` descriptor pushes the title start past the match; any
other match pulls the title end back to where the match begins.

Descriptors only ever look at the original string, never at a narrowed
region, so the registry can be applied in any order.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional, Tuple, Union

from releaseinfo.models import Flags, Span

Group = Union[str, int]


@dataclass(frozen=True)
class Pattern:
    name: str
    regex: re.Pattern
    capture: Tuple[Group, ...] = ()
    before_title: bool = False
    flag: Optional[Flags] = None

    def search(self, text: str) -> Optional[re.Match]:
        return self.regex.search(text)

    def value_span(self, match: re.Match) -> Optional[Span]:
        """Span of the first capture group, in priority order, that took part in the match."""
        for group in self.capture:
            start, end = match.span(group)
            if start != -1:
                return Span(start, end)
        return None


def _bounded(expr: str, flags: int = 0) -> re.Pattern:
    """Compile `expr` so it cannot start or end inside an alphanumeric run."""
    return re.compile(rf"(?<![A-Za-z0-9])(?:{expr})(?![A-Za-z0-9])", flags)


# ── Numbered fields ──────────────────────────────────────────────────────────

# S02, S02E04, Season 2, 2x04
SEASON = Pattern(
    "season",
    re.compile(
        r"(?<![a-z0-9])(?:"
        r"s(?P<short>\d{1,2})(?=e\d|[^a-z0-9]|$)"
        r"|season[ ._-]?(?P<long>\d{1,2})(?![0-9])"
        r"|(?P<cross>\d{1,2})x\d{1,3}(?![0-9])"
        r")",
        re.IGNORECASE,
    ),
    capture=("short", "long", "cross"),
)

# S02E04, Episode 4, 2x04, E04 / EP04
EPISODE = Pattern(
    "episode",
    re.compile(
        r"(?<![a-z0-9])(?:"
        r"s\d{1,2}[ ._-]?e(?P<short>\d{1,3})(?![0-9])"
        r"|episode[ ._-]?(?P<long>\d{1,3})(?![0-9])"
        r"|\d{1,2}x(?P<cross>\d{1,3})(?![0-9])"
        r"|ep?(?P<bare>\d{2,3})(?![a-z0-9])"
        r")",
        re.IGNORECASE,
    ),
    capture=("short", "long", "cross", "bare"),
)

YEAR = Pattern(
    "year",
    re.compile(r"(?<![A-Za-z0-9])[\[(]?(?P<year>(?:19|20)\d{2})[\])]?(?![A-Za-z0-9])"),
    capture=("year",),
)


# ── Raw text fields ──────────────────────────────────────────────────────────

RESOLUTION = Pattern(
    "resolution",
    _bounded(r"(?P<resolution>(?:240|320|480|576|720|1080|2160)[ip]|4k)", re.IGNORECASE),
    capture=("resolution",),
)

QUALITY = Pattern(
    "quality",
    _bounded(
        r"(?:PPV\.)?[HP]DTV|hdtv"
        r"|HDCAM|CAM|CamRip"
        r"|B[Rr]Rip|[Bb]lu[Rr]ay"
        r"|TS"
        r"|(?:PPV )?WEB(?:-?DL)?(?: DVDRip)?|WEB[Rr]ip|WBB[Rr]ip"
        r"|H[Dd]Rip"
        r"|DVDRi[Pp]|DVDRIP|DvDScr"
    ),
    capture=(0,),
)

CODEC = Pattern(
    "codec",
    _bounded(r"[xX]26[45]|[hH]\.?26[45]|xvid|hevc", re.IGNORECASE),
    capture=(0,),
)

AUDIO = Pattern(
    "audio",
    _bounded(r"MP3|DD5\.?1|Dual[- ]Audio|LiNE|DTS|AAC(?:\.?2\.0)?|AC3(?:\.?5\.1)?"),
    capture=(0,),
)

# -GROUP at the very end, optionally followed by a [tag] and an extension
GROUP = Pattern(
    "group",
    re.compile(
        r"-(?P<group>(?!(?:DL|Rip)(?![A-Za-z0-9]))[A-Za-z0-9]+)"
        r"(?:\[[^\]]*\])?(?:\.[A-Za-z0-9]{2,4})?$"
    ),
    capture=("group",),
)

IMDB = Pattern(
    "imdb",
    _bounded(r"tt\d{7,8}"),
    capture=(0,),
)


# ── Release flags ────────────────────────────────────────────────────────────

EXTENDED = Pattern("extended", _bounded(r"EXTENDED(?:[ ._-]CUT)?|Extended[ ._-]Cut"), flag=Flags.EXTENDED)
HARDCODED = Pattern("hardcoded", _bounded(r"HC"), flag=Flags.HARDCODED)
PROPER = Pattern("proper", _bounded(r"PROPER"), flag=Flags.PROPER)
REPACK = Pattern("repack", _bounded(r"REPACK"), flag=Flags.REPACK)
WIDESCREEN = Pattern("widescreen", _bounded(r"WS"), flag=Flags.WIDESCREEN)
UNRATED = Pattern("unrated", _bounded(r"UNRATED"), flag=Flags.UNRATED)
THREE_D = Pattern("three_d", _bounded(r"3D"), flag=Flags.THREE_D)


# ── Boundary-only markers ────────────────────────────────────────────────────

REGION = Pattern("region", _bounded(r"R[0-9]"))

CONTAINER = Pattern("container", _bounded(r"MKV|AVI|MP4", re.IGNORECASE))

LANGUAGE = Pattern(
    "language",
    _bounded(r"rus\.eng|ita\.eng|ENG|FRENCH|GERMAN|ITA|RUS|SPANISH|MULTi|MULTI"),
)

GARBAGE = Pattern(
    "garbage",
    _bounded(r"(?i:\d+(?:\.\d+)?[ ]?[MG]B)|READNFO|INTERNAL|LIMITED|COMPLETE|SUBBED|DUBBED"),
)

# [ www.site.org ] or www.site.org at the very start; the title follows it
WEBSITE = Pattern(
    "website",
    re.compile(r"^(?:\[ ?[^\]]+? ?\]|www\.[A-Za-z0-9-]+\.[A-Za-z]{2,6})"),
    before_title=True,
)


REGISTRY: Tuple[Pattern, ...] = (
    SEASON,
    EPISODE,
    YEAR,
    RESOLUTION,
    QUALITY,
    CODEC,
    AUDIO,
    GROUP,
    IMDB,
    EXTENDED,
    HARDCODED,
    PROPER,
    REPACK,
    WIDESCREEN,
    UNRATED,
    THREE_D,
    REGION,
    CONTAINER,
    LANGUAGE,
    GARBAGE,
    WEBSITE,
)
