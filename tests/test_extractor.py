"""Tests for engine/extractor.py — boundary narrowing, extraction and failures."""

import random
import re

import pytest

from releaseinfo import TitleNotFoundError, parse
from releaseinfo.config import cfg
from releaseinfo.engine.extractor import Boundary, extract
from releaseinfo.misc.logger import TRACE_LEVEL, apply_level, logger
from releaseinfo.models import Span
from releaseinfo.patterns import REGISTRY, Pattern

CORPUS = [
    "Show.Name.S02E04.1080p.WEB-DL.x264-GROUP",
    "Movie Title (2015) 720p BluRay x264",
    "Title_With_Underscores.2020.DVDRip",
    "S01E01.1080p.x264-GRP",
    "just a plain name",
    "Movie.Name.2010.EXTENDED.PROPER.REPACK.UNRATED.3D.720p.BluRay.x264-GRP",
    "Some.Movie.2019.HC.WS.HDRip.XviD-GRP",
    "[ www.Torrenting.com ] - Show Name S01E01 720p HDTV x264-GRP",
    "Show.S01E02.720p.WEB-DL.AAC2.0.H.264-GRP",
    "Movie.Title.2008.R5.LiNE.XviD-GRP.avi",
]


# ── Examples ────────────────────────────────────────────────────────────────

def test_parse_dotted_episode():
    meta = parse("Show.Name.S02E04.1080p.WEB-DL.x264-GROUP")
    assert meta.title == "Show Name"
    assert meta.season == 2
    assert meta.episode == 4
    assert meta.resolution == "1080p"
    assert meta.quality == "WEB-DL"
    assert meta.codec == "x264"
    assert meta.group == "GROUP"
    assert meta.year is None


def test_parse_movie_with_year_in_parens():
    meta = parse("Movie Title (2015) 720p BluRay x264")
    assert meta.title == "Movie Title"
    assert meta.year == 2015
    assert meta.resolution == "720p"
    assert meta.quality == "BluRay"
    assert meta.codec == "x264"
    assert meta.group is None


def test_parse_underscored_title():
    meta = parse("Title_With_Underscores.2020.DVDRip")
    assert meta.title == "Title With Underscores"
    assert meta.year == 2020
    assert meta.quality == "DVDRip"


def test_parse_flags():
    meta = parse("Movie.Name.2010.EXTENDED.PROPER.REPACK.UNRATED.3D.720p.BluRay.x264-GRP")
    assert meta.title == "Movie Name"
    assert meta.extended
    assert meta.proper
    assert meta.repack
    assert meta.unrated
    assert meta.three_d
    assert not meta.hardcoded
    assert not meta.widescreen


def test_parse_hardcoded_widescreen():
    meta = parse("Some.Movie.2019.HC.WS.HDRip.XviD-GRP")
    assert meta.title == "Some Movie"
    assert meta.hardcoded
    assert meta.widescreen
    assert meta.quality == "HDRip"
    assert meta.codec == "XviD"
    assert meta.group == "GRP"


def test_parse_website_prefix_moves_title_start():
    meta = parse("[ www.Torrenting.com ] - Show Name S01E01 720p HDTV x264-GRP")
    assert meta.title == "Show Name"
    assert meta.season == 1
    assert meta.episode == 1
    assert meta.quality == "HDTV"


def test_parse_audio_and_dotted_codec():
    meta = parse("Show.S01E02.720p.WEB-DL.AAC2.0.H.264-GRP")
    assert meta.title == "Show"
    assert meta.audio == "AAC2.0"
    assert meta.codec == "H.264"
    assert meta.group == "GRP"


def test_parse_group_before_extension():
    meta = parse("Movie.Title.2008.R5.LiNE.XviD-GRP.avi")
    assert meta.title == "Movie Title"
    assert meta.audio == "LiNE"
    assert meta.group == "GRP"


def test_parse_imdb_tag():
    meta = parse("Movie.Title.tt1234567.2012.720p")
    assert meta.title == "Movie Title"
    assert meta.imdb_tag == "tt1234567"
    assert meta.year == 2012


def test_marker_only_pattern_narrows_title():
    meta = parse("Movie.Name.MULTi.mkv")
    assert meta.title == "Movie Name"


# ── No match ────────────────────────────────────────────────────────────────

def test_no_match_keeps_whole_string():
    name = "just a plain name"
    extraction = extract(name)
    assert extraction.boundary == Boundary(0, len(name))
    assert not any(f.matched for f in extraction.fields)
    assert parse(name).title == "just a plain name"


def test_empty_registry_uses_whole_string():
    meta = parse("Some.Dotted.Name", registry=())
    assert meta.title == "Some Dotted Name"
    assert meta.season is None


# ── Failure ─────────────────────────────────────────────────────────────────

def test_only_technical_tokens_fails():
    with pytest.raises(TitleNotFoundError) as info:
        parse("S01E01.1080p.x264-GRP")
    matches = dict(info.value.matches)
    assert matches["season"] == "01"
    assert matches["episode"] == "01"
    assert matches["resolution"] == "1080p"
    assert matches["codec"] == "x264"
    assert matches["group"] == "GRP"
    assert matches["year"] is None
    assert "Couldn't find a title" in str(info.value)


def test_failure_lists_every_pattern_in_registry_order():
    with pytest.raises(TitleNotFoundError) as info:
        parse("S01E01.1080p.x264-GRP")
    assert [name for name, _ in info.value.matches] == [p.name for p in REGISTRY]
    assert ("season", "01") in info.value.matched


def test_failure_order_follows_registry_order():
    reversed_registry = tuple(reversed(REGISTRY))
    with pytest.raises(TitleNotFoundError) as info:
        parse("S01E01.1080p.x264-GRP", registry=reversed_registry)
    assert [name for name, _ in info.value.matches] == [p.name for p in reversed_registry]


def test_flag_diagnostic_is_whole_match():
    with pytest.raises(TitleNotFoundError) as info:
        parse("PROPER.S01E01")
    assert dict(info.value.matches)["proper"] == "PROPER"


def test_numeric_capture_of_non_digits_is_a_defect():
    broken = (Pattern("year", re.compile(r"(?P<year>abc)"), capture=("year",)),)
    with pytest.raises(ValueError):
        parse("Movie abc", registry=broken)


# ── Order independence ──────────────────────────────────────────────────────

def _permutations():
    registry = list(REGISTRY)
    rng = random.Random(1234)
    yield tuple(reversed(registry))
    for shift in (1, 5, 11):
        yield tuple(registry[shift:] + registry[:shift])
    for _ in range(5):
        shuffled = registry[:]
        rng.shuffle(shuffled)
        yield tuple(shuffled)


@pytest.mark.parametrize("name", CORPUS)
def test_registry_order_does_not_change_result(name):
    baseline = extract(name)
    expected_values = {f.name: f.text(name) for f in baseline.fields}
    for registry in _permutations():
        extraction = extract(name, registry)
        assert extraction.boundary == baseline.boundary
        assert {f.name: f.text(name) for f in extraction.fields} == expected_values


@pytest.mark.parametrize("name", CORPUS)
def test_boundary_only_narrows(name):
    for registry in (REGISTRY,) + tuple(_permutations()):
        history = extract(name, registry).history
        assert history[0] == Boundary(0, len(name))
        for before, after in zip(history, history[1:]):
            assert after.start >= before.start
            assert after.end <= before.end


# ── Boundary ────────────────────────────────────────────────────────────────

def test_boundary_before_title_raises_start():
    pattern = Pattern("prefix", re.compile(r"^\[[^\]]+\]"), before_title=True)
    match = pattern.search("[tag] Title")
    assert Boundary(0, 11).narrow(pattern, match) == Boundary(5, 11)
    # never lowers an already higher start
    assert Boundary(8, 11).narrow(pattern, match) == Boundary(8, 11)


def test_boundary_after_title_lowers_end():
    pattern = Pattern("suffix", re.compile(r"720p"))
    match = pattern.search("Title 720p")
    assert Boundary(0, 10).narrow(pattern, match) == Boundary(0, 6)
    assert Boundary(0, 3).narrow(pattern, match) == Boundary(0, 3)


def test_boundary_collapsed():
    assert Boundary(4, 4).collapsed
    assert Boundary(5, 2).collapsed
    assert not Boundary(0, 1).collapsed


def test_extraction_records_value_spans():
    name = "Show.Name.S02E04.1080p.WEB-DL.x264-GROUP"
    extraction = extract(name)
    assert extraction.value("resolution") == Span(17, 22)
    assert extraction.field("season").span == Span(10, 13)
    assert extraction.field("episode").span == Span(10, 16)
    assert extraction.title_region == "Show.Name."
    assert len(extraction.history) == len(REGISTRY) + 1


# ── Logging ─────────────────────────────────────────────────────────────────

def test_narrowing_is_traced_with_lazy_arguments(caplog):
    logger.addHandler(caplog.handler)
    apply_level("TRACE")
    try:
        parse("Movie Title (2015) 720p")
    finally:
        apply_level(cfg.log_level)
        logger.removeHandler(caplog.handler)

    traced = [r for r in caplog.records if r.levelno == TRACE_LEVEL]
    assert traced
    assert all(isinstance(r.args, tuple) and r.args for r in traced)
    assert any(r.getMessage().startswith("year matched '(2015)' at 12:18") for r in traced)
