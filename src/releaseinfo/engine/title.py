"""
title.py — Turn the raw title region into a display title.

Pure function, no side effects. Every step runs on the output of the
previous one, whether or not the earlier steps changed anything.
"""

from __future__ import annotations

_DASH_EDGE = " -"


def _strip_leading(text: str, chunk: str) -> str:
    while chunk and text.startswith(chunk):
        text = text[len(chunk):]
    return text


def _strip_trailing(text: str, chunk: str) -> str:
    while chunk and text.endswith(chunk):
        text = text[: -len(chunk)]
    return text


def normalize_title(raw: str) -> str:
    title = raw

    # 1. drop trailing parenthetical annotations
    paren = title.find("(")
    if paren != -1:
        title = title[:paren]

    # 2. leftover dash separators
    title = _strip_leading(title, _DASH_EDGE)
    title = _strip_trailing(title, _DASH_EDGE)

    # 3. dot-delimited names
    if " " not in title and "." in title:
        title = title.replace(".", " ")

    # 4.
    if "_" in title:
        title = title.replace("_", " ")

    # 5. stray open-paren
    if "(" in title:
        title = title.replace("(", "", 1)

    # 6.
    if "- " in title:
        title = title.replace("- ", "", 1)

    return title.strip()
