"""Parse a build lookup key into a number or an id."""

from __future__ import annotations

import re

from spectacles.timeline.models import BuildKey

# Whole-string ASCII decimal digits -> build number; anything else is an id.
BUILD_NUMBER_PATTERN = re.compile(r"[0-9]+")


def parse_build_key(key: str) -> BuildKey:
    """``"12345"`` looks up build number 12345, ``"a1b2c3"`` looks up by id."""
    if BUILD_NUMBER_PATTERN.fullmatch(key):
        return BuildKey(number=int(key))
    return BuildKey(id=key)
