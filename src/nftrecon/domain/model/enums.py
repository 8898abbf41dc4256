"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class DifferenceKind(StrEnum):
    """Field-level difference tags, named after the compared wire fields."""

    NAME = "name"
    ARTIST_NAME = "artistName"
    EDITIONS = "editions"


class SourceLabel(StrEnum):
    """Labels used for the two sides of a comparison in reports and tags."""

    SUBGRAPH1 = "subgraph1"
    PROD = "prod"
    SUBGRAPH = "subgraph"
    CONTRACT = "contract"


MISSING_PREFIX = "missing_in_"


def missing_in(label: str) -> str:
    """Return the tag for an entity absent from the side labelled ``label``."""

    return f"{MISSING_PREFIX}{label}"
