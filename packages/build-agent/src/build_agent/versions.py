"""Semantic version cleaning for tool cache keys."""

from __future__ import annotations

import semver


def clean_version(version: str) -> str | None:
    """Normalize a version string, or return None if it is not semver.

    Surrounding whitespace and leading ``=``/``v`` markers are stripped, and
    build metadata is dropped: ``" v1.2.3+build.5 "`` becomes ``"1.2.3"``.
    """
    text = version.strip().lstrip("=v").strip()
    try:
        parsed = semver.Version.parse(text)
    except (ValueError, TypeError):
        return None
    return str(parsed.replace(build=None))


def cache_key(version: str) -> str:
    """Cleaned version, falling back to the raw string when it is not semver."""
    return clean_version(version) or version
