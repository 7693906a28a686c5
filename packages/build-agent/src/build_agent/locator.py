"""Resolve executable names against the PATH held in an environment store."""

from __future__ import annotations

import os
import sys
from collections.abc import Mapping
from pathlib import Path

DEFAULT_PATH_EXT = ".COM;.EXE;.BAT;.CMD"


def _is_windows(platform: str) -> bool:
    return platform.startswith("win")


def path_variable_name(platform: str = sys.platform) -> str:
    """Name of the PATH-equivalent variable on the given platform."""
    return "Path" if _is_windows(platform) else "PATH"


def _search_path(env: Mapping[str, str], platform: str) -> str:
    primary = path_variable_name(platform)
    for key in (primary, "PATH", "Path"):
        value = env.get(key)
        if value:
            return value
    return ""


def _extensions(env: Mapping[str, str], default: str) -> list[str]:
    raw = env.get("PATHEXT") or default
    exts = []
    for ext in raw.replace(",", ";").split(";"):
        ext = ext.strip().lower()
        if not ext:
            continue
        if not ext.startswith("."):
            ext = "." + ext
        exts.append(ext)
    return exts


def _is_executable(candidate: Path, windows: bool) -> bool:
    try:
        if not candidate.is_file():
            return False
    except OSError:
        return False
    return windows or os.access(candidate, os.X_OK)


def _match_in_dir(directory: Path, name: str, exts: list[str]) -> Path | None:
    """Windows lookup: case-insensitive against the directory listing."""
    try:
        entries = {entry.name.lower(): entry for entry in directory.iterdir()}
    except OSError:
        return None
    lowered = name.lower()
    if any(lowered.endswith(ext) for ext in exts):
        entry = entries.get(lowered)
        if entry is not None and _is_executable(entry, True):
            return entry
    for ext in exts:
        entry = entries.get(lowered + ext)
        if entry is not None and _is_executable(entry, True):
            return entry
    return None


def look_path(
    tool: str,
    env: Mapping[str, str],
    *,
    platform: str = sys.platform,
    path_ext: str = DEFAULT_PATH_EXT,
) -> str | None:
    """Return the canonical absolute path of the first match for ``tool``.

    Names containing a path separator are checked directly instead of being
    searched for. Returns None when PATH is unset or nothing matches.
    """
    windows = _is_windows(platform)
    exts = _extensions(env, path_ext) if windows else []

    if os.sep in tool or (os.altsep and os.altsep in tool):
        candidate = Path(tool)
        if windows:
            found = _match_in_dir(candidate.parent, candidate.name, exts)
        else:
            found = candidate if _is_executable(candidate, False) else None
        return str(found.resolve()) if found else None

    search = _search_path(env, platform)
    if not search:
        return None

    delimiter = ";" if windows else ":"
    for entry in search.split(delimiter):
        # An empty PATH entry means the current directory
        directory = Path(entry or ".")
        if windows:
            found = _match_in_dir(directory, tool, exts)
        else:
            candidate = directory / tool
            found = candidate if _is_executable(candidate, False) else None
        if found is not None:
            return str(found.resolve())
    return None
