"""Filesystem helpers used by the tool cache."""

from __future__ import annotations

import asyncio
import os
import shutil
from pathlib import Path


async def directory_exists(path: str) -> bool:
    try:
        return Path(path).is_dir()
    except OSError:
        return False


async def file_exists(path: str) -> bool:
    try:
        return Path(path).is_file()
    except OSError:
        return False


async def remove_directory(path: str, retries: int = 3, delay: float = 1.0) -> None:
    """Recursively and forcefully remove ``path``. A missing target is not an error.

    Regular files and symlinks (including links to directories) are unlinked
    rather than descended into.

    Removal is retried up to ``retries`` times with a fixed ``delay`` between
    attempts; the last failure propagates.
    """
    for attempt in range(retries + 1):
        try:
            if os.path.islink(path) or not os.path.isdir(path):
                os.unlink(path)
            else:
                shutil.rmtree(path)
            return
        except FileNotFoundError:
            return
        except OSError:
            if attempt >= retries:
                raise
            await asyncio.sleep(delay)


async def copy_directory(source: str, destination: str) -> None:
    """Copy the tree under ``source`` into ``destination``, creating parents."""
    Path(destination).mkdir(parents=True, exist_ok=True)
    shutil.copytree(source, destination, symlinks=True, dirs_exist_ok=True)
