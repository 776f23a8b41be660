"""Concurrent discovery of node_modules directories.

Walks a tree looking for directories named ``node_modules``. Matches are
never descended into, so no returned path is nested inside another one.
Hidden directories (``.git``, ``.cache``...) are skipped entirely.
"""

import asyncio
import logging
from pathlib import Path

from nmprune.fs import FsGate

log = logging.getLogger(__name__)

TARGET_NAME = "node_modules"
HIDDEN_PREFIX = "."


class NmpruneError(Exception):
    """Base class for errors raised by nmprune."""


class RootInaccessibleError(NmpruneError):
    """The scan root itself could not be listed."""

    def __init__(self, root: str, reason: str):
        super().__init__(f"Cannot read {root}: {reason}")
        self.root = root
        self.reason = reason


async def _walk(gate: FsGate, directory: str) -> list[str]:
    try:
        entries = await gate.list_dir(directory)
    except OSError:
        # Unreadable or vanished subtree contributes nothing
        return []
    return await _descend(gate, entries)


async def _descend(gate: FsGate, entries) -> list[str]:
    matches: list[str] = []
    children = []

    for entry in entries:
        if not entry.is_dir:
            continue

        if entry.name == TARGET_NAME:
            matches.append(entry.path)
        elif not entry.name.startswith(HIDDEN_PREFIX):
            children.append(_walk(gate, entry.path))

    for found in await asyncio.gather(*children):
        matches.extend(found)

    return matches


async def find_async(root: str | Path, gate: FsGate | None = None) -> list[str]:
    """
    Find node_modules directories beneath root.

    Args:
        root: Absolute directory to search
        gate: Filesystem gate to share with other walks (created if omitted)

    Returns:
        Sorted list of matching directory paths

    Raises:
        RootInaccessibleError: If root itself cannot be listed
    """
    gate = gate or FsGate()
    root_str = str(root)
    log.debug("Scanning %s for %s", root_str, TARGET_NAME)

    try:
        entries = await gate.list_dir(root_str)
    except OSError as e:
        raise RootInaccessibleError(root_str, e.strerror or str(e)) from e

    matches = await _descend(gate, entries)
    matches.sort()
    log.debug("Found %d %s directories under %s", len(matches), TARGET_NAME, root_str)
    return matches


def find(root: str | Path, max_concurrency: int | None = None) -> list[str]:
    """Synchronous wrapper around :func:`find_async`."""

    async def _run() -> list[str]:
        return await find_async(root, FsGate(max_concurrency))

    return asyncio.run(_run())
