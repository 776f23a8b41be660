"""Concurrent directory size calculation."""

import asyncio
import logging
from pathlib import Path

from nmprune.finder import find_async
from nmprune.fs import FsGate
from nmprune.models import DirectoryEntry, ScanReport

log = logging.getLogger(__name__)


async def _file_size(gate: FsGate, path: str) -> int:
    try:
        return await gate.file_size(path)
    except OSError:
        # Vanished file or broken entry counts as empty
        return 0


async def size_of_async(path: str | Path, gate: FsGate | None = None) -> int:
    """
    Total size in bytes of all regular files beneath path.

    Every subdirectory is included, nested node_modules too. Symlinks are
    not followed. Never raises: anything unreadable counts as zero.
    """
    gate = gate or FsGate()

    try:
        entries = await gate.list_dir(str(path))
    except OSError:
        return 0

    pending = []
    for entry in entries:
        if entry.is_dir:
            pending.append(size_of_async(entry.path, gate))
        elif entry.is_file:
            pending.append(_file_size(gate, entry.path))

    sizes = await asyncio.gather(*pending)
    return sum(sizes)


async def measure_async(paths: list[str], gate: FsGate | None = None) -> list[DirectoryEntry]:
    """
    Size several directories in parallel.

    Returns:
        DirectoryEntry list sorted by size, largest first
    """
    gate = gate or FsGate()
    sizes = await asyncio.gather(*(size_of_async(p, gate) for p in paths))

    entries = [DirectoryEntry(path=p, size_bytes=s) for p, s in zip(paths, sizes)]
    entries.sort(key=lambda e: (-e.size_bytes, e.path))
    return entries


async def scan_async(root: str | Path, max_concurrency: int | None = None) -> ScanReport:
    """Find node_modules under root and size each of them."""
    gate = FsGate(max_concurrency)
    paths = await find_async(root, gate)
    entries = await measure_async(paths, gate)
    log.debug("Measured %d directories, %d bytes total", len(entries), sum(e.size_bytes for e in entries))
    return ScanReport(root=str(root), entries=entries)


def size_of(path: str | Path, max_concurrency: int | None = None) -> int:
    """Synchronous wrapper around :func:`size_of_async`."""

    async def _run() -> int:
        return await size_of_async(path, FsGate(max_concurrency))

    return asyncio.run(_run())


def measure(paths: list[str], max_concurrency: int | None = None) -> list[DirectoryEntry]:
    """Synchronous wrapper around :func:`measure_async`."""

    async def _run() -> list[DirectoryEntry]:
        return await measure_async(paths, FsGate(max_concurrency))

    return asyncio.run(_run())


def scan(root: str | Path, max_concurrency: int | None = None) -> ScanReport:
    """
    Scan root for node_modules directories and their sizes.

    Raises:
        RootInaccessibleError: If root itself cannot be listed
    """
    return asyncio.run(scan_async(root, max_concurrency))
