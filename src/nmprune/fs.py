"""Bounded async access to blocking filesystem calls.

Directory listing and stat are blocking syscalls, so they run in worker
threads. The gate caps how many are in flight at once, which keeps wide
trees from exhausting file descriptors or the default thread pool.
"""

import asyncio
import os
from dataclasses import dataclass


def default_concurrency() -> int:
    """Default cap on in-flight filesystem operations."""
    return max(1, (os.cpu_count() or 1) * 4)


@dataclass(frozen=True)
class DirEntryInfo:
    """What the walkers need to know about one directory entry."""

    name: str
    path: str
    is_dir: bool
    is_file: bool


def _list_dir(path: str) -> list[DirEntryInfo]:
    entries = []
    with os.scandir(path) as it:
        for entry in it:
            try:
                # Symlinks are never followed
                is_dir = entry.is_dir(follow_symlinks=False)
                is_file = not is_dir and entry.is_file(follow_symlinks=False)
            except OSError:
                continue
            entries.append(DirEntryInfo(entry.name, entry.path, is_dir, is_file))
    return entries


def _file_size(path: str) -> int:
    return os.lstat(path).st_size


class FsGate:
    """Runs filesystem calls in threads, at most ``limit`` at a time.

    Must be created and used inside a single running event loop.
    """

    def __init__(self, limit: int | None = None):
        self.limit = limit if limit is not None else default_concurrency()
        if self.limit < 1:
            raise ValueError(f"limit must be >= 1, got {self.limit}")
        self._semaphore = asyncio.Semaphore(self.limit)

    async def list_dir(self, path: str) -> list[DirEntryInfo]:
        """List a directory. Raises OSError if it cannot be read."""
        async with self._semaphore:
            return await asyncio.to_thread(_list_dir, path)

    async def file_size(self, path: str) -> int:
        """Size of a file in bytes. Raises OSError if it cannot be stat'ed."""
        async with self._semaphore:
            return await asyncio.to_thread(_file_size, path)
