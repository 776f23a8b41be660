"""Data models for nmprune."""

from typing import Iterable, Optional

from pydantic import BaseModel, ConfigDict, Field


def format_bytes(size_bytes: int) -> str:
    """Format bytes to human-readable string (binary units)."""
    if size_bytes <= 0:
        return "0 B"

    units = ["B", "KB", "MB", "GB", "TB"]
    i = 0
    size = float(size_bytes)
    while size >= 1024 and i < len(units) - 1:
        size /= 1024
        i += 1

    if i == 0:
        return f"{size_bytes} B"
    return f"{size:.1f} {units[i]}"


class DirectoryEntry(BaseModel):
    """A discovered node_modules directory and its recursive size."""

    model_config = ConfigDict(frozen=True)

    path: str = Field(..., description="Absolute path of the directory")
    size_bytes: int = Field(..., ge=0, description="Total size of regular files beneath it")

    @property
    def size_human(self) -> str:
        """Human-readable size string."""
        return format_bytes(self.size_bytes)


class ScanReport(BaseModel):
    """Result of scanning a root for node_modules directories."""

    root: str = Field(..., description="Absolute root that was scanned")
    entries: list[DirectoryEntry] = Field(
        default_factory=list, description="Entries sorted by size, largest first"
    )

    @property
    def count(self) -> int:
        """Number of directories found."""
        return len(self.entries)

    @property
    def is_empty(self) -> bool:
        """True when nothing was found."""
        return not self.entries

    @property
    def total_bytes(self) -> int:
        """Total size of all found directories."""
        return sum(e.size_bytes for e in self.entries)

    @property
    def paths(self) -> list[str]:
        """Paths in display order."""
        return [e.path for e in self.entries]

    def size_of_paths(self, paths: Iterable[str]) -> int:
        """Total size of the given subset of paths."""
        wanted = set(paths)
        return sum(e.size_bytes for e in self.entries if e.path in wanted)


class DeletionOutcome(BaseModel):
    """Result of deleting a single directory."""

    model_config = ConfigDict(frozen=True)

    path: str = Field(..., description="Path that was deleted")
    success: bool = Field(..., description="Whether the delete succeeded")
    error: Optional[str] = Field(None, description="Error message if failed")


class DeletionError(BaseModel):
    """A failed deletion as reported in the summary."""

    model_config = ConfigDict(frozen=True)

    path: str
    error: str


class DeletionSummary(BaseModel):
    """Aggregate of all deletion outcomes, in input order."""

    deleted: int = Field(0, description="Number of directories deleted")
    failed: int = Field(0, description="Number of directories that failed")
    errors: list[DeletionError] = Field(default_factory=list)

    @property
    def total(self) -> int:
        """Number of paths processed."""
        return self.deleted + self.failed

    @property
    def all_succeeded(self) -> bool:
        """True when nothing failed."""
        return self.failed == 0

    @classmethod
    def from_outcomes(cls, outcomes: Iterable[DeletionOutcome]) -> "DeletionSummary":
        """Fold outcomes into a summary, preserving order of failures."""
        deleted = 0
        failed = 0
        errors: list[DeletionError] = []

        for outcome in outcomes:
            if outcome.success:
                deleted += 1
            else:
                failed += 1
                errors.append(
                    DeletionError(path=outcome.path, error=outcome.error or "Unknown error")
                )

        return cls(deleted=deleted, failed=failed, errors=errors)
