"""Deletion of node_modules directories."""

import logging
import os
import shutil
from typing import Callable, Sequence

from nmprune.models import DeletionOutcome, DeletionSummary

log = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int, str], None]


def _ignore_missing(function, path, exc: BaseException) -> None:
    # Entries removed by someone else mid-delete are fine
    if isinstance(exc, FileNotFoundError):
        return
    raise exc


def _remove(path: str) -> None:
    if os.path.islink(path) or os.path.isfile(path):
        os.unlink(path)
    else:
        shutil.rmtree(path, onexc=_ignore_missing)


def delete_directory(path: str) -> DeletionOutcome:
    """
    Delete a directory recursively.

    A path that is already gone counts as deleted. A path that turned into
    a file or symlink since it was found is unlinked; a symlink's target is
    left alone.

    Args:
        path: Directory to delete

    Returns:
        DeletionOutcome with the error message on failure
    """
    try:
        _remove(path)
    except FileNotFoundError:
        pass
    except Exception as e:
        return DeletionOutcome(path=path, success=False, error=str(e) or type(e).__name__)

    return DeletionOutcome(path=path, success=True)


def delete_all(
    paths: Sequence[str],
    on_progress: ProgressCallback | None = None,
) -> DeletionSummary:
    """
    Delete directories one at a time, in the given order.

    Failures are recorded and do not stop the remaining deletions.

    Args:
        paths: Directories to delete
        on_progress: Optional callback(current, total, path) after each attempt

    Returns:
        DeletionSummary with failures in input order
    """
    total = len(paths)
    outcomes: list[DeletionOutcome] = []

    for index, path in enumerate(paths, 1):
        log.debug("Deleting %s (%d/%d)", path, index, total)
        outcome = delete_directory(path)
        if not outcome.success:
            log.debug("Failed to delete %s: %s", path, outcome.error)
        outcomes.append(outcome)

        if on_progress:
            on_progress(index, total, path)

    return DeletionSummary.from_outcomes(outcomes)
