"""Rotation of previous run outputs into a timestamped backup directory.

Each backup set is the group of files sharing one
``<stem>_<YYYY-MM-DDTHH-MM-SS><suffix>`` timestamp. Sets older than the
retention window are removed as a whole.
"""

from __future__ import annotations

import logging
import re
import shutil
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from pathlib import Path

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%Y-%m-%dT%H-%M-%S"
_TIMESTAMP_PATTERN = re.compile(r"_(\d{4}-\d{2}-\d{2}T\d{2}-\d{2}-\d{2})")


@dataclass(slots=True)
class BackupSet:
    timestamp: str
    files: list[str] = field(default_factory=list)

    @property
    def created_at(self) -> datetime:
        return parse_timestamp(self.timestamp)

    @property
    def file_count(self) -> int:
        return len(self.files)


@dataclass(slots=True)
class BackupOutcome:
    backed_up: list[Path] = field(default_factory=list)
    deleted_count: int = 0


def format_timestamp(moment: datetime) -> str:
    return moment.astimezone(timezone.utc).strftime(TIMESTAMP_FORMAT)


def parse_timestamp(text: str) -> datetime:
    return datetime.strptime(text, TIMESTAMP_FORMAT).replace(tzinfo=timezone.utc)


def list_backups(backup_dir: Path) -> list[BackupSet]:
    """Backup sets found in ``backup_dir``, newest first."""
    if not backup_dir.is_dir():
        return []

    sets: dict[str, BackupSet] = {}
    for path in sorted(backup_dir.iterdir()):
        match = _TIMESTAMP_PATTERN.search(path.name)
        if not match or not path.is_file():
            continue
        timestamp = match.group(1)
        sets.setdefault(timestamp, BackupSet(timestamp=timestamp)).files.append(path.name)
    return sorted(sets.values(), key=lambda backup: backup.timestamp, reverse=True)


def cleanup_old_backups(
    backup_dir: Path,
    retention: timedelta = timedelta(days=7),
    now: datetime | None = None,
) -> int:
    now = now or datetime.now(timezone.utc)
    deleted = 0
    for backup in list_backups(backup_dir):
        try:
            age = now - backup.created_at
        except ValueError:
            logger.warning("Skipping backup set with unreadable timestamp %s", backup.timestamp)
            continue
        if age <= retention:
            continue

        removed = 0
        for name in backup.files:
            try:
                (backup_dir / name).unlink()
                removed += 1
            except OSError as exc:
                logger.warning("Failed to delete %s: %s", name, exc)
        deleted += removed
        logger.info("Deleted %d files from backup %s (%d days old)", removed, backup.timestamp, age.days)

    if deleted:
        logger.info("Backup cleanup removed %d files", deleted)
    return deleted


def backup_existing_files(
    source_dir: Path,
    backup_dir: Path,
    filenames: Iterable[str],
    retention: timedelta = timedelta(days=7),
    min_bytes: int = 100,
    now: datetime | None = None,
) -> BackupOutcome:
    """Copy non-trivial outputs of the previous run into ``backup_dir``.

    Old backup sets are pruned first. Files of ``min_bytes`` or less (header
    only) are not kept.
    """
    now = now or datetime.now(timezone.utc)
    backup_dir.mkdir(parents=True, exist_ok=True)

    outcome = BackupOutcome(deleted_count=cleanup_old_backups(backup_dir, retention=retention, now=now))
    timestamp = format_timestamp(now)

    for filename in filenames:
        source = source_dir / filename
        if not source.is_file() or source.stat().st_size <= min_bytes:
            continue
        destination = backup_dir / f"{source.stem}_{timestamp}{source.suffix}"
        try:
            shutil.copy2(source, destination)
        except OSError as exc:
            logger.warning("Failed to back up %s: %s", source.name, exc)
            continue
        outcome.backed_up.append(destination)
        logger.debug("Backed up %s -> %s", source.name, destination)

    if outcome.backed_up:
        logger.info("Backed up %d files to %s", len(outcome.backed_up), backup_dir)
    else:
        logger.info("No existing files to back up")
    return outcome


class BackupNotFoundError(LookupError):
    """Raised when a backup set holds no copy of the requested file."""


def backup_file_path(backup_dir: Path, timestamp: str, filename: str) -> Path:
    """Path of the ``timestamp`` copy of output ``filename``.

    ``filename`` is the original output name (``valid_records.csv``), not the
    timestamped backup name.
    """
    try:
        parse_timestamp(timestamp)
    except ValueError as exc:
        raise BackupNotFoundError(f"Invalid backup timestamp: {timestamp}") from exc
    if Path(filename).name != filename:
        raise BackupNotFoundError(f"Invalid backup file name: {filename}")

    stem, suffix = Path(filename).stem, Path(filename).suffix
    path = backup_dir / f"{stem}_{timestamp}{suffix}"
    if not path.is_file():
        raise BackupNotFoundError(f"Backup file not found: {filename} at {timestamp}")
    return path
