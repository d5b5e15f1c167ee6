"""JSON file caches for issues and repositories.

Layout under the data directory:

    repositories.json        last fetched repository list
    issues/<key>.json        annotated issues of one repository

Files are rewritten whole on every save. Reads never raise: a missing or
unreadable file is reported as "no cache".
"""

from __future__ import annotations

import logging
import os
import tempfile
from collections.abc import Sequence
from pathlib import Path
from typing import TypeVar

from pydantic import BaseModel, TypeAdapter, ValidationError

from ..models import Issue, Repository
from ..utils import safe_filename

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

_ISSUE_LIST = TypeAdapter(list[Issue])
_REPOSITORY_LIST = TypeAdapter(list[Repository])


class CacheWriteError(OSError):
    """A cache file could not be written."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Could not write cache file {path}: {reason}")
        self.path = path
        self.reason = reason


def repository_key(name: str) -> str:
    """Derive the cache key for a repository from its short name.

    The key depends on the name only, so renaming a repository on GitHub
    starts a fresh cache.
    """
    return safe_filename(name)


def _read_list(path: Path, adapter: TypeAdapter[list[ModelT]]) -> list[ModelT] | None:
    """Read and validate a JSON list, returning None when unusable."""
    if not path.exists():
        logger.debug("No cache file at %s", path)
        return None
    try:
        data = path.read_bytes()
        return adapter.validate_json(data)
    except (OSError, ValidationError, ValueError) as e:
        logger.warning("Ignoring unreadable cache file %s: %s", path, e)
        return None


def _write_atomic(path: Path, data: bytes) -> None:
    """Replace `path` with `data`, creating parent directories as needed."""
    tmp_name: str | None = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
        with os.fdopen(fd, "wb") as f:
            f.write(data)
            f.write(b"\n")
        os.replace(tmp_name, path)
        tmp_name = None
    except OSError as e:
        logger.warning("Failed to write cache file %s: %s", path, e)
        raise CacheWriteError(path, str(e)) from e
    finally:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.unlink(tmp_name)


class AnnotationStore:
    """
    Per-repository cache of annotated issues.

    Each repository gets one JSON file holding the full issue list,
    upstream and local attributes together.
    """

    ISSUES_DIR = "issues"

    def __init__(self, data_directory: Path) -> None:
        """
        Initialize the store.

        Args:
            data_directory: Application data directory
        """
        self.data_directory = data_directory

    def path_for(self, key: str) -> Path:
        """Cache file path for a repository key."""
        return self.data_directory / self.ISSUES_DIR / f"{key}.json"

    def load(self, key: str) -> list[Issue] | None:
        """Load the cached issues for a repository, or None if there are none."""
        issues = _read_list(self.path_for(key), _ISSUE_LIST)
        if issues is not None:
            logger.debug("Loaded %d cached issues for %s", len(issues), key)
        return issues

    def save(self, key: str, issues: Sequence[Issue]) -> None:
        """Overwrite the cache file for a repository.

        Raises:
            CacheWriteError: The file could not be written
        """
        path = self.path_for(key)
        _write_atomic(path, _ISSUE_LIST.dump_json(list(issues), indent=2))
        logger.debug("Saved %d issues to %s", len(issues), path)


class RepositoryListCache:
    """Cache of the last fetched repository list."""

    FILENAME = "repositories.json"

    def __init__(self, data_directory: Path) -> None:
        self.data_directory = data_directory

    @property
    def path(self) -> Path:
        return self.data_directory / self.FILENAME

    def load(self) -> list[Repository] | None:
        return _read_list(self.path, _REPOSITORY_LIST)

    def save(self, repositories: Sequence[Repository]) -> None:
        """Overwrite the repository list cache.

        Raises:
            CacheWriteError: The file could not be written
        """
        _write_atomic(self.path, _REPOSITORY_LIST.dump_json(list(repositories), indent=2))
        logger.debug("Saved %d repositories to %s", len(repositories), self.path)
