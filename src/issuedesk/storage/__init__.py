"""Local caches on the filesystem."""

from .filesystem import AnnotationStore, CacheWriteError, RepositoryListCache, repository_key

__all__ = [
    "AnnotationStore",
    "CacheWriteError",
    "RepositoryListCache",
    "repository_key",
]
