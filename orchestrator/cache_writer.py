"""Write-only on-disk cache of formatted answers, one JSON file per question."""

import json
import os
from pathlib import Path

from models.errors import CacheWriteError
from models.fastgpt import CacheEntry
from utils.hash_utils import compute_fingerprint
from utils.logger import get_logger

logger = get_logger(__name__)

DIR_MODE = 0o755
FILE_MODE = 0o644


def cache_file_path(cache_dir: str | os.PathLike, question: str) -> Path:
    """Return the path the entry for *question* is written to."""
    return Path(cache_dir) / f"{compute_fingerprint(question)}.json"


def write_cache_entry(cache_dir: str | os.PathLike, question: str, answer: str) -> Path:
    """
    Persist {question, answer} to {cache_dir}/{fingerprint}.json.

    Missing directories are created. An existing entry with the same
    fingerprint is overwritten, including entries from colliding questions.

    Args:
        cache_dir: Target directory
        question: The raw question; its SHA-256 prefix names the file
        answer: The fully formatted answer text

    Returns:
        Path of the written file

    Raises:
        CacheWriteError: On any directory, serialization or write failure
    """
    directory = Path(cache_dir)
    try:
        _make_dirs(directory)
    except OSError as exc:
        raise CacheWriteError(f"failed to create cache directory: {exc}") from exc

    entry = CacheEntry(question=question, answer=answer)
    try:
        data = json.dumps(entry.to_dict(), ensure_ascii=False, separators=(",", ":"))
        encoded = data.encode("utf-8")
    except (TypeError, ValueError, UnicodeEncodeError) as exc:
        raise CacheWriteError(f"failed to marshal cache entry: {exc}") from exc

    path = cache_file_path(directory, question)
    try:
        fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, FILE_MODE)
        with os.fdopen(fd, "wb") as fh:
            fh.write(encoded)
    except OSError as exc:
        raise CacheWriteError(f"failed to write cache file: {exc}") from exc

    logger.debug(
        "Cache entry written",
        extra={"extra_fields": {"cache_file": str(path), "bytes": len(encoded)}},
    )
    return path


def _make_dirs(directory: Path) -> None:
    """Create *directory* and every missing parent, each with DIR_MODE."""
    missing = []
    current = directory
    while not current.exists():
        missing.append(current)
        if current.parent == current:
            break
        current = current.parent
    for path in reversed(missing):
        path.mkdir(mode=DIR_MODE, exist_ok=True)
