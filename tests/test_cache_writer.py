import hashlib
import json
import os
import stat

import pytest

from models.errors import CacheWriteError
from orchestrator.cache_writer import cache_file_path, write_cache_entry
from utils.hash_utils import compute_fingerprint


def test_fingerprint_is_sha256_prefix():
    question = "capital of France"
    assert compute_fingerprint(question) == hashlib.sha256(question.encode("utf-8")).hexdigest()[:8]


def test_fingerprint_is_stable_and_hex():
    f1 = compute_fingerprint("dev question")
    f2 = compute_fingerprint("dev question")
    assert f1 == f2
    assert len(f1) == 8
    assert all(ch in "0123456789abcdef" for ch in f1)


def test_fingerprint_is_byte_sensitive():
    assert compute_fingerprint("question") != compute_fingerprint("question ")
    assert compute_fingerprint("question") != compute_fingerprint("Question")


def test_entry_written_as_json_named_by_fingerprint(tmp_path):
    path = write_cache_entry(tmp_path, "capital of France", "# capital of France\nParis\n")

    assert path == tmp_path / f"{compute_fingerprint('capital of France')}.json"
    assert json.loads(path.read_text(encoding="utf-8")) == {
        "question": "capital of France",
        "answer": "# capital of France\nParis\n",
    }


def test_entry_is_compact_utf8_json(tmp_path):
    path = write_cache_entry(tmp_path, "café", "réponse")
    assert path.read_bytes() == '{"question":"café","answer":"réponse"}'.encode("utf-8")


def test_missing_directories_are_created(tmp_path):
    cache_dir = tmp_path / "nested" / "cache"
    path = write_cache_entry(cache_dir, "q", "a")
    assert cache_dir.is_dir()
    assert path.parent == cache_dir


@pytest.mark.skipif(os.name != "posix", reason="POSIX permissions")
def test_permissions(tmp_path):
    old_umask = os.umask(0)
    try:
        cache_dir = tmp_path / "outer" / "inner" / "cache"
        path = write_cache_entry(cache_dir, "q", "a")
    finally:
        os.umask(old_umask)
    for created in (tmp_path / "outer", tmp_path / "outer" / "inner", cache_dir):
        assert stat.S_IMODE(created.stat().st_mode) == 0o755
    assert stat.S_IMODE(path.stat().st_mode) == 0o644


def test_second_write_overwrites_first(tmp_path):
    write_cache_entry(tmp_path, "same question", "a much longer first answer")
    path = write_cache_entry(tmp_path, "same question", "second")

    assert json.loads(path.read_text(encoding="utf-8")) == {
        "question": "same question",
        "answer": "second",
    }
    assert len(list(tmp_path.iterdir())) == 1


def test_cache_file_path_does_not_touch_disk(tmp_path):
    target = tmp_path / "not-created"
    cache_file_path(target, "q")
    assert not target.exists()


def test_directory_creation_failure_raises(tmp_path):
    blocker = tmp_path / "file"
    blocker.write_text("not a directory")
    with pytest.raises(CacheWriteError, match="failed to create cache directory"):
        write_cache_entry(blocker / "cache", "q", "a")


def test_write_failure_raises(tmp_path):
    question = "q"
    # A directory squatting on the entry path makes the open fail
    (tmp_path / f"{compute_fingerprint(question)}.json").mkdir()
    with pytest.raises(CacheWriteError, match="failed to write cache file"):
        write_cache_entry(tmp_path, question, "a")
