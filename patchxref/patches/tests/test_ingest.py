import asyncio
from pathlib import Path

import pytest

from patchxref.errors import CapacityExceeded, ErrorType, ReadFailure
from patchxref.patches.ingest import FileIngestor

PATCH_A = """\
--- a/foo.py
+++ b/foo.py
@@ -1,2 +1,3 @@
 import os
+x=1
 print(os)
"""

PATCH_B = """\
--- a/foo.py
+++ b/foo.py
@@ -1,2 +1,3 @@
 import os
+x=2
 print(os)
--- a/bar.py
+++ b/bar.py
@@ -1 +1 @@
-old
+new
"""

BROKEN_PATCH = """\
--- a/foo.py
+++ b/foo.py
@@ -1,5 +1,5 @@
 import os
"""


def write(tmp_path: Path, name: str, text: str) -> Path:
    path = tmp_path / name
    path.write_text(text, encoding="utf-8")
    return path


class TestReadBatch:
    def test_parses_every_file_in_order(self, tmp_path: Path):
        paths = [write(tmp_path, "a.patch", PATCH_A), write(tmp_path, "b.patch", PATCH_B)]

        result = FileIngestor().ingest(paths)

        assert result.committable
        assert [p.name for p in result.patch_sets] == ["a.patch", "b.patch"]
        assert [d.new_name for d in result.patch_sets[1].diffs] == ["foo.py", "bar.py"]
        assert result.patch_sets[0].source_path == paths[0]

    def test_async_entry_point(self, tmp_path: Path):
        paths = [write(tmp_path, "a.patch", PATCH_A)]
        result = asyncio.run(FileIngestor().read_batch(paths))
        assert len(result.patch_sets) == 1

    def test_empty_batch(self):
        result = FileIngestor().ingest([])
        assert result.outcomes == []
        assert not result.committable

    def test_capacity_checked_before_reading(self, tmp_path: Path):
        paths = [tmp_path / f"missing{i}.patch" for i in range(6)]
        with pytest.raises(CapacityExceeded) as excinfo:
            FileIngestor().ingest(paths)
        assert excinfo.value.error_type == ErrorType.CAPACITY_EXCEEDED

    def test_capacity_counts_already_loaded(self, tmp_path: Path):
        paths = [write(tmp_path, "a.patch", PATCH_A), write(tmp_path, "b.patch", PATCH_B)]
        with pytest.raises(CapacityExceeded):
            FileIngestor().ingest(paths, loaded=4)


class TestReadFailures:
    def test_missing_file_is_read_failure(self, tmp_path: Path):
        result = FileIngestor().ingest([tmp_path / "missing.patch"])

        assert not result.committable
        [failure] = result.failures
        assert isinstance(failure, ReadFailure)
        assert failure.message == "Error reading file: missing.patch"

    def test_empty_file_is_read_failure(self, tmp_path: Path):
        result = FileIngestor().ingest([write(tmp_path, "empty.patch", "")])
        assert [f.message for f in result.failures] == ["Failed to read file: empty.patch"]

    def test_undecodable_file_is_read_failure(self, tmp_path: Path):
        path = tmp_path / "latin.patch"
        path.write_bytes(b"\xff\xfe\xfa")
        result = FileIngestor().ingest([path])
        assert result.failures[0].reason == "Error reading file"

    def test_one_failure_holds_back_the_batch(self, tmp_path: Path):
        paths = [write(tmp_path, "a.patch", PATCH_A), tmp_path / "missing.patch"]

        result = FileIngestor().ingest(paths)

        assert not result.committable
        assert result.patch_sets == []
        assert result.outcomes[0].ok
        assert not result.outcomes[1].ok

    def test_unparseable_file_is_read_failure(self, tmp_path: Path):
        paths = [write(tmp_path, "a.patch", PATCH_A), write(tmp_path, "bad.patch", BROKEN_PATCH)]

        result = FileIngestor().ingest(paths)

        assert result.patch_sets == []
        assert [f.message for f in result.failures] == ["Failed to parse file: bad.patch"]
