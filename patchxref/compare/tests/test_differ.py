import pytest

from patchxref.compare.differ import (
    CrossVersionDiffer,
    collect_file_diffs,
    comparison_label,
    has_changes,
)
from patchxref.compare.models import ComparisonState
from patchxref.diffs.codec import UnidiffCodec
from patchxref.errors import DiffParseError
from patchxref.patches.models import PatchSet
from patchxref.patches.registry import PatchRegistry
from patchxref.rendering.markdown import MarkdownDiffRenderer

PATCH_X1 = """\
--- a/foo.py
+++ b/foo.py
@@ -1,2 +1,3 @@
 import os
+x=1
 print(os)
"""

PATCH_X2 = """\
--- a/foo.py
+++ b/foo.py
@@ -1,2 +1,3 @@
 import os
+x=2
 print(os)
"""

PATCH_X1_BLANK = """\
--- a/foo.py
+++ b/foo.py
@@ -1,2 +1,4 @@
 import os
+x=1
+
 print(os)
"""

PATCH_DELETE = """\
--- a/foo.py
+++ /dev/null
@@ -1,2 +0,0 @@
-import os
-print(os)
"""

PATCH_OTHER = """\
--- a/bar.py
+++ b/bar.py
@@ -1 +1 @@
-a
+b
"""


class RecordingCodec(UnidiffCodec):
    def __init__(self):
        super().__init__()
        self.format_calls = 0

    def format(self, *args, **kwargs):
        self.format_calls += 1
        return super().format(*args, **kwargs)


class BrokenParseCodec(UnidiffCodec):
    def parse(self, text: str):
        raise DiffParseError("synthetic diff rejected")


def load(*patches: tuple[str, str]) -> PatchRegistry:
    codec = UnidiffCodec()
    registry = PatchRegistry()
    registry.add(
        *(PatchSet(name=name, diffs=tuple(codec.parse(text))) for name, text in patches)
    )
    return registry


class TestHasChanges:
    def test_headers_only(self):
        assert not has_changes("--- a\n+++ b\n")

    def test_hunk_with_change(self):
        assert has_changes("--- a\n+++ b\n@@ -1 +1 @@\n-x\n+y\n")

    def test_hunk_with_context_only(self):
        assert not has_changes("--- a\n+++ b\n@@ -1 +1 @@\n x\n")


class TestCollect:
    def test_matches_old_name_too(self):
        registry = load(("a.patch", PATCH_X1), ("del.patch", PATCH_DELETE))
        found = collect_file_diffs("foo.py", registry)
        assert [f.patch_name for f in found] == ["a.patch", "del.patch"]

    def test_unrelated_patch_skipped(self):
        registry = load(("a.patch", PATCH_X1), ("other.patch", PATCH_OTHER))
        found = collect_file_diffs("foo.py", registry)
        assert [f.patch_name for f in found] == ["a.patch"]


class TestCompare:
    def test_two_patches_with_different_edits(self):
        registry = load(("A.patch", PATCH_X1), ("B.patch", PATCH_X2))

        result = CrossVersionDiffer().compare("foo.py", registry)

        assert result.outcome == ComparisonState.CHANGED
        assert result.has_changes
        pairwise = result.pairwise
        assert pairwise.label_old == "foo.py (A.patch)"
        assert pairwise.label_new == "foo.py (B.patch)"
        [synthetic] = pairwise.diffs
        contents = [line.content for block in synthetic.blocks for line in block.lines]
        assert contents == ["-x=1", "+x=2"]
        assert [i.patch_name for i in result.individual] == ["A.patch", "B.patch"]

    def test_state_trace_for_changed(self):
        registry = load(("A.patch", PATCH_X1), ("B.patch", PATCH_X2))
        result = CrossVersionDiffer().compare("foo.py", registry)
        assert result.states == [
            ComparisonState.IDLE,
            ComparisonState.COLLECTING,
            ComparisonState.PAIRWISE_COMPARING,
            ComparisonState.CHANGED,
            ComparisonState.RENDERING_INDIVIDUAL,
            ComparisonState.DONE,
        ]
        assert result.state == ComparisonState.DONE

    def test_identical_edits_report_no_changes(self):
        registry = load(("A.patch", PATCH_X1), ("B.patch", PATCH_X1))

        result = CrossVersionDiffer(renderer=MarkdownDiffRenderer()).compare(
            "foo.py", registry
        )

        assert result.outcome == ComparisonState.UNCHANGED
        assert result.has_changes is False
        assert "@@" not in result.pairwise.synthetic_text
        assert result.pairwise.rendered is None
        assert len(result.individual) == 2
        assert all(i.rendered for i in result.individual)

    def test_trailing_blank_insert_counts_as_change(self):
        registry = load(("A.patch", PATCH_X1_BLANK), ("B.patch", PATCH_X1))

        result = CrossVersionDiffer().compare("foo.py", registry)

        assert result.outcome == ComparisonState.CHANGED
        [synthetic] = result.pairwise.diffs
        assert synthetic.added_lines == 0
        assert synthetic.deleted_lines == 1

    def test_single_contributor_skips_pairwise(self):
        codec = RecordingCodec()
        registry = load(("A.patch", PATCH_X1), ("other.patch", PATCH_OTHER))

        result = CrossVersionDiffer(codec=codec).compare("foo.py", registry)

        assert codec.format_calls == 0
        assert result.pairwise is None
        assert result.outcome is None
        assert ComparisonState.PAIRWISE_COMPARING not in result.states
        assert len(result.individual) == 1

    def test_three_contributors_skip_pairwise_and_keep_load_order(self):
        codec = RecordingCodec()
        registry = load(
            ("v1.patch", PATCH_X1),
            ("v2.patch", PATCH_X2),
            ("v3.patch", PATCH_X1),
        )

        result = CrossVersionDiffer(codec=codec).compare("foo.py", registry)

        assert codec.format_calls == 0
        assert result.pairwise is None
        assert [i.patch_name for i in result.individual] == [
            "v1.patch",
            "v2.patch",
            "v3.patch",
        ]

    def test_no_contributors_is_empty_not_error(self):
        registry = load(("other.patch", PATCH_OTHER))

        result = CrossVersionDiffer().compare("foo.py", registry)

        assert result.is_empty
        assert result.outcome == ComparisonState.NO_DATA
        assert result.states == [
            ComparisonState.IDLE,
            ComparisonState.COLLECTING,
            ComparisonState.NO_DATA,
            ComparisonState.DONE,
        ]

    def test_empty_registry(self):
        result = CrossVersionDiffer().compare("foo.py", PatchRegistry())
        assert result.is_empty

    def test_parse_failure_degrades_to_individual_diffs(self):
        registry = load(("A.patch", PATCH_X1), ("B.patch", PATCH_X2))

        result = CrossVersionDiffer(codec=BrokenParseCodec()).compare("foo.py", registry)

        assert result.outcome == ComparisonState.COMPARISON_FAILED
        assert result.pairwise.failed
        assert result.pairwise.error == "synthetic diff rejected"
        assert not result.has_changes
        assert len(result.individual) == 2
        assert result.state == ComparisonState.DONE

    def test_deleted_and_modified_versions_compare(self):
        registry = load(("A.patch", PATCH_X1), ("del.patch", PATCH_DELETE))

        result = CrossVersionDiffer().compare("foo.py", registry)

        assert result.outcome == ComparisonState.CHANGED
        synthetic = result.pairwise.diffs[0]
        assert synthetic.deleted_lines == 1
        assert synthetic.added_lines == 2

    def test_renderer_fills_rendered_sections(self):
        registry = load(("A.patch", PATCH_X1), ("B.patch", PATCH_X2))

        result = CrossVersionDiffer(renderer=MarkdownDiffRenderer()).compare(
            "foo.py", registry
        )

        assert "-x=1" in result.pairwise.rendered
        assert "+x=2" in result.pairwise.rendered
        assert "Files changed" not in result.individual[0].rendered


@pytest.mark.parametrize(
    "filename,patch_name,expected",
    [
        ("foo.py", "A.patch", "foo.py (A.patch)"),
        ("src/a b.py", "v2.diff", "src/a b.py (v2.diff)"),
    ],
)
def test_comparison_label(filename, patch_name, expected):
    assert comparison_label(filename, patch_name) == expected
