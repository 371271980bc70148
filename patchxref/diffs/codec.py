import difflib
import logging
from typing import Protocol, runtime_checkable

from unidiff import PatchSet, UnidiffParseError
from unidiff.constants import (
    LINE_TYPE_ADDED,
    LINE_TYPE_CONTEXT,
    LINE_TYPE_EMPTY,
    LINE_TYPE_REMOVED,
)

from patchxref.diffs.models import DiffBlock, DiffLine, FileDiff, LineType
from patchxref.errors import DiffParseError

logger = logging.getLogger(__name__)

DEV_NULL = "/dev/null"
DEFAULT_CONTEXT_LINES = 3

_LINE_TYPES = {
    LINE_TYPE_ADDED: (LineType.INSERT, "+"),
    LINE_TYPE_REMOVED: (LineType.DELETE, "-"),
    LINE_TYPE_CONTEXT: (LineType.CONTEXT, " "),
    LINE_TYPE_EMPTY: (LineType.CONTEXT, " "),
}


@runtime_checkable
class DiffCodec(Protocol):
    """Parses and produces unified-diff text.

    Implementations raise ``DiffCodecError`` subclasses on failure.
    """

    def parse(self, text: str) -> list[FileDiff]: ...

    def format(
        self,
        label_old: str,
        label_new: str,
        content_old: str,
        content_new: str,
        header_old: str | None = None,
        header_new: str | None = None,
    ) -> str: ...


def clean_path(raw: str | None, prefix: str) -> str | None:
    """Map ``/dev/null`` to ``None`` and drop the git ``a/``/``b/`` prefix."""
    if raw is None:
        return None
    path = raw.strip()
    if not path or path == DEV_NULL:
        return None
    return path.removeprefix(prefix)


class UnidiffCodec:
    """``unidiff`` for reading, ``difflib`` for writing."""

    def __init__(self, context_lines: int = DEFAULT_CONTEXT_LINES):
        self.context_lines = context_lines

    def parse(self, text: str) -> list[FileDiff]:
        try:
            patch_set = PatchSet.from_string(text)
        except UnidiffParseError as exc:
            raise DiffParseError(f"Could not parse unified diff: {exc}") from exc

        diffs: list[FileDiff] = []
        for patched_file in patch_set:
            old_name = clean_path(patched_file.source_file, "a/")
            new_name = clean_path(patched_file.target_file, "b/")
            if old_name is None and new_name is None:
                logger.debug("Skipping file entry without names")
                continue
            blocks = tuple(_convert_hunk(hunk) for hunk in patched_file)
            diffs.append(
                FileDiff(old_name=old_name, new_name=new_name, blocks=blocks)
            )

        logger.debug("Parsed %d file diffs from unified diff", len(diffs))
        return diffs

    def format(
        self,
        label_old: str,
        label_new: str,
        content_old: str,
        content_new: str,
        header_old: str | None = None,
        header_new: str | None = None,
    ) -> str:
        lines = list(
            difflib.unified_diff(
                content_old.splitlines(),
                content_new.splitlines(),
                fromfile=label_old,
                tofile=label_new,
                fromfiledate=header_old or "",
                tofiledate=header_new or "",
                n=self.context_lines,
                lineterm="",
            )
        )
        if not lines:
            # difflib emits nothing for equal inputs; keep the file headers
            lines = [
                _file_header("---", label_old, header_old),
                _file_header("+++", label_new, header_new),
            ]
        return "\n".join(lines) + "\n"


def _file_header(marker: str, label: str, date: str | None) -> str:
    if date:
        return f"{marker} {label}\t{date}"
    return f"{marker} {label}"


def _convert_hunk(hunk) -> DiffBlock:
    header = (
        f"@@ -{hunk.source_start},{hunk.source_length} "
        f"+{hunk.target_start},{hunk.target_length} @@"
    )
    if hunk.section_header:
        header = f"{header} {hunk.section_header}"

    lines: list[DiffLine] = []
    for line in hunk:
        mapped = _LINE_TYPES.get(line.line_type)
        if mapped is None:
            # "\ No newline at end of file"
            continue
        line_type, marker = mapped
        lines.append(
            DiffLine(
                type=line_type,
                content=marker + line.value.rstrip("\r\n"),
                old_number=line.source_line_no,
                new_number=line.target_line_no,
            )
        )

    return DiffBlock(
        header=header,
        old_start=hunk.source_start,
        old_count=hunk.source_length,
        new_start=hunk.target_start,
        new_count=hunk.target_length,
        lines=tuple(lines),
    )
