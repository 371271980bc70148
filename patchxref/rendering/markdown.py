from patchxref.diffs.models import FileDiff
from patchxref.rendering.base import RenderConfig
from patchxref.rendering.templates import NO_FILE_CHANGES, NO_HUNKS


def display_name(diff: FileDiff) -> str:
    if diff.old_name and diff.new_name and diff.old_name != diff.new_name:
        return f"{diff.old_name} → {diff.new_name}"
    return diff.name


def file_status(diff: FileDiff) -> str:
    if diff.is_new_file:
        return "added"
    if diff.is_deleted_file:
        return "deleted"
    if diff.old_name != diff.new_name:
        return "renamed"
    return "changed"


class MarkdownDiffRenderer:
    """Renders file diffs as Markdown, one line-by-line section per file."""

    def render(self, diffs: list[FileDiff], config: RenderConfig) -> str:
        if not diffs:
            return "" if config.render_nothing_when_empty else NO_FILE_CHANGES

        lines: list[str] = []
        if config.draw_file_list:
            lines.extend(self._file_list(diffs, config))
            lines.append("")

        for diff in diffs:
            lines.extend(self._file_section(diff, config))
            lines.append("")

        return "\n".join(lines).rstrip("\n") + "\n"

    def _file_list(self, diffs: list[FileDiff], config: RenderConfig) -> list[str]:
        table = [
            "| File | Status | Added | Deleted |",
            "|------|--------|-------|---------|",
        ]
        for diff in diffs:
            table.append(
                f"| {display_name(diff)} | {file_status(diff)} "
                f"| +{diff.added_lines} | -{diff.deleted_lines} |"
            )

        title = f"Files changed ({len(diffs)})"
        if not config.file_list_toggle:
            return [f"**{title}**", "", *table]

        opening = "<details open>" if config.file_list_start_visible else "<details>"
        return [opening, f"<summary>{title}</summary>", "", *table, "", "</details>"]

    def _file_section(self, diff: FileDiff, config: RenderConfig) -> list[str]:
        lines = [
            f"#### {display_name(diff)}",
            "",
            f"{file_status(diff)}, +{diff.added_lines} -{diff.deleted_lines}",
            "",
        ]
        if not diff.blocks:
            lines.append(NO_HUNKS)
            return lines

        lines.append("```diff" if config.highlight else "```")
        for block in diff.blocks:
            lines.append(block.header)
            lines.extend(line.content for line in block.lines)
        lines.append("```")
        return lines
