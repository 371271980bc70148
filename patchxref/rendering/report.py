from patchxref.compare.models import ComparisonResult
from patchxref.patches.models import ChangeSummary, Overview, PatchSet
from patchxref.rendering.base import DiffRenderer, RenderConfig
from patchxref.rendering.markdown import MarkdownDiffRenderer
from patchxref.rendering.templates import (
    COMPARISON_UNAVAILABLE,
    FILE_DIFFS_HEADER,
    INDIVIDUAL_HEADER,
    NO_CHANGES,
    NO_COMMON_FILES,
    NO_CONTRIBUTORS,
    NO_PATCHES,
    OVERVIEW_HEADER,
    PATCHES_HEADER,
)


def render_overview(
    overview: Overview,
    patch_rows: list[tuple[PatchSet, ChangeSummary]],
) -> str:
    if overview.total_patch_files == 0:
        return NO_PATCHES + "\n"

    lines: list[str] = []
    lines.append(f"{OVERVIEW_HEADER} ({overview.total_patch_files} patch files)")
    lines.append("")
    if overview.present_in_all_patches:
        lines.append(
            f"{len(overview.present_in_all_patches)} Files present in all patches:"
        )
        lines.append("")
        for filename in overview.present_in_all_patches:
            lines.append(f"- `{filename}`")
    else:
        lines.append(NO_COMMON_FILES)
    lines.append("")

    lines.append(PATCHES_HEADER)
    lines.append("")
    lines.append("| Patch | Files | Added | Deleted |")
    lines.append("|-------|-------|-------|---------|")
    for patch_set, summary in patch_rows:
        lines.append(
            f"| {patch_set.name} | {summary.total_files} "
            f"| +{summary.added_lines} | -{summary.deleted_lines} |"
        )
    return "\n".join(lines) + "\n"


def render_comparison_page(
    result: ComparisonResult,
    renderer: DiffRenderer | None = None,
    config: RenderConfig | None = None,
) -> str:
    """Comparison section (two contributors only) followed by each patch's diff."""
    renderer = renderer or MarkdownDiffRenderer()
    config = config or RenderConfig()

    lines: list[str] = [f"{FILE_DIFFS_HEADER}: {result.filename}", ""]
    if result.is_empty:
        lines.append(NO_CONTRIBUTORS)
        return "\n".join(lines) + "\n"

    pairwise = result.pairwise
    if pairwise is not None:
        if pairwise.failed:
            lines.append(COMPARISON_UNAVAILABLE)
        else:
            lines.append(
                f"### Comparison: {pairwise.first_name} → {pairwise.second_name}"
            )
            lines.append("")
            if pairwise.has_changes:
                body = pairwise.rendered
                if body is None:
                    body = renderer.render(
                        list(pairwise.diffs),
                        config.model_copy(
                            update={
                                "draw_file_list": False,
                                "render_nothing_when_empty": True,
                            }
                        ),
                    )
                lines.append(body.rstrip("\n"))
            else:
                lines.append(NO_CHANGES)
        lines.append("")
        lines.append(f"{INDIVIDUAL_HEADER}:")
        lines.append("")

    single_config = config.model_copy(update={"draw_file_list": False})
    for item in result.individual:
        body = item.rendered
        if body is None:
            body = renderer.render([item.diff], single_config)
        lines.append(f"### {item.patch_name}")
        lines.append("")
        lines.append(body.rstrip("\n"))
        lines.append("")

    return "\n".join(lines).rstrip("\n") + "\n"
