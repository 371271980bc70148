from patchxref.diffs.models import FileDiff


def reconstruct(diff: FileDiff) -> str:
    """Rebuild the changed regions of a file from one diff.

    Only insert and delete lines contribute, markers stripped, in hunk
    order, each followed by a newline. Context is dropped, so the result
    is the touched material of the file and not the file itself.
    """
    return "".join(
        f"{line.content[1:]}\n"
        for block in diff.blocks or ()
        for line in block.lines
        if line.is_change
    )
