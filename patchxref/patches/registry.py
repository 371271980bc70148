import logging
from collections.abc import Iterable, Iterator

from patchxref.errors import CapacityExceeded
from patchxref.patches.models import (
    ChangeSummary,
    CommonFile,
    CorrelationView,
    PatchSet,
)

logger = logging.getLogger(__name__)

MAX_PATCH_SETS = 5


class PatchRegistry:
    """Loaded patches in load order.

    Derived views are computed from scratch on every call; nothing is
    cached between mutations.
    """

    def __init__(self, capacity: int = MAX_PATCH_SETS):
        self.capacity = capacity
        self._patch_sets: list[PatchSet] = []

    def __len__(self) -> int:
        return len(self._patch_sets)

    def __iter__(self) -> Iterator[PatchSet]:
        return iter(list(self._patch_sets))

    @property
    def patch_sets(self) -> list[PatchSet]:
        return list(self._patch_sets)

    def can_admit(self, count: int) -> bool:
        return len(self._patch_sets) + count <= self.capacity

    def check_capacity(self, count: int) -> None:
        if not self.can_admit(count):
            raise CapacityExceeded(
                requested=count,
                current=len(self._patch_sets),
                capacity=self.capacity,
            )

    def add(self, *patch_sets: PatchSet) -> None:
        """Admit a whole batch or nothing."""
        self.check_capacity(len(patch_sets))
        self._patch_sets = [*self._patch_sets, *patch_sets]
        logger.debug(
            "Added %d patch sets (%d loaded)", len(patch_sets), len(self._patch_sets)
        )

    def remove(self, patch_id: str) -> None:
        remaining = [p for p in self._patch_sets if p.id != patch_id]
        if len(remaining) == len(self._patch_sets):
            logger.debug("Remove ignored, no patch set with id %s", patch_id)
            return
        self._patch_sets = remaining
        logger.debug("Removed patch set %s (%d loaded)", patch_id, len(remaining))

    def active_patch(self, patch_id: str | None) -> PatchSet | None:
        if not patch_id:
            return None
        for patch_set in self._patch_sets:
            if patch_set.id == patch_id:
                return patch_set
        return None

    def compute_common_files(self) -> CorrelationView:
        return compute_correlation(self._patch_sets)

    def summarize(self, patch_set: PatchSet) -> ChangeSummary:
        return summarize(patch_set)


def compute_correlation(patch_sets: Iterable[PatchSet]) -> CorrelationView:
    """Group files by ``new_name`` across patches.

    Deleted files (no ``new_name``) never correlate. A patch naming the
    same file twice is counted once.
    """
    patch_sets = list(patch_sets)
    files: dict[str, CommonFile] = {}

    for patch_set in patch_sets:
        for diff in patch_set.diffs:
            if not diff.new_name:
                continue
            entry = files.get(diff.new_name)
            if entry is None:
                entry = CommonFile(filename=diff.new_name)
                files[diff.new_name] = entry
            if patch_set.id in entry.patch_ids:
                continue
            entry.patch_ids.append(patch_set.id)
            entry.patch_names.append(patch_set.name)

    total = len(patch_sets)
    for entry in files.values():
        entry.present_in_all = total > 0 and entry.patch_count == total

    view = CorrelationView(total_patch_sets=total, files=files)
    logger.debug(
        "Correlated %d files across %d patch sets, %d present in all",
        len(files),
        total,
        len(view.present_in_all_patches),
    )
    return view


def summarize(patch_set: PatchSet) -> ChangeSummary:
    return ChangeSummary(
        total_files=len(patch_set.diffs),
        added_lines=sum(d.added_lines for d in patch_set.diffs),
        deleted_lines=sum(d.deleted_lines for d in patch_set.diffs),
    )
