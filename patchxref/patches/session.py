import logging
from collections.abc import Sequence
from pathlib import Path

from patchxref.compare.differ import CrossVersionDiffer
from patchxref.compare.models import ComparisonResult
from patchxref.config import PatchXrefConfig
from patchxref.diffs.codec import UnidiffCodec
from patchxref.errors import CapacityExceeded
from patchxref.patches.ingest import BatchResult, FileIngestor
from patchxref.patches.models import ChangeSummary, CorrelationView, Overview, PatchSet
from patchxref.patches.registry import PatchRegistry
from patchxref.rendering.base import DiffRenderer
from patchxref.rendering.markdown import MarkdownDiffRenderer

logger = logging.getLogger(__name__)


class PatchSession:
    """Loaded patches, the active tab and the message shown to the user."""

    def __init__(
        self,
        config: PatchXrefConfig | None = None,
        renderer: DiffRenderer | None = None,
    ):
        self.config = config or PatchXrefConfig()
        self.codec = UnidiffCodec(context_lines=self.config.context_lines)
        self.registry = PatchRegistry(capacity=self.config.max_patch_sets)
        self.ingestor = FileIngestor(
            codec=self.codec,
            encoding=self.config.encoding,
            capacity=self.config.max_patch_sets,
        )
        self.renderer = renderer or MarkdownDiffRenderer()
        self.differ = CrossVersionDiffer(
            codec=self.codec,
            renderer=self.renderer,
            render_config=self.config.render,
        )
        self.active_id: str = ""
        self.error: str = ""

    @property
    def patch_sets(self) -> list[PatchSet]:
        return self.registry.patch_sets

    @property
    def active(self) -> PatchSet | None:
        return self.registry.active_patch(self.active_id)

    def load_files(self, paths: Sequence[Path]) -> BatchResult:
        paths = [Path(p) for p in paths]
        if not paths:
            return BatchResult()

        try:
            result = self.ingestor.ingest(paths, loaded=len(self.registry))
        except CapacityExceeded as exc:
            logger.warning("Rejected batch of %d files: %s", len(paths), exc)
            self.error = exc.message
            return BatchResult()

        if not result.committable:
            self.error = "; ".join(f.message for f in result.failures)
            return result

        try:
            self.registry.add(*result.patch_sets)
        except CapacityExceeded as exc:
            self.error = exc.message
            result.patch_sets = []
            return result

        if not self.active_id and self.registry.patch_sets:
            self.active_id = self.registry.patch_sets[0].id
        self.error = ""
        logger.info("Loaded %d patch files", len(result.patch_sets))
        return result

    def remove(self, patch_id: str) -> None:
        self.registry.remove(patch_id)
        remaining = self.registry.patch_sets
        if not remaining:
            self.active_id = ""
        elif self.active_id == patch_id:
            self.active_id = remaining[0].id

    def select(self, patch_id: str) -> PatchSet | None:
        patch_set = self.registry.active_patch(patch_id)
        if patch_set is not None:
            self.active_id = patch_id
        return patch_set

    def correlation(self) -> CorrelationView:
        return self.registry.compute_common_files()

    def overview(self) -> Overview:
        view = self.correlation()
        return Overview(
            total_patch_files=view.total_patch_sets,
            present_in_all_patches=view.present_in_all_patches,
        )

    def summaries(self) -> list[tuple[PatchSet, ChangeSummary]]:
        return [(p, self.registry.summarize(p)) for p in self.registry.patch_sets]

    def compare(self, filename: str) -> ComparisonResult:
        return self.differ.compare(filename, self.registry)
