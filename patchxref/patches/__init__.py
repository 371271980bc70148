from patchxref.patches.ingest import BatchResult, FileIngestor, ReadOutcome
from patchxref.patches.models import (
    ChangeSummary,
    CommonFile,
    CorrelationView,
    Overview,
    PatchSet,
)
from patchxref.patches.registry import (
    MAX_PATCH_SETS,
    PatchRegistry,
    compute_correlation,
    summarize,
)

__all__ = [
    "BatchResult",
    "FileIngestor",
    "ReadOutcome",
    "ChangeSummary",
    "CommonFile",
    "CorrelationView",
    "Overview",
    "PatchSet",
    "MAX_PATCH_SETS",
    "PatchRegistry",
    "compute_correlation",
    "summarize",
]
