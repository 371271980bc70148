from patchxref.compare.models import (
    ComparisonResult,
    ComparisonState,
    IndividualDiff,
    PairwiseComparison,
)
from patchxref.compare.differ import (
    CrossVersionDiffer,
    collect_file_diffs,
    comparison_label,
    has_changes,
)

__all__ = [
    "ComparisonResult",
    "ComparisonState",
    "IndividualDiff",
    "PairwiseComparison",
    "CrossVersionDiffer",
    "collect_file_diffs",
    "comparison_label",
    "has_changes",
]
