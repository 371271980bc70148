from enum import StrEnum

from pydantic import BaseModel, Field

from patchxref.diffs.models import FileDiff


class ComparisonState(StrEnum):
    IDLE = "idle"
    COLLECTING = "collecting"
    NO_DATA = "no_data"
    PAIRWISE_COMPARING = "pairwise_comparing"
    CHANGED = "changed"
    UNCHANGED = "unchanged"
    COMPARISON_FAILED = "comparison_failed"
    RENDERING_INDIVIDUAL = "rendering_individual"
    DONE = "done"


PAIRWISE_OUTCOMES = (
    ComparisonState.CHANGED,
    ComparisonState.UNCHANGED,
    ComparisonState.COMPARISON_FAILED,
)


class IndividualDiff(BaseModel):
    patch_id: str
    patch_name: str
    diff: FileDiff
    rendered: str | None = None


class PairwiseComparison(BaseModel):
    first_name: str
    second_name: str
    label_old: str
    label_new: str
    synthetic_text: str | None = None
    diffs: tuple[FileDiff, ...] = ()
    has_changes: bool = False
    error: str | None = None
    rendered: str | None = None

    @property
    def failed(self) -> bool:
        return self.error is not None


class ComparisonResult(BaseModel):
    filename: str
    states: list[ComparisonState] = Field(default_factory=lambda: [ComparisonState.IDLE])
    pairwise: PairwiseComparison | None = None
    individual: list[IndividualDiff] = Field(default_factory=list)

    @property
    def state(self) -> ComparisonState:
        return self.states[-1]

    @property
    def outcome(self) -> ComparisonState | None:
        """The pairwise branch taken, or ``NO_DATA`` when nothing matched."""
        for state in self.states:
            if state in PAIRWISE_OUTCOMES or state == ComparisonState.NO_DATA:
                return state
        return None

    @property
    def has_changes(self) -> bool:
        return self.pairwise is not None and self.pairwise.has_changes

    @property
    def is_empty(self) -> bool:
        return not self.individual
