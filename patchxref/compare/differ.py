import logging
from collections.abc import Iterable

from patchxref.compare.models import (
    ComparisonResult,
    ComparisonState,
    IndividualDiff,
    PairwiseComparison,
)
from patchxref.diffs.codec import DiffCodec, UnidiffCodec
from patchxref.diffs.reconstruct import reconstruct
from patchxref.errors import DiffCodecError
from patchxref.patches.models import PatchSet
from patchxref.rendering.base import DiffRenderer, RenderConfig

logger = logging.getLogger(__name__)


def comparison_label(filename: str, patch_name: str) -> str:
    return f"{filename} ({patch_name})"


def has_changes(diff_text: str) -> bool:
    """True when the text has a hunk with at least one added or removed line."""
    in_hunk = False
    for line in diff_text.splitlines():
        if line.startswith("@@"):
            in_hunk = True
            continue
        if in_hunk and line.startswith(("+", "-")):
            return True
    return False


def collect_file_diffs(
    filename: str,
    patch_sets: Iterable[PatchSet],
) -> list[IndividualDiff]:
    """One diff per patch touching ``filename`` on either side, in load order."""
    found: list[IndividualDiff] = []
    for patch_set in patch_sets:
        diff = patch_set.find(filename)
        if diff is not None:
            found.append(
                IndividualDiff(
                    patch_id=patch_set.id,
                    patch_name=patch_set.name,
                    diff=diff,
                )
            )
    return found


class CrossVersionDiffer:
    """Compares one file across the loaded patches.

    With exactly two contributors the changed regions of both are
    reconstructed and diffed against each other; every contributor is
    then rendered on its own. Other contributor counts skip the pairwise
    step.
    """

    def __init__(
        self,
        codec: DiffCodec | None = None,
        renderer: DiffRenderer | None = None,
        render_config: RenderConfig | None = None,
    ):
        self.codec = codec or UnidiffCodec()
        self.renderer = renderer
        self.render_config = render_config or RenderConfig()

    def compare(
        self,
        filename: str,
        patch_sets: Iterable[PatchSet],
    ) -> ComparisonResult:
        result = ComparisonResult(filename=filename)
        result.states.append(ComparisonState.COLLECTING)
        contributors = collect_file_diffs(filename, patch_sets)
        logger.debug("%s touched by %d patch sets", filename, len(contributors))

        if not contributors:
            result.states.append(ComparisonState.NO_DATA)
            result.states.append(ComparisonState.DONE)
            return result

        if len(contributors) == 2:
            result.states.append(ComparisonState.PAIRWISE_COMPARING)
            result.pairwise = self._compare_pair(filename, *contributors)
            if result.pairwise.failed:
                result.states.append(ComparisonState.COMPARISON_FAILED)
            elif result.pairwise.has_changes:
                result.states.append(ComparisonState.CHANGED)
            else:
                result.states.append(ComparisonState.UNCHANGED)

        result.states.append(ComparisonState.RENDERING_INDIVIDUAL)
        single_config = self.render_config.model_copy(
            update={"draw_file_list": False}
        )
        for item in contributors:
            if self.renderer is not None:
                item.rendered = self.renderer.render([item.diff], single_config)
            result.individual.append(item)

        result.states.append(ComparisonState.DONE)
        return result

    def _compare_pair(
        self,
        filename: str,
        first: IndividualDiff,
        second: IndividualDiff,
    ) -> PairwiseComparison:
        pairwise = PairwiseComparison(
            first_name=first.patch_name,
            second_name=second.patch_name,
            label_old=comparison_label(filename, first.patch_name),
            label_new=comparison_label(filename, second.patch_name),
        )

        try:
            text = self.codec.format(
                pairwise.label_old,
                pairwise.label_new,
                reconstruct(first.diff),
                reconstruct(second.diff),
            )
            pairwise.synthetic_text = text
            pairwise.diffs = tuple(self.codec.parse(text))
        except (DiffCodecError, ValueError) as exc:
            logger.warning("Comparison of %s unavailable: %s", filename, exc)
            pairwise.error = str(exc) or exc.__class__.__name__
            return pairwise

        pairwise.has_changes = has_changes(text)
        if pairwise.has_changes and self.renderer is not None:
            config = self.render_config.model_copy(
                update={"draw_file_list": False, "render_nothing_when_empty": True}
            )
            pairwise.rendered = self.renderer.render(list(pairwise.diffs), config)
        return pairwise
