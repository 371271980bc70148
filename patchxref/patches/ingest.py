import asyncio
import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path

from patchxref.diffs.codec import DiffCodec, UnidiffCodec
from patchxref.errors import CapacityExceeded, DiffCodecError, ReadFailure
from patchxref.patches.models import PatchSet
from patchxref.patches.registry import MAX_PATCH_SETS

logger = logging.getLogger(__name__)

EMPTY_FILE_REASON = "Failed to read file"
IO_ERROR_REASON = "Error reading file"
PARSE_ERROR_REASON = "Failed to parse file"


@dataclass
class ReadOutcome:
    path: Path
    text: str | None = None
    error: ReadFailure | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class BatchResult:
    outcomes: list[ReadOutcome] = field(default_factory=list)
    patch_sets: list[PatchSet] = field(default_factory=list)

    @property
    def failures(self) -> list[ReadFailure]:
        return [o.error for o in self.outcomes if o.error is not None]

    @property
    def committable(self) -> bool:
        # a single failed read holds back the whole batch
        return bool(self.outcomes) and not self.failures


class FileIngestor:
    """Reads a batch of patch files concurrently and parses them.

    Each file is read in its own task; the batch is only parsed once every
    task has resolved.
    """

    def __init__(
        self,
        codec: DiffCodec | None = None,
        encoding: str = "utf-8",
        capacity: int = MAX_PATCH_SETS,
    ):
        self.codec = codec or UnidiffCodec()
        self.encoding = encoding
        self.capacity = capacity

    def check_capacity(self, requested: int, loaded: int) -> None:
        if loaded + requested > self.capacity:
            raise CapacityExceeded(
                requested=requested, current=loaded, capacity=self.capacity
            )

    async def read_file(self, path: Path) -> ReadOutcome:
        path = Path(path)
        try:
            data = await asyncio.to_thread(path.read_bytes)
            text = data.decode(self.encoding)
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Could not read %s: %s", path, exc)
            return ReadOutcome(path=path, error=ReadFailure(path, IO_ERROR_REASON))

        if not text:
            logger.warning("Patch file %s is empty", path)
            return ReadOutcome(path=path, error=ReadFailure(path, EMPTY_FILE_REASON))
        return ReadOutcome(path=path, text=text)

    async def read_batch(
        self,
        paths: Sequence[Path],
        loaded: int = 0,
    ) -> BatchResult:
        self.check_capacity(len(paths), loaded)
        if not paths:
            return BatchResult()

        outcomes = list(await asyncio.gather(*(self.read_file(p) for p in paths)))
        result = BatchResult(outcomes=outcomes)
        if result.failures:
            logger.warning(
                "%d of %d files failed to read, batch not committed",
                len(result.failures),
                len(outcomes),
            )
            return result

        for index, outcome in enumerate(outcomes):
            try:
                diffs = self.codec.parse(outcome.text or "")
            except DiffCodecError as exc:
                logger.warning("Could not parse %s: %s", outcome.path, exc)
                outcomes[index] = ReadOutcome(
                    path=outcome.path,
                    error=ReadFailure(outcome.path, PARSE_ERROR_REASON),
                )
                continue
            result.patch_sets.append(
                PatchSet(
                    name=outcome.path.name,
                    diffs=tuple(diffs),
                    source_path=outcome.path,
                )
            )

        if result.failures:
            result.patch_sets = []
        return result

    def ingest(self, paths: Sequence[Path], loaded: int = 0) -> BatchResult:
        return asyncio.run(self.read_batch(paths, loaded=loaded))
