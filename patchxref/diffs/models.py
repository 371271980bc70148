from enum import StrEnum

from pydantic import BaseModel, ConfigDict, model_validator


class LineType(StrEnum):
    CONTEXT = "context"
    INSERT = "insert"
    DELETE = "delete"


class DiffLine(BaseModel):
    """One hunk line. ``content`` keeps its ``+``/``-``/`` `` marker."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    type: LineType
    content: str
    old_number: int | None = None
    new_number: int | None = None

    @property
    def is_change(self) -> bool:
        return self.type in (LineType.INSERT, LineType.DELETE)


class DiffBlock(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    header: str
    old_start: int
    old_count: int
    new_start: int
    new_count: int
    lines: tuple[DiffLine, ...] = ()


class FileDiff(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    old_name: str | None = None
    new_name: str | None = None
    blocks: tuple[DiffBlock, ...] = ()

    @model_validator(mode="after")
    def _require_a_name(self) -> "FileDiff":
        if not self.old_name and not self.new_name:
            raise ValueError("FileDiff needs an old_name or a new_name")
        return self

    @property
    def name(self) -> str:
        return self.new_name or self.old_name or ""

    @property
    def is_new_file(self) -> bool:
        return self.old_name is None

    @property
    def is_deleted_file(self) -> bool:
        return self.new_name is None

    @property
    def added_lines(self) -> int:
        return sum(
            1
            for block in self.blocks
            for line in block.lines
            if line.type == LineType.INSERT
        )

    @property
    def deleted_lines(self) -> int:
        return sum(
            1
            for block in self.blocks
            for line in block.lines
            if line.type == LineType.DELETE
        )
