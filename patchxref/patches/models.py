from pathlib import Path

import ulid
from pydantic import BaseModel, ConfigDict, Field

from patchxref.diffs.models import FileDiff


def new_patch_id() -> str:
    return str(ulid.ULID())


class PatchSet(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    id: str = Field(default_factory=new_patch_id)
    name: str
    diffs: tuple[FileDiff, ...] = ()
    source_path: Path | None = None

    def find(self, filename: str) -> FileDiff | None:
        """First diff touching ``filename`` on either side."""
        for diff in self.diffs:
            if diff.new_name == filename or diff.old_name == filename:
                return diff
        return None


class ChangeSummary(BaseModel):
    total_files: int
    added_lines: int
    deleted_lines: int


class CommonFile(BaseModel):
    filename: str
    patch_ids: list[str] = Field(default_factory=list)
    patch_names: list[str] = Field(default_factory=list)
    present_in_all: bool = False

    @property
    def patch_count(self) -> int:
        return len(self.patch_ids)


class CorrelationView(BaseModel):
    total_patch_sets: int
    files: dict[str, CommonFile] = Field(default_factory=dict)

    @property
    def present_in_all_patches(self) -> list[str]:
        return [name for name, entry in self.files.items() if entry.present_in_all]


class Overview(BaseModel):
    total_patch_files: int
    present_in_all_patches: list[str] = Field(default_factory=list)
