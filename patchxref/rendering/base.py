from typing import Literal, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict

from patchxref.diffs.models import FileDiff


class RenderConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    draw_file_list: bool = True
    matching: Literal["lines"] = "lines"
    output_format: Literal["line-by-line"] = "line-by-line"
    highlight: bool = True
    file_list_toggle: bool = True
    file_list_start_visible: bool = False
    render_nothing_when_empty: bool = False


@runtime_checkable
class DiffRenderer(Protocol):
    def render(self, diffs: list[FileDiff], config: RenderConfig) -> str: ...
