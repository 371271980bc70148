from patchxref.rendering.base import DiffRenderer, RenderConfig
from patchxref.rendering.markdown import MarkdownDiffRenderer, display_name, file_status

__all__ = [
    "DiffRenderer",
    "RenderConfig",
    "MarkdownDiffRenderer",
    "display_name",
    "file_status",
]
