from patchxref.diffs.codec import DiffCodec, UnidiffCodec, clean_path
from patchxref.diffs.models import DiffBlock, DiffLine, FileDiff, LineType
from patchxref.diffs.reconstruct import reconstruct

__all__ = [
    "DiffCodec",
    "UnidiffCodec",
    "clean_path",
    "DiffBlock",
    "DiffLine",
    "FileDiff",
    "LineType",
    "reconstruct",
]
