from enum import StrEnum
from pathlib import Path


class ErrorType(StrEnum):
    READ_FAILURE = "read_failure"
    CAPACITY_EXCEEDED = "capacity_exceeded"
    DIFF_PARSE = "diff_parse"


class PatchXrefError(Exception):
    def __init__(
        self,
        error_type: ErrorType,
        message: str,
        details: dict | None = None,
    ):
        super().__init__(message)
        self.error_type = error_type
        self.message = message
        self.details = details or {}


class ReadFailure(PatchXrefError):
    """A single file of an upload batch could not be turned into text."""

    def __init__(self, path: Path | str, reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(
            ErrorType.READ_FAILURE,
            f"{reason}: {self.path.name}",
            details={"path": str(self.path)},
        )


class CapacityExceeded(PatchXrefError):
    def __init__(self, requested: int, current: int, capacity: int):
        self.requested = requested
        self.current = current
        self.capacity = capacity
        super().__init__(
            ErrorType.CAPACITY_EXCEEDED,
            f"Maximum {capacity} patch files allowed",
            details={
                "requested": requested,
                "current": current,
                "capacity": capacity,
            },
        )


class DiffCodecError(PatchXrefError):
    pass


class DiffParseError(DiffCodecError):
    def __init__(self, message: str, line: str | None = None):
        super().__init__(
            ErrorType.DIFF_PARSE,
            message,
            details={"line": line} if line is not None else None,
        )
