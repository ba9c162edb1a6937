from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

"""Upload flow status enum and per-attempt result.

State transitions: idle -> uploading -> (success | error), and
success/error -> idle only through an explicit reset.
"""


class UploadStatus(Enum):
    """Status of the single upload flow.

    - IDLE: waiting for a file
    - UPLOADING: a parse/validate/normalize pass is in flight
    - SUCCESS: the last file was stored as the current Dataset
    - ERROR: the last file was rejected; the store was left untouched
    """
    IDLE = "idle"
    UPLOADING = "uploading"
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class UploadResult:
    """Outcome of one ingestion attempt."""
    file_name: str
    status: UploadStatus
    row_count: int = 0                       # Rows stored on success
    columns: list[str] = field(default_factory=list)
    preview: list[dict[str, Any]] = field(default_factory=list)  # First rows for display
    error: str | None = None                 # Message shown to the user
    error_type: str | None = None            # UPPER_SNAKE classification
    start_time: datetime | None = None
    end_time: datetime | None = None

    @property
    def elapsed_seconds(self) -> float:
        if self.start_time is None or self.end_time is None:
            return 0.0
        return (self.end_time - self.start_time).total_seconds()
