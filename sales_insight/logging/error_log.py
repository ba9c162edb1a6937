from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path

from ..ingest.errors import IngestionError
from ..models.error_record import ErrorRecord

"""Rejected-upload log.

Each upload that UploadSession rejects becomes one JSON line (ErrorRecord key
set) naming the file, the offending data row / column when known, and the
user-facing message. A CLI run writes to a single
`ingest-errors-YYYYMMDD-HHMMSS.log` (UTC) under the configured `log_dir`; the
file only appears once something has actually been rejected.
"""

__all__ = [
    "ErrorRecord",
    "ErrorLogBuffer",
    "UNEXPECTED_ERROR",
]

LOGS_DIR = Path("./logs")
TIMESTAMP_FMT = "%Y%m%d-%H%M%S"
UNEXPECTED_ERROR = "UNEXPECTED_ERROR"


class ErrorLogBuffer:
    """Collects rejected uploads for one run and appends them to its log file.

    `log_dir` comes from the `log_dir` config key (default ./logs). The
    timestamped file name is chosen on the first write and reused for the rest
    of the run, so a session that rejects several files in a row produces one
    file. Serial use only; UploadSession never ingests concurrently.
    """

    def __init__(self, log_dir: Path | None = None) -> None:
        self._records: list[ErrorRecord] = []
        self._file_path: Path | None = None
        self._log_dir = log_dir if log_dir is not None else LOGS_DIR

    @property
    def file_path(self) -> Path:
        if self._file_path is None:
            self._log_dir.mkdir(parents=True, exist_ok=True)
            stamp = datetime.now(UTC).strftime(TIMESTAMP_FMT)
            self._file_path = self._log_dir / f"ingest-errors-{stamp}.log"
        return self._file_path

    @property
    def records(self) -> list[ErrorRecord]:
        return list(self._records)

    def append(self, record: ErrorRecord) -> None:
        self._records.append(record)

    def record_rejection(self, file_name: str, error: Exception) -> ErrorRecord:
        """Buffer one rejected upload and return the record.

        IngestionError subclasses carry their own error_type / row / column;
        anything else is logged as a file-level UNEXPECTED_ERROR.
        """
        if isinstance(error, IngestionError):
            record = ErrorRecord.create(
                file=file_name,
                row=error.row,
                error_type=error.error_type,
                message=str(error),
                column=error.column,
            )
        else:
            record = ErrorRecord.create(file=file_name, row=-1, error_type=UNEXPECTED_ERROR, message=str(error))
        self.append(record)
        return record

    def __len__(self) -> int:
        return len(self._records)

    def flush(self) -> Path | None:
        """Append buffered rejections to the run's log file.

        Returns None when nothing is buffered, without creating `log_dir` or
        the file: a run whose uploads all succeed leaves no log behind.
        """
        if not self._records:
            return None
        fp = self.file_path
        with fp.open("a", encoding="utf-8") as f:
            for r in self._records:
                f.write(r.to_json_line() + "\n")
        # 書き込み済みのレコードは破棄 (次回 flush で重複させない)
        self._records.clear()
        return fp
