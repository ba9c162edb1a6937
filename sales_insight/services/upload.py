from __future__ import annotations

import logging
from datetime import UTC, datetime
from pathlib import Path

from ..config.loader import InsightConfig, default_config
from ..ingest.errors import EmptyFileError, IngestionError
from ..ingest.normalizer import normalize_rows
from ..ingest.reader import ParsedTable, Source, parse_file
from ..ingest.schema import validate_headers
from ..logging.error_log import UNEXPECTED_ERROR, ErrorLogBuffer
from ..models.row_data import RowData
from ..models.upload_state import UploadResult, UploadStatus
from ..store.dataset_store import DatasetStore
from .progress import StageProgress

"""Upload flow: parse -> validate -> normalize -> store.

UploadSession drives the `idle -> uploading -> (success | error)` state
machine for one store. Only one ingestion runs at a time; success and error
return to idle only through reset(). A failed ingestion never touches the
store, so the Dataset readers see is always complete.
"""

__all__ = [
    "PREVIEW_ROWS",
    "UploadSessionError",
    "UploadInProgressError",
    "InvalidTransitionError",
    "ingest_file",
    "UploadSession",
]

logger = logging.getLogger(__name__)

PREVIEW_ROWS = 5


class UploadSessionError(Exception):
    """Base exception for misuse of the upload state machine."""


class UploadInProgressError(UploadSessionError):
    """A second file was submitted while one is still being processed."""


class InvalidTransitionError(UploadSessionError):
    """ingest() or reset() was called from a state that does not allow it."""


def ingest_file(
    source: Source,
    file_name: str,
    config: InsightConfig | None = None,
    progress: StageProgress | None = None,
) -> tuple[ParsedTable, list[RowData]]:
    """Run the ingestion pipeline without touching any store.

    Returns:
        (parsed table, normalized rows)

    Raises:
        IngestionError: any parse / validation / normalization failure
    """
    cfg = config or default_config()

    if progress is not None:
        progress.start("parse")
    table = parse_file(source, file_name)
    if not table.rows:
        raise EmptyFileError()
    if progress is not None:
        progress.finish(rows=len(table.rows))
        progress.start("validate")

    column_map = validate_headers(table.columns, cfg.required_columns)
    if progress is not None:
        progress.finish()
        progress.start("normalize")

    rows = normalize_rows(table.rows, column_map, cfg.numeric_columns, cfg.identifier_column)
    if progress is not None:
        progress.finish(rows=len(rows))
    logger.debug(
        "file=%s parsed_rows=%d normalized_rows=%d column_map=%s",
        file_name,
        len(table.rows),
        len(rows),
        column_map,
    )
    return table, rows


class UploadSession:
    """Single-flight upload state machine writing to one DatasetStore."""

    def __init__(
        self,
        store: DatasetStore,
        config: InsightConfig | None = None,
        error_log: ErrorLogBuffer | None = None,
    ) -> None:
        self.store = store
        self.config = config or default_config()
        self.error_log = error_log
        self.status = UploadStatus.IDLE
        self.last_result: UploadResult | None = None

    def ingest(self, source: Source, file_name: str | None = None) -> UploadResult:
        """Process one file and, on success, replace the store's Dataset.

        Raises:
            UploadInProgressError: an ingestion is already running
            InvalidTransitionError: the previous result was not reset()
        """
        if self.status is UploadStatus.UPLOADING:
            raise UploadInProgressError("an upload is already being processed")
        if self.status is not UploadStatus.IDLE:
            raise InvalidTransitionError(f"cannot start an upload from '{self.status.value}'; call reset() first")

        if file_name is None:
            file_name = Path(source).name if isinstance(source, (str, Path)) else str(getattr(source, "name", ""))

        self.status = UploadStatus.UPLOADING
        start_time = datetime.now(UTC)
        logger.info(f"Processing {file_name}")
        try:
            with StageProgress(file_name) as progress:
                table, rows = ingest_file(source, file_name, self.config, progress)
                progress.start("store")
                dataset = self.store.set_dataset(rows, file_name, columns=table.columns)
                progress.finish()
        except IngestionError as e:
            return self._fail(file_name, start_time, e)
        except Exception as e:
            self._fail(file_name, start_time, e)
            raise

        self.status = UploadStatus.SUCCESS
        result = UploadResult(
            file_name=file_name,
            status=UploadStatus.SUCCESS,
            row_count=len(dataset),
            columns=list(dataset.columns),
            preview=[dict(r) for r in dataset.rows[:PREVIEW_ROWS]],
            start_time=start_time,
            end_time=datetime.now(UTC),
        )
        logger.info(f"File processed successfully: {file_name} ({result.row_count} rows imported)")
        self.last_result = result
        return result

    def reset(self) -> None:
        """Return from success/error to idle. The stored Dataset is kept."""
        if self.status is UploadStatus.UPLOADING:
            raise InvalidTransitionError("cannot reset while an upload is being processed")
        self.status = UploadStatus.IDLE

    def _fail(self, file_name: str, start_time: datetime, error: Exception) -> UploadResult:
        self.status = UploadStatus.ERROR
        error_type = error.error_type if isinstance(error, IngestionError) else UNEXPECTED_ERROR
        logger.error(f"Upload failed: {file_name}: {error}")

        if self.error_log is not None:
            self.error_log.record_rejection(file_name, error)
            try:
                self.error_log.flush()
            except OSError as flush_error:
                logger.warning(f"could not write error log: {flush_error}")

        result = UploadResult(
            file_name=file_name,
            status=UploadStatus.ERROR,
            error=str(error),
            error_type=error_type,
            start_time=start_time,
            end_time=datetime.now(UTC),
        )
        self.last_result = result
        return result
