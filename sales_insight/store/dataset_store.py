from __future__ import annotations

import logging
import uuid
from collections.abc import Iterable, Mapping, Sequence
from datetime import UTC, datetime
from typing import Any

from ..models.dataset import Dataset, freeze_row
from ..models.row_data import RowData

"""In-memory Dataset store.

The store is created by the composition root and passed by reference to
every component that needs the Dataset. It has exactly one writer path
(a successful upload) and any number of readers. A write replaces the
Dataset wholesale; readers always see a complete, immutable Dataset.
"""

__all__ = [
    "DatasetStore",
]

logger = logging.getLogger(__name__)


class DatasetStore:
    """Holds the current Dataset for one process.

    Operations: get_dataset / set_dataset / clear_dataset / is_loaded.
    """

    def __init__(self) -> None:
        self._dataset: Dataset = Dataset.empty()

    def get_dataset(self) -> Dataset:
        return self._dataset

    def set_dataset(
        self,
        rows: Iterable[RowData | Mapping[str, Any]],
        file_name: str,
        columns: Sequence[str] | None = None,
    ) -> Dataset:
        """Replace the current Dataset with already normalized rows.

        Args:
            rows: normalized RowData (or plain mappings)
            file_name: originating file name
            columns: header order; defaults to the keys of the first row

        Returns:
            The new Dataset
        """
        frozen = tuple(freeze_row(r.values if isinstance(r, RowData) else r) for r in rows)
        if columns is None:
            columns = list(frozen[0].keys()) if frozen else []
        dataset = Dataset(
            rows=frozen,
            columns=tuple(columns),
            file_name=file_name,
            uploaded_at=datetime.now(UTC),
            token=uuid.uuid4().hex,
        )
        self._dataset = dataset
        logger.debug("dataset stored file=%s rows=%d token=%s", file_name, len(frozen), dataset.token)
        return dataset

    def clear_dataset(self) -> None:
        self._dataset = Dataset.empty()
        logger.debug("dataset cleared")

    def is_loaded(self) -> bool:
        return not self._dataset.is_empty
