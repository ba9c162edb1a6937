from __future__ import annotations

"""Ingestion error taxonomy.

Every error is terminal for the current ingestion attempt. The message of each
exception is the text shown to the user, so it is built once here and never
rewritten by callers. ``error_type`` is the UPPER_SNAKE label written to the
ingestion error log.
"""

__all__ = [
    "IngestionError",
    "UnsupportedFormatError",
    "StructuralParseError",
    "MissingColumnsError",
    "InvalidNumericValueError",
    "EmptyFileError",
    "InsufficientDataError",
    "EmptyRequiredFieldError",
]


class IngestionError(Exception):
    """Base class for all ingestion failures."""

    error_type = "INGESTION_ERROR"
    row: int = -1
    column: str | None = None


class UnsupportedFormatError(IngestionError):
    error_type = "UNSUPPORTED_FORMAT"

    def __init__(self, file_name: str) -> None:
        self.file_name = file_name
        super().__init__("Unsupported file format. Please upload CSV or Excel files.")


class StructuralParseError(IngestionError):
    """Raised when the tabular text or workbook content cannot be decoded."""

    error_type = "STRUCTURAL_PARSE_ERROR"

    def __init__(self, kind: str, cause: str) -> None:
        self.kind = kind
        self.cause = cause
        super().__init__(f"{kind} parsing failed: {cause}")


class MissingColumnsError(IngestionError):
    error_type = "MISSING_COLUMNS"

    def __init__(self, missing: list[str]) -> None:
        self.missing = list(missing)
        super().__init__(f"Missing required columns: {', '.join(self.missing)}")


class InvalidNumericValueError(IngestionError):
    error_type = "INVALID_NUMERIC_VALUE"

    def __init__(self, row: int, column: str, raw_value: object) -> None:
        self.row = row
        self.column = column
        self.raw_value = raw_value
        super().__init__(f"Invalid numeric value in row {row}, column '{column}': {raw_value}")


class EmptyFileError(IngestionError):
    error_type = "EMPTY_FILE"

    def __init__(self, message: str = "File is empty or contains no valid data") -> None:
        super().__init__(message)


class InsufficientDataError(EmptyFileError):
    """Workbook without a header row plus at least one data row."""

    error_type = "INSUFFICIENT_DATA"

    def __init__(self) -> None:
        super().__init__("Excel file must have at least a header row and one data row")


class EmptyRequiredFieldError(IngestionError):
    error_type = "EMPTY_REQUIRED_FIELD"

    def __init__(self, row: int, field: str) -> None:
        self.row = row
        self.column = field
        self.field = field
        super().__init__(f"{field} is required in row {row}")
