"""Spreadsheet ingestion: parse -> validate -> normalize."""

from .errors import (
    EmptyFileError,
    EmptyRequiredFieldError,
    IngestionError,
    InsufficientDataError,
    InvalidNumericValueError,
    MissingColumnsError,
    StructuralParseError,
    UnsupportedFormatError,
)
from .normalizer import normalize_rows, parse_number
from .reader import ParsedTable, parse_file
from .schema import NUMERIC_COLUMNS, REQUIRED_COLUMNS, validate_headers

__all__ = [
    "EmptyFileError",
    "EmptyRequiredFieldError",
    "IngestionError",
    "InsufficientDataError",
    "InvalidNumericValueError",
    "MissingColumnsError",
    "StructuralParseError",
    "UnsupportedFormatError",
    "NUMERIC_COLUMNS",
    "REQUIRED_COLUMNS",
    "ParsedTable",
    "normalize_rows",
    "parse_file",
    "parse_number",
    "validate_headers",
]
