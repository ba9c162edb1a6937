"""Domain models for the sales insight tool.

This package contains the domain model classes shared by the ingestion
pipeline, the dataset store and the analytics layer.
"""

from .aggregates import BreakdownSlice, DashboardSummary, ProductDetail, ProductMetrics, Totals
from .chat_message import ChatMessage
from .dataset import Dataset
from .error_record import ErrorRecord
from .product_selection import ProductSelection
from .row_data import RowData
from .upload_state import UploadResult, UploadStatus

__all__ = [
    # Ingestion models
    "RowData",
    "Dataset",
    "ErrorRecord",
    "UploadResult",
    "UploadStatus",
    # Analytics models
    "Totals",
    "BreakdownSlice",
    "ProductMetrics",
    "DashboardSummary",
    "ProductDetail",
    "ProductSelection",
    # Chat
    "ChatMessage",
]
