from .dataset_store import DatasetStore

__all__ = ["DatasetStore"]
