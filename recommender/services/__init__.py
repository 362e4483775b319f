"""Storage collaborators: store protocol, in-memory and JSON-backed stores."""

from .catalog_store import CatalogStore, InMemoryCatalogStore, InteractionMaskedStore
from .dataset_loader import DatasetManifest, JsonCatalogStore, load_catalog_dataset

__all__ = [
    "CatalogStore",
    "DatasetManifest",
    "InMemoryCatalogStore",
    "InteractionMaskedStore",
    "JsonCatalogStore",
    "load_catalog_dataset",
]
