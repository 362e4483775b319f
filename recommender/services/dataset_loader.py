"""
Dataset Loader

Loads a blog catalog snapshot from a dataset folder into an in-memory store.
Each dataset must have tags.json, users.json and posts.json; likes.json,
comments.json and manifest.json are optional.

Usage:
    store = load_catalog_dataset("evaluation/fixtures/sample_blog")
    posts = await store.list_active_posts()

Expected directory structure:
    evaluation/fixtures/
    └── sample_blog/
        ├── manifest.json (optional)
        ├── tags.json
        ├── users.json
        ├── posts.json
        ├── likes.json (optional)
        └── comments.json (optional)
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Union

from ..models.catalog import (
    ensure_comments,
    ensure_likes,
    ensure_posts,
    ensure_tags,
    ensure_users,
)
from .catalog_store import InMemoryCatalogStore

logger = logging.getLogger(__name__)

REQUIRED_FILES = ("tags.json", "users.json", "posts.json")


@dataclass
class DatasetManifest:
    """Parsed manifest.json for a dataset."""
    name: str
    version: str = ""
    description: str = ""
    created_at: str = ""
    statistics: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict, default_name: str = "") -> "DatasetManifest":
        return cls(
            name=data.get("name", default_name),
            version=data.get("version", ""),
            description=data.get("description", ""),
            created_at=data.get("created_at", ""),
            statistics=data.get("statistics", {}),
        )


class JsonCatalogStore(InMemoryCatalogStore):
    """In-memory catalog store populated from a dataset folder."""

    def __init__(self, dataset_dir: Union[Path, str]):
        self.path = Path(dataset_dir)
        if not self.path.is_dir():
            raise FileNotFoundError(f"Dataset directory not found: {self.path}")
        for name in REQUIRED_FILES:
            if not (self.path / name).exists():
                raise FileNotFoundError(f"Dataset file missing: {self.path / name}")

        manifest_path = self.path / "manifest.json"
        manifest_data = self._read(manifest_path) if manifest_path.exists() else {}
        self.manifest = DatasetManifest.from_dict(manifest_data, default_name=self.path.name)

        super().__init__(
            tags=ensure_tags(self._read_list("tags.json")),
            users=ensure_users(self._read_list("users.json")),
            posts=ensure_posts(self._read_list("posts.json")),
            likes=ensure_likes(self._read_list("likes.json")),
            comments=ensure_comments(self._read_list("comments.json")),
        )
        logger.info(
            "Loaded dataset %s: %d tags, %d users, %d posts, %d likes, %d comments",
            self.manifest.name,
            len(self._tags),
            len(self._users),
            len(self._posts),
            len(self._likes),
            len(self._comments),
        )

    @staticmethod
    def _read(path: Path) -> Any:
        with open(path) as f:
            return json.load(f)

    def _read_list(self, name: str) -> List[Dict]:
        path = self.path / name
        if not path.exists():
            return []
        data = self._read(path)
        # Accept either a bare list or {"<name>": [...]}
        if isinstance(data, dict):
            data = data.get(path.stem, [])
        return data


def load_catalog_dataset(dataset_dir: Union[Path, str]) -> JsonCatalogStore:
    """Load a dataset folder into a JsonCatalogStore."""
    return JsonCatalogStore(dataset_dir)
