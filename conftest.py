"""Shared fixtures: small in-memory catalogs and the bundled sample dataset."""

from pathlib import Path

import pytest

from recommender.services.catalog_store import InMemoryCatalogStore
from recommender.services.dataset_loader import load_catalog_dataset
from recommender.tests.factories import (
    make_comment,
    make_like,
    make_post,
    make_tag,
    make_user,
)

SAMPLE_DATASET_DIR = Path(__file__).parent / "evaluation" / "fixtures" / "sample_blog"


@pytest.fixture
def three_tag_store():
    """
    Tags A, B, C; one single-tagged post each by other users, plus one A post
    written by u1. u1 prefers only A.
    """
    return InMemoryCatalogStore(
        tags=[make_tag("A"), make_tag("B"), make_tag("C")],
        users=[
            make_user("u1", ["A"]),
            make_user("u2", ["B"]),
            make_user("u3", ["C"]),
        ],
        posts=[
            make_post("pA", "u2", ["A"], day=0),
            make_post("pB", "u2", ["B"], day=1),
            make_post("pC", "u3", ["C"], day=2),
            make_post("pOwn", "u1", ["A"], day=3),
        ],
    )


@pytest.fixture
def twin_users_store():
    """u1 and u2 share preferences {A, B}; u3 prefers only C."""
    return InMemoryCatalogStore(
        tags=[make_tag("A"), make_tag("B"), make_tag("C")],
        users=[
            make_user("u1", ["A", "B"]),
            make_user("u2", ["A", "B"]),
            make_user("u3", ["C"]),
        ],
        posts=[
            make_post("pa", "u1", ["A"], day=0),
            make_post("pb", "u2", ["B"], day=1),
            make_post("pc", "u3", ["C"], day=2),
        ],
    )


@pytest.fixture
def interaction_store():
    """a likes P; b comments on P and likes Q; authors are a third user."""
    return InMemoryCatalogStore(
        tags=[make_tag("A"), make_tag("B")],
        users=[
            make_user("a", ["A"]),
            make_user("b", ["B"]),
            make_user("writer", ["A", "B"]),
        ],
        posts=[
            make_post("P", "writer", ["A"], day=0),
            make_post("Q", "writer", ["B"], day=1),
        ],
        likes=[make_like("a", "P"), make_like("b", "Q")],
        comments=[make_comment("b", "P")],
    )


@pytest.fixture
def sample_dataset_dir():
    return SAMPLE_DATASET_DIR


@pytest.fixture
def sample_store():
    """The bundled sample_blog dataset."""
    return load_catalog_dataset(SAMPLE_DATASET_DIR)
