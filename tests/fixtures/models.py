"""Data model fixtures for Bindery tests."""

from __future__ import annotations

from typing import Any

import pytest

from bindery.bindings import ResolveContext


@pytest.fixture
def data_model() -> dict[str, Any]:
    """A small surface data model with nested objects, lists and scalars."""
    return {
        "user": {"name": "Ada", "id": "u-1", "active": True, "nickname": None},
        "score": 7,
        "ratio": 0.5,
        "items": [
            {"title": "First", "price": 3},
            {"title": "Second", "price": 4.5},
        ],
        "tags": ["alpha", "beta"],
        "greeting": "Hello",
    }


@pytest.fixture
def scope() -> dict[str, Any]:
    """A list-item scope as used when rendering repeated templates."""
    return {"title": "Scoped", "price": 10, "name": "Grace"}


@pytest.fixture
def context(data_model: dict[str, Any]) -> ResolveContext:
    """A resolution context over data_model with no scope or overrides."""
    return ResolveContext(data_model=data_model)


@pytest.fixture
def scoped_context(data_model: dict[str, Any], scope: dict[str, Any]) -> ResolveContext:
    """A resolution context over data_model with the list-item scope."""
    return ResolveContext(data_model=data_model, scope=scope)
