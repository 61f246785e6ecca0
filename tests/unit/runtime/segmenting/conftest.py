"""Shared fixtures for segmenting tests."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

import pytest

from windrow.export.runtime.segmenting import ExportSegmenter


@dataclass(frozen=True)
class Product:
    id: int
    sku: str
    variants: int = 1


class CatalogStore:
    """In-memory product table that records every page request."""

    def __init__(self, total: int, take: int) -> None:
        self.products = [Product(id=i, sku=f"SKU-{i:05d}") for i in range(total)]
        self.take = take
        self.loads: list[int] = []

    def load(self, skip: int) -> list[Product]:
        self.loads.append(skip)
        return self.products[skip : skip + self.take]


def project_row(product: Product) -> list[dict[str, Any]]:
    return [{"id": product.id, "sku": product.sku}]


@pytest.fixture
def make_segmenter() -> Callable[..., tuple[ExportSegmenter, CatalogStore]]:
    """Factory building a segmenter over a fresh CatalogStore."""

    def factory(
        *,
        total: int,
        take: int,
        offset: int = 0,
        limit: int = 0,
        records_per_segment: int = 0,
        project: Callable[[Product], list[Any]] = project_row,
        on_batch_loaded: Callable[[Any], None] | None = None,
    ) -> tuple[ExportSegmenter, CatalogStore]:
        store = CatalogStore(total=total, take=take)
        segmenter = ExportSegmenter(
            load=store.load,
            on_batch_loaded=on_batch_loaded,
            project=project,
            offset=offset,
            take=take,
            limit=limit,
            records_per_segment=records_per_segment,
            total_records=total,
        )
        return segmenter, store

    return factory


@pytest.fixture
def catalog_store() -> type[CatalogStore]:
    return CatalogStore


@pytest.fixture
def row_projector() -> Callable[[Product], list[dict[str, Any]]]:
    return project_row
