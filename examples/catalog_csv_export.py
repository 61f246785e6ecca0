#!/usr/bin/env python3
from __future__ import annotations

import argparse
import csv
import logging
from dataclasses import dataclass
from pathlib import Path

from windrow.export import ExportProfile, ExportSegmenter, iter_segments


@dataclass(frozen=True)
class Product:
    id: int
    sku: str
    name: str
    attribute_combinations: tuple[str, ...]


def make_catalog(size: int) -> list[Product]:
    colors = ("red", "green", "blue")
    return [
        Product(
            id=i,
            sku=f"SKU-{i:06d}",
            name=f"Product {i}",
            attribute_combinations=colors[: i % 4],
        )
        for i in range(size)
    ]


def project(product: Product) -> list[dict[str, object]]:
    # One row per attribute combination; products without variants export once
    variants = product.attribute_combinations or ("",)
    return [
        {"id": product.id, "sku": product.sku, "name": product.name, "variant": variant}
        for variant in variants
    ]


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Export a fake catalog to CSV files, one per segment")
    p.add_argument("out_dir", nargs="?", default="export")
    p.add_argument("--records", type=int, default=2500)
    p.add_argument("--offset", type=int, default=0)
    p.add_argument("--limit", type=int, default=0)
    p.add_argument("--per-file", type=int, default=1000)
    p.add_argument("--page-size", type=int, default=100)
    p.add_argument("-v", "--verbose", action="store_true")
    return p.parse_args()


def main() -> None:
    args = parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    catalog = make_catalog(args.records)
    exported_ids: set[int] = set()
    profile = ExportProfile(
        offset=args.offset,
        limit=args.limit,
        batch_size=args.per_file,
        page_size=args.page_size,
    )
    segmenter: ExportSegmenter[Product] = ExportSegmenter.from_profile(
        profile,
        total_records=len(catalog),
        load=lambda skip: catalog[skip : skip + profile.page_size],
        project=project,
        on_batch_loaded=lambda products: exported_ids.update(p.id for p in products),
    )

    out_dir = Path(args.out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    fieldnames = ["id", "sku", "name", "variant"]

    print("=" * 50)
    print(f"Records to export : {segmenter.record_total}")
    for index, rows in enumerate(iter_segments(segmenter)):
        path = out_dir / f"catalog-{index + 1:04d}.csv"
        with path.open("w", newline="", encoding="utf-8") as fh:
            writer = csv.DictWriter(fh, fieldnames=fieldnames)
            writer.writeheader()
            writer.writerows(rows)
        print(f"{path.name:22} | {len(rows):>6} rows")
    print("-" * 50)
    print(f"Records exported  : {segmenter.record_count}")
    print(f"Ids seen by hook  : {len(exported_ids)}")
    print("=" * 50)


if __name__ == "__main__":
    main()
