#!/usr/bin/env python3
from __future__ import annotations

import argparse
import sys

from catalog_search.core.config import settings
from catalog_search.db.catalog import Catalog
from catalog_search.schemas import SortMode
from catalog_search.services.highlighter import highlight


def render(query: str, text: str | None) -> str:
    return "".join(f"[[{s.text}]]" if s.match else s.text for s in highlight(query, text))


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Search a static catalog file from the command line")
    p.add_argument("query", nargs="?", default="", help="Free-text query (empty lists everything)")
    p.add_argument("--catalog", default=settings.catalog_path, help="Catalog file (.json|.csv|.parquet)")
    p.add_argument("--category", default=settings.all_category, help="Category filter")
    p.add_argument("--sort", default=SortMode.relevance.value, choices=[m.value for m in SortMode])
    p.add_argument("--categories", action="store_true", help="List categories and exit")
    return p


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        catalog = Catalog.from_path(args.catalog)
    except (FileNotFoundError, ValueError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 2
    if args.categories:
        for c in catalog.categories():
            print(c)
        return 0
    results = catalog.rank(args.query, args.category, args.sort)
    print(f"Found: {len(results)}")
    for m in results:
        tags = ", ".join(m.record.tags or ())
        print(f"- [{m.record.category}] {render(args.query, m.record.title)} (score={m.score})")
        if m.record.text:
            print(f"    {render(args.query, m.record.text)}")
        if tags:
            print(f"    tags: {tags}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
