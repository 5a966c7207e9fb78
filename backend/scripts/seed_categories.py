#!/usr/bin/env python3
"""
Seed categories from a JSON file, or from a small default list when no file
is given. Existing names are skipped, so the script can be re-run safely.

Usage:
    python scripts/seed_categories.py
    python scripts/seed_categories.py --file categories.json

The JSON may be a list of names, a list of {"name": ...} objects, or an
object with an "items" list of either.
"""
import argparse
import json
import logging
import os
import sys

# allow running from repo/scripts
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from catalog.config import settings
from catalog.db import SessionLocal, init_db
from catalog.repositories.category_repo import CategoryRepository
from catalog.utils.logging_config import setup_logging

logger = logging.getLogger("seed_categories")

DEFAULT_CATEGORIES = ["Electronics", "Home", "Garden", "Toys", "Books"]


def _normalize(data):
    if isinstance(data, dict):
        data = data.get("items", [])
    names = []
    for entry in data if isinstance(data, list) else []:
        name = entry.get("name") if isinstance(entry, dict) else entry
        if isinstance(name, str) and name.strip():
            names.append(name.strip())
    return names


def load_names(path):
    if not path:
        return list(DEFAULT_CATEGORIES)
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except ValueError as e:
            raise RuntimeError(f"Failed to parse JSON from {path}: {e}")
    return _normalize(data)


def seed(names):
    init_db()
    db = SessionLocal()
    repo = CategoryRepository(db)
    created = 0
    try:
        for name in names:
            if repo.get_by_name(name):
                continue
            c = repo.create(name)
            logger.info("Created category %s (%s)", c.name, c.id)
            created += 1
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
    logger.info("Seeded categories: %d new, %d total requested", created, len(names))
    return created


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    parser.add_argument("--file", "-f", default=None, help="Path to a JSON list of category names")
    args = parser.parse_args()
    setup_logging(settings.LOG_LEVEL)
    if args.file and not os.path.exists(args.file):
        logger.error("File not found: %s", args.file)
        sys.exit(1)
    seed(load_names(args.file))
