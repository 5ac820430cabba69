"""
Seed a lifecycle database from a legacy JSON export.

The export holds the old policy rows and editor/publisher relations:

    {"policies": [{...}, ...], "relations": [{...}, ...]}

Usage:
    python seed_db.py export.json                 # Seed ./data/lifecycle.db
    python seed_db.py export.json --db other.db   # Seed a custom database
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import Any

# Add root to pythonpath
sys.path.append(os.getcwd())

from src.adapters.legacy import document_from_record, relations_from_records
from src.adapters.sqlite.migrator import SQLiteMigrator
from src.adapters.sqlite.repos import SQLiteAssignmentStore, SQLiteDocumentRepo
from src.domain.errors import DocumentNotFoundError

logger = logging.getLogger(__name__)

DEFAULT_DATA_DIR = os.environ.get("POLICY_DATA_DIR", "./data")
DB_FILENAME = "lifecycle.db"


def seed(db_path: str, export: dict[str, Any]) -> dict[str, int]:
    """
    Import legacy policies and relations; existing documents are skipped.

    Returns:
        Counts of imported documents, skipped documents and stored relations.
    """
    SQLiteMigrator(db_path).run_migrations()

    documents = SQLiteDocumentRepo(db_path)
    imported = skipped = 0
    for record in export.get("policies", []):
        doc = document_from_record(record)
        try:
            documents.load_document(doc.id)
        except DocumentNotFoundError:
            documents.save_document(doc)
            imported += 1
        else:
            logger.info("Document %s already present, skipping", doc.id)
            skipped += 1

    store = SQLiteAssignmentStore(db_path)
    relations = store.load_assignments() | relations_from_records(export.get("relations", []))
    store.save_assignments(relations)

    return {"imported": imported, "skipped": skipped, "relations": len(relations)}


def main() -> int:
    parser = argparse.ArgumentParser(description="Seed a lifecycle database from a legacy export")
    parser.add_argument("export", type=Path, help="Legacy JSON export file")
    parser.add_argument(
        "--db",
        default=str(Path(DEFAULT_DATA_DIR) / DB_FILENAME),
        help="SQLite database path",
    )
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    Path(args.db).parent.mkdir(parents=True, exist_ok=True)

    export = json.loads(args.export.read_text())
    counts = seed(args.db, export)
    print(
        f"Seeded {args.db}: {counts['imported']} documents imported, "
        f"{counts['skipped']} skipped, {counts['relations']} relations"
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
