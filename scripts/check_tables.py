#!/usr/bin/env python
"""List the application tables present in `DATABASE_URL`.

Usage:
  python scripts/check_tables.py
"""
import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sqlalchemy import inspect

from app.database import engine, metadata
import app.models  # noqa: F401


def main():
    present = set(inspect(engine).get_table_names())
    expected = set(metadata.tables)

    print("tables:", sorted(present))
    missing = expected - present
    if missing:
        print("missing:", ", ".join(sorted(missing)))
        print("Run `alembic upgrade head` to create them.")
        sys.exit(1)
    print("[OK] All application tables exist")


if __name__ == "__main__":
    main()
