#!/usr/bin/env python
"""
create_db.py

Initializes the database by calling 'create_tables()' from
'userapi/database.py'. Existing tables and rows are left untouched.

Usage:
    python userapi/create_db.py
"""

import asyncio
import sys
import os

# Determine the project root, which is one level above this file's directory,
# so 'userapi' is importable when run as a plain script.
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from userapi.database import DATABASE_URL, create_tables


def main() -> int:
    try:
        print(f"Creating database tables at {DATABASE_URL}...")
        asyncio.run(create_tables())
        print("Database tables created successfully.")
    except Exception as e:
        print("Error creating database tables:", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
