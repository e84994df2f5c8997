#!/usr/bin/env python3
"""
Database Seed Script

Populates the books table with sample data for development.

USAGE:
    # From the project root, with DATABASE_URL or DB_* settings available
    python scripts/seed_data.py

    # Keep existing rows instead of clearing the table first
    python scripts/seed_data.py --keep

This script:
1. Connects to the database using app settings
2. Creates the books table if needed
3. Clears existing rows (unless --keep)
4. Inserts the sample books in one batch
"""

import argparse
import sys
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from sqlalchemy import delete
from sqlalchemy.orm import Session, sessionmaker

from bookstore.config import get_settings
from bookstore.database import create_db_engine, create_session_factory, create_tables
from bookstore.models import Book
from bookstore.schemas import BookCreate
from bookstore.storage import SqlBookStore

SAMPLE_BOOKS = [
    {"title": "Dune", "author": "Frank Herbert", "year": 1965},
    {"title": "1984", "author": "George Orwell", "year": 1949},
    {"title": "Animal Farm", "author": "George Orwell", "year": 1945},
    {"title": "Pride and Prejudice", "author": "Jane Austen", "year": 1813},
    {"title": "The Old Man and the Sea", "author": "Ernest Hemingway", "year": 1952},
    {"title": "Murder on the Orient Express", "author": "Agatha Christie", "year": 1934},
    {"title": "Foundation", "author": "Isaac Asimov", "year": 1951},
    {"title": "The Hobbit", "author": "J.R.R. Tolkien", "year": 1937},
]


def clear_data(session_factory: sessionmaker[Session]) -> None:
    """Remove every row, soft-deleted ones included."""
    print("Clearing existing data...")
    with session_factory() as session:
        session.execute(delete(Book))
        session.commit()
    print("Data cleared.")


def seed_database(clear_existing: bool = True) -> None:
    """
    Main function to seed the database.

    Args:
        clear_existing: If True, clears existing data before seeding.
    """
    settings = get_settings()
    engine = create_db_engine(settings)

    print("=" * 60)
    print("Starting database seed...")
    print("=" * 60)

    try:
        create_tables(engine)
        session_factory = create_session_factory(engine)

        if clear_existing:
            clear_data(session_factory)

        store = SqlBookStore(session_factory, soft_delete=settings.soft_delete)
        books = store.create_many([BookCreate(**data) for data in SAMPLE_BOOKS])

        print("=" * 60)
        print("Database seeding completed successfully!")
        print("=" * 60)
        print(f"\nCreated {len(books)} books.")
        print(f"You can now access the API at http://{settings.host}:{settings.port}/books")
    finally:
        engine.dispose()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Seed the books table")
    parser.add_argument(
        "--keep",
        action="store_true",
        help="keep existing rows instead of clearing the table first",
    )
    args = parser.parse_args()
    seed_database(clear_existing=not args.keep)
