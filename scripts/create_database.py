#!/usr/bin/env python
"""Create the PostgreSQL database from `DATABASE_URL` in .env, and optionally its tables.

Usage:
  python scripts/create_database.py [--password PW] [--tables]
"""
import argparse
import os
import sys
from getpass import getpass

# Ensure project root is on sys.path so `campushub` package can be imported
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import psycopg2
from psycopg2 import sql
from psycopg2 import OperationalError
from sqlalchemy.engine import make_url

from campushub.config import settings


def connect_admin_db(url, password):
    return psycopg2.connect(
        dbname="postgres",
        user=url.username,
        password=password,
        host=url.host or "localhost",
        port=url.port or 5432,
    )


def create_database(url, password):
    conn = connect_admin_db(url, password)
    conn.autocommit = True
    try:
        with conn.cursor() as cur:
            cur.execute("SELECT 1 FROM pg_database WHERE datname=%s", (url.database,))
            if cur.fetchone():
                print(f"Database '{url.database}' already exists.")
            else:
                cur.execute(sql.SQL("CREATE DATABASE {};").format(sql.Identifier(url.database)))
                print(f"Database '{url.database}' created.")
    finally:
        conn.close()


def create_tables():
    """Create every model table directly (development shortcut for the Alembic revision)"""
    from campushub.database import Base, engine
    import campushub.models  # noqa: F401  registers tables on Base.metadata

    Base.metadata.create_all(engine)
    print("Tables:", ", ".join(sorted(Base.metadata.tables)))


def main():
    url = make_url(settings.DATABASE_URL)
    if not url.database:
        print("No database name found in DATABASE_URL")
        sys.exit(1)

    # Accept password from CLI or environment for non-interactive use
    parser = argparse.ArgumentParser()
    parser.add_argument("--password", "-p", help="Postgres admin password")
    parser.add_argument("--tables", action="store_true", help="Also create the application tables")
    args = parser.parse_args()

    password = args.password or os.getenv("POSTGRES_PASSWORD") or url.password

    try:
        create_database(url, password)
    except OperationalError:
        if not sys.stdin.isatty():
            print("Password authentication failed. Provide the password via --password or POSTGRES_PASSWORD env var.")
            sys.exit(1)
        print("Password authentication failed. Please enter the Postgres password for user:", url.username)
        try:
            create_database(url, getpass())
        except Exception as e:
            print("Error creating database:", e)
            sys.exit(1)
    except Exception as e:
        print("Error creating database:", e)
        sys.exit(1)

    if args.tables:
        create_tables()


if __name__ == "__main__":
    main()
