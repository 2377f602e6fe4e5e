#!/usr/bin/env python3
"""Initialize the Freelance Market database with sample data."""

import argparse
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from sqlalchemy.orm import Session

from freelance_market.config import get_database_url
from freelance_market.db.database import create_database_engine, init_db
from freelance_market.db.seed import CONTRACTS, JOBS, PROFILES, seed_database


def main():
    """Main initialization function."""
    parser = argparse.ArgumentParser(description="Create the schema and load the sample data")
    parser.add_argument("--database-url", help="Database URL, defaults to the configured one")
    parser.add_argument(
        "--schema-only", action="store_true", help="Create the tables without loading data"
    )
    args = parser.parse_args()

    database_url = args.database_url or get_database_url()
    print(f"Creating database: {database_url}")

    engine = create_database_engine(database_url)
    init_db(engine)
    print("Database tables created")

    if not args.schema_only:
        with Session(engine) as session:
            seed_database(session)
        print(f"   Profiles loaded: {len(PROFILES)}")
        print(f"   Contracts loaded: {len(CONTRACTS)}")
        print(f"   Jobs loaded: {len(JOBS)}")

    print("\nNext steps:")
    print("1. Start the server: python -m freelance_market.launcher")
    print("2. Test API health: curl http://127.0.0.1:3001/health")
    print("3. Call as profile 1: curl -H 'profile_id: 1' http://127.0.0.1:3001/contracts")


if __name__ == "__main__":
    main()
