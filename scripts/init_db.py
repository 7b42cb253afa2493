#!/usr/bin/env python3
"""
Database initialization script for the restaurant hours admin backend.

This script handles:
- Database creation (for PostgreSQL)
- Table creation from the SQLAlchemy models
- Optional seeding of demo locations with operating hours

Usage:
    python scripts/init_db.py [--seed-data] [--force-recreate]
"""

import sys
import argparse
import logging
from pathlib import Path
from urllib.parse import urlparse

# add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from sqlalchemy import create_engine, text

from restaurant_hours.core.config import settings
from restaurant_hours.db.base import Base
from restaurant_hours.db.session import engine, session_scope
from restaurant_hours.models import RestaurantLocation
from restaurant_hours.services.business.hours import (
    DayOfWeek,
    get_default_operating_hours,
    set_day_closed,
    to_backend_format,
    update_day_schedule,
)

# configure logging
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def create_database_if_not_exists():
    """create db if it doesn't exist (PostgreSQL only)."""
    database_url = settings.DATABASE_URL

    if not database_url.startswith("postgresql"):
        logger.info("Database URL is not PostgreSQL, skipping database creation")
        return True

    try:
        parsed = urlparse(database_url)
        database_name = parsed.path[1:]  # Remove leading '/'

        # connect to the maintenance db to create ours
        postgres_url = f"{parsed.scheme}://{parsed.netloc}/postgres"
        postgres_engine = create_engine(postgres_url, isolation_level="AUTOCOMMIT")

        with postgres_engine.connect() as conn:
            result = conn.execute(
                text("SELECT 1 FROM pg_database WHERE datname = :db_name"),
                {"db_name": database_name}
            )

            if result.fetchone() is None:
                logger.info(f"Creating database: {database_name}")
                conn.execute(text(f'CREATE DATABASE "{database_name}"'))
                logger.info(f"Database {database_name} created successfully")
            else:
                logger.info(f"Database {database_name} already exists")

        postgres_engine.dispose()
        return True

    except Exception as e:
        logger.error(f"Error creating database: {e}")
        return False


def create_tables(force_recreate: bool = False):
    """create all tables, dropping them first when asked."""
    if force_recreate:
        logger.warning("Dropping all tables...")
        Base.metadata.drop_all(bind=engine)

    Base.metadata.create_all(bind=engine)
    logger.info("Tables created successfully")


def _demo_locations():
    late_night = get_default_operating_hours()
    for day in (DayOfWeek.FRIDAY, DayOfWeek.SATURDAY):
        late_night = update_day_schedule(late_night, day, open="18:00", close="02:00")
    late_night = set_day_closed(late_night, DayOfWeek.MONDAY, True)

    weekdays_only = get_default_operating_hours()
    for day in (DayOfWeek.SATURDAY, DayOfWeek.SUNDAY):
        weekdays_only = set_day_closed(weekdays_only, day, True)

    return [
        ("Centro", "Av. Principal 123", get_default_operating_hours()),
        ("Bar Nocturno", "Calle 8 #45", late_night),
        ("Oficinas", "Torre Empresarial, Local 2", weekdays_only),
    ]


def seed_initial_data():
    """add demo locations unless a location with the same name exists."""
    try:
        with session_scope() as db:
            for name, address, hours in _demo_locations():
                existing = db.query(RestaurantLocation).filter(RestaurantLocation.name == name).first()
                if existing:
                    logger.info(f"Location {name} already exists, skipping")
                    continue

                db.add(RestaurantLocation(
                    name=name,
                    address=address,
                    operating_hours=to_backend_format(hours),
                ))
                logger.info(f"Created location: {name}")
        return True

    except Exception as e:
        logger.error(f"Error seeding data: {e}")
        return False


def main():
    parser = argparse.ArgumentParser(description="Initialize the restaurant hours database")
    parser.add_argument("--seed-data", action="store_true", help="Seed demo locations")
    parser.add_argument("--force-recreate", action="store_true", help="Drop and recreate all tables")
    args = parser.parse_args()

    if not create_database_if_not_exists():
        sys.exit(1)

    create_tables(force_recreate=args.force_recreate)

    if args.seed_data and not seed_initial_data():
        sys.exit(1)

    logger.info("Database initialization completed")


if __name__ == "__main__":
    main()
