#!/usr/bin/env python3
"""
Database management script for the HR portal backend.
Handles table creation, administrator provisioning, and demo data.
"""

import sys
import asyncio
from pathlib import Path

# Add the project root to the path
sys.path.insert(0, str(Path(__file__).parent))

from app.config import get_settings
from app.domain.models.base import DomainException
from app.domain.models.user import User, UserRole
from app.infrastructure.container import build_container
from app.infrastructure.db.database import drop_all_tables
from app.infrastructure.fixtures import seed_fixtures


def _database_container():
    settings = get_settings()
    if settings.storage_backend != "sqlalchemy":
        print(f"STORAGE_BACKEND is '{settings.storage_backend}'; nothing to manage.")
        sys.exit(1)
    return build_container(settings)


def create_tables():
    """Create all missing tables."""
    container = _database_container()
    print(f"Creating tables in {container.settings.database_url}...")
    container.create_tables()
    container.dispose()


def drop_tables():
    """Drop all tables - WARNING: This will drop all data!"""
    response = input("This will drop ALL data. Type 'yes' to continue: ")
    if response.lower() != 'yes':
        print("Drop cancelled.")
        return

    container = _database_container()
    drop_all_tables(container.engine)
    container.dispose()
    print("All tables dropped.")


def reset_database():
    """Drop and recreate all tables - WARNING: This will drop all data!"""
    response = input("This will drop ALL data. Type 'yes' to continue: ")
    if response.lower() != 'yes':
        print("Database reset cancelled.")
        return

    container = _database_container()
    print("Resetting database...")
    drop_all_tables(container.engine)
    container.create_tables()
    container.dispose()


async def _create_admin(email: str, password: str, name: str):
    container = _database_container()
    container.create_tables()

    admin = User(
        email=email,
        name=name,
        role=UserRole.ADMIN,
        department="Management",
        password_hash=container.auth_service.hash_password(password)
    )
    try:
        admin.validate()
        saved = await container.user_repository.save(admin)
    except DomainException as e:
        print(f"Error creating admin: {e.message}")
        return
    finally:
        container.dispose()

    print("Admin user created successfully!")
    print(f"Email: {saved.email}")
    print(f"Password: {password}")


def create_admin(email: str = "admin@example.com", password: str = "admin123", name: str = "Admin User"):
    """Create an administrator account. Admins cannot self-register."""
    asyncio.run(_create_admin(email, password, name))


async def _seed():
    container = _database_container()
    container.create_tables()
    try:
        created = await seed_fixtures(
            container.user_repository,
            container.entry_repository,
            container.auth_service
        )
    finally:
        container.dispose()

    if created:
        print(f"Seeded demo data ({created} entries). Demo password: admin123")
    else:
        print("Demo data already present.")


def seed():
    """Load demo users and entries."""
    asyncio.run(_seed())


def main():
    """Main CLI function."""
    if len(sys.argv) < 2:
        print("Usage: python manage_db.py [command]")
        print("Commands:")
        print("  create-tables                      - Create missing tables")
        print("  drop-tables                        - Drop all tables (WARNING: drops all data)")
        print("  reset                              - Drop and recreate all tables")
        print("  create-admin [email] [pass] [name] - Create an administrator")
        print("  seed                               - Load demo users and entries")
        return

    command_name = sys.argv[1]

    if command_name == "create-tables":
        create_tables()
    elif command_name == "drop-tables":
        drop_tables()
    elif command_name == "reset":
        reset_database()
    elif command_name == "create-admin":
        create_admin(*sys.argv[2:5])
    elif command_name == "seed":
        seed()
    else:
        print(f"Unknown command: {command_name}")


if __name__ == "__main__":
    main()
