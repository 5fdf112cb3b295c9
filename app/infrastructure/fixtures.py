"""
Demo data for local development and walkthroughs.
Loaded on startup when SEED_FIXTURES is set, or through manage_db.py seed.
"""

import logging
from datetime import date, datetime, time, timedelta
from typing import Optional

from app.domain.models.entry import (
    EntryStatus,
    ExpenseEntry,
    TravelEntry,
    VacationEntry,
    WorkHoursEntry,
)
from app.domain.models.user import User, UserRole
from app.domain.repositories.entry_repository import EntryRepository
from app.domain.repositories.user_repository import UserRepository
from app.domain.services.auth_service import AuthService

logger = logging.getLogger(__name__)

DEMO_PASSWORD = "admin123"

# email, name, role, department, phone, days since joining
DEMO_USERS = [
    ("admin@example.com", "Admin User", UserRole.ADMIN, "Management", "+1234567890", 365),
    ("john@example.com", "John Doe", UserRole.EMPLOYEE, "Engineering", "+1234567891", 180),
    ("jane@example.com", "Jane Smith", UserRole.EMPLOYEE, "Marketing", "+1234567892", 150),
    ("bob@example.com", "Bob Johnson", UserRole.EMPLOYEE, "Sales", "+1234567893", 120),
    ("alice@example.com", "Alice Williams", UserRole.EMPLOYEE, "Engineering", "+1234567894", 90),
    ("charlie@example.com", "Charlie Brown", UserRole.VOLUNTEER, None, "+1234567895", 60),
    ("diana@example.com", "Diana Prince", UserRole.EMPLOYEE, "HR", "+1234567896", 45),
    ("eva@example.com", "Eva Martinez", UserRole.VOLUNTEER, None, "+1234567897", 30),
]


def _demo_entries(today: date):
    """(owner email, days ago submitted, entry) tuples relative to ``today``."""
    def ago(days):
        return today - timedelta(days=days)

    def ahead(days):
        return today + timedelta(days=days)

    return [
        # Waiting for review
        ("john@example.com", 1, WorkHoursEntry(
            date=ago(1), hours_worked=8, description="Worked on new feature implementation")),
        ("jane@example.com", 2, ExpenseEntry(
            date=ago(2), amount=125.50, category="Client Meeting", description="Lunch with potential client")),
        ("bob@example.com", 1, TravelEntry(
            travel_date=ago(1), from_location="Main Office", to_location="Client Site Downtown",
            distance_km=45.5, description="Sales presentation")),
        ("alice@example.com", 3, VacationEntry(
            start_date=ahead(14), end_date=ahead(18), days=5, description="Family vacation to Hawaii")),
        ("charlie@example.com", 2, WorkHoursEntry(
            date=ago(2), hours_worked=4, description="Community event organization")),

        # Already approved
        ("john@example.com", 5, WorkHoursEntry(
            date=ago(5), hours_worked=8.5, description="Code review and bug fixes",
            status=EntryStatus.APPROVED)),
        ("john@example.com", 6, WorkHoursEntry(
            date=ago(6), hours_worked=9, description="Sprint planning and development",
            status=EntryStatus.APPROVED)),
        ("jane@example.com", 4, WorkHoursEntry(
            date=ago(4), hours_worked=7.5, description="Marketing campaign planning",
            status=EntryStatus.APPROVED)),
        ("jane@example.com", 7, ExpenseEntry(
            date=ago(7), amount=89.99, category="Office Supplies", description="Marketing materials and supplies",
            status=EntryStatus.APPROVED)),
        ("bob@example.com", 3, WorkHoursEntry(
            date=ago(3), hours_worked=8, description="Client calls and proposal writing",
            status=EntryStatus.APPROVED)),
        ("bob@example.com", 8, ExpenseEntry(
            date=ago(8), amount=250.00, category="Client Meeting", description="Dinner with major client",
            status=EntryStatus.APPROVED)),
        ("alice@example.com", 4, WorkHoursEntry(
            date=ago(4), hours_worked=7, description="Database optimization",
            status=EntryStatus.APPROVED)),
        ("diana@example.com", 5, WorkHoursEntry(
            date=ago(5), hours_worked=8, description="Employee onboarding and training",
            status=EntryStatus.APPROVED)),
        ("diana@example.com", 10, ExpenseEntry(
            date=ago(10), amount=45.00, category="Office Supplies", description="HR forms and folders",
            status=EntryStatus.APPROVED)),

        # Turned down
        ("eva@example.com", 9, TravelEntry(
            travel_date=ago(9), from_location="Home", to_location="Community Center",
            distance_km=12, description="Volunteer day", status=EntryStatus.REJECTED)),
        ("charlie@example.com", 12, VacationEntry(
            start_date=ago(12), end_date=ago(10), days=3, description="Long weekend",
            status=EntryStatus.REJECTED)),
    ]


async def seed_fixtures(
    user_repository: UserRepository,
    entry_repository: EntryRepository,
    auth_service: AuthService,
    today: Optional[date] = None,
) -> int:
    """
    Load the demo users and entries.
    Does nothing when the demo admin already exists. Returns the number of
    entries created.
    """
    today = today or date.today()

    if await user_repository.find_by_email(DEMO_USERS[0][0]):
        logger.info("Demo fixtures already present, skipping")
        return 0

    password_hash = auth_service.hash_password(DEMO_PASSWORD)
    admin_id = None
    user_ids = {}

    for email, name, role, department, phone, joined_days_ago in DEMO_USERS:
        user = User(
            email=email,
            name=name,
            role=role,
            department=department,
            phone_number=phone,
            password_hash=password_hash,
            created_at=datetime.combine(today - timedelta(days=joined_days_ago), time(9)),
        )
        user.validate()
        saved = await user_repository.save(user)
        user_ids[email] = saved.id
        if role == UserRole.ADMIN:
            admin_id = saved.id

    created = 0
    for email, submitted_days_ago, entry in _demo_entries(today):
        status = entry.status
        entry.prepare_submission(user_ids[email])
        entry.status = status
        entry.created_at = datetime.combine(today - timedelta(days=submitted_days_ago), time(17))
        if status != EntryStatus.PENDING:
            entry.reviewed_by = admin_id
            entry.reviewed_at = entry.created_at + timedelta(hours=16)
        entry.validate()
        await entry_repository.save(entry)
        created += 1

    logger.info(f"Seeded {len(user_ids)} demo users and {created} entries")
    return created
