"""
Unit tests for request and response DTOs.
"""

import pytest
from datetime import date
from pydantic import TypeAdapter, ValidationError as PydanticValidationError

from app.application.dto.base_dto import field_errors_from_pydantic
from app.application.dto.entry_dto import (
    CreateEntryRequestDTO,
    CreateExpenseRequestDTO,
    CreateTravelRequestDTO,
    CreateVacationRequestDTO,
    CreateWorkHoursRequestDTO,
    EntryResponseDTO,
    EntryStatusUpdateDTO,
    ExpenseEntryResponseDTO,
    VacationEntryResponseDTO,
    entry_to_response
)
from app.application.dto.user_dto import RegisterRequestDTO
from app.domain.models.entry import ExpenseEntry, TravelEntry, VacationEntry, WorkHoursEntry


class TestCreateEntryRequestDTOs:
    """Test cases for entry submission DTOs."""

    def test_work_hours_to_domain(self):
        """Test conversion to a domain entity owned by the caller."""
        dto = CreateWorkHoursRequestDTO(date=date(2024, 1, 15), hours_worked=8, description="  ")

        entry = dto.to_domain("user-1")

        assert isinstance(entry, WorkHoursEntry)
        assert entry.owner_id == "user-1"
        assert entry.hours_worked == 8
        assert entry.description is None

    def test_hours_out_of_range(self):
        """Test hours outside (0, 24] are rejected."""
        for hours in (0, -1, 25):
            with pytest.raises(PydanticValidationError):
                CreateWorkHoursRequestDTO(date=date(2024, 1, 15), hours_worked=hours)

    def test_expense_receipt_url(self):
        """Test the receipt URL maps to the receipt reference."""
        dto = CreateExpenseRequestDTO(
            date=date(2024, 1, 16), amount=12.5, category=" Food ", receipt_url="/uploads/r.png"
        )

        entry = dto.to_domain("user-1")

        assert isinstance(entry, ExpenseEntry)
        assert entry.category == "Food"
        assert entry.receipt_ref == "/uploads/r.png"

    def test_expense_blank_category(self):
        """Test whitespace-only category is rejected."""
        with pytest.raises(PydanticValidationError):
            CreateExpenseRequestDTO(date=date(2024, 1, 16), amount=12.5, category="   ")

    def test_reversed_vacation_reaches_domain(self):
        """Test range ordering is left to the domain."""
        dto = CreateVacationRequestDTO(start_date=date(2024, 2, 5), end_date=date(2024, 2, 1), days=3)

        entry = dto.to_domain("user-1")

        assert isinstance(entry, VacationEntry)
        assert entry.end_date < entry.start_date

    def test_travel_locations_trimmed(self):
        """Test locations are stripped."""
        dto = CreateTravelRequestDTO(
            travel_date=date(2024, 1, 20), from_location=" Office ", to_location="Client", distance_km=12
        )

        entry = dto.to_domain("user-1")

        assert isinstance(entry, TravelEntry)
        assert entry.from_location == "Office"

    def test_unknown_fields_rejected(self):
        """Test unexpected fields such as status cannot be smuggled in."""
        with pytest.raises(PydanticValidationError):
            CreateWorkHoursRequestDTO(date=date(2024, 1, 15), hours_worked=8, status="APPROVED")

    def test_base_request_is_abstract(self):
        """Test the shared submission fields alone cannot be instantiated."""
        with pytest.raises(TypeError):
            CreateEntryRequestDTO(description="Lunch")

class TestModerationDTOs:
    """Test cases for the moderation body."""

    def test_decisions_accepted(self):
        assert EntryStatusUpdateDTO(status="APPROVED").status == "APPROVED"
        assert EntryStatusUpdateDTO(status="REJECTED").status == "REJECTED"

    def test_pending_is_not_a_decision(self):
        """Test PENDING is refused as a target status."""
        with pytest.raises(PydanticValidationError):
            EntryStatusUpdateDTO(status="PENDING")

    def test_unknown_status(self):
        with pytest.raises(PydanticValidationError):
            EntryStatusUpdateDTO(status="ARCHIVED")


class TestRegisterRequestDTO:
    """Test cases for the registration DTO."""

    def test_defaults_to_employee(self):
        dto = RegisterRequestDTO(email="john@example.com", password="secret123", name="John Doe")

        assert dto.role == "EMPLOYEE"

    def test_admin_self_registration_refused(self):
        """Test the ADMIN role cannot be chosen at registration."""
        with pytest.raises(PydanticValidationError):
            RegisterRequestDTO(email="eve@example.com", password="secret123", name="Eve", role="ADMIN")

    def test_short_password(self):
        with pytest.raises(PydanticValidationError):
            RegisterRequestDTO(email="john@example.com", password="123", name="John Doe")

    def test_invalid_email(self):
        with pytest.raises(PydanticValidationError):
            RegisterRequestDTO(email="not-an-email", password="secret123", name="John Doe")


class TestEntryResponseDTO:
    """Test cases for the discriminated entry response."""

    def test_entry_to_response_carries_type(self):
        """Test every variant is tagged with its type."""
        entry = ExpenseEntry(
            id="entry-1", owner_id="user-1", date=date(2024, 1, 16), amount=20, category="Food",
            receipt_ref="/uploads/r.pdf"
        )

        response = entry_to_response(entry, owner_name="John Doe")

        assert isinstance(response, ExpenseEntryResponseDTO)
        data = response.model_dump(mode="json")
        assert data["type"] == "EXPENSE"
        assert data["receipt_url"] == "/uploads/r.pdf"
        assert data["owner_name"] == "John Doe"
        assert data["status"] == "PENDING"

    def test_discriminator_selects_variant(self):
        """Test parsing a payload picks the variant named by type."""
        adapter = TypeAdapter(EntryResponseDTO)

        parsed = adapter.validate_python({
            "type": "VACATION",
            "id": "entry-2",
            "owner_id": "user-1",
            "status": "APPROVED",
            "start_date": "2024-02-01",
            "end_date": "2024-02-05",
            "days": 5
        })

        assert isinstance(parsed, VacationEntryResponseDTO)
        assert parsed.days == 5

    def test_unknown_type_rejected(self):
        adapter = TypeAdapter(EntryResponseDTO)

        with pytest.raises(PydanticValidationError):
            adapter.validate_python({"type": "MILEAGE", "owner_id": "user-1", "status": "PENDING"})


class TestFieldErrors:
    """Test cases for flattening pydantic errors."""

    def test_location_prefix_dropped(self):
        errors = field_errors_from_pydantic([
            {"loc": ("body", "hours_worked"), "msg": "Input should be greater than 0"},
            {"loc": ("query", "start_date"), "msg": "Input should be a valid date"},
            {"loc": ("body",), "msg": "Field required"}
        ])

        assert [error.field for error in errors] == ["hours_worked", "start_date", "request"]
        assert errors[0].message == "Input should be greater than 0"
