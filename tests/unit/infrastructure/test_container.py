"""
Unit tests for application wiring.
"""

import pytest
from unittest.mock import Mock

from app.application.use_cases.upload_use_cases import UploadReceiptUseCase
from app.config import DEFAULT_JWT_SECRET, Settings
from app.domain.services.file_storage import RECEIPT_CONTENT_TYPES, FileStorage
from app.infrastructure.container import build_container, build_file_storage
from app.infrastructure.repositories.entry_repository import SQLAlchemyEntryRepository
from app.infrastructure.repositories.memory import InMemoryEntryRepository, InMemoryUserRepository
from app.infrastructure.storage.storage_service import LocalFileStorage


class TestBuildContainer:
    """Test cases for build_container."""

    def test_memory_backend(self, tmp_path):
        """Test the in-memory store shares one store between repositories."""
        container = build_container(Settings(storage_backend="memory", upload_dir=str(tmp_path)))

        assert isinstance(container.user_repository, InMemoryUserRepository)
        assert isinstance(container.entry_repository, InMemoryEntryRepository)
        assert container.user_repository.store is container.entry_repository.store
        assert container.engine is None
        assert isinstance(container.file_storage, LocalFileStorage)

        # No database to prepare
        container.create_tables()
        container.dispose()

    def test_sqlalchemy_backend(self, tmp_path):
        container = build_container(Settings(
            storage_backend="SQLAlchemy",
            database_url="sqlite:///:memory:",
            upload_dir=str(tmp_path)
        ))

        assert isinstance(container.entry_repository, SQLAlchemyEntryRepository)
        container.create_tables()
        container.dispose()

    def test_unknown_storage_backend(self):
        with pytest.raises(ValueError):
            build_container(Settings(storage_backend="mongo"))

    def test_supabase_requires_credentials(self):
        """Test supabase file storage is refused without URL and key."""
        with pytest.raises(ValueError):
            build_file_storage(Settings(file_storage_backend="supabase", supabase_url=None, supabase_service_key=None))

    def test_unknown_file_storage_backend(self):
        with pytest.raises(ValueError):
            build_file_storage(Settings(file_storage_backend="ftp"))


class TestSettings:
    """Test cases for Settings parsing."""

    def test_comma_separated_lists(self):
        settings = Settings(
            cors_origins="http://a.test, http://b.test",
            allowed_receipt_types="image/PNG,application/pdf"
        )

        assert settings.cors_origins == ["http://a.test", "http://b.test"]
        assert settings.allowed_receipt_types == ["image/png", "application/pdf"]

    def test_default_receipt_types(self):
        """Test settings default to the receipt types uploads accept."""
        default = Settings.model_fields["allowed_receipt_types"].default

        assert default == ",".join(RECEIPT_CONTENT_TYPES)
        assert UploadReceiptUseCase(Mock(spec=FileStorage)).allowed_types == set(RECEIPT_CONTENT_TYPES)

    def test_production_requires_real_secret(self):
        settings = Settings(environment="production", jwt_secret_key=DEFAULT_JWT_SECRET)

        with pytest.raises(ValueError, match="JWT_SECRET_KEY"):
            settings.validate_environment()
