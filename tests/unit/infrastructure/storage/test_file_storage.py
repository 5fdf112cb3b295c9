"""
Unit tests for receipt storage backends.
"""

import pytest
from datetime import datetime
from unittest.mock import MagicMock

from app.domain.models.base import ValidationError
from app.infrastructure.storage.storage_service import (
    LocalFileStorage,
    SupabaseFileStorage,
    generate_file_path,
    sanitize_filename
)


class TestFilePaths:
    """Test cases for file name handling."""

    def test_sanitize_filename(self):
        """Test unsafe characters are replaced."""
        assert sanitize_filename("my receipt (1).pdf") == "my_receipt__1_.pdf"

    def test_sanitize_strips_directories(self):
        """Test path traversal components are dropped."""
        assert sanitize_filename("../../etc/passwd") == "passwd"
        assert sanitize_filename("C:\\Users\\john\\scan.png") == "scan.png"

    def test_sanitize_long_name(self):
        """Test long names are shortened but keep their extension."""
        safe = sanitize_filename("a" * 300 + ".pdf")

        assert len(safe) <= 200
        assert safe.endswith(".pdf")

    def test_generate_file_path(self):
        """Test paths are grouped by owner and month with a unique suffix."""
        now = datetime(2024, 1, 16, 12, 30)

        path = generate_file_path("receipt.pdf", "user-1", now=now)

        owner, year, month, name = path.split("/")
        assert (owner, year, month) == ("user-1", "2024", "01")
        assert name.startswith("receipt_")
        assert name.endswith(".pdf")
        assert path != generate_file_path("receipt.pdf", "user-1", now=datetime(2024, 1, 16, 12, 31))


class TestLocalFileStorage:
    """Test cases for LocalFileStorage."""

    @pytest.mark.asyncio
    async def test_upload_writes_file(self, tmp_path):
        """Test the bytes land under the upload directory and the URL points at them."""
        storage = LocalFileStorage(str(tmp_path), base_url="/uploads/")

        url = await storage.upload(b"%PDF-1.4", "receipt.pdf", "application/pdf", "user-1")

        assert url.startswith("/uploads/user-1/")
        stored = tmp_path / url[len("/uploads/"):]
        assert stored.read_bytes() == b"%PDF-1.4"


class TestSupabaseFileStorage:
    """Test cases for SupabaseFileStorage."""

    def setup_method(self):
        """Set up test fixtures."""
        self.client = MagicMock()
        self.bucket = self.client.storage.from_.return_value
        self.bucket.get_public_url.return_value = "https://example.supabase.co/storage/v1/object/public/receipts/x.pdf"
        self.storage = SupabaseFileStorage(self.client, bucket="receipts")

    @pytest.mark.asyncio
    async def test_upload_returns_public_url(self):
        """Test upload to the configured bucket."""
        url = await self.storage.upload(b"data", "receipt.pdf", "application/pdf", "user-1")

        assert url.endswith("/receipts/x.pdf")
        self.client.storage.from_.assert_called_with("receipts")
        kwargs = self.bucket.upload.call_args.kwargs
        assert kwargs["file"] == b"data"
        assert kwargs["path"].startswith("user-1/")
        assert kwargs["file_options"]["content-type"] == "application/pdf"

    @pytest.mark.asyncio
    async def test_upload_failure_is_validation_error(self):
        """Test storage failures surface as a file validation error."""
        self.bucket.upload.side_effect = RuntimeError("bucket not found")

        with pytest.raises(ValidationError) as exc_info:
            await self.storage.upload(b"data", "receipt.pdf", "application/pdf", "user-1")

        assert exc_info.value.field == "file"
        self.bucket.get_public_url.assert_not_called()
