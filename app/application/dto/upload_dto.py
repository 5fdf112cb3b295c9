"""
Upload DTOs for receipt files.
"""

from pydantic import Field

from .base_dto import BaseDTO, RequestDTO


class UploadReceiptRequestDTO(RequestDTO):
    """DTO carrying an uploaded receipt file."""

    filename: str = Field(min_length=1, max_length=255, description="Original file name")
    content_type: str = Field(description="MIME type reported by the client")
    content: bytes = Field(description="Raw file bytes")


class UploadResponseDTO(BaseDTO):
    """DTO returned after a successful upload."""

    url: str = Field(description="Reference to store as the expense receipt_url")
    filename: str = Field(description="Original file name")
    content_type: str = Field(description="MIME type")
    size: int = Field(description="Size in bytes")
