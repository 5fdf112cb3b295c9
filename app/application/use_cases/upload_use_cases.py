"""
Receipt upload use case.
"""

import logging
from typing import Iterable

from app.application.use_cases.base_use_case import AuthorizedUseCase, CommandUseCase
from app.application.dto.upload_dto import UploadReceiptRequestDTO, UploadResponseDTO
from app.domain.models.base import ValidationError
from app.domain.models.user import Principal
from app.domain.services.file_storage import RECEIPT_CONTENT_TYPES, FileStorage

logger = logging.getLogger(__name__)


class UploadReceiptUseCase(AuthorizedUseCase, CommandUseCase[UploadReceiptRequestDTO, UploadResponseDTO]):
    """Use case for storing a receipt file and returning its reference."""

    def __init__(
        self,
        file_storage: FileStorage,
        allowed_types: Iterable[str] = RECEIPT_CONTENT_TYPES,
        max_size_bytes: int = 10 * 1024 * 1024
    ):
        super().__init__()
        self.file_storage = file_storage
        self.allowed_types = {content_type.lower() for content_type in allowed_types}
        self.max_size_bytes = max_size_bytes

    async def _validate_request(self, request: UploadReceiptRequestDTO, principal: Principal) -> None:
        await super()._validate_request(request, principal)

        content_type = (request.content_type or "").split(";")[0].strip().lower()
        if content_type not in self.allowed_types:
            raise ValidationError(
                f"File type {request.content_type} not allowed. Allowed: JPEG, PNG, GIF, WEBP, PDF",
                "file"
            )

        if not request.content:
            raise ValidationError("File is empty", "file")

        if len(request.content) > self.max_size_bytes:
            max_mb = self.max_size_bytes / (1024 * 1024)
            raise ValidationError(f"File too large. Maximum size: {max_mb:g}MB", "file")

    async def _execute_command_logic(self, request: UploadReceiptRequestDTO, principal: Principal) -> UploadResponseDTO:
        content_type = request.content_type.split(";")[0].strip().lower()
        url = await self.file_storage.upload(
            request.content,
            request.filename,
            content_type,
            principal.user_id
        )

        logger.info(f"Receipt {request.filename} ({len(request.content)} bytes) stored for {principal.user_id}")
        return UploadResponseDTO(
            url=url,
            filename=request.filename,
            content_type=content_type,
            size=len(request.content)
        )
