"""
File upload router.
Stores receipt files and returns the URL to attach to an expense.
"""

from fastapi import APIRouter, File, UploadFile, status

from app.application.dto.upload_dto import UploadReceiptRequestDTO, UploadResponseDTO
from app.application.use_cases.upload_use_cases import UploadReceiptUseCase
from app.infrastructure.auth.dependencies import AppContainer, CurrentPrincipal


router = APIRouter()


@router.post("/receipts", status_code=status.HTTP_201_CREATED, response_model=UploadResponseDTO)
async def upload_receipt(
    principal: CurrentPrincipal,
    container: AppContainer,
    file: UploadFile = File(..., description="Receipt image or PDF")
):
    """
    Upload a receipt.

    - **file**: JPEG, PNG, GIF, WEBP or PDF, up to the configured size limit

    Send the returned **url** as `receipt_url` when submitting the expense.
    """
    settings = container.settings
    content = await file.read()

    use_case = UploadReceiptUseCase(
        container.file_storage,
        allowed_types=settings.allowed_receipt_types,
        max_size_bytes=settings.max_upload_size_bytes
    )
    request = UploadReceiptRequestDTO(
        filename=file.filename or "receipt",
        content_type=file.content_type or "application/octet-stream",
        content=content
    )
    return await use_case.execute(request, principal)
