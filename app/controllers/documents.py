"""Lesson document endpoints."""

import logging
from typing import List

from fastapi import APIRouter, File, HTTPException, UploadFile, status

from app.config.settings import settings
from app.controllers.dependencies import StorageDep
from app.domain.models import DocumentCreate
from app.services.document_text import (
    SUPPORTED_CONTENT_TYPES,
    DocumentExtractionError,
    extract_text,
    resolve_content_type,
)
from app.views import DocumentResponse, ErrorResponse

router = APIRouter(
    prefix="/api/documents",
    tags=["documents"],
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)

logger = logging.getLogger(__name__)

_UPLOAD_FILE = File(None)


@router.get("", response_model=List[DocumentResponse])
async def list_documents(storage: StorageDep) -> List[DocumentResponse]:
    documents = await storage.list_documents()
    return [DocumentResponse.model_validate(document) for document in documents]


@router.get("/{document_id}", response_model=DocumentResponse)
async def get_document(document_id: str, storage: StorageDep) -> DocumentResponse:
    document = await storage.get_document(document_id)
    if not document:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Document not found",
        )
    return DocumentResponse.model_validate(document)


@router.post(
    "/upload",
    response_model=DocumentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def upload_document(
    storage: StorageDep,
    file: UploadFile | None = _UPLOAD_FILE,
) -> DocumentResponse:
    """Extract the text of a TXT, PDF, or DOCX lesson and store it."""

    if file is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No file uploaded",
        )

    # One byte past the cap is enough to tell an oversized upload apart.
    data = await file.read(settings.upload.max_bytes + 1)
    await file.close()

    if not data:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Uploaded file is empty",
        )
    if len(data) > settings.upload.max_bytes:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail="Uploaded file is too large",
        )

    content_type = resolve_content_type(file.content_type, file.filename)
    if content_type not in SUPPORTED_CONTENT_TYPES:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Unsupported file type",
        )

    try:
        content = await extract_text(data, content_type)
    except DocumentExtractionError as exc:
        logger.warning("Upload extraction failed for %s: %s", file.filename, exc)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc

    filename = file.filename or "document"
    document = await storage.create_document(
        DocumentCreate(
            filename=filename,
            original_name=filename,
            mime_type=content_type,
            size=len(data),
            content=content,
        )
    )
    logger.info("Stored document %s (%s, %d bytes)", document.id, content_type, len(data))
    return DocumentResponse.model_validate(document)


@router.delete("/{document_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_document(document_id: str, storage: StorageDep) -> None:
    deleted = await storage.delete_document(document_id)
    if not deleted:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Document not found",
        )
