"""
Document store health endpoints
"""

from fastapi import APIRouter, HTTPException, Depends, status
import logging

from storefront.core.document_store import DocumentStore, DocumentStoreHealthCheck, get_document_store

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/health")
async def store_health(store: DocumentStore = Depends(get_document_store)):
    """
    Document store health check with response time
    """
    health_status = await DocumentStoreHealthCheck(store).check_connection()

    if health_status["status"] == "healthy":
        return health_status

    logger.error("Document store health check failed")
    raise HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        detail=health_status
    )


@router.get("/connection")
async def test_connection(store: DocumentStore = Depends(get_document_store)):
    """
    Test basic document store connection
    """
    if await store.check_connection():
        return {
            "status": "connected",
            "message": "Document store connection successful"
        }

    raise HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        detail={"status": "disconnected", "message": "Document store connection failed"}
    )
