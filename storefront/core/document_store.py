"""
Document store configuration and access

The catalog lives in Firestore. Everything above this module only sees the
``DocumentStore`` contract: list every document of a collection, in store
order, as plain mappings.
"""

import logging
import time
from typing import Any, Dict, List, Mapping, Optional, Protocol

from google.api_core import exceptions as gcp_exceptions
from google.auth import exceptions as auth_exceptions
from google.cloud import firestore

from storefront.core.config import settings

logger = logging.getLogger(__name__)

CATEGORIES_COLLECTION = "categories"
PRODUCTS_COLLECTION = "products"


class DataSourceUnavailable(Exception):
    """Raised when a collection cannot be read from the document store"""

    def __init__(self, collection: str, message: str):
        self.collection = collection
        self.message = message
        super().__init__(f"Collection '{collection}' unavailable: {message}")


class DocumentStore(Protocol):
    """Read-only view of a collection-oriented document database"""

    async def list_documents(self, collection_name: str) -> List[Optional[Mapping[str, Any]]]:
        ...

    async def check_connection(self) -> bool:
        ...

    async def close(self) -> None:
        ...


class FirestoreDocumentStore:
    """Document store backed by a Firestore ``AsyncClient``"""

    def __init__(self, project_id: Optional[str] = None, database: str = "(default)"):
        """
        Args:
            project_id: GCP project (None = resolved from the environment)
            database: Firestore database id
        """
        self.project_id = project_id
        self.database = database
        self._client: Optional[firestore.AsyncClient] = None

    @property
    def client(self) -> firestore.AsyncClient:
        """Firestore client, created on first use"""
        if self._client is None:
            self._client = firestore.AsyncClient(project=self.project_id, database=self.database)
            logger.debug("Firestore client created for project %s", self.project_id)
        return self._client

    async def list_documents(self, collection_name: str) -> List[Optional[Mapping[str, Any]]]:
        """
        Fetch every document of a collection

        Args:
            collection_name: Firestore collection to scan

        Returns:
            Document payloads in the order Firestore returns them
        """
        try:
            documents = []
            async for snapshot in self.client.collection(collection_name).stream():
                documents.append(snapshot.to_dict())
        except (gcp_exceptions.GoogleAPIError, auth_exceptions.GoogleAuthError) as e:
            logger.error(f"Failed to list '{collection_name}' from Firestore: {e}")
            raise DataSourceUnavailable(collection_name, str(e)) from e

        logger.debug("Fetched %d documents from '%s'", len(documents), collection_name)
        return documents

    async def check_connection(self) -> bool:
        """
        Check if the document store is reachable
        """
        try:
            async for _ in self.client.collection(CATEGORIES_COLLECTION).limit(1).stream():
                break
            logger.info("Document store connection successful")
            return True
        except (gcp_exceptions.GoogleAPIError, auth_exceptions.GoogleAuthError) as e:
            logger.error(f"Document store connection failed: {e}")
            return False

    async def close(self) -> None:
        """Close the gRPC channel; the next call opens a fresh client"""
        if self._client is None:
            return
        client, self._client = self._client, None
        await client._firestore_api.transport.close()
        logger.info("Firestore client closed")


class DocumentStoreHealthCheck:
    """Connection check with timing, for the health endpoints"""

    def __init__(self, store: DocumentStore):
        self.store = store

    async def check_connection(self) -> Dict[str, Any]:
        start_time = time.time()
        is_connected = await self.store.check_connection()
        response_time = round((time.time() - start_time) * 1000, 2)

        return {
            "status": "healthy" if is_connected else "unhealthy",
            "response_time_ms": response_time,
            "timestamp": time.time(),
        }


_store: Optional[FirestoreDocumentStore] = None


def get_document_store() -> DocumentStore:
    """
    Dependency to get the process-wide document store
    """
    global _store
    if _store is None:
        _store = FirestoreDocumentStore(
            project_id=settings.FIRESTORE_PROJECT_ID,
            database=settings.FIRESTORE_DATABASE,
        )
    return _store


async def close_document_store() -> None:
    """Close the process-wide document store, if one was opened"""
    if _store is not None:
        await _store.close()
