"""
Persistencia en MongoDB.
"""
from sync_middleware.infrastructure.database.mongo_store import MongoDocumentStore
from sync_middleware.infrastructure.database.session import (
    MongoConnectionManager,
    get_document_store,
    close_db,
)

__all__ = ["MongoDocumentStore", "MongoConnectionManager", "get_document_store", "close_db"]
