import logging
from typing import Any, Dict, List

from bson import ObjectId
from bson.errors import BSONError
from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from .config import Settings
from .core import ProductIn, _make_product, _make_product_document, _product_from_document
from .errors import DatabaseConnectionError, ProductNotFoundError, StorageError
from .models import Product

logger = logging.getLogger(__name__)

# This file holds the MongoDB connection and the product collection handle.


class ProductStore:
    """Product operations over one MongoDB collection.

    The store is built once at startup and shared by every request; the
    driver's client is thread-safe and owns connection pooling. Any driver
    failure is re-raised as StorageError.
    """

    def __init__(self, collection: Collection):
        self._collection = collection

    @property
    def collection(self) -> Collection:
        return self._collection

    def insert(self, payload: ProductIn) -> Product:
        product_id = ObjectId()
        doc: Dict[str, Any] = {"_id": product_id, **_make_product_document(payload)}
        try:
            self._collection.insert_one(doc)
        except (PyMongoError, BSONError, OverflowError) as e:
            raise StorageError(str(e)) from e
        return _make_product(product_id, payload)

    def get(self, product_id: ObjectId) -> Product:
        try:
            doc = self._collection.find_one({"_id": product_id})
        except PyMongoError as e:
            raise StorageError(str(e)) from e
        if doc is None:
            raise ProductNotFoundError()
        return _product_from_document(doc)

    def replace_fields(self, product_id: ObjectId, payload: ProductIn) -> None:
        # Matching no document is not an error.
        try:
            self._collection.update_one(
                {"_id": product_id},
                {"$set": _make_product_document(payload)},
            )
        except (PyMongoError, BSONError, OverflowError) as e:
            raise StorageError(str(e)) from e

    def delete(self, product_id: ObjectId) -> None:
        try:
            self._collection.delete_one({"_id": product_id})
        except PyMongoError as e:
            raise StorageError(str(e)) from e

    def list_all(self) -> List[Product]:
        # No paging: the whole collection is materialized per call.
        try:
            return [_product_from_document(doc) for doc in self._collection.find({})]
        except PyMongoError as e:
            raise StorageError(str(e)) from e


def connect(settings: Settings) -> ProductStore:
    """Open the MongoDB client, ping it, and return the product store.

    Raises:
        DatabaseConnectionError: If the URI is invalid or the server does not answer.
    """
    try:
        client: MongoClient = MongoClient(settings.mongo_uri)
        client.admin.command("ping")
    except (PyMongoError, ValueError) as e:
        raise DatabaseConnectionError(f"cannot connect to MongoDB: {e}") from e

    collection = client[settings.db_name][settings.collection_name]
    logger.info("Connected to MongoDB (database=%s, collection=%s)", settings.db_name, settings.collection_name)
    return ProductStore(collection)
