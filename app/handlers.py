from typing import List

from fastapi.responses import PlainTextResponse

from .core import ProductIn, _make_product, parse_object_id
from .database import ProductStore
from .models import Product

# This file contains the logic behind each API endpoint. Every handler takes
# the store it works on explicitly; ids are parsed before storage is touched.

HEALTH_MESSAGE = "Server is up and running!"
DELETED_MESSAGE = "Product deleted successfully"


def health_logic() -> str:
    return HEALTH_MESSAGE


def create_product_logic(store: ProductStore, payload: ProductIn) -> Product:
    return store.insert(payload)


def get_product_logic(store: ProductStore, product_id: str) -> Product:
    oid = parse_object_id(product_id)
    return store.get(oid)


def update_product_logic(store: ProductStore, product_id: str, payload: ProductIn) -> Product:
    # Echoes the submitted fields; an id that matches nothing still succeeds.
    oid = parse_object_id(product_id)
    store.replace_fields(oid, payload)
    return _make_product(oid, payload)


def delete_product_logic(store: ProductStore, product_id: str) -> PlainTextResponse:
    oid = parse_object_id(product_id)
    store.delete(oid)
    return PlainTextResponse(DELETED_MESSAGE, status_code=200)


def list_products_logic(store: ProductStore) -> List[Product]:
    return store.list_all()
