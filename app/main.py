# app/main.py
import logging
import sys
from typing import List

import uvicorn
from fastapi import FastAPI

from .config import HOST, PORT, ConfigurationError, load_settings
from .core import ProductIn
from .database import ProductStore, connect
from .errors import DatabaseConnectionError, register_error_handlers
from .handlers import (
    create_product_logic,
    delete_product_logic,
    get_product_logic,
    health_logic,
    list_products_logic,
    update_product_logic,
)
from .models import Product

logger = logging.getLogger(__name__)


def create_app(store: ProductStore) -> FastAPI:
    """Build the API with every route bound to the given store."""
    app = FastAPI(title="product-store (MongoDB)")
    register_error_handlers(app)

    # Handlers are plain functions: the server runs each request on a worker thread.

    # ---------------------------
    # Health
    # ---------------------------
    @app.get("/")
    def server_health() -> str:
        return health_logic()

    # ---------------------------
    # Product endpoints
    # ---------------------------
    @app.post("/products", status_code=201, response_model=Product)
    def create_product(payload: ProductIn):
        return create_product_logic(store, payload)

    @app.get("/products/{id}", response_model=Product)
    def get_product(id: str):
        return get_product_logic(store, id)

    @app.put("/products/{id}", response_model=Product)
    def update_product(id: str, payload: ProductIn):
        return update_product_logic(store, id, payload)

    @app.delete("/products/{id}")
    def delete_product(id: str):
        return delete_product_logic(store, id)

    @app.get("/products", response_model=List[Product])
    def list_products():
        return list_products_logic(store)

    return app


def main() -> None:
    try:
        settings = load_settings()
    except ConfigurationError as e:
        logging.basicConfig(level=logging.INFO)
        logger.critical("%s", e)
        sys.exit(1)

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s | %(levelname)-8s | %(name)s - %(message)s",
    )

    try:
        store = connect(settings)
    except DatabaseConnectionError as e:
        logger.critical("%s", e)
        sys.exit(1)

    app = create_app(store)
    logger.info("Server started at http://localhost:%d", PORT)
    uvicorn.run(app, host=HOST, port=PORT)


if __name__ == "__main__":
    main()
