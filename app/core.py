from typing import Any, Dict

from bson import ObjectId
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import InvalidIdError, StorageError
from .models import Product

# Request schemas and the mapping between API models and stored documents.

INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1


class ProductIn(BaseModel):
    # Fields left out of the body decode to their zero values; any "id" is ignored.
    # No coercion: "1.5", true or NaN for a number is a malformed body.
    model_config = ConfigDict(strict=True, allow_inf_nan=False)

    name: str = ""
    description: str = ""
    price: float = 0.0
    quantity: int = Field(default=0, ge=INT64_MIN, le=INT64_MAX)


def parse_object_id(raw: str) -> ObjectId:
    if not ObjectId.is_valid(raw):
        raise InvalidIdError()
    return ObjectId(raw)


def _make_product_document(p: ProductIn) -> Dict[str, Any]:
    return {
        "name": p.name,
        "description": p.description,
        "price": p.price,
        "quantity": p.quantity,
    }


def _make_product(product_id: ObjectId, p: ProductIn) -> Product:
    return Product(id=str(product_id), **_make_product_document(p))


def _product_from_document(doc: Dict[str, Any]) -> Product:
    try:
        return Product(
            id=str(doc["_id"]),
            name=doc.get("name", ""),
            description=doc.get("description", ""),
            price=doc.get("price", 0.0),
            quantity=doc.get("quantity", 0),
        )
    except (KeyError, ValidationError) as e:
        raise StorageError(f"cannot decode stored product: {e}") from e
