# sdk/models.py
from decimal import Decimal
from typing import Any, List, Optional, Tuple

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictInt,
    TypeAdapter,
    field_validator,
    model_validator,
)


class _CatalogModel(BaseModel):
    """
    Base for payloads coming back from the catalog API.

    Field names are matched ignoring letter case, so "ID", "Id" and "id"
    all land on `id`. Unknown keys are dropped. If the same field shows up
    under several casings the last one wins.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def _match_field_case(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        canonical = {name.lower(): name for name in cls.model_fields}
        out = {}
        for key, value in data.items():
            if not isinstance(key, str):
                continue
            name = canonical.get(key.lower())
            if name is not None:
                out[name] = value
        return out


class Category(_CatalogModel):
    id: StrictInt
    name: str = Field(min_length=1)


class Product(_CatalogModel):
    id: StrictInt
    name: str = Field(min_length=1)
    price: Decimal = Field(ge=0)
    stock: StrictInt = Field(ge=0)
    category: Optional[Category] = None

    @field_validator("price", mode="before")
    @classmethod
    def _price_is_number(cls, value: Any) -> Any:
        # lax Decimal parsing would take "12.5"; the wire format is a JSON number
        if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
            raise ValueError("price must be a number")
        return value


_PRODUCT_LIST = TypeAdapter(Optional[List[Product]])


def decode_products(body: str) -> Optional[Tuple[Product, ...]]:
    """
    Decode a JSON array of products, keeping server order.

    Returns None for a literal `null` body. Raises pydantic.ValidationError
    for invalid JSON or a payload that is not a well-typed product array.
    """
    products = _PRODUCT_LIST.validate_json(body)
    if products is None:
        return None
    return tuple(products)
