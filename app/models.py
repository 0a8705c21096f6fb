# app/models.py
from typing import Optional

from pydantic import BaseModel


class Category(BaseModel):
    id: int
    name: str


class Product(BaseModel):
    id: int
    name: str
    # float so the wire format is a JSON number, not a decimal string
    price: float
    stock: int
    category: Optional[Category] = None
