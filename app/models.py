# app/models.py
from pydantic import BaseModel, Field
from typing import Any, List, Union


class Product(BaseModel):
    id: Union[int, float]
    title: Any
    description: Any
    code: Any
    price: Union[int, float]
    status: bool = True
    stock: Union[int, float]
    category: Any
    thumbnails: Any = Field(default_factory=list)


class LineItem(BaseModel):
    product: int
    quantity: int = Field(1, ge=1)


class Cart(BaseModel):
    id: Union[int, float]
    products: List[LineItem] = Field(default_factory=list)
