from dataclasses import dataclass, field
from typing import List
from apps.catalog.dtos import ProductDTO


@dataclass
class CartItemDTO:
    product: ProductDTO
    quantity: int


@dataclass
class CartDTO:
    id: int
    user_id: int
    email: str
    items: List[CartItemDTO] = field(default_factory=list)
