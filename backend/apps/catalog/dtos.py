from dataclasses import dataclass


@dataclass
class ProductDTO:
    id: int
    name: str
    category: str
    cost: str
    rating: int
    image: str
