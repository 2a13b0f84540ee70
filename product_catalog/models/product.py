import uuid
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Optional


@dataclass
class Product:
    id: str = ""
    name: str = ""
    description: str = ""
    price: Decimal = field(default_factory=lambda: Decimal("0"))
    image_url: Optional[str] = None

    @staticmethod
    def new_id():
        return str(uuid.uuid4())

    @classmethod
    def from_dict(cls, data):
        """Build a product from a decoded JSON body.

        Missing text fields default to "" and a missing price to 0.
        Raises ValueError when price is not a number.
        """
        price = data.get("price")
        if price is None:
            price = Decimal("0")
        elif isinstance(price, bool) or not isinstance(price, (int, float, str, Decimal)):
            raise ValueError("price must be a number")
        else:
            try:
                # str() keeps floats at their shortest repr instead of binary noise
                price = Decimal(str(price))
            except InvalidOperation:
                raise ValueError("price must be a number")
            if not price.is_finite():
                raise ValueError("price must be a number")

        return cls(
            id=str(data.get("id") or ""),
            name=_text(data.get("name")),
            description=_text(data.get("description")),
            price=price,
            image_url=data.get("imageUrl"),
        )

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "price": self.price,
            "imageUrl": self.image_url,
        }

    def __repr__(self):
        return f"<Product {self.id}: {self.name}>"


def _text(value):
    return "" if value is None else str(value)
