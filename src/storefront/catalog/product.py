"""Product aggregate: one sellable catalog item.

Products are created and deleted by admins only. The catalog is otherwise
read-only, so there are no update operations.
"""

from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, Identifier, String, Text

from storefront.catalog.events import ProductAdded
from storefront.domain import storefront
from storefront.errors import InvalidProduct

MIN_NAME_LENGTH = 3


class Category(Enum):
    CLOTHES = "Clothes"
    JEWELLERY = "Jewellery"
    FLOWER_TEA = "Flower Tea"
    HOME_DECOR = "Home Decor"


@storefront.aggregate
class Product:
    name = String(required=True, max_length=200)
    price = Float(required=True)
    category = String(required=True, max_length=50, choices=Category)
    description = Text(required=True)
    image = Text(required=True)
    added_by = Identifier()
    created_at = DateTime()

    @invariant.post
    def name_has_minimum_length(self):
        if len((self.name or "").strip()) < MIN_NAME_LENGTH:
            raise ValidationError({"name": [f"Product name must be at least {MIN_NAME_LENGTH} characters"]})

    @invariant.post
    def price_is_positive(self):
        if self.price is not None and self.price <= 0:
            raise ValidationError({"price": ["Price must be greater than 0"]})

    @invariant.post
    def description_is_present(self):
        if not (self.description or "").strip():
            raise ValidationError({"description": ["Description is required"]})

    @invariant.post
    def image_is_present(self):
        if not (self.image or "").strip():
            raise ValidationError({"image": ["Image is required"]})

    @classmethod
    def add(cls, name, price, category, description, image, added_by=None):
        """Build a new product, reporting any rule violation as ``InvalidProduct``."""
        now = datetime.now(UTC)
        try:
            product = cls(
                name=(name or "").strip(),
                price=price,
                category=category,
                description=description,
                image=image,
                added_by=added_by,
                created_at=now,
            )
        except ValidationError as exc:
            raise InvalidProduct(exc.messages) from exc

        product.raise_(
            ProductAdded(
                product_id=product.id,
                name=product.name,
                price=product.price,
                category=product.category,
                added_by=added_by,
                added_at=now,
            )
        )
        return product

    def as_dict(self) -> dict:
        return {
            "id": str(self.id),
            "name": self.name,
            "price": self.price,
            "category": self.category,
            "description": self.description,
            "image": self.image,
            "added_by": str(self.added_by) if self.added_by else None,
            "created_at": self.created_at,
        }
