from storefront.catalog.product import Product
from storefront.domain import storefront


@storefront.repository(part_of=Product)
class ProductRepository:
    def list_all(self, category: str | None = None) -> list[Product]:
        """Every product, oldest first, optionally narrowed to one category."""
        query = self._dao.query
        if category:
            query = query.filter(category=category)
        return sorted(query.all().items, key=lambda p: p.created_at)
