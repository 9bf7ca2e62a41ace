"""Shopping cart held on the client.

Lines are keyed by product id. Adding a product already in the cart bumps its
quantity instead of adding a second line. Every change is mirrored into
client storage under the ``cart`` key when a storage is attached.
"""

from dataclasses import asdict, dataclass

from storefront.client.storage import CART_KEY, LocalStorage
from storefront.domain import logger


@dataclass
class CartItem:
    product_id: str
    name: str
    price: float
    quantity: int = 1
    image: str | None = None

    @property
    def line_total(self) -> float:
        return self.price * self.quantity


class Cart:
    def __init__(self, storage: LocalStorage | None = None) -> None:
        self._storage = storage
        self._items: dict[str, CartItem] = {}
        if storage is not None:
            self._restore()

    def _restore(self) -> None:
        saved = self._storage.get(CART_KEY) or []
        try:
            for raw in saved:
                item = CartItem(
                    product_id=str(raw["product_id"]),
                    name=raw["name"],
                    price=float(raw["price"]),
                    quantity=int(raw.get("quantity", 1)),
                    image=raw.get("image"),
                )
                if item.quantity > 0:
                    self._items[item.product_id] = item
        except (KeyError, TypeError, ValueError) as exc:
            logger.warning("cart_mirror_corrupt", error=str(exc))
            self._items = {}

    def _mirror(self) -> None:
        if self._storage is not None:
            self._storage.set(CART_KEY, self.lines())

    def add(self, product: dict) -> CartItem:
        """Add one unit of ``product`` (a catalog dict with ``id``, ``name``, ``price``)."""
        product_id = str(product.get("id") or product.get("product_id"))
        item = self._items.get(product_id)
        if item is None:
            item = CartItem(
                product_id=product_id,
                name=product["name"],
                price=float(product["price"]),
                image=product.get("image"),
            )
            self._items[product_id] = item
        else:
            item.quantity += 1
        self._mirror()
        return item

    def remove(self, product_id: str) -> None:
        self._items.pop(str(product_id), None)
        self._mirror()

    def set_quantity(self, product_id: str, quantity: int) -> None:
        product_id = str(product_id)
        if quantity <= 0:
            self._items.pop(product_id, None)
        elif product_id in self._items:
            self._items[product_id].quantity = quantity
        self._mirror()

    def clear(self) -> None:
        self._items.clear()
        self._mirror()

    @property
    def total(self) -> float:
        return round(sum(item.line_total for item in self._items.values()), 2)

    @property
    def item_count(self) -> int:
        return sum(item.quantity for item in self._items.values())

    @property
    def is_empty(self) -> bool:
        return not self._items

    def lines(self) -> list[dict]:
        """Snapshot of the cart as order lines."""
        return [asdict(item) for item in self._items.values()]

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, product_id) -> bool:
        return str(product_id) in self._items
