"""Admin catalog management: adding and removing products."""

from protean import handle
from protean.fields import Float, Identifier, String, Text
from protean.utils.globals import current_domain

from storefront.catalog.product import Product
from storefront.domain import logger, storefront


@storefront.command(part_of="Product")
class AddProduct:
    name = String(max_length=200)
    price = Float()
    category = String(max_length=50)
    description = Text()
    image = Text()
    added_by = Identifier()


@storefront.command(part_of="Product")
class RemoveProduct:
    product_id = Identifier(required=True)


@storefront.command_handler(part_of=Product)
class CatalogManagementHandler:
    @handle(AddProduct)
    def add_product(self, command):
        product = Product.add(
            name=command.name,
            price=command.price,
            category=command.category,
            description=command.description,
            image=command.image,
            added_by=command.added_by,
        )
        current_domain.repository_for(Product).add(product)
        logger.info("product_added", product_id=str(product.id), category=product.category)
        return str(product.id)

    @handle(RemoveProduct)
    def remove_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        repo._dao.delete(product)
        logger.info("product_removed", product_id=str(command.product_id))
