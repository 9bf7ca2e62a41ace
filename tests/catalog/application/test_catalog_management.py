"""Application tests for catalog management commands."""

import pytest
from protean import current_domain
from protean.exceptions import ObjectNotFoundError

from storefront.catalog.management import AddProduct, RemoveProduct
from storefront.catalog.product import Product
from storefront.errors import InvalidProduct


def _add_product(name="Rose Tea", category="Flower Tea", price=300.0):
    return current_domain.process(
        AddProduct(
            name=name,
            price=price,
            category=category,
            description="Dried rose petal tea",
            image="https://cdn.example.com/rose.jpg",
            added_by="admin-1",
        ),
        asynchronous=False,
    )


class TestAddProductCommand:
    def test_add_product(self):
        product_id = _add_product()
        product = current_domain.repository_for(Product).get(product_id)
        assert product.name == "Rose Tea"

    def test_invalid_product_not_stored(self):
        with pytest.raises(InvalidProduct):
            _add_product(price=0)
        assert current_domain.repository_for(Product).list_all() == []


class TestRemoveProductCommand:
    def test_remove_product(self):
        product_id = _add_product()
        current_domain.process(RemoveProduct(product_id=product_id), asynchronous=False)
        with pytest.raises(ObjectNotFoundError):
            current_domain.repository_for(Product).get(product_id)

    def test_remove_unknown_product(self):
        with pytest.raises(ObjectNotFoundError):
            current_domain.process(RemoveProduct(product_id="missing"), asynchronous=False)


class TestProductRepository:
    def test_list_by_category(self):
        _add_product(name="Rose Tea", category="Flower Tea")
        _add_product(name="Silver Anklet", category="Jewellery")
        repo = current_domain.repository_for(Product)
        assert [p.name for p in repo.list_all(category="Jewellery")] == ["Silver Anklet"]
        assert len(repo.list_all()) == 2

    def test_repeated_listing_is_stable(self):
        _add_product(name="Rose Tea")
        _add_product(name="Jasmine Tea")
        repo = current_domain.repository_for(Product)
        first = [p.id for p in repo.list_all()]
        assert [p.id for p in repo.list_all()] == first
