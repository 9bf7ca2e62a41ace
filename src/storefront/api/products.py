"""FastAPI endpoints for the product catalog."""

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from storefront.api.schemas import AddProductRequest, ProductListResponse, ProductResponse, StatusResponse
from storefront.auth.dependencies import require_admin
from storefront.catalog.management import AddProduct, RemoveProduct
from storefront.catalog.product import Product

router = APIRouter(prefix="/products", tags=["products"])


@router.get("", response_model=ProductListResponse)
async def list_products(category: str | None = None) -> ProductListResponse:
    products = current_domain.repository_for(Product).list_all(category=category)
    return ProductListResponse(products=[ProductResponse(**p.as_dict()) for p in products])


@router.get("/{product_id}", response_model=ProductResponse)
async def get_product(product_id: str) -> ProductResponse:
    product = current_domain.repository_for(Product).get(product_id)
    return ProductResponse(**product.as_dict())


@router.post("", status_code=201, response_model=ProductResponse)
async def add_product(body: AddProductRequest, admin: dict = Depends(require_admin)) -> ProductResponse:
    command = AddProduct(
        name=body.name,
        price=body.price,
        category=body.category,
        description=body.description,
        image=body.image,
        added_by=admin.get("id"),
    )
    product_id = current_domain.process(command, asynchronous=False)
    product = current_domain.repository_for(Product).get(product_id)
    return ProductResponse(**product.as_dict())


@router.delete("/{product_id}", response_model=StatusResponse)
async def remove_product(product_id: str, _admin: dict = Depends(require_admin)) -> StatusResponse:
    current_domain.process(RemoveProduct(product_id=product_id), asynchronous=False)
    return StatusResponse(status="deleted")
