"""Pydantic request/response schemas for the storefront API.

These are the external contract and are kept separate from the Protean
commands. Request fields that the domain validates are left optional here so
that the domain reports every problem as a per-field error.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Users & auth
# ---------------------------------------------------------------------------
class RegisterRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [{"full_name": "Asha Verma", "email": "asha@example.com", "password": "s3cret!"}]
        }
    }

    full_name: str = Field(..., max_length=100)
    email: str = Field(..., max_length=254)
    password: str = Field(..., max_length=128)


class LoginRequest(BaseModel):
    email: str = Field(..., max_length=254)
    password: str = Field(..., max_length=128)


class UserResponse(BaseModel):
    id: str
    full_name: str
    email: str
    role: str
    created_at: datetime | None = None


class AuthResponse(BaseModel):
    token: str
    user: UserResponse


class VerifyResponse(BaseModel):
    valid: bool = True
    claims: dict


class UserListResponse(BaseModel):
    users: list[UserResponse]


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------
class AddProductRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Block Print Kurta",
                    "price": 1299.0,
                    "category": "Clothes",
                    "description": "Hand block printed cotton kurta",
                    "image": "https://cdn.example.com/kurta.jpg",
                }
            ]
        }
    }

    name: str | None = Field(None, max_length=200)
    price: float | None = None
    category: str | None = Field(None, max_length=50)
    description: str | None = None
    image: str | None = None


class ProductResponse(BaseModel):
    id: str
    name: str
    price: float
    category: str
    description: str
    image: str
    added_by: str | None = None
    created_at: datetime | None = None


class ProductListResponse(BaseModel):
    products: list[ProductResponse]


# ---------------------------------------------------------------------------
# Addresses
# ---------------------------------------------------------------------------
class AddressFields(BaseModel):
    full_name: str | None = Field(None, max_length=100)
    phone: str | None = Field(None, max_length=32)
    email: str | None = Field(None, max_length=254)
    address: str | None = Field(None, max_length=500)
    landmark: str | None = Field(None, max_length=200)
    city: str | None = Field(None, max_length=100)
    state: str | None = Field(None, max_length=100)
    pincode: str | None = Field(None, max_length=12)


class RecordAddressRequest(AddressFields):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "user_id": "0b6f3c1e-4c55-4d0c-9e1f-3a1d2b7c8e90",
                    "full_name": "Asha Verma",
                    "phone": "98765 43210",
                    "email": "asha@example.com",
                    "address": "12 MI Road",
                    "landmark": "Near Panch Batti",
                    "city": "Jaipur",
                    "state": "Rajasthan",
                    "pincode": "302001",
                }
            ]
        }
    }

    user_id: str


class AddressResponse(BaseModel):
    id: str
    user_id: str
    full_name: str
    phone: str
    email: str
    address: str
    landmark: str | None = None
    city: str
    state: str
    pincode: str
    created_at: datetime | None = None


class AddressListResponse(BaseModel):
    addresses: list[AddressResponse]


# ---------------------------------------------------------------------------
# Payments
# ---------------------------------------------------------------------------
class RecordPaymentRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [{"payment_method": "cod", "amount": 1300.0, "transaction_id": "COD-1A2B3C-1718000000000"}]
        }
    }

    payment_method: str = Field(..., max_length=30)
    amount: float
    user_id: str | None = None
    transaction_id: str | None = Field(None, max_length=64)
    upi_id: str | None = Field(None, max_length=100)
    card_last4: str | None = Field(None, max_length=4)


class PaymentResponse(BaseModel):
    id: str
    transaction_id: str
    user_id: str
    payment_method: str
    amount: float
    status: str
    upi_id: str | None = None
    card_last4: str | None = None
    gateway_order_id: str | None = None
    gateway_payment_id: str | None = None
    refunded_amount: float | None = None
    created_at: datetime | None = None


class PaymentListResponse(BaseModel):
    payments: list[PaymentResponse]


class PaymentMethodResponse(BaseModel):
    id: str
    name: str
    description: str
    requires_gateway: bool
    form: str | None = None


class PaymentMethodsResponse(BaseModel):
    methods: list[PaymentMethodResponse]


class CreateGatewayOrderRequest(BaseModel):
    amount: float = Field(gt=0)
    receipt: str = Field(..., max_length=50)
    payment_method: str = Field("upi", max_length=30)
    email: str | None = Field(None, max_length=254)
    phone: str | None = Field(None, max_length=32)


class GatewayOrderSchema(BaseModel):
    id: str
    amount: int
    currency: str
    receipt: str
    status: str


class GatewayOrderResponse(BaseModel):
    order: GatewayOrderSchema
    payment_id: str
    key_id: str


class GatewayProof(BaseModel):
    gateway_order_id: str = Field(..., max_length=100)
    gateway_payment_id: str = Field(..., max_length=100)
    signature: str = Field(..., max_length=256)


class VerifyPaymentRequest(GatewayProof):
    payment_method: str | None = Field(None, max_length=30)
    amount: float | None = None


class RefundRequest(BaseModel):
    amount: float | None = None


class ConfigureGatewayRequest(BaseModel):
    should_succeed: bool = True
    failure_reason: str = "Gateway unavailable"


class GatewayConfigResponse(BaseModel):
    gateway: str
    should_succeed: bool
    failure_reason: str


class GatewayPaymentResponse(BaseModel):
    id: str
    order_id: str | None = None
    amount: int
    currency: str
    status: str
    method: str | None = None
    vpa: str | None = None
    email: str | None = None
    contact: str | None = None
    created_at: int | None = None


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------
class OrderLineSchema(BaseModel):
    product_id: str
    name: str
    price: float
    quantity: int = 1
    image: str | None = None


class PlaceOrderRequest(BaseModel):
    user_id: str
    products: list[OrderLineSchema]
    address_id: str
    payment_id: str
    total_amount: float | None = None
    order_number: str | None = Field(None, max_length=50)


class UpdateOrderStatusRequest(BaseModel):
    status: str = Field(..., max_length=20)


class OrderResponse(BaseModel):
    id: str
    order_number: str
    user_id: str
    products: list[OrderLineSchema]
    address_id: str
    payment_id: str
    total_amount: float
    status: str
    created_at: datetime | None = None
    updated_at: datetime | None = None


class OrderListResponse(BaseModel):
    orders: list[OrderResponse]


class UserDetailResponse(BaseModel):
    user: UserResponse
    addresses: list[AddressResponse]
    orders: list[OrderResponse]
    payments: list[PaymentResponse]


# ---------------------------------------------------------------------------
# Checkout
# ---------------------------------------------------------------------------
class CheckoutRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "address": {
                        "full_name": "Asha Verma",
                        "phone": "9876543210",
                        "email": "asha@example.com",
                        "address": "12 MI Road",
                        "city": "Jaipur",
                        "state": "Rajasthan",
                        "pincode": "302001",
                    },
                    "payment_method": "cod",
                    "products": [
                        {"product_id": "p1", "name": "Kurta", "price": 500.0, "quantity": 2},
                        {"product_id": "p2", "name": "Rose Tea", "price": 300.0, "quantity": 1},
                    ],
                    "total_amount": 1300.0,
                }
            ]
        }
    }

    address: AddressFields
    payment_method: str = Field(..., max_length=30)
    products: list[OrderLineSchema]
    total_amount: float | None = None
    transaction_id: str | None = Field(None, max_length=64)
    upi_id: str | None = Field(None, max_length=100)
    card_last4: str | None = Field(None, max_length=4)
    gateway: GatewayProof | None = None


class CheckoutResponse(BaseModel):
    order_number: str
    order_id: str
    address_id: str
    payment_id: str
    transaction_id: str
    payment_status: str
    order_status: str
    total_amount: float


# ---------------------------------------------------------------------------
# Shared
# ---------------------------------------------------------------------------
class StatusResponse(BaseModel):
    status: str = "ok"


class HealthResponse(BaseModel):
    success: bool = True
    message: str = "Server is running"
    timestamp: datetime
    version: str
