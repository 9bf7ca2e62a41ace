"""FastAPI endpoints for payments and the payment gateway flow."""

from dataclasses import asdict

from fastapi import APIRouter, Depends, Request
from protean.utils.globals import current_domain

from storefront.api.schemas import (
    ConfigureGatewayRequest,
    CreateGatewayOrderRequest,
    GatewayConfigResponse,
    GatewayOrderResponse,
    GatewayOrderSchema,
    GatewayPaymentResponse,
    PaymentListResponse,
    PaymentMethodResponse,
    PaymentMethodsResponse,
    PaymentResponse,
    RecordPaymentRequest,
    RefundRequest,
    VerifyPaymentRequest,
)
from storefront.auth.dependencies import current_claims, ensure_self_or_admin, rate_limited, require_admin
from storefront.domain import logger
from storefront.errors import Forbidden, InvalidInput, PaymentVerificationFailed, UpstreamGatewayError
from storefront.gateway.fake_adapter import FakeGateway
from storefront.payment.methods import METHODS, requires_gateway
from storefront.payment.payment import Payment, resolve_payment_method
from storefront.payment.recording import RecordPayment
from storefront.payment.refund import RefundPayment
from storefront.payment.verification import CompleteGatewayPayment

router = APIRouter(prefix="/payments", tags=["payments"])


def _payment_response(payment_id: str) -> PaymentResponse:
    payment = current_domain.repository_for(Payment).get(payment_id)
    return PaymentResponse(**payment.as_dict())


# --- Static paths first, so they are not captured by /{user_id} ---


@router.get("/methods", response_model=PaymentMethodsResponse)
async def list_payment_methods() -> PaymentMethodsResponse:
    return PaymentMethodsResponse(methods=[PaymentMethodResponse(**m.to_dict()) for m in METHODS])


@router.post(
    "/create-order",
    status_code=201,
    response_model=GatewayOrderResponse,
    dependencies=[Depends(rate_limited)],
)
async def create_gateway_order(
    body: CreateGatewayOrderRequest,
    request: Request,
    claims: dict = Depends(current_claims),
) -> GatewayOrderResponse:
    method = resolve_payment_method(body.payment_method)
    if not requires_gateway(method):
        raise InvalidInput({"payment_method": [f"{method.value} is not paid through the gateway"]})

    settings = request.app.state.settings
    gateway = request.app.state.gateway
    notes = {key: value for key, value in (("email", body.email), ("phone", body.phone)) if value}
    order = gateway.create_order(
        amount=body.amount,
        receipt=body.receipt,
        currency=settings.gateway_currency,
        notes=notes,
    )

    payment_id = current_domain.process(
        RecordPayment(
            user_id=claims["id"],
            payment_method=method.value,
            amount=body.amount,
            gateway_order_id=order.id,
        ),
        asynchronous=False,
    )
    logger.info("gateway_order_created", gateway=gateway.name, gateway_order_id=order.id, receipt=body.receipt)
    return GatewayOrderResponse(
        order=GatewayOrderSchema(
            id=order.id,
            amount=order.amount,
            currency=order.currency,
            receipt=order.receipt,
            status=order.status,
        ),
        payment_id=payment_id,
        key_id=gateway.key_id,
    )


@router.post("/verify", response_model=PaymentResponse, dependencies=[Depends(rate_limited)])
async def verify_gateway_payment(
    body: VerifyPaymentRequest,
    request: Request,
    claims: dict = Depends(current_claims),
) -> PaymentResponse:
    gateway = request.app.state.gateway
    if not gateway.verify_signature(body.gateway_order_id, body.gateway_payment_id, body.signature):
        logger.warning("payment_signature_rejected", gateway_order_id=body.gateway_order_id)
        raise PaymentVerificationFailed()

    payment_id = current_domain.process(
        CompleteGatewayPayment(
            gateway_order_id=body.gateway_order_id,
            gateway_payment_id=body.gateway_payment_id,
            user_id=claims["id"],
            payment_method=body.payment_method,
            amount=body.amount,
        ),
        asynchronous=False,
    )
    return _payment_response(payment_id)


@router.post("/gateway/configure", response_model=GatewayConfigResponse)
async def configure_gateway(body: ConfigureGatewayRequest, request: Request) -> GatewayConfigResponse:
    if request.app.state.settings.is_production:
        raise Forbidden("Gateway configuration is disabled in production")

    gateway = request.app.state.gateway
    if not isinstance(gateway, FakeGateway):
        raise InvalidInput(message=f"The {gateway.name} gateway cannot be configured at runtime")

    gateway.configure(should_succeed=body.should_succeed, failure_reason=body.failure_reason)
    logger.info("gateway_configured", should_succeed=gateway.should_succeed)
    return GatewayConfigResponse(
        gateway=gateway.name,
        should_succeed=gateway.should_succeed,
        failure_reason=gateway.failure_reason,
    )


@router.get("/gateway/{gateway_payment_id}", response_model=GatewayPaymentResponse)
async def fetch_gateway_payment(
    gateway_payment_id: str,
    request: Request,
    _admin: dict = Depends(require_admin),
) -> GatewayPaymentResponse:
    payment = request.app.state.gateway.fetch_payment(gateway_payment_id)
    return GatewayPaymentResponse(**asdict(payment))


# --- Payment records ---


@router.post("", status_code=201, response_model=PaymentResponse)
async def record_payment(body: RecordPaymentRequest, claims: dict = Depends(current_claims)) -> PaymentResponse:
    user_id = body.user_id or claims["id"]
    ensure_self_or_admin(claims, user_id)
    command = RecordPayment(
        user_id=user_id,
        payment_method=body.payment_method,
        amount=body.amount,
        transaction_id=body.transaction_id,
        upi_id=body.upi_id,
        card_last4=body.card_last4,
    )
    payment_id = current_domain.process(command, asynchronous=False)
    return _payment_response(payment_id)


@router.get("/{user_id}", response_model=PaymentListResponse)
async def list_payments(user_id: str, claims: dict = Depends(current_claims)) -> PaymentListResponse:
    ensure_self_or_admin(claims, user_id)
    payments = current_domain.repository_for(Payment).for_user(user_id)
    return PaymentListResponse(payments=[PaymentResponse(**p.as_dict()) for p in payments])


@router.post("/{payment_id}/refund", response_model=PaymentResponse)
async def refund_payment(
    payment_id: str,
    body: RefundRequest,
    request: Request,
    _admin: dict = Depends(require_admin),
) -> PaymentResponse:
    payment = current_domain.repository_for(Payment).get(payment_id)
    amount = payment.refundable_amount(body.amount)

    refund_id = None
    if payment.gateway_payment_id:
        result = request.app.state.gateway.refund(payment.gateway_payment_id, amount=amount)
        if not result.success:
            logger.error("gateway_refund_failed", payment_id=payment_id, reason=result.failure_reason)
            raise UpstreamGatewayError(result.failure_reason or "Refund failed at the gateway")
        refund_id = result.gateway_refund_id

    current_domain.process(
        RefundPayment(payment_id=payment_id, amount=amount, refund_id=refund_id),
        asynchronous=False,
    )
    return _payment_response(payment_id)
