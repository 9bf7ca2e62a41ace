"""FastAPI endpoint for the one-call checkout."""

import json

from fastapi import APIRouter, Depends, Request
from protean.utils.globals import current_domain

from storefront.api.schemas import CheckoutRequest, CheckoutResponse
from storefront.auth.dependencies import current_claims
from storefront.checkout.checkout import CompleteCheckout
from storefront.domain import logger
from storefront.errors import PaymentVerificationFailed

router = APIRouter(prefix="/checkout", tags=["checkout"])


@router.post("", status_code=201, response_model=CheckoutResponse)
async def checkout(
    body: CheckoutRequest,
    request: Request,
    claims: dict = Depends(current_claims),
) -> CheckoutResponse:
    proof = body.gateway
    verified = False
    if proof is not None:
        if not request.app.state.gateway.verify_signature(
            proof.gateway_order_id, proof.gateway_payment_id, proof.signature
        ):
            logger.warning("checkout_signature_rejected", gateway_order_id=proof.gateway_order_id)
            raise PaymentVerificationFailed()
        verified = True

    address = body.address
    command = CompleteCheckout(
        user_id=claims["id"],
        full_name=address.full_name,
        phone=address.phone,
        email=address.email,
        address=address.address,
        landmark=address.landmark,
        city=address.city,
        state=address.state,
        pincode=address.pincode,
        payment_method=body.payment_method,
        transaction_id=body.transaction_id,
        upi_id=body.upi_id,
        card_last4=body.card_last4,
        gateway_order_id=proof.gateway_order_id if proof else None,
        gateway_payment_id=proof.gateway_payment_id if proof else None,
        payment_verified=verified,
        products=json.dumps([line.model_dump() for line in body.products]),
        total_amount=body.total_amount,
    )
    result = current_domain.process(command, asynchronous=False)
    return CheckoutResponse(**result)
