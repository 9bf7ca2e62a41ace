"""FastAPI endpoints for the address book."""

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from storefront.address.address import Address
from storefront.address.recording import RecordAddress
from storefront.api.schemas import AddressListResponse, AddressResponse, RecordAddressRequest
from storefront.auth.dependencies import current_claims, ensure_self_or_admin

router = APIRouter(prefix="/addresses", tags=["addresses"])


@router.post("", status_code=201, response_model=AddressResponse)
async def record_address(body: RecordAddressRequest) -> AddressResponse:
    command = RecordAddress(
        user_id=body.user_id,
        full_name=body.full_name,
        phone=body.phone,
        email=body.email,
        address=body.address,
        landmark=body.landmark,
        city=body.city,
        state=body.state,
        pincode=body.pincode,
    )
    address_id = current_domain.process(command, asynchronous=False)
    address = current_domain.repository_for(Address).get(address_id)
    return AddressResponse(**address.as_dict())


@router.get("/{user_id}", response_model=AddressListResponse)
async def list_addresses(user_id: str, claims: dict = Depends(current_claims)) -> AddressListResponse:
    ensure_self_or_admin(claims, user_id)
    addresses = current_domain.repository_for(Address).for_user(user_id)
    return AddressListResponse(addresses=[AddressResponse(**a.as_dict()) for a in addresses])
