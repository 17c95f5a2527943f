from fastapi import APIRouter, Depends
from typing import List
from uuid import UUID

from aquaflow.api.rest.errors import unwrap
from aquaflow.core.context import RequestContext, require_user
from aquaflow.schemas.address import AddressCreate, AddressUpdate, AddressResponse
from aquaflow.services.address_service import AddressService

router = APIRouter(prefix="/addresses", tags=["addresses"])


@router.get("", response_model=List[AddressResponse])
def list_addresses(ctx: RequestContext = Depends(require_user)):
    """List the caller's addresses, default first"""
    return unwrap(AddressService.list_user_addresses(ctx))


@router.post("", response_model=AddressResponse, status_code=201)
def create_address(address_data: AddressCreate, ctx: RequestContext = Depends(require_user)):
    """Add an address for the caller"""
    return unwrap(AddressService.create_address(ctx, address_data))


@router.patch("/{address_id}", response_model=AddressResponse)
def update_address(address_id: UUID, address_data: AddressUpdate, ctx: RequestContext = Depends(require_user)):
    """Update one of the caller's addresses"""
    return unwrap(AddressService.update_address(ctx, address_id, address_data))


@router.delete("/{address_id}", status_code=204)
def delete_address(address_id: UUID, ctx: RequestContext = Depends(require_user)):
    """Delete one of the caller's addresses"""
    unwrap(AddressService.delete_address(ctx, address_id))
    return None
