from typing import List, Optional

import structlog

from aquaflow.core.context import RequestContext
from aquaflow.core.errors import AccessError, guarded
from aquaflow.models.address import Address
from aquaflow.schemas.address import AddressCreate, AddressUpdate

logger = structlog.get_logger(__name__)


class AddressService:
    @staticmethod
    def _clear_default(ctx: RequestContext, user_pk, keep_id=None) -> None:
        """Unset is_default on the user's addresses within the current transaction"""
        query = ctx.db.query(Address).filter(Address.user_id == user_pk, Address.is_default.is_(True))
        if keep_id is not None:
            query = query.filter(Address.id != keep_id)
        query.update({Address.is_default: False}, synchronize_session="fetch")

    @staticmethod
    @guarded("list_user_addresses")
    def list_user_addresses(ctx: RequestContext, user_pk=None) -> List[Address]:
        """List a user's addresses, default first. Other users' addresses are not visible"""
        user_pk = user_pk or ctx.user_pk
        if ctx.user_pk is None:
            return []
        return ctx.db.query(Address).filter(
            Address.user_id == user_pk,
            Address.user_id == ctx.user_pk,
        ).order_by(Address.is_default.desc(), Address.created_at).all()

    @staticmethod
    @guarded("get_address")
    def get_address(ctx: RequestContext, address_id) -> Address:
        """Get one of the caller's addresses"""
        address = ctx.db.query(Address).filter(
            Address.id == address_id,
            Address.user_id == ctx.user_pk,
        ).first()
        if not address:
            raise AccessError.not_found("Address not found")
        return address

    @staticmethod
    @guarded("create_address")
    def create_address(ctx: RequestContext, address_data: AddressCreate, user_pk: Optional[object] = None) -> Address:
        """Create an address for the caller.

        A new default address clears the flag on the caller's other addresses
        in the same transaction, so at most one address stays default.
        """
        user_pk = user_pk or ctx.user_pk
        if ctx.user_pk is None or user_pk != ctx.user_pk:
            raise AccessError.policy()

        if address_data.is_default:
            AddressService._clear_default(ctx, user_pk)

        address = Address(
            user_id=user_pk,
            label=address_data.label,
            street=address_data.street,
            city=address_data.city,
            state=address_data.state,
            zip_code=address_data.zip_code,
            is_default=address_data.is_default,
            area_id=address_data.area_id,
        )
        ctx.db.add(address)
        ctx.db.commit()
        ctx.db.refresh(address)
        logger.info("address_created", address_id=str(address.id), is_default=address.is_default)
        return address

    @staticmethod
    @guarded("update_address")
    def update_address(ctx: RequestContext, address_id, address_data: AddressUpdate) -> Address:
        """Update one of the caller's addresses; only fields present in the input are written"""
        address = ctx.db.query(Address).filter(
            Address.id == address_id,
            Address.user_id == ctx.user_pk,
        ).first()
        if not address:
            raise AccessError.not_found("Address not found")

        updates = address_data.model_dump(exclude_unset=True)
        if updates.get("is_default"):
            AddressService._clear_default(ctx, address.user_id, keep_id=address.id)

        for field, value in updates.items():
            setattr(address, field, value)
        ctx.db.commit()
        ctx.db.refresh(address)
        return address

    @staticmethod
    @guarded("delete_address")
    def delete_address(ctx: RequestContext, address_id) -> bool:
        """Delete one of the caller's addresses"""
        deleted = ctx.db.query(Address).filter(
            Address.id == address_id,
            Address.user_id == ctx.user_pk,
        ).delete(synchronize_session=False)
        ctx.db.commit()
        if not deleted:
            raise AccessError.not_found("Address not found")
        return True
