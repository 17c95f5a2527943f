from typing import List

import structlog

from aquaflow.core.context import RequestContext
from aquaflow.core.errors import AccessError, guarded
from aquaflow.models.service_area import ServiceArea
from aquaflow.models.user import User, UserType
from aquaflow.schemas.service_area import ServiceAreaCreate, ServiceAreaUpdate

logger = structlog.get_logger(__name__)


class ServiceAreaService:
    @staticmethod
    @guarded("list_service_areas")
    def list_service_areas(ctx: RequestContext) -> List[ServiceArea]:
        """List all service areas, newest first"""
        return ctx.db.query(ServiceArea).order_by(ServiceArea.created_at.desc()).all()

    @staticmethod
    @guarded("get_service_area")
    def get_service_area(ctx: RequestContext, area_id) -> ServiceArea:
        """Get service area by ID"""
        area = ctx.db.query(ServiceArea).filter(ServiceArea.id == area_id).first()
        if not area:
            raise AccessError.not_found("Service area not found")
        return area

    @staticmethod
    @guarded("create_service_area")
    def create_service_area(ctx: RequestContext, area_data: ServiceAreaCreate) -> ServiceArea:
        """Create a service area owned by the calling vendor"""
        vendor_id = area_data.vendor_id or ctx.user_pk
        if ctx.user_pk is None or vendor_id != ctx.user_pk:
            raise AccessError.policy()

        vendor = ctx.db.query(User).filter(User.id == vendor_id).first()
        if not vendor or vendor.user_type != UserType.VENDOR:
            raise AccessError.constraint("vendor_id must reference a vendor", code="vendor_required")

        area = ServiceArea(
            name=area_data.name,
            vendor_id=vendor.id,
            vendor_name=area_data.vendor_name or vendor.name,
        )
        ctx.db.add(area)
        ctx.db.commit()
        ctx.db.refresh(area)
        logger.info("service_area_created", area_id=str(area.id), vendor_id=str(vendor.id))
        return area

    @staticmethod
    @guarded("update_service_area")
    def update_service_area(ctx: RequestContext, area_id, area_data: ServiceAreaUpdate) -> ServiceArea:
        """Update one of the caller's service areas"""
        area = ctx.db.query(ServiceArea).filter(
            ServiceArea.id == area_id,
            ServiceArea.vendor_id == ctx.user_pk,
        ).first()
        if not area:
            raise AccessError.not_found("Service area not found")

        for field, value in area_data.model_dump(exclude_unset=True).items():
            setattr(area, field, value)
        ctx.db.commit()
        ctx.db.refresh(area)
        return area

    @staticmethod
    @guarded("delete_service_area")
    def delete_service_area(ctx: RequestContext, area_id) -> bool:
        """Delete one of the caller's service areas"""
        deleted = ctx.db.query(ServiceArea).filter(
            ServiceArea.id == area_id,
            ServiceArea.vendor_id == ctx.user_pk,
        ).delete(synchronize_session=False)
        ctx.db.commit()
        if not deleted:
            raise AccessError.not_found("Service area not found")
        return True

    @staticmethod
    @guarded("delete_service_areas_by_vendor")
    def delete_service_areas_by_vendor(ctx: RequestContext, vendor_id) -> int:
        """Delete every service area of a vendor. Rows of other vendors are not visible"""
        deleted = ctx.db.query(ServiceArea).filter(
            ServiceArea.vendor_id == vendor_id,
            ServiceArea.vendor_id == ctx.user_pk,
        ).delete(synchronize_session=False)
        ctx.db.commit()
        return deleted
