from fastapi import APIRouter, Depends
from typing import List
from uuid import UUID

from aquaflow.api.rest.errors import unwrap
from aquaflow.core.context import RequestContext, get_request_context, require_vendor
from aquaflow.schemas.service_area import ServiceAreaCreate, ServiceAreaUpdate, ServiceAreaResponse
from aquaflow.services.service_area_service import ServiceAreaService

router = APIRouter(prefix="/service-areas", tags=["service-areas"])


@router.get("", response_model=List[ServiceAreaResponse])
def list_service_areas(ctx: RequestContext = Depends(get_request_context)):
    """List all service areas"""
    return unwrap(ServiceAreaService.list_service_areas(ctx))


@router.get("/{area_id}", response_model=ServiceAreaResponse)
def get_service_area(area_id: UUID, ctx: RequestContext = Depends(get_request_context)):
    """Get a service area by ID"""
    return unwrap(ServiceAreaService.get_service_area(ctx, area_id))


@router.post("", response_model=ServiceAreaResponse, status_code=201)
def create_service_area(area_data: ServiceAreaCreate, ctx: RequestContext = Depends(require_vendor)):
    """Create a service area for the calling vendor"""
    return unwrap(ServiceAreaService.create_service_area(ctx, area_data))


@router.patch("/{area_id}", response_model=ServiceAreaResponse)
def update_service_area(
    area_id: UUID,
    area_data: ServiceAreaUpdate,
    ctx: RequestContext = Depends(require_vendor),
):
    """Rename one of the caller's service areas"""
    return unwrap(ServiceAreaService.update_service_area(ctx, area_id, area_data))


@router.delete("/{area_id}", status_code=204)
def delete_service_area(area_id: UUID, ctx: RequestContext = Depends(require_vendor)):
    """Delete one of the caller's service areas"""
    unwrap(ServiceAreaService.delete_service_area(ctx, area_id))
    return None


@router.delete("/vendor/{vendor_id}")
def delete_vendor_service_areas(vendor_id: UUID, ctx: RequestContext = Depends(require_vendor)):
    """Delete every service area of the calling vendor"""
    deleted = unwrap(ServiceAreaService.delete_service_areas_by_vendor(ctx, vendor_id))
    return {"deleted": deleted}
