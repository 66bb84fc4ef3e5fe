"""
Maintenance Endpoints
Platform admin tools for scheduled jobs
"""

from fastapi import APIRouter, Depends

from campushub.auth import get_platform_admin
from campushub.deps import get_retention_service
from campushub.scheduler import get_scheduler_status
from campushub.services.retention_service import RetentionService

router = APIRouter()


@router.post("/cleanup-guest-data")
async def cleanup_guest_data(
    current_admin: dict = Depends(get_platform_admin),
    retention_service: RetentionService = Depends(get_retention_service)
):
    """Run the guest-data cleanup now instead of waiting for the nightly job"""
    deleted = await retention_service.sweep()
    return {"success": True, "deleted": deleted}


@router.get("/scheduler")
async def scheduler_status(current_admin: dict = Depends(get_platform_admin)):
    """Scheduled jobs and their next run times"""
    return get_scheduler_status()
