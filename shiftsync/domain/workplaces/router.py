"""Workplace router - FastAPI endpoints for workplace operations"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import get_current_user
from ...database import get_db
from ...models import User, Workplace
from ...rate_limiter import create_limiter
from ...schemas import single_page
from .schemas import WorkplaceCreate, WorkplaceResponse, WorkplaceUpdate
from .service import WorkplaceService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/workplaces", tags=["Workplaces"])


def get_workplace_service(db: Session = Depends(get_db)) -> WorkplaceService:
    """Dependency injection for WorkplaceService"""
    return WorkplaceService(db)


def workplace_response(workplace: Workplace) -> WorkplaceResponse:
    return WorkplaceResponse(
        id=workplace.id,
        userId=workplace.user_id,
        name=workplace.name,
        color=workplace.color,
        hourlyRate=workplace.hourly_rate,
        address=workplace.address,
        contactInfo=workplace.contact_info,
        notes=workplace.notes,
        createdAt=workplace.created_at,
        updatedAt=workplace.updated_at,
    )


@router.get("")
async def get_workplaces(
    current_user: User = Depends(get_current_user),
    service: WorkplaceService = Depends(get_workplace_service),
):
    """Get all workplaces for the current user"""
    workplaces = [workplace_response(w) for w in service.get_workplaces(current_user)]
    return {"success": True, "data": workplaces, "pagination": single_page(workplaces)}


@router.get("/{workplace_id}")
async def get_workplace(
    workplace_id: int,
    current_user: User = Depends(get_current_user),
    service: WorkplaceService = Depends(get_workplace_service),
):
    workplace = service.get_workplace(workplace_id, current_user)
    return {"success": True, "data": workplace_response(workplace)}


@router.post("", status_code=201, dependencies=[Depends(create_limiter)])
async def create_workplace(
    data: WorkplaceCreate,
    current_user: User = Depends(get_current_user),
    service: WorkplaceService = Depends(get_workplace_service),
):
    workplace = service.create_workplace(data, current_user)
    return {
        "success": True,
        "message": "Workplace created successfully",
        "data": workplace_response(workplace),
    }


@router.put("/{workplace_id}")
async def update_workplace(
    workplace_id: int,
    data: WorkplaceUpdate,
    current_user: User = Depends(get_current_user),
    service: WorkplaceService = Depends(get_workplace_service),
):
    workplace = service.update_workplace(workplace_id, data, current_user)
    return {
        "success": True,
        "message": "Workplace updated successfully",
        "data": workplace_response(workplace),
    }


@router.delete("/{workplace_id}")
async def delete_workplace(
    workplace_id: int,
    current_user: User = Depends(get_current_user),
    service: WorkplaceService = Depends(get_workplace_service),
):
    service.delete_workplace(workplace_id, current_user)
    return {"success": True, "message": "Workplace deleted successfully"}
