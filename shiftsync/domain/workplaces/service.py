"""Workplace service - Business logic for workplace operations"""

import logging

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...models import User, Workplace
from .repository import WorkplaceRepository
from .schemas import WorkplaceCreate, WorkplaceUpdate

logger = logging.getLogger(__name__)

# Request field -> column
FIELD_MAP = {
    "name": "name",
    "color": "color",
    "hourlyRate": "hourly_rate",
    "address": "address",
    "contactInfo": "contact_info",
    "notes": "notes",
}


class WorkplaceService:
    """Service layer for workplace business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = WorkplaceRepository()

    def get_workplaces(self, user: User) -> list[Workplace]:
        return self.repo.get_workplaces(self.db, user.id)

    def get_workplace(self, workplace_id: int, user: User) -> Workplace:
        workplace = self.repo.get_workplace_by_id(self.db, workplace_id, user.id)
        if not workplace:
            raise HTTPException(status_code=404, detail="Workplace not found")
        return workplace

    def create_workplace(self, data: WorkplaceCreate, user: User) -> Workplace:
        logger.info(f"📥 Creating workplace for user_id: {user.id}")
        values = data.model_dump()
        return self.repo.create_workplace(
            self.db, user.id, **{FIELD_MAP[key]: value for key, value in values.items()}
        )

    def update_workplace(self, workplace_id: int, data: WorkplaceUpdate, user: User) -> Workplace:
        workplace = self.get_workplace(workplace_id, user)
        # Only fields present in the request body are changed
        updates = {
            FIELD_MAP[key]: value for key, value in data.model_dump(exclude_unset=True).items()
        }
        for required in ("name", "color", "hourly_rate"):
            if required in updates and updates[required] is None:
                del updates[required]

        logger.info(f"✏️ Updating workplace {workplace_id} for user_id: {user.id}")
        return self.repo.update_workplace(self.db, workplace, **updates)

    def delete_workplace(self, workplace_id: int, user: User) -> None:
        workplace = self.get_workplace(workplace_id, user)
        self.repo.delete_workplace(self.db, workplace)
        logger.info(f"🗑️ Deleted workplace {workplace_id} for user_id: {user.id}")
