"""Workplace repository - Database operations for workplaces"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import Workplace


class WorkplaceRepository:
    """Repository for workplace database operations"""

    @staticmethod
    def get_workplaces(db: Session, user_id: int) -> list[Workplace]:
        """Get all workplaces for a user, newest first"""
        return (
            db.query(Workplace)
            .filter(Workplace.user_id == user_id)
            .order_by(Workplace.created_at.desc(), Workplace.id.desc())
            .all()
        )

    @staticmethod
    def get_workplace_by_id(db: Session, workplace_id: int, user_id: int) -> Optional[Workplace]:
        return (
            db.query(Workplace)
            .filter(Workplace.id == workplace_id, Workplace.user_id == user_id)
            .first()
        )

    @staticmethod
    def create_workplace(db: Session, user_id: int, **workplace_data) -> Workplace:
        workplace = Workplace(user_id=user_id, **workplace_data)
        db.add(workplace)
        db.commit()
        db.refresh(workplace)
        return workplace

    @staticmethod
    def update_workplace(db: Session, workplace: Workplace, **updates) -> Workplace:
        """Update a workplace with provided fields"""
        for key, value in updates.items():
            if hasattr(workplace, key):
                setattr(workplace, key, value)

        db.commit()
        db.refresh(workplace)
        return workplace

    @staticmethod
    def delete_workplace(db: Session, workplace: Workplace) -> None:
        """Delete a workplace and its shifts"""
        db.delete(workplace)
        db.commit()
