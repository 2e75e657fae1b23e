"""
Entry repository backed by SQLAlchemy/SQLite.
"""
from datetime import datetime
from typing import List, Optional
from sqlalchemy.orm import Session

from domain.models import Entry
from repositories.models import EntryORM


def _entry_from_orm(orm: EntryORM) -> Entry:
    return Entry(
        id=orm.id,
        user_id=orm.user_id,
        title=orm.title,
        hobby=orm.hobby,
        place=orm.place,
        country=orm.country,
        date=orm.date,
        notes=orm.notes,
        latitude=orm.latitude,
        longitude=orm.longitude,
        created_at=orm.created_at,
        updated_at=orm.updated_at,
    )


def _update_orm_from_entry(orm: EntryORM, entry: Entry) -> None:
    orm.title = entry.title
    orm.hobby = entry.hobby
    orm.place = entry.place
    orm.country = entry.country
    orm.date = entry.date
    orm.notes = entry.notes
    orm.latitude = entry.latitude
    orm.longitude = entry.longitude
    orm.updated_at = entry.updated_at or datetime.utcnow()


class EntriesRepository:
    """CRUD operations for entries."""

    def list_entries(self, session: Session, user_id: str) -> List[Entry]:
        entries = (
            session.query(EntryORM)
            .filter(EntryORM.user_id == user_id)
            .order_by(EntryORM.date.desc(), EntryORM.created_at.desc())
            .all()
        )
        return [_entry_from_orm(e) for e in entries]

    def get_entry(self, session: Session, entry_id: str) -> Optional[Entry]:
        orm = session.get(EntryORM, entry_id)
        if not orm:
            return None
        return _entry_from_orm(orm)

    def create_entry(self, session: Session, entry: Entry) -> Entry:
        now = datetime.utcnow()
        orm = EntryORM(
            id=entry.id,
            user_id=entry.user_id,
            title=entry.title,
            hobby=entry.hobby,
            place=entry.place,
            country=entry.country,
            date=entry.date,
            notes=entry.notes,
            latitude=entry.latitude,
            longitude=entry.longitude,
            created_at=entry.created_at or now,
            updated_at=entry.updated_at or now,
        )
        session.add(orm)
        session.commit()
        session.refresh(orm)
        return _entry_from_orm(orm)

    def update_entry(self, session: Session, entry: Entry) -> Entry:
        orm = session.get(EntryORM, entry.id)
        if not orm:
            raise ValueError("Entry not found")
        _update_orm_from_entry(orm, entry)
        session.add(orm)
        session.commit()
        session.refresh(orm)
        return _entry_from_orm(orm)

    def delete_entry(self, session: Session, entry_id: str) -> None:
        orm = session.get(EntryORM, entry_id)
        if orm:
            session.delete(orm)
            session.commit()
