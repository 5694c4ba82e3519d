"""Persistence store for catalog entities.

``Store`` is the keyed repository contract the service depends on;
``SqlAlchemyBookStore`` is its implementation over an ORM session.
"""
from typing import Optional, Protocol, TypeVar

from sqlalchemy import select
from sqlalchemy.orm import Session

from .entities import BookRecord

EntityT = TypeVar("EntityT")
KeyT = TypeVar("KeyT", contravariant=True)


class Store(Protocol[EntityT, KeyT]):
    def save(self, entity: EntityT) -> EntityT: ...

    def find_by_id(self, key: KeyT) -> Optional[EntityT]: ...

    def find_all(self) -> list[EntityT]: ...

    def exists_by_id(self, key: KeyT) -> bool: ...

    def delete_by_id(self, key: KeyT) -> None: ...


class SqlAlchemyBookStore:
    def __init__(self, session: Session):
        self.session = session

    def save(self, entity: BookRecord) -> BookRecord:
        self.session.add(entity)
        self.session.commit()
        self.session.refresh(entity)
        return entity

    def find_by_id(self, key: int) -> Optional[BookRecord]:
        return self.session.get(BookRecord, key)

    def find_all(self) -> list[BookRecord]:
        return list(self.session.execute(select(BookRecord)).scalars().all())

    def exists_by_id(self, key: int) -> bool:
        return self.session.get(BookRecord, key) is not None

    def delete_by_id(self, key: int) -> None:
        record = self.session.get(BookRecord, key)
        if record is not None:
            self.session.delete(record)
            self.session.commit()
