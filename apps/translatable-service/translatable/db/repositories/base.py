"""
Generic CRUD repository over a single mapped class.

Repositories flush but never commit; the unit of work opened by the
service (or the caller) decides when changes become durable.
"""
from __future__ import annotations

from typing import Generic, Iterable, List, Optional, TypeVar

from sqlalchemy import inspect
from sqlalchemy.orm import Query, Session

from translatable.db.schemas import Page, PageRequest
from translatable.exceptions import InvalidArgumentError

ModelT = TypeVar("ModelT")
IdT = TypeVar("IdT")


class BaseRepository(Generic[ModelT, IdT]):
    """CRUD operations shared by every repository.

    The mapped class is taken from the ``model`` argument or, when omitted,
    from a ``model`` class attribute on the subclass.
    """

    model: type

    def __init__(self, db: Session, model: Optional[type] = None):
        self.db = db
        if model is not None:
            self.model = model
        if getattr(self, "model", None) is None:
            raise TypeError(f"{type(self).__name__} requires a mapped model class")
        self._mapper = inspect(self.model)
        self._check_model()

    def _check_model(self) -> None:
        """Hook for subclasses to validate the mapped class they were given."""
        if not hasattr(self.model, "id"):
            raise TypeError(f"{self.model.__name__} must map an 'id' attribute")

    def _query(self) -> Query:
        return self.db.query(self.model)

    def _exists(self, query: Query) -> bool:
        return bool(self.db.query(query.exists()).scalar())

    def _primary_key_order(self, model=None):
        mapper = self._mapper if model is None else inspect(model)
        return list(mapper.primary_key)

    def _apply_sort(self, query: Query, page_request: PageRequest, model=None) -> Query:
        model = model or self.model
        mapper = inspect(model)
        clauses = []
        for field, descending in page_request.sort_order:
            if field not in mapper.columns:
                raise InvalidArgumentError(
                    f"Cannot sort {model.__name__} by unknown field '{field}'",
                    {"field": field, "model": model.__name__},
                )
            column = getattr(model, field)
            clauses.append(column.desc() if descending else column.asc())
        clauses.extend(self._primary_key_order(model))
        return query.order_by(*clauses)

    def _paginate(self, query: Query, page_request: PageRequest, model=None) -> Page:
        total_items = query.order_by(None).count()
        items = (
            self._apply_sort(query, page_request, model)
            .offset(page_request.offset)
            .limit(page_request.size)
            .all()
        )
        return Page.build(items, total_items, page_request)

    def get(self, entity_id: IdT) -> Optional[ModelT]:
        return self.db.get(self.model, entity_id)

    def exists(self, entity_id: IdT) -> bool:
        query = self._query().filter(self.model.id == entity_id)
        return self._exists(query)

    def find_all(self) -> List[ModelT]:
        return self._query().order_by(*self._primary_key_order()).all()

    def paginate(self, page_request: PageRequest) -> Page[ModelT]:
        return self._paginate(self._query(), page_request)

    def count(self) -> int:
        return self._query().count()

    def save(self, entity: ModelT) -> ModelT:
        """Add the entity to the session and flush so generated fields are populated."""
        self.db.add(entity)
        self.db.flush()
        return entity

    def save_all(self, entities: Iterable[ModelT]) -> List[ModelT]:
        entities = list(entities)
        self.db.add_all(entities)
        self.db.flush()
        return entities

    def delete(self, entity: ModelT) -> None:
        self.db.delete(entity)
        self.db.flush()

    def delete_by_id(self, entity_id: IdT) -> int:
        entity = self.get(entity_id)
        if entity is None:
            return 0
        self.delete(entity)
        return 1
