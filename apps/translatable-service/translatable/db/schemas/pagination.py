import math
from typing import Generic, List, Tuple, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator

from translatable.utils.settings import get_settings

T = TypeVar("T")


def parse_sort_entry(entry: str) -> Tuple[str, bool]:
    """Split a sort entry into ``(field, descending)``; surrounding blanks are ignored."""
    entry = entry.strip()
    descending = entry.startswith("-")
    field = entry[1:].strip() if descending else entry
    return field, descending


class PageRequest(BaseModel):
    """Zero-based page index, page size and optional sort fields.

    Sort entries name mapped columns; a leading ``-`` sorts descending.
    """

    page: int = Field(0, ge=0)
    size: int = Field(default_factory=lambda: get_settings().default_page_size, gt=0)
    sort: List[str] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    @field_validator("size")
    @classmethod
    def _size_within_limit(cls, value: int) -> int:
        limit = get_settings().max_page_size
        if value > limit:
            raise ValueError(f"page size must be at most {limit}")
        return value

    @field_validator("sort")
    @classmethod
    def _sort_fields_not_blank(cls, value: List[str]) -> List[str]:
        for entry in value:
            if not parse_sort_entry(entry)[0]:
                raise ValueError("sort entries must name a field")
        return value

    @property
    def offset(self) -> int:
        return self.page * self.size

    @property
    def sort_order(self) -> List[Tuple[str, bool]]:
        return [parse_sort_entry(entry) for entry in self.sort]


class Page(BaseModel, Generic[T]):
    items: List[T]
    total_items: int
    total_pages: int
    page: int
    size: int

    model_config = ConfigDict(arbitrary_types_allowed=True)

    @classmethod
    def build(cls, items: List[T], total_items: int, page_request: PageRequest) -> "Page[T]":
        total_pages = math.ceil(total_items / page_request.size) if page_request.size > 0 else 0
        return cls(
            items=items,
            total_items=total_items,
            total_pages=total_pages,
            page=page_request.page,
            size=page_request.size,
        )

    @property
    def has_next(self) -> bool:
        return self.page + 1 < self.total_pages

    @property
    def has_previous(self) -> bool:
        return self.page > 0
