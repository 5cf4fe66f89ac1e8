"""
budgetbook/schemas/page.py

Pagination descriptors shared by the list endpoints.
PageRequest goes into a store query; Page comes back out of it.
"""

from dataclasses import dataclass, field
from typing import Generic, List, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100


class PageRequest(BaseModel):
    """
    Zero-based page offset plus page size.
    """
    page: int = Field(default=0, ge=0)
    size: int = Field(default=DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE)

    @property
    def offset(self) -> int:
        return self.page * self.size


@dataclass
class Page(Generic[T]):
    """One slice of a query result, plus the total match count."""

    items: List[T] = field(default_factory=list)
    total: int = 0
    page: int = 0
    size: int = DEFAULT_PAGE_SIZE

    def to_list(self) -> List[T]:
        return list(self.items)
