# models.py
# typed catalog records, search criteria and the per-session query state

from dataclasses import dataclass, field
from enum import Enum
from pydantic import BaseModel
from typing import Any, List, Optional, Union

DEFAULT_LIMIT = 100


class AttractionRecord(BaseModel):
    # id is assigned by the catalog; seed input has none
    id: Optional[Union[int, str]] = None
    name: str
    description: Optional[str] = None
    category: Optional[str] = None
    location: Optional[str] = None
    image_url: Optional[str] = None
    # kept exactly as sent ("4.5" stays a string, true stays a bool);
    # only real numbers get a badge
    rating: Any = None
    tags: Optional[List[str]] = None

    def create_payload(self) -> dict:
        """Body for POST /api/attractions (id is server-assigned)."""
        return self.model_dump(exclude={"id"})


class SearchCriteria(BaseModel):
    q: Optional[str] = None
    category: Optional[str] = None
    location: Optional[str] = None
    limit: int = DEFAULT_LIMIT

    def payload(self) -> dict:
        """
        Complete request body. Every key is present; empty or blank
        values go out as null rather than being dropped.
        """
        def _v(s: Optional[str]) -> Optional[str]:
            return s if s and s.strip() else None

        return {
            "q": _v(self.q),
            "category": _v(self.category),
            "location": _v(self.location),
            "limit": self.limit,
        }


class Status(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    ERROR = "error"


@dataclass
class QueryState:
    items: List[AttractionRecord] = field(default_factory=list)
    status: Status = Status.IDLE
    error_message: str = ""
    filters: SearchCriteria = field(default_factory=SearchCriteria)

    @property
    def has_data(self) -> bool:
        return len(self.items) > 0

    @property
    def is_empty(self) -> bool:
        # "no data": what the UI uses to decide whether to offer seeding
        return not self.items and self.status is Status.IDLE
