import math
from typing import Any, Dict

from fastapi import Query


class PageParams:
    """Query-string paging shared by the admin listings."""

    def __init__(
        self,
        page: int = Query(1, ge=1),
        limit: int = Query(10, ge=1, le=100),
    ):
        self.page = page
        self.limit = limit

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


def pagination_envelope(total: int, page: int, limit: int) -> Dict[str, Any]:
    return {
        "total": total,
        "page": page,
        "limit": limit,
        "totalPages": math.ceil(total / limit) if limit else 0,
    }
