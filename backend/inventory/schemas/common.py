import math

from pydantic import BaseModel


class Pagination(BaseModel):
    total: int
    limit: int
    offset: int
    current_page: int
    total_pages: int
    has_more: bool

    @classmethod
    def build(cls, total: int, limit: int, offset: int) -> "Pagination":
        return cls(
            total=total,
            limit=limit,
            offset=offset,
            current_page=offset // limit + 1,
            total_pages=math.ceil(total / limit) if total else 0,
            has_more=offset + limit < total,
        )


def envelope(message: str, data) -> dict:
    return {"success": True, "message": message, "data": data}
