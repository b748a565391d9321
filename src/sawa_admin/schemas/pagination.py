"""Generic pagination types shared by all list screens.

PageMeta: the ``meta`` block the marketplace API sends with lists.
Paginated[T]: plain dataclass for controller-level pages (not serializable).
PaginatedResponse[T]: Pydantic model for the dashboard's own list responses.
"""

from dataclasses import dataclass

from pydantic import BaseModel, Field, ValidationError


class PageMeta(BaseModel):
    """Pagination block of an upstream list response.

    Only the shape is validated. Whether ``current_page`` lies inside
    ``[1, last_page]`` is the server's business; the list controller clamps
    when the two disagree.
    """

    model_config = {"extra": "ignore"}

    current_page: int = Field(ge=1)
    last_page: int = Field(ge=1)
    per_page: int = Field(ge=1)
    total: int = Field(ge=0)

    @classmethod
    def parse(cls, raw: object, *, per_page: int, count: int) -> "PageMeta":
        """Validate ``raw`` or fall back to a single page holding ``count`` items.

        The fallback covers a missing ``meta`` key as well as malformed values::

            PageMeta.parse(None, per_page=10, count=3)
            # PageMeta(current_page=1, last_page=1, per_page=10, total=3)
        """
        try:
            return cls.model_validate(raw)
        except ValidationError:
            return cls(current_page=1, last_page=1, per_page=per_page, total=count)


@dataclass
class Paginated[T]:
    """One fetched page inside the controller layer.

    A dataclass instead of a Pydantic model because controllers don't serialize
    anything; the routers build a ``ListView`` (a PaginatedResponse) instead.
    """

    items: list[T]
    meta: PageMeta


class PaginatedResponse[T](BaseModel):
    """Paginated list view returned by the dashboard's screen endpoints."""

    items: list[T]
    current_page: int
    total_pages: int
    per_page: int
    total: int
