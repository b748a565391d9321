"""Response bodies of the dashboard's own endpoints.

Each screen endpoint answers with the state its controller ended up in plus
the toasts raised while getting there, so a front end can render the page
and show the notifications without a second round trip.
"""

from typing import Any

from pydantic import BaseModel

from sawa_admin.controllers.list_controller import ListController
from sawa_admin.controllers.toasts import Toast
from sawa_admin.schemas.pagination import PaginatedResponse


class ToastOut(BaseModel):
    title: str
    description: str | None = None
    variant: str = "default"

    @classmethod
    def from_toast(cls, toast: Toast) -> "ToastOut":
        return cls(title=toast.title, description=toast.description, variant=toast.variant.value)


class ListView(PaginatedResponse[dict[str, Any]]):
    """One page of a list screen."""

    state: str
    error: str | None = None
    toasts: list[ToastOut] = []

    @classmethod
    def from_controller(cls, controller: ListController[Any], toasts: list[ToastOut]) -> "ListView":
        page = controller.page
        return cls(
            items=[item.model_dump(mode="json") for item in page.items],
            current_page=page.meta.current_page,
            total_pages=page.meta.last_page,
            per_page=page.meta.per_page,
            total=page.meta.total,
            state=controller.state.value,
            error=controller.error,
            toasts=toasts,
        )


class EntityView(BaseModel):
    """A single entity after a fetch, save or row action.

    ``data`` is None when the API acknowledged an action without echoing
    the entity back.
    """

    data: dict[str, Any] | None = None
    toasts: list[ToastOut] = []


class DeletedView(BaseModel):
    id: int
    deleted: bool = True
    toasts: list[ToastOut] = []


class RedirectView(BaseModel):
    """Outcome of an auth step: where the browser should go next."""

    redirect_to: str | None = None
    toasts: list[ToastOut] = []


class CountView(BaseModel):
    count: int


class HomeView(BaseModel):
    """Dashboard landing page: entity totals, zero where a count failed."""

    totals: dict[str, int]
    toasts: list[ToastOut] = []
