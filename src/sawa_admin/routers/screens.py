"""List, detail, create, edit and delete endpoints for every entity screen.

The eleven screens differ only in their gateway and forms, so one router
factory builds the five endpoints for each entry of SCREENS. Each endpoint
drives the same controller a screen would: ListController for the table,
EditDialog for create/edit, DeleteDialog for removal.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Annotated, Any

from fastapi import APIRouter, Body, Query, Request

from sawa_admin.controllers.dialogs import DeleteDialog, EditDialog
from sawa_admin.controllers.list_controller import ListController
from sawa_admin.dependencies import Context, DashboardContext
from sawa_admin.exceptions import DomainError, FormValidationError
from sawa_admin.gateways.base import Gateway
from sawa_admin.schemas.booking import BookingForm
from sawa_admin.schemas.catalog import CategoryForm, FeatureForm, HouseTypeForm
from sawa_admin.schemas.common import Form
from sawa_admin.schemas.listing import ListingForm
from sawa_admin.schemas.notification import NotificationForm
from sawa_admin.schemas.site_setting import SiteSettingForm
from sawa_admin.schemas.user import StaffForm, StaffUpdateForm, UserForm, UserUpdateForm
from sawa_admin.schemas.views import DeletedView, EntityView, ListView

# Query parameters the list endpoints consume themselves; the rest are filters
RESERVED_PARAMS = frozenset({"page", "limit", "search"})


@dataclass(frozen=True)
class Screen:
    """One entity screen.

    ``gateway`` names the Gateways attribute. Screens without a create form
    get no create endpoint, screens that are not deletable get no delete
    endpoint, and edit falls back to the create form when no
    separate update form is given.
    """

    slug: str
    gateway: str
    create_form: type[Form] | None = None
    update_form: type[Form] | None = None
    editable: bool = True
    deletable: bool = True

    @property
    def edit_form(self) -> type[Form] | None:
        return self.update_form or self.create_form


SCREENS: tuple[Screen, ...] = (
    Screen("users", "users", UserForm, UserUpdateForm),
    Screen("staff", "staff", StaffForm, StaffUpdateForm),
    Screen("listings", "listings", ListingForm),
    Screen("categories", "categories", CategoryForm),
    Screen("housetypes", "house_types", HouseTypeForm),
    Screen("features", "features", FeatureForm),
    # Reviews are moderated through block/unblock, transactions through status
    Screen("reviews", "reviews", editable=False),
    Screen("bookings", "bookings", BookingForm),
    Screen("transactions", "transactions", editable=False),
    Screen("notifications", "notifications", NotificationForm, editable=False),
    # Platform settings are edited in place, never removed
    Screen("settings", "site_settings", SiteSettingForm, deletable=False),
)


def list_filters(request: Request) -> dict[str, Any]:
    """Every query parameter that isn't paging or search, passed on verbatim."""
    return {key: value for key, value in request.query_params.items() if key not in RESERVED_PARAMS}


def saved_view(ctx: DashboardContext, dialog: EditDialog[Any, Any], saved: Any) -> EntityView:
    """Response for a dialog submit, or the error the dialog stayed open with."""
    ctx.ensure_session()
    if dialog.field_errors:
        raise FormValidationError(dialog.field_errors)
    if saved is None:
        raise DomainError(dialog.error or "The form could not be saved")
    return EntityView(data=saved.model_dump(mode="json"), toasts=ctx.toasts())


def build_router(screen: Screen) -> APIRouter:
    router = APIRouter(prefix=f"/{screen.slug}", tags=[screen.slug])

    def gateway_of(ctx: DashboardContext) -> Gateway[Any]:
        return getattr(ctx.gateways, screen.gateway)  # type: ignore[no-any-return]

    @router.get("", response_model=ListView)
    async def list_items(
        request: Request,
        ctx: Context,
        page: int = Query(1, ge=1),
        limit: int | None = Query(None, ge=1),
        search: str = "",
    ) -> ListView:
        per_page = min(limit or ctx.settings.default_per_page, ctx.settings.max_per_page)
        controller: ListController[Any] = ListController(
            gateway_of(ctx),
            ctx.toaster,
            per_page=per_page,
            page=page,
            filters=list_filters(request),
            search=search,
            name=screen.slug,
        )
        try:
            await controller.load()
        finally:
            controller.close()
        ctx.ensure_session()
        return ListView.from_controller(controller, ctx.toasts())

    @router.get("/{entity_id}", response_model=EntityView)
    async def get_item(entity_id: int, ctx: Context) -> EntityView:
        gateway = gateway_of(ctx)
        entity = ctx.unwrap(await gateway.get(entity_id), gateway, entity_id)
        return EntityView(data=entity.model_dump(mode="json"))

    if screen.create_form is not None:
        create_form = screen.create_form

        @router.post("", response_model=EntityView, status_code=201)
        async def create_item(
            ctx: Context, values: Annotated[dict[str, Any], Body()]
        ) -> EntityView:
            dialog: EditDialog[Any, Any] = EditDialog(
                create_form, gateway_of(ctx), ctx.toaster, uploads=ctx.gateways.uploads
            )
            dialog.open_create()
            saved = await dialog.submit(values)
            return saved_view(ctx, dialog, saved)

    if screen.editable and screen.edit_form is not None:
        edit_form = screen.edit_form

        @router.put("/{entity_id}", response_model=EntityView)
        async def update_item(
            entity_id: int, ctx: Context, values: Annotated[dict[str, Any], Body()]
        ) -> EntityView:
            gateway = gateway_of(ctx)
            entity = ctx.unwrap(await gateway.get(entity_id), gateway, entity_id)
            dialog: EditDialog[Any, Any] = EditDialog(
                edit_form, gateway, ctx.toaster, uploads=ctx.gateways.uploads
            )
            dialog.open_edit(entity)
            saved = await dialog.submit(_changed(values))
            return saved_view(ctx, dialog, saved)

    if screen.deletable:

        @router.delete("/{entity_id}", response_model=DeletedView)
        async def delete_item(entity_id: int, ctx: Context) -> DeletedView:
            dialog = DeleteDialog(gateway_of(ctx), ctx.toaster)
            dialog.open(entity_id)
            deleted = await dialog.confirm()
            ctx.ensure_session()
            if not deleted:
                raise DomainError(dialog.error or "The item could not be deleted")
            return DeletedView(id=entity_id, toasts=ctx.toasts())

    return router


def _changed(values: Mapping[str, Any]) -> dict[str, Any]:
    # An edit body may be partial; the rest, nested fields included, comes from the fetched entity
    return {key: value for key, value in values.items() if value is not None}


router = APIRouter()
for _screen in SCREENS:
    router.include_router(build_router(_screen))
