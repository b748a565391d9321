"""Row actions: status changes, review moderation, notifications, export,
and the listing pages for calendar, house rules and ownership.

Registered before the screen routers so fixed paths such as
``/notifications/unread-count`` win over ``/notifications/{entity_id}``.
After a successful action the entity is fetched again rather than patched
from the action's response.
"""

from typing import Annotated, Any

from fastapi import APIRouter, Body, Request, Response

from sawa_admin.dependencies import Context, DashboardContext
from sawa_admin.exceptions import DomainError, NotFoundError
from sawa_admin.gateways.base import Gateway
from sawa_admin.routers.screens import list_filters
from sawa_admin.schemas.common import Form
from sawa_admin.schemas.listing import AvailabilityForm, ChangeOwnerForm, ListingRulesForm
from sawa_admin.schemas.result import Err, Result
from sawa_admin.schemas.transaction import TransactionStatusForm
from sawa_admin.schemas.user import StatusForm
from sawa_admin.schemas.views import CountView, EntityView

router = APIRouter()

EXPORT_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
EXPORT_FILENAME = "transactions.xlsx"

# slug -> (Gateways attribute, status form)
STATUS_SCREENS: dict[str, tuple[str, type[Form]]] = {
    "users": ("users", StatusForm),
    "staff": ("staff", StatusForm),
    "listings": ("listings", StatusForm),
    "transactions": ("transactions", TransactionStatusForm),
}


async def finish_action(
    ctx: DashboardContext,
    gateway: Gateway[Any],
    entity_id: int,
    result: Result[Any],
    success_message: str,
) -> EntityView:
    ctx.ensure_session()
    if isinstance(result, Err):
        if result.not_found:
            raise NotFoundError(gateway.label.capitalize(), entity_id)
        raise DomainError(result.message)
    ctx.toaster.success(success_message)
    entity = ctx.unwrap(await gateway.get(entity_id), gateway, entity_id)
    return EntityView(data=entity.model_dump(mode="json"), toasts=ctx.toasts())


@router.get("/notifications/unread-count", response_model=CountView, tags=["notifications"])
async def unread_count(ctx: Context) -> CountView:
    result = await ctx.gateways.notifications.unread_count()
    ctx.ensure_session()
    if isinstance(result, Err):
        raise DomainError(result.message)
    return CountView(count=result.data)


@router.post("/notifications/read-all", response_model=EntityView, tags=["notifications"])
async def read_all_notifications(ctx: Context) -> EntityView:
    result = await ctx.gateways.notifications.mark_all_read()
    ctx.ensure_session()
    if isinstance(result, Err):
        raise DomainError(result.message)
    ctx.toaster.success("All notifications marked as read")
    return EntityView(toasts=ctx.toasts())


@router.post(
    "/notifications/{entity_id}/read", response_model=EntityView, tags=["notifications"]
)
async def read_notification(entity_id: int, ctx: Context) -> EntityView:
    gateway = ctx.gateways.notifications
    result = await gateway.mark_read(entity_id)
    return await finish_action(ctx, gateway, entity_id, result, "Notification marked as read")


@router.post("/reviews/{entity_id}/toggle-block", response_model=EntityView, tags=["reviews"])
async def toggle_review_block(entity_id: int, ctx: Context) -> EntityView:
    gateway = ctx.gateways.reviews
    review = ctx.unwrap(await gateway.get(entity_id), gateway, entity_id)
    result = await gateway.toggle_block(review)
    message = "Review unblocked" if review.is_blocked else "Review blocked"
    return await finish_action(ctx, gateway, entity_id, result, message)


@router.get("/transactions/export", tags=["transactions"])
async def export_transactions(request: Request, ctx: Context) -> Response:
    result = await ctx.gateways.transactions.export(list_filters(request))
    ctx.ensure_session()
    if isinstance(result, Err):
        raise DomainError(result.message)
    return Response(
        content=result.data,
        media_type=EXPORT_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{EXPORT_FILENAME}"'},
    )


@router.post("/listings/{entity_id}/images/reorder", response_model=EntityView, tags=["listings"])
async def reorder_listing_images(
    entity_id: int, ctx: Context, image_ids: Annotated[list[int], Body(embed=True)]
) -> EntityView:
    gateway = ctx.gateways.listings
    result = await gateway.reorder_images(entity_id, image_ids)
    return await finish_action(ctx, gateway, entity_id, result, "Images reordered")


@router.put("/listings/{entity_id}/available-dates", response_model=EntityView, tags=["listings"])
async def update_listing_availability(
    entity_id: int, ctx: Context, values: Annotated[dict[str, Any], Body()]
) -> EntityView:
    form = AvailabilityForm.validate_values(values)
    gateway = ctx.gateways.listings
    result = await gateway.update_availability(entity_id, form)
    return await finish_action(ctx, gateway, entity_id, result, "Availability updated")


@router.put("/listings/{entity_id}/rules", response_model=EntityView, tags=["listings"])
async def update_listing_rules(
    entity_id: int, ctx: Context, values: Annotated[dict[str, Any], Body()]
) -> EntityView:
    form = ListingRulesForm.validate_values(values)
    gateway = ctx.gateways.listings
    result = await gateway.update_rules(entity_id, form)
    return await finish_action(ctx, gateway, entity_id, result, "Listing rules updated")


@router.post("/listings/{entity_id}/owner", response_model=EntityView, tags=["listings"])
async def change_listing_owner(
    entity_id: int, ctx: Context, values: Annotated[dict[str, Any], Body()]
) -> EntityView:
    form = ChangeOwnerForm.validate_values(values)
    gateway = ctx.gateways.listings
    listing = ctx.unwrap(await gateway.get(entity_id), gateway, entity_id)
    if listing.host_id == form.host_id:
        raise DomainError("The selected host already owns this listing")
    result = await gateway.change_owner(entity_id, form.host_id)
    return await finish_action(ctx, gateway, entity_id, result, "Listing owner changed")


def _status_route(slug: str, gateway_name: str, form: type[Form]) -> None:
    @router.post(f"/{slug}/{{entity_id}}/status", response_model=EntityView, tags=[slug])
    async def change_status(
        entity_id: int, ctx: Context, values: Annotated[dict[str, Any], Body()]
    ) -> EntityView:
        status = form.validate_values(values).status  # type: ignore[attr-defined]
        gateway = getattr(ctx.gateways, gateway_name)
        result = await gateway.update_status(entity_id, status)
        return await finish_action(ctx, gateway, entity_id, result, "Status updated")


for _slug, (_gateway_name, _form) in STATUS_SCREENS.items():
    _status_route(_slug, _gateway_name, _form)
