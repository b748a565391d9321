"""The signed-in admin's profile page: details and password change."""

from typing import Annotated, Any

from fastapi import APIRouter, Body

from sawa_admin.controllers.dialogs import merge_values
from sawa_admin.dependencies import Context, DashboardContext
from sawa_admin.exceptions import DomainError
from sawa_admin.schemas.profile import PasswordChangeForm, ProfileForm
from sawa_admin.schemas.result import Err
from sawa_admin.schemas.user import User
from sawa_admin.schemas.views import EntityView

router = APIRouter(prefix="/profile", tags=["profile"])

FormBody = Annotated[dict[str, Any], Body()]


async def current_profile(ctx: DashboardContext) -> User:
    result = await ctx.gateways.profile.get()
    ctx.ensure_session()
    if isinstance(result, Err):
        raise DomainError(result.message)
    return result.data


@router.get("", response_model=EntityView)
async def get_profile(ctx: Context) -> EntityView:
    profile = await current_profile(ctx)
    return EntityView(data=profile.model_dump(mode="json"))


@router.put("", response_model=EntityView)
async def update_profile(ctx: Context, values: FormBody) -> EntityView:
    """Partial edit on top of the stored profile, fetched again once saved."""
    profile = await current_profile(ctx)
    seeded = ProfileForm.from_entity(profile)
    form = ProfileForm.validate_values(merge_values(seeded, values))

    result = await ctx.gateways.profile.update(form.to_payload())
    ctx.ensure_session()
    if isinstance(result, Err):
        raise DomainError(result.message)
    ctx.toaster.success("Saved", "The profile was updated successfully")

    profile = await current_profile(ctx)
    return EntityView(data=profile.model_dump(mode="json"), toasts=ctx.toasts())


@router.post("/password", response_model=EntityView)
async def change_password(ctx: Context, values: FormBody) -> EntityView:
    form = PasswordChangeForm.validate_values(values)
    result = await ctx.gateways.profile.change_password(form)
    ctx.ensure_session()
    if isinstance(result, Err):
        raise DomainError(result.message)
    ctx.toaster.success("Password changed", result.data)
    return EntityView(toasts=ctx.toasts())
