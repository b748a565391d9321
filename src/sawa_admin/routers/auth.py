"""Login, logout and the password-reset pages.

These are the pre-authentication routes: an upstream 401 here is an
ordinary failure (wrong password, expired code), never a session redirect.
Where the browser should go next is whatever AuthService asked the
navigator for.
"""

from typing import Annotated, Any

from fastapi import APIRouter, Body, Response
from fastapi.responses import RedirectResponse

from sawa_admin.config import Settings
from sawa_admin.dependencies import Context, DashboardContext
from sawa_admin.exceptions import DomainError
from sawa_admin.schemas.auth import ForgotPasswordForm, LoginForm, ResetPasswordForm, VerifyOtpForm
from sawa_admin.schemas.result import Err
from sawa_admin.schemas.views import RedirectView
from sawa_admin.session import LOGIN_ROUTE

router = APIRouter(tags=["auth"])

FormBody = Annotated[dict[str, Any], Body()]


def set_token_cookie(response: Response, settings: Settings, token: str) -> None:
    response.set_cookie(
        settings.token_cookie_name,
        token,
        max_age=settings.token_cookie_days * 24 * 60 * 60,
        path="/",
        samesite="lax",
        secure=settings.is_production,
    )


def clear_token_cookie(response: Response, settings: Settings) -> None:
    response.delete_cookie(settings.token_cookie_name, path="/")


def redirect_view(ctx: DashboardContext, succeeded: bool) -> RedirectView:
    if not succeeded:
        # AuthService reports failures as toasts; the newest one explains it
        message = "Request failed"
        for toast in ctx.toaster.toasts[-1:]:
            message = toast.description or toast.title
        raise DomainError(message)
    return RedirectView(redirect_to=ctx.navigator.redirected_to, toasts=ctx.toasts())


@router.post("/login", response_model=RedirectView)
async def login(ctx: Context, values: FormBody, response: Response) -> RedirectView:
    form = LoginForm.validate_values(values)
    result = await ctx.auth.login(form)
    if isinstance(result, Err):
        raise DomainError(result.message)
    set_token_cookie(response, ctx.settings, result.data)
    return RedirectView(redirect_to=ctx.navigator.redirected_to, toasts=ctx.toasts())


@router.post("/logout")
async def logout(ctx: Context) -> RedirectResponse:
    await ctx.auth.logout()
    response = RedirectResponse(ctx.navigator.redirected_to or LOGIN_ROUTE, status_code=303)
    clear_token_cookie(response, ctx.settings)
    return response


@router.post("/forgot-password", response_model=RedirectView)
async def forgot_password(ctx: Context, values: FormBody) -> RedirectView:
    form = ForgotPasswordForm.validate_values(values)
    return redirect_view(ctx, await ctx.auth.forgot_password(form))


@router.post("/verify-otp", response_model=RedirectView)
async def verify_otp(ctx: Context, values: FormBody) -> RedirectView:
    form = VerifyOtpForm.validate_values(values)
    return redirect_view(ctx, await ctx.auth.verify_otp(form))


@router.post("/reset-password", response_model=RedirectView)
async def reset_password(ctx: Context, values: FormBody) -> RedirectView:
    form = ResetPasswordForm.validate_values(values)
    return redirect_view(ctx, await ctx.auth.reset_password(form))
