"""Sign-in, sign-out and the password-reset flow.

Ties AuthGateway to the SessionContext: a successful login fills the
session, logout clears it whatever the API answers.
"""

from urllib.parse import urlencode

from sawa_admin.controllers.toasts import Toaster
from sawa_admin.gateways.auth import AuthGateway
from sawa_admin.logging import get_logger
from sawa_admin.schemas.auth import ForgotPasswordForm, LoginForm, ResetPasswordForm, VerifyOtpForm
from sawa_admin.schemas.result import Err, Ok, Result
from sawa_admin.session import HOME_ROUTE, LOGIN_ROUTE, Navigator, SessionContext

logger = get_logger(__name__)

VERIFY_OTP_ROUTE = "/verify-otp"
RESET_PASSWORD_ROUTE = "/reset-password"


class AuthService:
    def __init__(
        self,
        gateway: AuthGateway,
        session: SessionContext,
        navigator: Navigator,
        toaster: Toaster,
    ) -> None:
        self.gateway = gateway
        self.session = session
        self.navigator = navigator
        self.toaster = toaster

    async def login(self, form: LoginForm) -> Result[str]:
        """Sign in and return the new token."""
        result = await self.gateway.login(form.phone, form.password)
        if isinstance(result, Err):
            self.toaster.error("Login failed", result.message)
            return result

        signed_in = result.data
        self.session.sign_in(signed_in.access_token, signed_in.data)
        if signed_in.data is None:
            # The login response doesn't always embed the profile
            profile = await self.gateway.me()
            if isinstance(profile, Ok):
                self.session.user = profile.data
            else:
                logger.warning("profile_fetch_failed", message=profile.message)
        logger.info("admin_logged_in", user_id=(self.session.user or {}).get("id"))
        self.navigator.redirect(HOME_ROUTE)
        return Ok(signed_in.access_token)

    async def logout(self) -> None:
        if self.session.token:
            result = await self.gateway.logout()
            if isinstance(result, Err):
                # The local session is cleared either way
                logger.warning("logout_call_failed", message=result.message)
        self.session.sign_out()
        self.navigator.redirect(LOGIN_ROUTE)

    async def forgot_password(self, form: ForgotPasswordForm) -> bool:
        result = await self.gateway.forgot_password(form.phone)
        if isinstance(result, Err):
            self.toaster.error("Error", result.message)
            return False
        self.toaster.success("Code sent", result.data)
        self.navigator.redirect(_with_phone(VERIFY_OTP_ROUTE, form.phone))
        return True

    async def verify_otp(self, form: VerifyOtpForm) -> bool:
        result = await self.gateway.verify_otp(form.phone, form.otp)
        if isinstance(result, Err):
            self.toaster.error("Error", result.message)
            return False
        self.navigator.redirect(_with_phone(RESET_PASSWORD_ROUTE, form.phone))
        return True

    async def reset_password(self, form: ResetPasswordForm) -> bool:
        result = await self.gateway.reset_password(
            form.phone, form.password, form.password_confirmation
        )
        if isinstance(result, Err):
            self.toaster.error("Error", result.message)
            return False
        self.toaster.success("Password changed", result.data)
        self.navigator.redirect(LOGIN_ROUTE)
        return True


def _with_phone(route: str, phone: str) -> str:
    return f"{route}?{urlencode({'phone': phone})}"
