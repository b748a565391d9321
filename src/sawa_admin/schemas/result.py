"""Uniform outcome of every gateway call.

The marketplace API answers with ``{success, data, message, meta}`` but not
always consistently, and transport failures have no body at all. Gateways
fold all of it into one discriminated union so callers branch on
``status`` (or ``isinstance``) instead of catching exceptions::

    result = await gateways.features.get(3)
    match result:
        case Ok(data=feature):
            ...
        case Err(message=message):
            toaster.error(message)
"""

from dataclasses import dataclass
from typing import Literal

from sawa_admin.schemas.pagination import PageMeta


@dataclass(frozen=True)
class Ok[T]:
    """Successful call; ``meta`` is set for list calls only."""

    data: T
    meta: PageMeta | None = None
    status: Literal["ok"] = "ok"

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Err:
    """Failed call: business error, HTTP error or transport error."""

    message: str
    status_code: int | None = None
    status: Literal["error"] = "error"

    @property
    def ok(self) -> bool:
        return False

    @property
    def not_found(self) -> bool:
        return self.status_code == 404

    @property
    def unauthorized(self) -> bool:
        return self.status_code == 401


type Result[T] = Ok[T] | Err
