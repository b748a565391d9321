"""Transient, non-blocking notifications shown to the admin."""

from collections import deque
from dataclasses import dataclass
from enum import StrEnum

from sawa_admin.logging import get_logger

logger = get_logger(__name__)


class ToastVariant(StrEnum):
    DEFAULT = "default"
    DESTRUCTIVE = "destructive"


@dataclass(frozen=True)
class Toast:
    title: str
    description: str | None = None
    variant: ToastVariant = ToastVariant.DEFAULT


class Toaster:
    """Keeps the newest ``limit`` toasts; older ones are dropped, not queued."""

    def __init__(self, limit: int = 1) -> None:
        self._toasts: deque[Toast] = deque(maxlen=limit)

    @property
    def toasts(self) -> list[Toast]:
        return list(self._toasts)

    def show(
        self,
        title: str,
        description: str | None = None,
        variant: ToastVariant = ToastVariant.DEFAULT,
    ) -> Toast:
        toast = Toast(title=title, description=description, variant=variant)
        self._toasts.append(toast)
        logger.info("toast", title=title, description=description, variant=variant.value)
        return toast

    def success(self, title: str, description: str | None = None) -> Toast:
        return self.show(title, description)

    def error(self, title: str, description: str | None = None) -> Toast:
        return self.show(title, description, ToastVariant.DESTRUCTIVE)

    def drain(self) -> list[Toast]:
        """Hand the current toasts to the caller and forget them."""
        toasts = list(self._toasts)
        self._toasts.clear()
        return toasts
