"""Create/edit and delete-confirmation dialogs.

EditDialog validates its form client-side, makes exactly one create or
update call, and on success reports the saved entity to its owner (usually
ListController.on_saved, which refetches). On failure it stays open with the
server message toasted so the input can be corrected.

Files follow a two-step protocol: ``attach_image`` uploads the file right
away and writes the stored filename into the form values, and that filename
is what the create/update payload carries. Images uploaded by a dialog that
is then abandoned are left on the server; they are only logged.
"""

from collections.abc import Awaitable, Callable, Mapping
from enum import StrEnum
from typing import Any, Protocol

from pydantic import BaseModel

from sawa_admin.controllers.toasts import Toaster
from sawa_admin.exceptions import FormValidationError
from sawa_admin.gateways.uploads import UploadsGateway
from sawa_admin.logging import get_logger
from sawa_admin.schemas.common import Form
from sawa_admin.schemas.result import Err, Ok, Result

logger = get_logger(__name__)

type SavedCallback[T] = Callable[[T], Awaitable[Any]]


def merge_values(current: Mapping[str, Any], changes: Mapping[str, Any]) -> dict[str, Any]:
    """Apply ``changes`` on top of ``current``, merging nested mappings key by key.

    A partial edit such as ``{"name": {"en": "Car park"}}`` keeps the stored
    ``name.ar``; any non-mapping value replaces what was there.
    """
    merged = dict(current)
    for key, value in changes.items():
        existing = merged.get(key)
        if isinstance(value, Mapping) and isinstance(existing, Mapping):
            merged[key] = merge_values(existing, value)
        else:
            merged[key] = value
    return merged


class EditableSource[T](Protocol):
    label: str

    async def create(
        self, payload: Mapping[str, Any], files: Mapping[str, Any] | None = None
    ) -> Result[T]: ...

    async def update(
        self, entity_id: int, payload: Mapping[str, Any], files: Mapping[str, Any] | None = None
    ) -> Result[T]: ...


class DeletableSource(Protocol):
    label: str

    async def delete(self, entity_id: int) -> Result[None]: ...


class DialogMode(StrEnum):
    CREATE = "create"
    EDIT = "edit"


class EditDialog[F: Form, T: BaseModel]:
    def __init__(
        self,
        form: type[F],
        gateway: EditableSource[T],
        toaster: Toaster,
        *,
        uploads: UploadsGateway | None = None,
        on_saved: SavedCallback[T] | None = None,
    ) -> None:
        self.form = form
        self.gateway = gateway
        self.toaster = toaster
        self.uploads = uploads
        self.on_saved = on_saved

        self.is_open = False
        self.mode = DialogMode.CREATE
        self.entity_id: int | None = None
        self.values: dict[str, Any] = {}
        self.field_errors: dict[str, str] = {}
        self.previews: dict[str, str] = {}
        self.submitting = False
        self._unsaved_uploads: list[str] = []
        self.error: str | None = None

    def open_create(self, initial: Mapping[str, Any] | None = None) -> None:
        self._reset()
        self.is_open = True
        self.mode = DialogMode.CREATE
        self.values = dict(initial or {})

    def open_edit(self, entity: T) -> None:
        self._reset()
        self.is_open = True
        self.mode = DialogMode.EDIT
        self.entity_id = entity.id  # type: ignore[attr-defined]
        self.values = self.form.from_entity(entity)

    def close(self) -> None:
        if self._unsaved_uploads:
            logger.warning("orphaned_upload", images=list(self._unsaved_uploads))
        self._reset()

    def _reset(self) -> None:
        self.is_open = False
        self.entity_id = None
        self.values = {}
        self.field_errors = {}
        self.previews = {}
        self.submitting = False
        self._unsaved_uploads = []
        self.error = None

    async def attach_image(
        self,
        field: str,
        filename: str,
        content: bytes,
        *,
        folder: str | None = None,
        content_type: str = "application/octet-stream",
    ) -> bool:
        """Upload a picked file and reference its stored name from ``field``."""
        if self.uploads is None:
            raise RuntimeError("dialog was created without an uploads gateway")
        result = await self.uploads.upload_image(filename, content, folder, content_type)
        if isinstance(result, Err):
            self.toaster.error("Upload failed", result.message)
            return False
        self.values[field] = result.data.image_name
        if result.data.image_url:
            self.previews[field] = result.data.image_url
        self._unsaved_uploads.append(result.data.image_name)
        return True

    async def submit(self, values: Mapping[str, Any] | None = None) -> T | None:
        """Validate and save; returns the saved entity, or None when it stays open."""
        if not self.is_open:
            return None
        if self.submitting:
            logger.info("submit_ignored_in_flight", dialog=self.gateway.label)
            return None
        if values:
            self.values = merge_values(self.values, values)

        try:
            form = self.form.validate_values(self.values)
        except FormValidationError as exc:
            self.field_errors = exc.fields
            return None
        self.field_errors = {}

        self.submitting = True
        try:
            if self.mode is DialogMode.EDIT and self.entity_id is not None:
                result = await self.gateway.update(self.entity_id, form.to_payload())
            else:
                result = await self.gateway.create(form.to_payload())
        finally:
            self.submitting = False

        match result:
            case Err(message=message):
                self.error = message
                self.toaster.error("Error", message)
                return None
            case Ok(data=saved):
                verb = "updated" if self.mode is DialogMode.EDIT else "created"
                self.toaster.success("Saved", f"The {self.gateway.label} was {verb} successfully")
                logger.info("dialog_saved", dialog=self.gateway.label, mode=self.mode.value)
                self._unsaved_uploads = []
                self.close()
                if self.on_saved is not None:
                    await self.on_saved(saved)
                return saved
        return None


class DeleteState(StrEnum):
    CLOSED = "closed"
    OPEN = "open"
    DELETING = "deleting"


class DeleteDialog:
    """closed -> open -> (confirm -> deleting -> closed | cancel -> closed)."""

    def __init__(
        self,
        gateway: DeletableSource,
        toaster: Toaster,
        *,
        on_deleted: SavedCallback[int] | None = None,
    ) -> None:
        self.gateway = gateway
        self.toaster = toaster
        self.on_deleted = on_deleted
        self.state = DeleteState.CLOSED
        self.target_id: int | None = None
        self.error: str | None = None

    def open(self, entity_id: int) -> None:
        self.state = DeleteState.OPEN
        self.target_id = entity_id
        self.error = None

    def cancel(self) -> None:
        self.state = DeleteState.CLOSED
        self.target_id = None

    async def confirm(self) -> bool:
        if self.state is not DeleteState.OPEN or self.target_id is None:
            return False
        entity_id = self.target_id
        self.state = DeleteState.DELETING
        result = await self.gateway.delete(entity_id)
        self.state = DeleteState.CLOSED
        self.target_id = None

        if isinstance(result, Err):
            self.error = result.message
            self.toaster.error("Error", result.message)
            return False
        self.toaster.success("Deleted", f"The {self.gateway.label} was deleted")
        logger.info("entity_deleted", entity=self.gateway.label, entity_id=entity_id)
        if self.on_deleted is not None:
            await self.on_deleted(entity_id)
        return True
