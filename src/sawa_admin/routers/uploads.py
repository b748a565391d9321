"""Image upload, the first step of saving any entity with a picture."""

from typing import Annotated

from fastapi import APIRouter, File, Form, UploadFile

from sawa_admin.dependencies import Context
from sawa_admin.exceptions import DomainError
from sawa_admin.schemas.result import Err
from sawa_admin.schemas.views import EntityView

router = APIRouter(tags=["uploads"])


@router.post("/uploads/images", response_model=EntityView, status_code=201)
async def upload_image(
    ctx: Context,
    image: Annotated[UploadFile, File()],
    folder: Annotated[str | None, Form()] = None,
) -> EntityView:
    """Forward the file to the marketplace API and return its stored name.

    The returned ``image_name`` goes into the entity's create/update body;
    ``image_url`` is for the preview only.
    """
    content = await image.read()
    result = await ctx.gateways.uploads.upload_image(
        image.filename or "image",
        content,
        folder,
        image.content_type or "application/octet-stream",
    )
    ctx.ensure_session()
    if isinstance(result, Err):
        raise DomainError(result.message)
    ctx.toaster.success("Image uploaded")
    return EntityView(data=result.data.model_dump(), toasts=ctx.toasts())
