"""Image upload gateway.

First half of the two-step file protocol: a file is uploaded as soon as it
is picked, and the stored ``image_name`` returned here is what the later
create/update payload carries.
"""

from pydantic import ValidationError

from sawa_admin.client import ApiClient
from sawa_admin.gateways.base import ApiGateway, logger
from sawa_admin.schemas.result import Err, Ok, Result
from sawa_admin.schemas.upload import UploadedImage

UPLOAD_PATH = "/general/images/upload"


class UploadsGateway(ApiGateway):
    name = "uploads"

    def __init__(self, client: ApiClient, default_folder: str = "listings") -> None:
        super().__init__(client)
        self.default_folder = default_folder

    async def upload_image(
        self,
        filename: str,
        content: bytes,
        folder: str | None = None,
        content_type: str = "application/octet-stream",
    ) -> Result[UploadedImage]:
        failure = "Failed to upload image"
        folder = folder or self.default_folder
        body = await self._send(
            "POST",
            UPLOAD_PATH,
            failure=failure,
            data={"folder": folder},
            files={"image": (filename, content, content_type)},
        )
        if isinstance(body, Err):
            return body
        try:
            image = UploadedImage.model_validate(body.get("data"))
        except ValidationError:
            logger.warning("upload_unexpected_shape", filename=filename)
            return Err(failure)
        logger.info("image_uploaded", image_name=image.image_name, folder=folder)
        return Ok(image)
