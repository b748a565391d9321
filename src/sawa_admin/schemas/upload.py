from pydantic import BaseModel, model_validator


class UploadedImage(BaseModel):
    """Result of the image upload endpoint.

    ``image_name`` is what create/update payloads reference; ``image_url`` is
    only for previews.
    """

    image_name: str
    image_url: str | None = None

    @model_validator(mode="before")
    @classmethod
    def _from_bare_url(cls, value: object) -> object:
        # Older deployments answer with the URL alone
        if isinstance(value, str):
            return {"image_name": value.rsplit("/", 1)[-1], "image_url": value}
        return value
