from pydantic import Field

from immoauto.schemas.common import CamelModel


class UploadRequest(CamelModel):
    images: list[str] = Field(min_length=1)


class UploadedImage(CamelModel):
    id: int
    mime_type: str
