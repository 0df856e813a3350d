import base64
import binascii
import io
import logging
import re

from PIL import Image as PILImage
from PIL import UnidentifiedImageError
from sqlalchemy.orm import Session

from immoauto.core.config import get_settings
from immoauto.core.errors import ForbiddenError, NotFoundError, ValidationError
from immoauto.models.listing import Image
from immoauto.models.user import User

logger = logging.getLogger(__name__)

# Pillow format name -> MIME type served back to clients.
FORMAT_MIME_TYPES = {"JPEG": "image/jpeg", "PNG": "image/png", "GIF": "image/gif", "WEBP": "image/webp"}
ALLOWED_MIME_TYPES = tuple(FORMAT_MIME_TYPES.values())
DATA_URL_RE = re.compile(r"^data:(?P<mime>[\w/+.-]+);base64,(?P<data>.*)$", re.DOTALL)


def _detect_mime_type(raw: bytes) -> str:
    try:
        with PILImage.open(io.BytesIO(raw)) as img:
            img.verify()
            image_format = img.format
    except (UnidentifiedImageError, PILImage.DecompressionBombError, OSError, SyntaxError, ValueError):
        raise ValidationError("File is not a valid image")

    mime_type = FORMAT_MIME_TYPES.get(image_format or "")
    if mime_type is None:
        raise ValidationError(f"Unsupported file type: {image_format}")
    return mime_type


def decode_image(value: str) -> tuple[str, str]:
    """Validate a base64 image (bare or data URL) and return ``(mime_type, base64_data)``.

    The MIME type always comes from the decoded content; a data URL's declared
    type must agree with it.
    """
    settings = get_settings()
    declared = None
    payload = value.strip()
    match = DATA_URL_RE.match(payload)
    if match:
        declared = match.group("mime")
        payload = match.group("data")

    if declared is not None and declared not in ALLOWED_MIME_TYPES:
        raise ValidationError(f"Unsupported file type: {declared}")

    try:
        raw = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError):
        raise ValidationError("Image is not valid base64 data")

    if len(raw) > settings.MAX_IMAGE_BYTES:
        raise ValidationError(f"Image exceeds the maximum size of {settings.MAX_IMAGE_BYTES} bytes")

    mime_type = _detect_mime_type(raw)
    if declared is not None and declared != mime_type:
        raise ValidationError(f"Declared type {declared} does not match image content ({mime_type})")
    return mime_type, payload


def build_images(values: list[str], uploader_id: int | None = None) -> list[Image]:
    settings = get_settings()
    if len(values) > settings.MAX_IMAGES_PER_UPLOAD:
        raise ValidationError(f"At most {settings.MAX_IMAGES_PER_UPLOAD} images per request")
    images = []
    for value in values:
        mime_type, data = decode_image(value)
        images.append(Image(data=data, mime_type=mime_type, uploaded_by=uploader_id))
    return images


def upload_images(db: Session, values: list[str], uploader: User) -> list[Image]:
    images = build_images(values, uploader.id)
    db.add_all(images)
    db.commit()
    logger.info("user %s uploaded %d image(s)", uploader.id, len(images))
    return images


def get_image(db: Session, image_id: int) -> Image:
    image = db.get(Image, image_id)
    if not image:
        raise NotFoundError("Image not found")
    return image


def image_bytes(image: Image) -> bytes:
    return base64.b64decode(image.data)


def delete_image(db: Session, image_id: int, user: User) -> None:
    image = get_image(db, image_id)
    listing = image.property or image.vehicle
    owner_id = listing.user_id if listing is not None else image.uploaded_by
    if owner_id != user.id:
        raise ForbiddenError("You can only delete your own images")
    db.delete(image)
    db.commit()
