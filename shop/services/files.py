"""Product image storage: resolve stored images and save uploads."""

import logging
import uuid
from pathlib import Path
from typing import TYPE_CHECKING

from shop.core.exceptions import ValidationFailure

if TYPE_CHECKING:
    from shop.core.config import Settings

logger = logging.getLogger(__name__)

ALLOWED_IMAGE_EXTENSIONS = frozenset({"jpg", "jpeg", "png", "gif"})
UPLOAD_REJECTED_MESSAGE = "Make sure that the file is an image"


def _extension(filename: str) -> str:
    if "." not in filename:
        return ""
    return filename.rsplit(".", 1)[1].lower()


def products_dir(settings: "Settings") -> Path:
    return Path(settings.STATIC_PRODUCTS_DIR)


def get_static_product_image(image_name: str, settings: "Settings") -> Path:
    """
    Return the path of a stored product image.

    Raises ValidationFailure when the name is not a bare image filename or the
    file does not exist.
    """
    not_found = ValidationFailure(f"No product found with image {image_name}")
    if (
        not image_name
        or Path(image_name).name != image_name
        or _extension(image_name) not in ALLOWED_IMAGE_EXTENSIONS
    ):
        raise not_found
    path = products_dir(settings) / image_name
    if not path.is_file():
        raise not_found
    return path


def save_product_image(
    filename: str | None,
    content: bytes,
    settings: "Settings",
) -> str:
    """
    Store an uploaded image under a generated name and return its public URL.

    Only the extension is checked; no image decoding or transcoding happens here.
    """
    if not filename or not content:
        raise ValidationFailure(UPLOAD_REJECTED_MESSAGE)
    ext = _extension(filename)
    if ext not in ALLOWED_IMAGE_EXTENSIONS:
        raise ValidationFailure(UPLOAD_REJECTED_MESSAGE)
    if len(content) > settings.MAX_UPLOAD_FILE_BYTES:
        raise ValidationFailure(
            f"File size must not exceed {settings.MAX_UPLOAD_FILE_BYTES // 1024} KB."
        )

    stored_name = f"{uuid.uuid4()}.{ext}"
    target_dir = products_dir(settings)
    target_dir.mkdir(parents=True, exist_ok=True)
    (target_dir / stored_name).write_bytes(content)
    logger.info("Product image stored: %s (%d bytes)", stored_name, len(content))
    return f"{settings.HOST_API}/files/product/{stored_name}"
