"""Product image routes: serve stored images and accept uploads."""

from typing import Annotated

from fastapi import APIRouter, Depends, File, UploadFile, status
from fastapi.responses import FileResponse

from shop.core.config import Settings, get_settings
from shop.core.exceptions import ValidationFailure
from shop.schemas.files import FileUploadResponse
from shop.services.files import (
    UPLOAD_REJECTED_MESSAGE,
    get_static_product_image,
    save_product_image,
)

router = APIRouter()


@router.get("/product/{image_name}")
def get_product_image(
    image_name: str,
    settings: Annotated[Settings, Depends(get_settings)],
) -> FileResponse:
    """Return the stored image bytes. 400 if the image does not exist."""
    path = get_static_product_image(image_name, settings)
    return FileResponse(path)


@router.post(
    "/product",
    response_model=FileUploadResponse,
    status_code=status.HTTP_201_CREATED,
)
async def upload_product_image(
    settings: Annotated[Settings, Depends(get_settings)],
    file: Annotated[UploadFile | None, File()] = None,
) -> FileUploadResponse:
    """
    Accept a multipart `file` field with a jpg, jpeg, png or gif image.
    Returns the absolute URL under HOST_API where the image is served.
    """
    if file is None:
        raise ValidationFailure(UPLOAD_REJECTED_MESSAGE)
    content = await file.read()
    secure_url = save_product_image(file.filename, content, settings)
    return FileUploadResponse(secure_url=secure_url)
