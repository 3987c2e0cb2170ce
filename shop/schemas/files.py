"""Schemas for product image upload."""

from pydantic import BaseModel, ConfigDict, Field


class FileUploadResponse(BaseModel):
    """Absolute URL of the stored image, built from HOST_API."""

    model_config = ConfigDict(populate_by_name=True)

    secure_url: str = Field(..., alias="secureUrl")
