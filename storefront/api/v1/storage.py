"""Presigned image upload endpoints."""

import logging

from botocore.exceptions import BotoCoreError, ClientError
from fastapi import APIRouter, Depends, HTTPException

from storefront.core.dependencies import get_current_user, require_role
from storefront.models.user import User
from storefront.schemas.common import Envelope
from storefront.schemas.storage import UploadUrlRequest, UploadUrlResponse
from storefront.services.storage import (
    IMAGE_FOLDERS,
    PRESIGN_UPLOAD_EXPIRES,
    build_owner_key,
    delete_object,
    presign_put,
    public_url,
    safe_file_name,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/upload-url", response_model=Envelope[UploadUrlResponse], status_code=201)
async def create_upload_url(
    body: UploadUrlRequest,
    user: User = Depends(get_current_user),
):
    """Generate a presigned PUT URL for an image.

    The client PUTs the file to ``upload_url`` and then stores ``public_url``
    as a product ``image_url`` or a ``payment_method_image``.
    """
    require_role("seller", user)

    key = build_owner_key(user.id, body.folder, body.file_name)
    upload_url = presign_put(key, body.content_type)

    return Envelope(
        data=UploadUrlResponse(
            upload_url=upload_url,
            public_url=public_url(key),
            key=key,
            expires_in=PRESIGN_UPLOAD_EXPIRES,
        )
    )


@router.delete("/images/{folder}/{file_name}", response_model=Envelope[None])
async def delete_image(
    folder: str,
    file_name: str,
    user: User = Depends(get_current_user),
):
    """Delete one of the owner's images. Keys outside the owner's prefix are unreachable."""
    require_role("seller", user)
    if folder not in IMAGE_FOLDERS:
        raise HTTPException(status_code=404, detail="Image not found")

    key = f"{user.id}/{folder}/{safe_file_name(file_name)}"
    try:
        delete_object(key)
    except (BotoCoreError, ClientError) as e:
        logger.error("Failed to delete %s: %s", key, e)
        raise HTTPException(status_code=502, detail="Failed to delete image") from e

    return Envelope(data=None, message="Image deleted")
