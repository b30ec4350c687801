"""S3 / MinIO presigned-URL helpers for store images.

All keys MUST start with ``{owner_id}/``. This is enforced in
``build_owner_key`` and never accepted from the client.
"""

import logging
import os
import uuid
from urllib.parse import quote

import boto3
from botocore.config import Config

from storefront.core.config import settings

logger = logging.getLogger(__name__)

PRESIGN_UPLOAD_EXPIRES = 900  # 15 min
MAX_UPLOAD_SIZE = 5 * 1024 * 1024  # 5 MB

ALLOWED_CONTENT_TYPES = frozenset(
    {
        "image/jpeg",
        "image/png",
        "image/webp",
        "image/gif",
    }
)

IMAGE_FOLDERS = frozenset({"payment", "products", "store"})

_minio_cred_warned = False


def _get_s3_client():  # type: ignore[no-untyped-def]
    global _minio_cred_warned  # noqa: PLW0603
    config_kwargs: dict = {"signature_version": "s3v4"}
    if settings.S3_ENDPOINT_URL:
        config_kwargs["s3"] = {"addressing_style": "path"}
    kwargs: dict = {
        "service_name": "s3",
        "region_name": settings.AWS_REGION,
        "config": Config(**config_kwargs),
    }
    if settings.S3_ENDPOINT_URL:
        kwargs["endpoint_url"] = settings.S3_ENDPOINT_URL
    if settings.AWS_ACCESS_KEY_ID and settings.AWS_SECRET_ACCESS_KEY:
        kwargs["aws_access_key_id"] = settings.AWS_ACCESS_KEY_ID
        kwargs["aws_secret_access_key"] = settings.AWS_SECRET_ACCESS_KEY

    # MinIO endpoint combined with real AWS creds signs URLs MinIO rejects
    if settings.S3_ENDPOINT_URL and not _minio_cred_warned:
        env_key = os.environ.get("AWS_ACCESS_KEY_ID", "")
        if env_key.startswith("AKIA") and (
            not settings.AWS_ACCESS_KEY_ID or settings.AWS_ACCESS_KEY_ID.startswith("AKIA")
        ):
            logger.warning(
                "S3_ENDPOINT_URL points to MinIO but AWS_ACCESS_KEY_ID looks like a "
                "real AWS key (AKIA...). Uploads will fail against MinIO."
            )
        _minio_cred_warned = True

    return boto3.client(**kwargs)


def safe_file_name(file_name: str) -> str:
    return quote(file_name.strip().replace(" ", "_"), safe="._-")


def build_owner_key(owner_id: uuid.UUID, folder: str, file_name: str) -> str:
    """Build an S3 key scoped to the owner: ``{owner_id}/{folder}/{uuid}-{safe_name}``."""
    if folder not in IMAGE_FOLDERS:
        raise ValueError(f"Unknown image folder '{folder}'")
    return f"{owner_id}/{folder}/{uuid.uuid4()}-{safe_file_name(file_name)}"


def public_url(key: str) -> str:
    """Public URL stored in ``payment_method_image`` / ``image_url`` columns."""
    if settings.S3_PUBLIC_BASE_URL:
        return f"{settings.S3_PUBLIC_BASE_URL.rstrip('/')}/{key}"
    if settings.S3_ENDPOINT_URL:
        return f"{settings.S3_ENDPOINT_URL.rstrip('/')}/{settings.S3_BUCKET}/{key}"
    return f"https://{settings.S3_BUCKET}.s3.{settings.AWS_REGION}.amazonaws.com/{key}"


def presign_put(
    key: str,
    content_type: str,
    expires: int = PRESIGN_UPLOAD_EXPIRES,
) -> str:
    """Generate a presigned PUT URL for uploading to S3."""
    client = _get_s3_client()
    return client.generate_presigned_url(
        "put_object",
        Params={
            "Bucket": settings.S3_BUCKET,
            "Key": key,
            "ContentType": content_type,
        },
        ExpiresIn=expires,
    )


def delete_object(key: str) -> None:
    client = _get_s3_client()
    client.delete_object(Bucket=settings.S3_BUCKET, Key=key)
