"""S3-compatible object storage for attachments, stamps and letterheads"""

import logging

import boto3
from botocore.config import Config

from .config import (
    STORAGE_ACCESS_KEY_ID,
    STORAGE_BUCKET_NAME,
    STORAGE_ENDPOINT_URL,
    STORAGE_REGION,
    STORAGE_SECRET_ACCESS_KEY,
)

logger = logging.getLogger(__name__)

# Presigned URL expiration time (1 hour)
PRESIGNED_URL_EXPIRATION = 3600

# Image types rendered inline instead of downloaded
INLINE_EXTENSIONS = (".jpg", ".jpeg", ".png", ".webp", ".gif", ".svg", ".pdf")


def get_storage_client():
    """Create and return an S3 client for the configured bucket."""
    return boto3.client(
        "s3",
        endpoint_url=STORAGE_ENDPOINT_URL,
        aws_access_key_id=STORAGE_ACCESS_KEY_ID,
        aws_secret_access_key=STORAGE_SECRET_ACCESS_KEY,
        region_name=STORAGE_REGION,
        config=Config(signature_version="s3v4"),
    )


def generate_presigned_url(key: str, expiration: int = PRESIGNED_URL_EXPIRATION) -> str:
    """Generate a presigned URL for accessing a private object."""
    client = get_storage_client()

    params = {"Bucket": STORAGE_BUCKET_NAME, "Key": key}
    if key.lower().endswith(".svg"):
        params["ResponseContentType"] = "image/svg+xml"
    if key.lower().endswith(INLINE_EXTENSIONS):
        params["ResponseContentDisposition"] = "inline"

    try:
        url = client.generate_presigned_url("get_object", Params=params, ExpiresIn=expiration)
        logger.info(f"✅ Generated presigned URL for key: {key}")
        return url
    except Exception as e:
        logger.error(f"❌ Failed to generate presigned URL for key {key}: {e}")
        raise


def delete_object(key: str) -> None:
    """Remove an object from the bucket"""
    client = get_storage_client()
    try:
        client.delete_object(Bucket=STORAGE_BUCKET_NAME, Key=key)
        logger.info(f"🗑️ Deleted object from storage: {key}")
    except Exception as e:
        logger.error(f"❌ Failed to delete object {key}: {e}")
        raise
