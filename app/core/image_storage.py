"""Supabase Storage upload for optimized images."""
import logging
import uuid

from supabase import Client

from app.config import settings
from app.core.errors import BackendOperationError
from app.core.images import WEBP_CONTENT_TYPE, WEBP_EXTENSION, optimize_image

logger = logging.getLogger(__name__)


class ImageStorage:
    def __init__(self, supabase: Client, bucket_name: str = None):
        self.supabase = supabase
        self.bucket_name = bucket_name or settings.case_images_bucket

    def build_path(self, user_id: str) -> str:
        """Namespaced by uploader with a random filename: <bucket>/<user_id>/<hex>.webp"""
        file_name = f"{uuid.uuid4().hex}.{WEBP_EXTENSION}"
        return f"{self.bucket_name}/{user_id}/{file_name}"

    def upload_image(self, file_content: bytes, user_id: str) -> str:
        """Optimize, upload and return the public URL of the stored object"""
        optimized = optimize_image(file_content)
        path = self.build_path(user_id)
        bucket = self.supabase.storage.from_(self.bucket_name)
        try:
            bucket.upload(
                path=path,
                file=optimized,
                file_options={"content-type": WEBP_CONTENT_TYPE},
            )
        except Exception as e:
            logger.error(f"Failed to upload {path}: {str(e)}")
            raise BackendOperationError(f"File upload failed: {str(e)}")

        public_url = bucket.get_public_url(path)
        if not public_url:
            raise BackendOperationError("Failed to retrieve public URL")
        logger.info(f"Uploaded image to {self.bucket_name}/{path}")
        return public_url
