"""
Image upload to the media host (Cloudinary upload API)
"""

import hashlib
import logging
import time
from typing import Dict, Optional

import httpx

from app.core.config import settings
from app.core.errors import ImageUploadError

logger = logging.getLogger(__name__)

class ImageUploadService:
    """Uploads event images and returns their secure URL"""

    def __init__(
        self,
        cloud_name: Optional[str] = None,
        api_key: Optional[str] = None,
        api_secret: Optional[str] = None,
        folder: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.cloud_name = cloud_name or settings.CLOUDINARY_CLOUD_NAME
        self.api_key = api_key or settings.CLOUDINARY_API_KEY
        self.api_secret = api_secret or settings.CLOUDINARY_API_SECRET
        self.folder = folder or settings.CLOUDINARY_UPLOAD_FOLDER
        self.base_url = (base_url or settings.CLOUDINARY_UPLOAD_URL).rstrip("/")
        self.timeout = timeout or settings.UPLOAD_TIMEOUT
        self.transport = transport

    @property
    def upload_url(self) -> str:
        return f"{self.base_url}/{self.cloud_name}/image/upload"

    @staticmethod
    def sign(params: Dict[str, str], api_secret: str) -> str:
        """SHA-1 signature over the sorted upload parameters plus the secret"""
        payload = "&".join(f"{key}={params[key]}" for key in sorted(params))
        return hashlib.sha1(f"{payload}{api_secret}".encode("utf-8")).hexdigest()

    async def upload(self, content: bytes, filename: str, content_type: Optional[str] = None) -> str:
        """Upload image bytes; returns the secure URL"""
        if not (self.cloud_name and self.api_key and self.api_secret):
            raise ImageUploadError("media host credentials are not configured")

        params = {"folder": self.folder, "timestamp": str(int(time.time()))}
        data = {
            **params,
            "api_key": self.api_key,
            "signature": self.sign(params, self.api_secret),
        }
        files = {"file": (filename, content, content_type or "application/octet-stream")}

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.post(self.upload_url, data=data, files=files)
                response.raise_for_status()
                result = response.json()
        except httpx.HTTPStatusError as exc:
            logger.error(f"Image upload rejected with status {exc.response.status_code}: {exc.response.text}")
            raise ImageUploadError(f"status {exc.response.status_code}") from exc
        except (httpx.HTTPError, ValueError) as exc:
            logger.error(f"Image upload failed: {exc}")
            raise ImageUploadError(str(exc)) from exc

        secure_url = result.get("secure_url") if isinstance(result, dict) else None
        if not secure_url:
            raise ImageUploadError("response did not include secure_url")

        logger.info(f"Image uploaded: {secure_url}")
        return secure_url
