# backend/services/media_service.py
"""
Cloudinary gateway for company media.

Profiles only ever store the returned HTTPS URLs; this module is the single
place that talks to the object store. Gallery sections accept images,
certificate slots accept images or PDF.
"""
import hashlib
import logging
import os
import time
from typing import Dict, Any

import cloudinary
import cloudinary.uploader
from cloudinary.exceptions import Error as CloudinaryError
from pydantic.alias_generators import to_camel
from starlette.concurrency import run_in_threadpool

from config.settings import settings
from schemas.company import GALLERY_SECTIONS, CERTIFICATE_KEYS
from services.errors import InvalidArgument, ServiceUnavailable

logger = logging.getLogger(__name__)

IMAGE_EXTENSIONS = {".jpg", ".jpeg", ".png", ".gif", ".bmp", ".webp"}
DOCUMENT_EXTENSIONS = {".pdf"}

# upload kinds are the camelCase keys the profile uses
GALLERY_KINDS = tuple(to_camel(s) for s in GALLERY_SECTIONS)
CERTIFICATE_KINDS = tuple(to_camel(k) for k in CERTIFICATE_KEYS)
UPLOAD_KINDS = GALLERY_KINDS + CERTIFICATE_KINDS


def _is_valid_image_header(content: bytes) -> bool:
    if len(content) < 10:
        return False
    if content.startswith(b"\xff\xd8\xff"):                 # JPEG
        return True
    if content.startswith(b"\x89PNG\r\n\x1a\n"):            # PNG
        return True
    if content.startswith((b"GIF87a", b"GIF89a")):          # GIF
        return True
    if content.startswith(b"BM"):                           # BMP
        return True
    if content[8:12] == b"WEBP":                            # WebP
        return True
    return False


def _is_valid_pdf_header(content: bytes) -> bool:
    return content.startswith(b"%PDF-")


class MediaService:
    """Validates and uploads profile media to Cloudinary."""

    def __init__(self):
        self._configured = False

    def _configure(self):
        if self._configured:
            return
        if not settings.cloudinary_configured:
            raise ServiceUnavailable(
                "Media storage is not configured. Set CLOUDINARY_CLOUD_NAME, "
                "CLOUDINARY_API_KEY and CLOUDINARY_API_SECRET"
            )
        cloudinary.config(
            cloud_name=settings.cloudinary_cloud_name,
            api_key=settings.cloudinary_api_key,
            api_secret=settings.cloudinary_api_secret,
            secure=True,
        )
        self._configured = True

    def validate_file(self, content: bytes, filename: str, kind: str) -> str:
        """
        Check kind, extension, size and header. Returns the Cloudinary resource type.

        Raises:
            InvalidArgument: anything about the file is not acceptable.
        """
        if kind not in UPLOAD_KINDS:
            raise InvalidArgument(f"Unknown upload kind. Allowed: {', '.join(UPLOAD_KINDS)}")

        allowed = set(IMAGE_EXTENSIONS)
        if kind in CERTIFICATE_KINDS:
            allowed |= DOCUMENT_EXTENSIONS

        ext = os.path.splitext(filename or "")[1].lower()
        if ext not in allowed:
            raise InvalidArgument(
                f"Unsupported file type. Allowed types: {', '.join(sorted(allowed))}"
            )

        if not content:
            raise InvalidArgument("File is empty")
        if len(content) > settings.media_max_bytes:
            raise InvalidArgument(
                f"File exceeds {settings.media_max_bytes // (1024 * 1024)}MB"
            )

        if ext in DOCUMENT_EXTENSIONS:
            if not _is_valid_pdf_header(content):
                raise InvalidArgument("File is not a valid PDF")
            return "raw"
        if not _is_valid_image_header(content):
            raise InvalidArgument("File is not a valid image")
        return "image"

    def _public_id(self, company_id: int, kind: str, filename: str) -> str:
        stem = os.path.splitext(os.path.basename(filename))[0]
        digest = hashlib.md5(f"{stem}:{time.time()}".encode()).hexdigest()[:8]
        return f"company_{company_id}_{kind}_{digest}"

    async def upload_company_file(
        self, content: bytes, filename: str, company_id: int, kind: str
    ) -> Dict[str, Any]:
        resource_type = self.validate_file(content, filename, kind)
        self._configure()

        public_id = self._public_id(company_id, kind, filename)
        try:
            result = await run_in_threadpool(
                cloudinary.uploader.upload,
                content,
                public_id=public_id,
                folder=f"companies/{company_id}/{kind}",
                resource_type=resource_type,
            )
        except CloudinaryError as e:
            logger.error("Cloudinary upload failed for company %s: %s", company_id, e)
            raise ServiceUnavailable(f"Media upload failed: {e}")
        logger.info("Uploaded %s for company %s: %s", kind, company_id, result["public_id"])
        return {
            "url": result["secure_url"],
            "public_id": result["public_id"],
            "kind": kind,
            "bytes": result.get("bytes", len(content)),
        }


media_service = MediaService()
