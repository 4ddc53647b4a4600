"""File validation utilities for secure file uploads.

Security: Validates file content (magic bytes), enforces size limits,
and sanitizes filenames before they are echoed back to clients.
"""

import re
from typing import TYPE_CHECKING

import magic
import structlog

if TYPE_CHECKING:
    from fastapi import UploadFile

from app.core.errors import ValidationError

logger = structlog.get_logger()

# Maximum file size (10 MB)
MAX_FILE_SIZE_BYTES = 10 * 1024 * 1024

# Chunk size for reading files (64 KB)
CHUNK_SIZE_BYTES = 64 * 1024

PDF_MIME = "application/pdf"

# Resumes are accepted as PDF only
ALLOWED_MIMES: dict[str, str] = {
    PDF_MIME: "PDF",
}


async def read_file_with_size_limit(
    file: "UploadFile",
    max_size: int = MAX_FILE_SIZE_BYTES,
) -> bytes:
    """Read file content with size limit to prevent DoS.

    Args:
        file: UploadFile from FastAPI.
        max_size: Maximum allowed file size in bytes.

    Returns:
        File content as bytes.

    Raises:
        ValidationError: If file exceeds size limit.
    """
    content = b""
    total_size = 0

    while True:
        chunk = await file.read(CHUNK_SIZE_BYTES)
        if not chunk:
            break
        total_size += len(chunk)
        if total_size > max_size:
            raise ValidationError(
                message=f"File too large. Maximum size: {max_size // (1024 * 1024)}MB",
                details=[{"field": "file", "error": "FILE_TOO_LARGE"}],
            )
        content += chunk

    return content


def detect_mime_type(content: bytes, filename: str) -> str | None:
    """Detect the MIME type of file content using magic bytes.

    Args:
        content: File binary content.
        filename: Original filename (for log context only).

    Returns:
        The detected MIME type if it is in ALLOWED_MIMES, None otherwise.
    """
    detected_mime = magic.from_buffer(content, mime=True)

    if detected_mime not in ALLOWED_MIMES:
        # Log detected MIME for server-side debugging; do NOT expose to client
        logger.warning(
            "File content validation failed",
            detected_mime=detected_mime,
            filename=filename,
        )
        return None

    return detected_mime


def sanitize_filename(filename: str, max_length: int = 200) -> str:
    """Sanitize an uploaded filename for storage and display.

    Removes characters that could cause header injection or break JSON
    consumers, and bounds the length.

    Args:
        filename: Original filename.
        max_length: Maximum allowed filename length.

    Returns:
        Sanitized filename.
    """
    # Quotes, newlines, carriage returns, backslashes, semicolons
    safe = re.sub(r'["\r\n\\;]', "", filename)

    # Control characters
    safe = re.sub(r"[\x00-\x1f\x7f]", "", safe)

    if len(safe) > max_length:
        # Preserve extension if present
        if "." in safe:
            name, ext = safe.rsplit(".", 1)
            ext = f".{ext}"
            max_name_length = max_length - len(ext)
            safe = name[:max_name_length] + ext
        else:
            safe = safe[:max_length]

    if not safe:
        safe = "resume.pdf"

    return safe
