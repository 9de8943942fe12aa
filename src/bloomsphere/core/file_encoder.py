"""
Local file validation and base64 encoding for upload to the service.
"""
import asyncio
import base64
import mimetypes
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence, Union

from src.bloomsphere import config
from src.bloomsphere.exceptions import FileValidationError
from src.bloomsphere.models.api_models import FilePayload


@dataclass(frozen=True)
class EncodedFile:
    """A validated file ready to be embedded in a request body."""
    filename: str
    content: str
    mime_type: str
    size: int

    def to_payload(self) -> FilePayload:
        return FilePayload(
            filename=self.filename,
            content=self.content,
            mime_type=self.mime_type,
        )


def guess_mime_type(path: Union[str, Path]) -> Optional[str]:
    """Guess a file's MIME type from its name."""
    mime_type, _ = mimetypes.guess_type(str(path))
    return mime_type


def validate_file(
    path: Union[str, Path],
    allowed_mime_types: Sequence[str] = tuple(config.GENERATION_MIME_TYPES),
    file_type_description: str = config.GENERATION_FILE_DESCRIPTION,
    max_size_bytes: int = config.MAX_FILE_SIZE_BYTES
) -> str:
    """
    Check that a file may be uploaded.

    Args:
        path: Path to the local file
        allowed_mime_types: MIME types accepted for this upload
        file_type_description: Human-readable name of the accepted types
        max_size_bytes: Largest accepted file size

    Returns:
        The file's MIME type

    Raises:
        FileValidationError: If the file is missing, of a disallowed type or too large
    """
    file_path = Path(path)

    if not file_path.is_file():
        raise FileValidationError(f"File '{file_path}' not found.")

    mime_type = guess_mime_type(file_path)
    if mime_type not in allowed_mime_types:
        raise FileValidationError(
            f"Invalid file type. Please upload a {file_type_description} file.")

    if file_path.stat().st_size > max_size_bytes:
        raise FileValidationError(
            f"File is too large. Maximum size is {max_size_bytes // (1024 * 1024)}MB.")

    return mime_type


def encode_file(
    path: Union[str, Path],
    allowed_mime_types: Sequence[str] = tuple(config.GENERATION_MIME_TYPES),
    file_type_description: str = config.GENERATION_FILE_DESCRIPTION,
    max_size_bytes: int = config.MAX_FILE_SIZE_BYTES
) -> EncodedFile:
    """
    Validate a file and encode its bytes as base64 text.

    Returns:
        EncodedFile with the bare base64 content (no data-URL prefix)
    """
    mime_type = validate_file(
        path, allowed_mime_types, file_type_description, max_size_bytes)
    file_path = Path(path)
    try:
        data = file_path.read_bytes()
    except OSError as e:
        raise FileValidationError(f"Could not read file '{file_path}': {e.strerror or e}") from e

    return EncodedFile(
        filename=file_path.name,
        content=base64.b64encode(data).decode("ascii"),
        mime_type=mime_type,
        size=len(data),
    )


async def encode_file_async(
    path: Union[str, Path],
    allowed_mime_types: Sequence[str] = tuple(config.GENERATION_MIME_TYPES),
    file_type_description: str = config.GENERATION_FILE_DESCRIPTION,
    max_size_bytes: int = config.MAX_FILE_SIZE_BYTES
) -> EncodedFile:
    """Run encode_file() off the event loop thread."""
    return await asyncio.to_thread(
        encode_file, path, allowed_mime_types, file_type_description, max_size_bytes)
