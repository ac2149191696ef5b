import base64
import binascii
import re
from typing import NamedTuple

_DATA_URI_RE = re.compile(r"^data:(?P<mime>[\w.+-]+/[\w.+-]+);base64,(?P<data>.*)$", re.DOTALL)

ALLOWED_MIME_TYPES = frozenset({
    "image/jpeg",
    "image/png",
    "image/webp",
    "image/heic",
    "image/heif",
})


class ParsedImage(NamedTuple):
    label: str
    mime_type: str
    data: bytes


def parse_data_uri(uri: str, label: str = "") -> ParsedImage:
    """Decode a 'data:<mimetype>;base64,<data>' photo.

    Raises ValueError for malformed URIs, non-image types or bad base64.
    """
    match = _DATA_URI_RE.match(uri.strip())
    if not match:
        raise ValueError("Photo must be a base64 data URI")

    mime_type = match.group("mime").lower()
    if mime_type not in ALLOWED_MIME_TYPES:
        raise ValueError(f"Unsupported image type: {mime_type}")

    try:
        data = base64.b64decode(match.group("data"), validate=True)
    except (binascii.Error, ValueError):
        raise ValueError("Photo data is not valid base64")

    if not data:
        raise ValueError("Photo is empty")
    return ParsedImage(label=label, mime_type=mime_type, data=data)


def validate_size(data: bytes, max_mb: int) -> None:
    """Raise ValueError if the decoded photo exceeds max_mb."""
    if len(data) > max_mb * 1024 * 1024:
        raise ValueError(f"Photo too large. Max size: {max_mb}MB")
