# app/utils/share_code.py
"""
Schedule share codes: ``SB2.`` + base64url(JSON), no padding.

Older ``SB1.`` codes use the same body and are still accepted.
"""
import base64
import json

from pydantic import ValidationError

from app.schemas.share import SharePayload
from app.utils.exceptions import ShareCodeError

CURRENT_PREFIX = "SB2."
ACCEPTED_PREFIXES = ("SB1.", "SB2.")
MAX_CODE_LENGTH = 100_000


def _b64url_encode(raw: bytes) -> str:
    return base64.urlsafe_b64encode(raw).decode("ascii").rstrip("=")


def _b64url_decode(text: str) -> bytes:
    padded = text + "=" * (-len(text) % 4)
    return base64.urlsafe_b64decode(padded.encode("ascii"))


def encode_share(payload: SharePayload) -> str:
    body = json.dumps(payload.model_dump(mode="json"), ensure_ascii=False, separators=(",", ":"))
    return CURRENT_PREFIX + _b64url_encode(body.encode("utf-8"))


def decode_share(code: str) -> SharePayload:
    code = (code or "").strip()
    if len(code) > MAX_CODE_LENGTH:
        raise ShareCodeError("Share code is too long")
    if not code.startswith(ACCEPTED_PREFIXES):
        raise ShareCodeError('Invalid share code format. Code must start with "SB1." or "SB2."')

    try:
        data = json.loads(_b64url_decode(code[4:]).decode("utf-8"))
    except (ValueError, UnicodeDecodeError) as e:
        raise ShareCodeError("Failed to decode share code. Please check the code and try again.") from e

    try:
        return SharePayload.model_validate(data)
    except ValidationError as e:
        raise ShareCodeError("Invalid share code data format") from e
