"""
Base64url transcoding for receipt tokens.

Tokens use the URL-safe alphabet [A-Za-z0-9-_] without "=" padding so they
can be placed in a URL fragment as-is.
"""
import base64
import binascii

from chipin.services.exceptions import DecodeError


def encode(data: bytes) -> str:
    """Encode bytes as an unpadded base64url token."""
    token = base64.b64encode(data).decode("ascii")
    return token.replace("+", "-").replace("/", "_").rstrip("=")


def decode(token: str) -> bytes:
    """
    Decode an unpadded base64url token back into bytes.

    Raises DecodeError on characters outside the alphabet or on a length
    that no base64 input can have.
    """
    text = token.replace("-", "+").replace("_", "/")
    while len(text) % 4:
        text += "="
    try:
        return base64.b64decode(text, validate=True)
    except (binascii.Error, ValueError) as e:
        raise DecodeError(f"Invalid base64url token: {e}") from e
