"""
Envelope serializer: versioned receipt data <-> URL-safe token.

The token is the only storage the application has, so decoding validates the
structure before anything reads it, and every failure collapses into a single
InvalidReceiptError at the boundary.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Union
import json
import logging
import math

from pydantic import BaseModel

from chipin.services import codec_service
from chipin.services.exceptions import (
    CorruptedDataError,
    DecodeError,
    EncodeError,
    InvalidReceiptError,
    MissingDataError,
    MissingFieldsError,
    UnsupportedVersionError,
)

logger = logging.getLogger(__name__)

ENVELOPE_VERSION = 1


class DecodeFailure(str, Enum):
    """Why a token was rejected."""
    MISSING_DATA = "missing_data"
    CORRUPTED_DATA = "corrupted_data"
    UNSUPPORTED_VERSION = "unsupported_version"
    MISSING_FIELDS = "missing_fields"


FAILURE_ERRORS = {
    DecodeFailure.MISSING_DATA: MissingDataError,
    DecodeFailure.CORRUPTED_DATA: CorruptedDataError,
    DecodeFailure.UNSUPPORTED_VERSION: UnsupportedVersionError,
    DecodeFailure.MISSING_FIELDS: MissingFieldsError,
}


@dataclass(frozen=True)
class DecodeResult:
    """Outcome of inspect_token(): either an envelope or a failure kind."""
    envelope: Optional[Dict[str, Any]] = None
    failure: Optional[DecodeFailure] = None
    detail: str = ""

    @property
    def ok(self) -> bool:
        return self.failure is None

    def error(self):
        """Specific diagnostic exception for a failed result."""
        return FAILURE_ERRORS[self.failure](self.detail)


def _reject_constant(name: str):
    raise ValueError(f"Non-standard JSON constant {name}")


def _parse_finite_float(text: str) -> float:
    number = float(text)
    if not math.isfinite(number):
        raise ValueError(f"Number out of range: {text}")
    return number


def _parse_bounded_int(text: str) -> int:
    number = int(text)
    try:
        float(number)
    except OverflowError:
        raise ValueError(f"Number out of range: {text[:20]}...")
    return number


def encode(envelope: Union[Mapping[str, Any], BaseModel]) -> str:
    """
    Serialize an envelope to a token.

    Raises EncodeError if the envelope holds values JSON cannot represent
    (NaN, infinities, arbitrary objects).
    """
    data = envelope.model_dump() if isinstance(envelope, BaseModel) else envelope
    try:
        text = json.dumps(data, ensure_ascii=False, allow_nan=False, separators=(",", ":"))
    except (TypeError, ValueError) as e:
        logger.error(f"Encoding error: {e}")
        raise EncodeError(f"Receipt cannot be encoded: {e}") from e
    return codec_service.encode(text.encode("utf-8"))


def _check_structure(data: Any) -> DecodeResult:
    if not isinstance(data, dict):
        return DecodeResult(failure=DecodeFailure.CORRUPTED_DATA, detail="Invalid data structure")

    version = data.get("v")
    if isinstance(version, bool) or version != ENVELOPE_VERSION:
        return DecodeResult(
            failure=DecodeFailure.UNSUPPORTED_VERSION,
            detail=f"Unsupported version: {version!r}",
        )

    receipt = data.get("receipt")
    if not isinstance(receipt, dict) or not isinstance(receipt.get("participants"), list):
        return DecodeResult(failure=DecodeFailure.MISSING_FIELDS, detail="Missing required fields")

    return DecodeResult(envelope=data)


def inspect_token(token: Optional[str]) -> DecodeResult:
    """Decode a token without raising; the result names the failure kind."""
    if not token:
        return DecodeResult(failure=DecodeFailure.MISSING_DATA, detail="No receipt data provided")

    try:
        raw = codec_service.decode(token)
    except DecodeError as e:
        return DecodeResult(failure=DecodeFailure.CORRUPTED_DATA, detail=str(e))

    try:
        data = json.loads(
            raw.decode("utf-8"),
            parse_constant=_reject_constant,
            parse_float=_parse_finite_float,
            parse_int=_parse_bounded_int,
        )
    except (UnicodeDecodeError, ValueError, RecursionError) as e:
        return DecodeResult(failure=DecodeFailure.CORRUPTED_DATA, detail=f"Invalid JSON payload: {e}")

    return _check_structure(data)


def decode(token: Optional[str]) -> Dict[str, Any]:
    """
    Decode a token into its envelope.

    The envelope is returned exactly as encoded; derived fields are not
    recomputed. Any failure raises InvalidReceiptError.
    """
    result = inspect_token(token)
    if not result.ok:
        logger.warning(f"Decoding error ({result.failure.value}): {result.detail}")
        raise InvalidReceiptError(kind=result.failure) from result.error()
    return result.envelope


def build_envelope(receipt: Mapping[str, Any], lang: str) -> Dict[str, Any]:
    """Wrap a computed receipt in a current-version envelope."""
    return {"v": ENVELOPE_VERSION, "lang": lang, "receipt": dict(receipt)}
