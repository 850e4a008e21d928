"""
Receipt routes: validate, preview, create and open share links.
"""
from fastapi import APIRouter, HTTPException, status
from pydantic import ValidationError
from typing import Any, Dict, Optional
import logging
import math

from chipin.core.i18n import get_catalog, is_supported
from chipin.core.utils import format_error
from chipin.schemas.receipt import (
    Envelope,
    OpenLinkRequest,
    PreviewResponse,
    ReceiptRequest,
    ShareLinkResponse,
    SummaryResponse,
    ValidationResult,
)
from chipin.services import envelope_service
from chipin.services.exceptions import EncodeError, InvalidReceiptError, INVALID_RECEIPT_MESSAGE
from chipin.services.link_service import build_share_links, extract_token
from chipin.services.split_service import build_summary, calculate_receipt
from chipin.services.validation_service import validate_receipt

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/receipts", tags=["receipts"])


def open_token(token: str) -> Dict[str, Any]:
    """
    Decode a token and check it against the Envelope schema.

    Returns the envelope exactly as stored in the token. Any failure is
    reported with the same generic 400 response.
    """
    try:
        data = envelope_service.decode(token)
        Envelope.model_validate(data)
        return data
    except InvalidReceiptError:
        pass
    except ValidationError as e:
        logger.warning(f"Decoded envelope does not match schema: {e.error_count()} errors")

    raise HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail=format_error(INVALID_RECEIPT_MESSAGE)
    )


def publish(envelope: Dict[str, Any]) -> ShareLinkResponse:
    """Encode an envelope and build its share links."""
    try:
        token = envelope_service.encode(envelope)
    except EncodeError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=format_error("Receipt could not be encoded", str(e))
        )

    links = build_share_links(token)
    return ShareLinkResponse(token=token, envelope=envelope, **links)


@router.post("/validate", response_model=ValidationResult)
async def validate(payload: ReceiptRequest):
    """Validate a receipt without calculating it."""
    errors = validate_receipt(payload.receipt, get_catalog(payload.lang))
    return ValidationResult(valid=not errors, errors=errors)


@router.post("/preview", response_model=PreviewResponse)
async def preview(payload: ReceiptRequest):
    """Calculate totals for a receipt that is still being edited."""
    calculated = calculate_receipt(payload.receipt)
    if not math.isfinite(calculated["finalTotal"]):
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=format_error("Receipt totals are not finite")
        )

    catalog = get_catalog(payload.lang)
    return PreviewResponse(
        receipt=calculated,
        final_total_display=catalog.format_currency(calculated["finalTotal"], calculated["currency"])
    )


@router.post("", response_model=ShareLinkResponse, status_code=status.HTTP_201_CREATED)
async def create_receipt(payload: ReceiptRequest):
    """Validate, calculate and encode a receipt into a share link."""
    catalog = get_catalog(payload.lang)
    errors = validate_receipt(payload.receipt, catalog)
    if errors:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=format_error("Receipt is invalid", errors)
        )

    calculated = calculate_receipt(payload.receipt)
    response = publish(envelope_service.build_envelope(calculated, catalog.lang))

    logger.info(
        f"Created receipt link for {len(calculated['participants'])} participants "
        f"({len(response.token)} chars)"
    )
    return response


@router.post("/open", response_model=Envelope)
async def open_link(payload: OpenLinkRequest):
    """Open a share link (full URL, fragment or bare token)."""
    return open_token(extract_token(payload.link))


@router.get("/{token}", response_model=Envelope)
async def get_receipt(token: str):
    """Decode a receipt token. Nothing is recalculated."""
    return open_token(token)


@router.get("/{token}/summary", response_model=SummaryResponse)
async def get_receipt_summary(token: str, lang: Optional[str] = None):
    """Printable receipt text, in the receipt's language unless overridden."""
    envelope = open_token(token)
    catalog = get_catalog(lang or envelope["lang"])
    return SummaryResponse(
        lang=catalog.lang,
        dir=catalog.direction,
        summary=build_summary(envelope["receipt"], catalog)
    )


@router.put("/{token}/lang/{lang}", response_model=ShareLinkResponse)
async def switch_language(token: str, lang: str):
    """Re-encode a receipt with a different display language."""
    if not is_supported(lang):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=format_error(f"Unsupported language: {lang}")
        )

    envelope = open_token(token)
    envelope["lang"] = lang
    logger.debug(f"Switched receipt language to '{lang}'")
    return publish(envelope)
