"""
Pydantic schemas for Receipt, Participant and Envelope.
"""
from pydantic import BaseModel, Field
from typing import Dict, List, Optional, Union

from chipin.core.config import settings
from chipin.core.i18n import default_language

# Form values arrive as numbers or as whatever the user typed.
RawNumber = Union[float, str, None]


class ParticipantInput(BaseModel):
    """Participant as entered on the form."""
    name: Optional[str] = ""
    desc: Optional[str] = ""
    base: RawNumber = 0

    model_config = {"extra": "allow"}


class ReceiptInput(BaseModel):
    """Receipt as entered on the form, before validation."""
    title: str = ""
    paidBy: str = ""
    currency: str = Field(default_factory=lambda: settings.DEFAULT_CURRENCY)
    taxPercent: RawNumber = 0
    tipValue: RawNumber = 0
    note: Optional[str] = ""
    participants: List[ParticipantInput] = []

    model_config = {"extra": "allow"}


class ParticipantShare(BaseModel):
    """Participant with calculated shares."""
    name: Optional[str] = ""
    desc: Optional[str] = None
    base: float
    taxShare: float
    tipShare: float
    finalOwed: float
    shareRatio: float

    model_config = {"extra": "allow"}


class ComputedReceipt(BaseModel):
    """Receipt with totals and per-participant shares."""
    title: str = ""
    paidBy: str = ""
    currency: str = ""
    taxPercent: float
    tipValue: float
    note: Optional[str] = None
    baseSum: float
    taxValue: float
    finalTotal: float
    participants: List[ParticipantShare]

    model_config = {"extra": "allow"}


class Envelope(BaseModel):
    """Versioned payload carried by a share token."""
    v: int
    lang: str
    receipt: ComputedReceipt


class ReceiptRequest(BaseModel):
    """Schema for validate/preview/create requests."""
    lang: str = Field(default_factory=default_language)
    receipt: ReceiptInput


class OpenLinkRequest(BaseModel):
    """Schema for opening a share link."""
    link: str


class ValidationResult(BaseModel):
    """Schema for validation response."""
    valid: bool
    errors: List[str] = []


class PreviewResponse(BaseModel):
    """Schema for live total preview."""
    receipt: ComputedReceipt
    final_total_display: str


class ShareLinkResponse(BaseModel):
    """Schema for a created or re-encoded share link."""
    token: str
    share_url: str
    receipt_url: str
    envelope: Envelope


class SummaryResponse(BaseModel):
    """Schema for printable receipt summary."""
    lang: str
    dir: str
    summary: str


class LanguageResponse(BaseModel):
    """Schema for a supported language."""
    code: str
    name: str
    dir: str


class CatalogResponse(LanguageResponse):
    """Schema for a language's message catalog."""
    messages: Dict[str, str]
