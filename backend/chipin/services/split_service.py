"""
Split service for proportional tax and tip allocation.
"""
from typing import Any, Dict, List, Mapping, Union
import logging

from pydantic import BaseModel

from chipin.core.i18n import MessageCatalog
from chipin.core.utils import coerce_amount

logger = logging.getLogger(__name__)

# Keys calculate() derives; everything else on a record is carried forward.
RECEIPT_DERIVED_FIELDS = ("baseSum", "taxValue", "finalTotal")
PARTICIPANT_DERIVED_FIELDS = ("taxShare", "tipShare", "finalOwed", "shareRatio")


def _as_dict(record: Union[Mapping[str, Any], BaseModel, None]) -> Dict[str, Any]:
    if isinstance(record, BaseModel):
        return record.model_dump()
    if isinstance(record, Mapping):
        return dict(record)
    return {}


def calculate_receipt(receipt: Union[Mapping[str, Any], BaseModel]) -> Dict[str, Any]:
    """
    Calculate the split for a raw receipt.

    Tax and tip are allocated to participants in proportion to their base
    amount. Never fails: absent or non-numeric amounts count as 0. When the
    base sum is 0 nobody gets a share of tax or tip, but the tip is still
    part of finalTotal.
    """
    data = _as_dict(receipt)
    participants = data.get("participants")
    if not isinstance(participants, (list, tuple)):
        participants = []

    tax_percent = coerce_amount(data.get("taxPercent"))
    tip_value = coerce_amount(data.get("tipValue"))

    bases = [coerce_amount(_as_dict(p).get("base")) for p in participants]
    base_sum = 0.0
    for base in bases:
        base_sum += base

    tax_value = base_sum * (tax_percent / 100)
    final_total = base_sum + tax_value + tip_value

    calculated_participants: List[Dict[str, Any]] = []
    for participant, base in zip(participants, bases):
        share_ratio = base / base_sum if base_sum > 0 else 0.0
        tax_share = tax_value * share_ratio
        tip_share = tip_value * share_ratio
        calculated_participants.append({
            **_as_dict(participant),
            "base": base,
            "taxShare": tax_share,
            "tipShare": tip_share,
            "finalOwed": base + tax_share + tip_share,
            "shareRatio": share_ratio,
        })

    logger.debug(
        f"Calculated receipt: {len(calculated_participants)} participants, "
        f"base {base_sum}, tax {tax_value}, tip {tip_value}, total {final_total}"
    )

    return {
        **data,
        "taxPercent": tax_percent,
        "tipValue": tip_value,
        "baseSum": base_sum,
        "taxValue": tax_value,
        "finalTotal": final_total,
        "participants": calculated_participants,
    }


def to_raw_shape(receipt: Union[Mapping[str, Any], BaseModel]) -> Dict[str, Any]:
    """Strip derived fields from a computed receipt, leaving its raw input."""
    data = _as_dict(receipt)
    raw = {k: v for k, v in data.items() if k not in RECEIPT_DERIVED_FIELDS}
    participants = data.get("participants")
    if isinstance(participants, (list, tuple)):
        raw["participants"] = [
            {k: v for k, v in _as_dict(p).items() if k not in PARTICIPANT_DERIVED_FIELDS}
            for p in participants
        ]
    return raw


def build_summary(receipt: Union[Mapping[str, Any], BaseModel], catalog: MessageCatalog) -> str:
    """
    Render a computed receipt as printable text.

    Amounts are read from the receipt as stored; nothing is recalculated.
    """
    data = _as_dict(receipt)
    if "receipt" in data and "v" in data:
        data = _as_dict(data["receipt"])

    t = catalog.t
    currency = data.get("currency") or ""

    def money(value: Any) -> str:
        return catalog.format_currency(coerce_amount(value), currency)

    summary_lines = []
    summary_lines.append(f"{t('receipt_title_text')}: {data.get('title') or t('untitled')}")
    summary_lines.append(f"{t('receipt_paid_by')}: {data.get('paidBy') or t('unknown')}")
    summary_lines.append(f"{t('receipt_currency')}: {currency}")
    summary_lines.append("")
    summary_lines.append(f"{t('base_amount')}: {money(data.get('baseSum'))}")
    summary_lines.append(f"{t('tax_amount')}: {money(data.get('taxValue'))}")
    summary_lines.append(f"{t('tip_amount')}: {money(data.get('tipValue'))}")
    summary_lines.append(f"{t('final_total')}: {money(data.get('finalTotal'))}")
    summary_lines.append("")
    summary_lines.append(f"{t('participants')}:")
    for participant in data.get("participants") or []:
        p = _as_dict(participant)
        summary_lines.append(f"  {p.get('name', '')}: {money(p.get('finalOwed'))}")
        if p.get("desc"):
            summary_lines.append(f"    {p['desc']}")
        summary_lines.append(f"    {t('base_amount')}: {money(p.get('base'))}")
        summary_lines.append(f"    {t('tax_amount')}: {money(p.get('taxShare'))}")
        summary_lines.append(f"    {t('tip_amount')}: {money(p.get('tipShare'))}")

    if data.get("note"):
        summary_lines.append("")
        summary_lines.append(f"{t('note')}: {data['note']}")

    return "\n".join(summary_lines)
