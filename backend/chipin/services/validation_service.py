"""
Validation service for raw receipt input.
"""
from typing import Any, List, Mapping, Union

from pydantic import BaseModel

from chipin.core.i18n import MessageCatalog
from chipin.core.utils import is_valid_amount

NUMERIC_FIELDS = (
    ("taxPercent", "tax_percent"),
    ("tipValue", "tip_value"),
)


def _is_valid_optional_amount(value: Any) -> bool:
    """Absent amounts default to 0; present ones must be finite and non-negative."""
    return value is None or is_valid_amount(value)


def validate_receipt(receipt: Union[Mapping[str, Any], BaseModel], catalog: MessageCatalog) -> List[str]:
    """
    Check a raw receipt before it is calculated.

    Returns every problem found as a localized message; an empty list means
    the receipt is valid. The input is never modified.
    """
    data = receipt.model_dump() if isinstance(receipt, BaseModel) else receipt
    t = catalog.t
    errors = []

    participants = data.get("participants")
    if not participants or not isinstance(participants, (list, tuple)):
        errors.append(t("validation_participants_required"))
    else:
        for index, participant in enumerate(participants, start=1):
            if not isinstance(participant, Mapping):
                participant = {}
            row = f"{t('participant_name')} {index}"

            name = participant.get("name")
            if not isinstance(name, str) or not name.strip():
                errors.append(f"{row}: {t('validation_participant_name_required')}")
            if not _is_valid_optional_amount(participant.get("base")):
                errors.append(f"{row}: {t('validation_invalid_number')}")

    for field, label in NUMERIC_FIELDS:
        if not _is_valid_optional_amount(data.get(field)):
            errors.append(f"{t(label)}: {t('validation_invalid_number')}")

    return errors
