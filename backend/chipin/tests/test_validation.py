"""
Tests for receipt input validation.
"""
import copy
import pytest
from chipin.core.i18n import get_catalog
from chipin.schemas.receipt import ReceiptInput
from chipin.services.validation_service import validate_receipt

en = get_catalog("en")


def valid_receipt():
    return {
        "title": "Dinner",
        "paidBy": "Sara",
        "currency": "EUR",
        "taxPercent": 10,
        "tipValue": 5,
        "participants": [{"name": "Sara", "base": 20}, {"name": "Reza", "base": "15.5"}],
    }


def test_valid_receipt_has_no_errors():
    """Test that a complete receipt passes."""
    assert validate_receipt(valid_receipt(), en) == []


def test_no_participants():
    """Test that an empty participant list gives exactly one error."""
    errors = validate_receipt({"participants": []}, en)
    assert errors == ["Please add at least one participant"]


def test_missing_participants_key():
    """Test that a receipt without participants is rejected."""
    assert validate_receipt({"taxPercent": 0, "tipValue": 0}, en) == ["Please add at least one participant"]


def test_empty_name_and_negative_base():
    """Test that both problems on one row are reported."""
    errors = validate_receipt({"participants": [{"name": "", "base": -5}]}, en)
    assert errors == [
        "Name 1: Participant name is required",
        "Name 1: Please enter a valid number",
    ]


def test_whitespace_name_is_missing():
    """Test that names are trimmed before checking."""
    errors = validate_receipt({"participants": [{"name": "   ", "base": 1}]}, en)
    assert errors == ["Name 1: Participant name is required"]


def test_rows_are_numbered_from_one():
    """Test positional messages for later rows."""
    receipt = valid_receipt()
    receipt["participants"].append({"name": "Jonas", "base": "abc"})
    receipt["participants"].append({"base": 3})
    errors = validate_receipt(receipt, en)
    assert errors == [
        "Name 3: Please enter a valid number",
        "Name 4: Participant name is required",
    ]


@pytest.mark.parametrize("value", [-1, "abc", "", float("inf"), "Infinity", float("nan"), True, [1]])
def test_invalid_tax_percent(value):
    """Test that tax must be a finite, non-negative number."""
    receipt = valid_receipt()
    receipt["taxPercent"] = value
    assert validate_receipt(receipt, en) == ["Tax (%): Please enter a valid number"]


def test_invalid_tip_value():
    """Test the tip field message."""
    receipt = valid_receipt()
    receipt["tipValue"] = "-3"
    assert validate_receipt(receipt, en) == ["Tip: Please enter a valid number"]


@pytest.mark.parametrize("value", [0, "0", 12.75, "12.75", " 8"])
def test_valid_numbers(value):
    """Test accepted number formats."""
    receipt = valid_receipt()
    receipt["taxPercent"] = value
    receipt["tipValue"] = value
    receipt["participants"][0]["base"] = value
    assert validate_receipt(receipt, en) == []


def test_all_errors_are_collected():
    """Test that validation does not stop at the first problem."""
    errors = validate_receipt({
        "taxPercent": "x",
        "tipValue": -1,
        "participants": [{"name": "", "base": "y"}, {"name": "B", "base": 1}],
    }, en)
    assert len(errors) == 4
    assert errors[-2:] == ["Tax (%): Please enter a valid number", "Tip: Please enter a valid number"]


def test_non_mapping_participant():
    """Test that a malformed participant row is reported, not raised."""
    errors = validate_receipt({"participants": ["oops"]}, en)
    assert errors == ["Name 1: Participant name is required"]


def test_german_messages():
    """Test that messages come from the given catalog."""
    errors = validate_receipt({"taxPercent": -1, "participants": [{"name": "", "base": 1}]}, get_catalog("de"))
    assert errors == [
        "Name 1: Teilnehmername ist erforderlich",
        "Steuer (%): Bitte geben Sie eine gültige Zahl ein",
    ]


def test_persian_messages():
    """Test the right-to-left catalog."""
    errors = validate_receipt({"participants": []}, get_catalog("fa"))
    assert errors == ["لطفاً حداقل یک شرکت‌کننده اضافه کنید"]


def test_unknown_language_uses_default():
    """Test that an unsupported language falls back to English."""
    assert validate_receipt({"participants": []}, get_catalog("xx")) == ["Please add at least one participant"]


def test_input_is_not_mutated():
    """Test that validation is read-only."""
    receipt = valid_receipt()
    receipt["participants"][0]["name"] = "  Sara  "
    before = copy.deepcopy(receipt)
    validate_receipt(receipt, en)
    assert receipt == before


def test_accepts_pydantic_input():
    """Test validating a ReceiptInput model."""
    model = ReceiptInput(participants=[{"name": "", "base": "-2"}])
    assert validate_receipt(model, en) == [
        "Name 1: Participant name is required",
        "Name 1: Please enter a valid number",
    ]


@pytest.mark.parametrize("value", [10 ** 400, -(10 ** 400)])
def test_oversized_integer_is_invalid(value):
    """Test that integers too large for a float are reported, not raised."""
    errors = validate_receipt({"participants": [{"name": "A", "base": value}]}, en)
    assert errors == ["Name 1: Please enter a valid number"]
