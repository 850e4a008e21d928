"""
Message catalogs and locale-aware formatting.

A MessageCatalog is an explicit, immutable value: callers resolve one with
get_catalog() and pass it to every validation, formatting or summary call.
Nothing here depends on a "current language".
"""
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional
import logging
import math

from chipin.core.config import settings

logger = logging.getLogger(__name__)


LANGUAGES: Mapping[str, Mapping[str, str]] = MappingProxyType({
    "en": MappingProxyType({"name": "English", "dir": "ltr"}),
    "fa": MappingProxyType({"name": "فارسی", "dir": "rtl"}),
    "de": MappingProxyType({"name": "Deutsch", "dir": "ltr"}),
})

# (group separator, decimal separator)
NUMBER_SEPARATORS: Dict[str, tuple] = {
    "en": (",", "."),
    "fa": (",", "."),
    "de": (".", ","),
}

TRANSLATIONS: Dict[str, Dict[str, str]] = {
    "en": {
        # Page titles
        "title_create": "ChipInBro - Split Expenses",
        "title_share": "ChipInBro - Share Receipt",
        "title_receipt": "ChipInBro - Receipt",

        # Form labels
        "receipt_title": "Receipt Title",
        "receipt_title_placeholder": "e.g., Dinner at Restaurant",
        "paid_by": "Paid by",
        "paid_by_placeholder": "e.g., John Doe",
        "currency": "Currency",
        "tax_percent": "Tax (%)",
        "tip_value": "Tip",
        "note": "Note",
        "note_placeholder": "Optional note...",

        # Participants
        "participants": "Participants",
        "participant_name": "Name",
        "participant_name_placeholder": "e.g., Alice",
        "participant_desc": "Description",
        "participant_desc_placeholder": "Optional description...",
        "participant_base": "Amount",
        "add_participant": "Add Participant",
        "remove_participant": "Remove participant",

        # Calculations
        "total": "Total",
        "base_amount": "Base Amount",
        "tax_amount": "Tax Amount",
        "tip_amount": "Tip Amount",
        "final_total": "Final Total",
        "you_owe": "You owe",
        "they_owe": "They owe",

        # Share / receipt pages
        "share_title": "Share Your Receipt",
        "share_description": "Copy the link below and share it with others:",
        "link_copied": "Link copied to clipboard!",
        "copy_failed": "Failed to copy link. Please copy manually.",
        "receipt_title_text": "Receipt",
        "receipt_paid_by": "Paid by",
        "receipt_date": "Date",
        "receipt_currency": "Currency",
        "untitled": "Untitled",
        "unknown": "Unknown",

        # Validation messages
        "validation_title_required": "Please enter a receipt title",
        "validation_paid_by_required": "Please enter who paid",
        "validation_participants_required": "Please add at least one participant",
        "validation_participant_name_required": "Participant name is required",
        "validation_invalid_number": "Please enter a valid number",
        "validation_negative_not_allowed": "Negative values are not allowed",

        # Error messages
        "error_invalid_hash": "Invalid or corrupted receipt link",
        "error_missing_data": "Receipt data is missing",
        "error_unsupported_version": "This receipt version is not supported",
        "error_return_home": "Return to Home",

        # Currency labels
        "currency_EUR": "EUR",
        "currency_USD": "USD",
        "currency_GBP": "GBP",
        "currency_IRR": "IRR",
    },
    "fa": {
        "title_create": "چیپ‌این‌برادر - تقسیم هزینه‌ها",
        "title_share": "چیپ‌این‌برادر - اشتراک‌گذاری رسید",
        "title_receipt": "چیپ‌این‌برادر - رسید",

        "receipt_title": "عنوان رسید",
        "receipt_title_placeholder": "مثلاً شام در رستوران",
        "paid_by": "پرداخت شده توسط",
        "paid_by_placeholder": "مثلاً جان دو",
        "currency": "واحد پول",
        "tax_percent": "مالیات (%)",
        "tip_value": "انعام",
        "note": "یادداشت",
        "note_placeholder": "یادداشت اختیاری...",

        "participants": "شرکت‌کنندگان",
        "participant_name": "نام",
        "participant_name_placeholder": "مثلاً آلیس",
        "participant_desc": "توضیحات",
        "participant_desc_placeholder": "توضیحات اختیاری...",
        "participant_base": "مبلغ",
        "add_participant": "افزودن شرکت‌کننده",
        "remove_participant": "حذف شرکت‌کننده",

        "total": "مجموع",
        "base_amount": "مبلغ پایه",
        "tax_amount": "مبلغ مالیات",
        "tip_amount": "مبلغ انعام",
        "final_total": "مجموع نهایی",
        "you_owe": "شما بدهکارید",
        "they_owe": "آنها بدهکارند",

        "share_title": "رسید خود را به اشتراک بگذارید",
        "share_description": "لینک زیر را کپی کرده و با دیگران به اشتراک بگذارید:",
        "link_copied": "لینک در کلیپ‌بورد کپی شد!",
        "copy_failed": "کپی لینک ناموفق بود. لطفاً به صورت دستی کپی کنید.",
        "receipt_title_text": "رسید",
        "receipt_paid_by": "پرداخت شده توسط",
        "receipt_date": "تاریخ",
        "receipt_currency": "واحد پول",
        "untitled": "بدون عنوان",
        "unknown": "نامشخص",

        "validation_title_required": "لطفاً عنوان رسید را وارد کنید",
        "validation_paid_by_required": "لطفاً مشخص کنید چه کسی پرداخت کرده",
        "validation_participants_required": "لطفاً حداقل یک شرکت‌کننده اضافه کنید",
        "validation_participant_name_required": "نام شرکت‌کننده ضروری است",
        "validation_invalid_number": "لطفاً عدد معتبر وارد کنید",
        "validation_negative_not_allowed": "مقادیر منفی مجاز نیستند",

        "error_invalid_hash": "لینک رسید نامعتبر یا خراب است",
        "error_missing_data": "داده‌های رسید موجود نیستند",
        "error_unsupported_version": "این نسخه رسید پشتیبانی نمی‌شود",
        "error_return_home": "بازگشت به صفحه اصلی",

        "currency_EUR": "یورو",
        "currency_USD": "دلار",
        "currency_GBP": "پوند",
        "currency_IRR": "ریال",
    },
    "de": {
        "title_create": "ChipInBro - Ausgaben teilen",
        "title_share": "ChipInBro - Quittung teilen",
        "title_receipt": "ChipInBro - Quittung",

        "receipt_title": "Quittungstitel",
        "receipt_title_placeholder": "z.B. Abendessen im Restaurant",
        "paid_by": "Bezahlt von",
        "paid_by_placeholder": "z.B. John Doe",
        "currency": "Währung",
        "tax_percent": "Steuer (%)",
        "tip_value": "Trinkgeld",
        "note": "Notiz",
        "note_placeholder": "Optionale Notiz...",

        "participants": "Teilnehmer",
        "participant_name": "Name",
        "participant_name_placeholder": "z.B. Alice",
        "participant_desc": "Beschreibung",
        "participant_desc_placeholder": "Optionale Beschreibung...",
        "participant_base": "Betrag",
        "add_participant": "Teilnehmer hinzufügen",
        "remove_participant": "Teilnehmer entfernen",

        "total": "Gesamt",
        "base_amount": "Grundbetrag",
        "tax_amount": "Steuerbetrag",
        "tip_amount": "Trinkgeldbetrag",
        "final_total": "Endsumme",
        "you_owe": "Du schuldest",
        "they_owe": "Sie schulden",

        "share_title": "Teilen Sie Ihre Quittung",
        "share_description": "Kopieren Sie den untenstehenden Link und teilen Sie ihn mit anderen:",
        "link_copied": "Link in die Zwischenablage kopiert!",
        "copy_failed": "Link kopieren fehlgeschlagen. Bitte manuell kopieren.",
        "receipt_title_text": "Quittung",
        "receipt_paid_by": "Bezahlt von",
        "receipt_date": "Datum",
        "receipt_currency": "Währung",
        "untitled": "Ohne Titel",
        "unknown": "Unbekannt",

        "validation_title_required": "Bitte geben Sie einen Quittungstitel ein",
        "validation_paid_by_required": "Bitte geben Sie an, wer bezahlt hat",
        "validation_participants_required": "Bitte fügen Sie mindestens einen Teilnehmer hinzu",
        "validation_participant_name_required": "Teilnehmername ist erforderlich",
        "validation_invalid_number": "Bitte geben Sie eine gültige Zahl ein",
        "validation_negative_not_allowed": "Negative Werte sind nicht erlaubt",

        "error_invalid_hash": "Ungültiger oder beschädigter Quittungslink",
        "error_missing_data": "Quittungsdaten fehlen",
        "error_unsupported_version": "Diese Quittungsversion wird nicht unterstützt",
        "error_return_home": "Zur Startseite zurückkehren",

        "currency_EUR": "EUR",
        "currency_USD": "USD",
        "currency_GBP": "GBP",
        "currency_IRR": "IRR",
    },
}


def default_language() -> str:
    """Configured default language, or "en" if the setting names an unknown one."""
    lang = settings.DEFAULT_LANGUAGE
    return lang if lang in LANGUAGES else "en"


def is_supported(lang: Optional[str]) -> bool:
    """Check whether a language tag has a catalog."""
    return isinstance(lang, str) and lang in LANGUAGES


def list_languages() -> List[Dict[str, str]]:
    """Supported languages as code/name/dir records, in catalog order."""
    return [
        {"code": code, "name": info["name"], "dir": info["dir"]}
        for code, info in LANGUAGES.items()
    ]


class MessageCatalog:
    """Translations and number formatting for a single language."""

    def __init__(self, lang: str, messages: Mapping[str, str], fallback: Mapping[str, str]):
        self.lang = lang
        self.name = LANGUAGES[lang]["name"]
        self.direction = LANGUAGES[lang]["dir"]
        self.messages = MappingProxyType(dict(messages))
        self._fallback = fallback
        self._group_sep, self._decimal_sep = NUMBER_SEPARATORS.get(lang, (",", "."))

    def t(self, key: str) -> str:
        """Translate a key, falling back to the default language, then to the key."""
        if key in self.messages:
            return self.messages[key]
        return self._fallback.get(key, key)

    def format_number(self, amount: float) -> str:
        """Format with two fraction digits and this language's separators."""
        if not math.isfinite(amount):
            return str(amount)
        text = f"{amount:,.2f}"
        return (
            text.replace(",", "\x00")
            .replace(".", self._decimal_sep)
            .replace("\x00", self._group_sep)
        )

    def format_currency(self, amount: float, currency: str) -> str:
        """Format an amount followed by the currency label."""
        key = f"currency_{currency}"
        label = self.messages.get(key) or self._fallback.get(key) or currency or ""
        number = self.format_number(amount)
        return f"{number} {label}".rstrip()

    def __repr__(self) -> str:
        return f"MessageCatalog(lang={self.lang!r})"


def build_catalogs(
    default_lang: Optional[str] = None,
    translations: Mapping[str, Mapping[str, str]] = TRANSLATIONS,
) -> Dict[str, MessageCatalog]:
    """Build one catalog per language, all falling back to the default language."""
    default_lang = default_lang or default_language()
    fallback = MappingProxyType(dict(translations.get(default_lang, {})))
    return {
        lang: MessageCatalog(lang, translations.get(lang, {}), fallback)
        for lang in LANGUAGES
    }


_CATALOGS = build_catalogs()


def get_catalog(lang: Optional[str] = None) -> MessageCatalog:
    """
    Resolve the catalog for a language tag.

    Unknown or empty tags resolve to the default language.
    """
    if is_supported(lang):
        return _CATALOGS[lang]
    if lang:
        logger.debug(f"Unsupported language '{lang}', using '{default_language()}'")
    return _CATALOGS[default_language()]
