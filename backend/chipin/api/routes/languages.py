"""
Language and message catalog routes.
"""
from fastapi import APIRouter
from typing import List

from chipin.core.i18n import get_catalog, list_languages
from chipin.schemas.receipt import CatalogResponse, LanguageResponse

router = APIRouter(prefix="/languages", tags=["languages"])


@router.get("", response_model=List[LanguageResponse])
async def get_languages():
    """List supported languages."""
    return list_languages()


@router.get("/{lang}/messages", response_model=CatalogResponse)
async def get_messages(lang: str):
    """Get the message catalog for a language (unknown tags get the default)."""
    catalog = get_catalog(lang)
    return CatalogResponse(
        code=catalog.lang,
        name=catalog.name,
        dir=catalog.direction,
        messages=dict(catalog.messages)
    )
