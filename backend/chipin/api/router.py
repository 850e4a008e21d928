"""
Main API router that includes all route modules.
"""
from fastapi import APIRouter
from chipin.api.routes import languages, receipts

api_router = APIRouter()

# Include all route modules
api_router.include_router(languages.router)
api_router.include_router(receipts.router)
