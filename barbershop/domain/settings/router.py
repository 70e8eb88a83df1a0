"""Settings router - FastAPI endpoints for the shop configuration"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import User, get_current_user
from ...cache import Cache, get_cache
from ...database import get_db
from .schemas import BusinessSettings
from .service import SettingsService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/settings", tags=["Settings"])


def get_settings_service(
    db: Session = Depends(get_db), cache: Cache = Depends(get_cache)
) -> SettingsService:
    """Dependency injection for SettingsService"""
    return SettingsService(db, cache)


@router.get("", response_model=BusinessSettings)
async def get_settings(
    current_user: User = Depends(get_current_user),
    service: SettingsService = Depends(get_settings_service),
):
    """Get the business settings (defaults when never saved)"""
    return service.get_settings()


@router.put("", response_model=BusinessSettings)
async def update_settings(
    data: BusinessSettings,
    current_user: User = Depends(get_current_user),
    service: SettingsService = Depends(get_settings_service),
):
    """Replace the business settings"""
    return service.update_settings(data)
