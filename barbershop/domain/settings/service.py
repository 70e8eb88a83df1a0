"""Settings service - Business logic for the shop configuration"""

import logging

from sqlalchemy.orm import Session

from ...cache import SETTINGS, Cache
from ...config import CACHE_TTL_SETTINGS
from .repository import SettingsRepository
from .schemas import DEFAULT_SETTINGS, BusinessSettings

logger = logging.getLogger(__name__)

CACHE_KEY = "singleton"


class SettingsService:
    """Service layer for business settings"""

    def __init__(self, db: Session, cache: Cache):
        self.db = db
        self.cache = cache
        self.repo = SettingsRepository()

    def get_settings(self) -> BusinessSettings:
        """Current settings, or the documented defaults when none are stored"""
        cached = self.cache.get(SETTINGS, CACHE_KEY)
        if cached is not None:
            return BusinessSettings.model_validate(cached)

        record = self.repo.get_settings(self.db)
        if record is None:
            logger.info("No stored settings - serving defaults")
            settings = DEFAULT_SETTINGS
        else:
            settings = BusinessSettings.model_validate(record)

        self.cache.set(SETTINGS, CACHE_KEY, settings.model_dump(mode="json", by_alias=True), CACHE_TTL_SETTINGS)
        return settings

    def update_settings(self, data: BusinessSettings) -> BusinessSettings:
        """Replace the stored settings wholesale"""
        record = self.repo.save_settings(
            self.db,
            business_name=data.business_name,
            phone=data.phone,
            email=data.email,
            address=data.address,
            start_hour=data.start_hour,
            end_hour=data.end_hour,
            appointment_duration=data.appointment_duration,
            working_days=data.working_days.model_dump(),
            services=[service.model_dump() for service in data.services],
        )
        self.cache.invalidate(SETTINGS)
        logger.info(
            f"✅ Settings updated: {record.business_name} "
            f"{record.start_hour}:00-{record.end_hour}:00 every {record.appointment_duration} min"
        )
        return BusinessSettings.model_validate(record)
