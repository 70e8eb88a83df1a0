"""Settings repository - Database operations for the business settings row"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import BusinessSettingsRecord

SETTINGS_ROW_ID = 1


class SettingsRepository:
    """Repository for the singleton business settings record"""

    @staticmethod
    def get_settings(db: Session) -> Optional[BusinessSettingsRecord]:
        """Get the settings row, None if the shop was never configured"""
        return (
            db.query(BusinessSettingsRecord)
            .filter(BusinessSettingsRecord.id == SETTINGS_ROW_ID)
            .first()
        )

    @staticmethod
    def save_settings(db: Session, **values) -> BusinessSettingsRecord:
        """Create or replace the settings row"""
        record = SettingsRepository.get_settings(db)
        if record is None:
            record = BusinessSettingsRecord(id=SETTINGS_ROW_ID, **values)
            db.add(record)
        else:
            for key, value in values.items():
                setattr(record, key, value)

        db.commit()
        db.refresh(record)
        return record
