"""CSV import router"""

import logging
from typing import Optional

from fastapi import APIRouter, Body, Depends
from sqlalchemy.orm import Session

from ...auth import User, get_current_user
from ...cache import Cache, get_cache
from ...database import get_db
from ...shared.clock import Clock, get_clock
from .schemas import ImportRequest, ImportResult
from .service import CsvImportService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/import", tags=["Import"])


def get_import_service(
    db: Session = Depends(get_db),
    cache: Cache = Depends(get_cache),
    clock: Clock = Depends(get_clock),
) -> CsvImportService:
    """Dependency injection for CsvImportService"""
    return CsvImportService(db, cache, clock)


@router.post("", response_model=ImportResult)
async def import_csv(
    data: Optional[ImportRequest] = Body(None),
    current_user: User = Depends(get_current_user),
    service: CsvImportService = Depends(get_import_service),
):
    """Import reservations from CSV text, or from the configured CSV file"""
    logger.info(f"📥 CSV import requested by {current_user.email}")
    return service.import_csv(data.csv if data else None)
