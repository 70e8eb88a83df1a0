"""CSV import schemas"""

from typing import Optional

from pydantic import BaseModel


class ImportRequest(BaseModel):
    """CSV text to import; when omitted the configured CSV file is read"""

    csv: Optional[str] = None


class RowError(BaseModel):
    line: int
    reason: str


class ImportResult(BaseModel):
    success: bool = True
    created: int = 0
    skipped: int = 0
    errors: list[RowError] = []
