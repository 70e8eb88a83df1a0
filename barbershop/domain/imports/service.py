"""
CSV import service - bulk creation of reservations from a schedule export.

Expected columns (header names are case-insensitive, extra columns ignored):

    Emri/Name, Dita/Date, Ora/Time

Rows are processed in file order through the same booking rules as the
reservation API. A row that fails never stops the batch: invalid rows are
reported with their line number, rows whose slot is already taken are only
counted.
"""

import csv
import io
import logging
from pathlib import Path
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ...cache import CLIENTS, RESERVATIONS, Cache
from ...config import IMPORT_CSV_PATH
from ...models import Reservation
from ...shared.clock import Clock
from ...shared.validators import clean_text
from ..booking import (
    ClientIndex,
    RejectionReason,
    can_book,
    parse_date,
    parse_time,
    upsert_client_for_booking,
)
from ..clients.repository import ClientRepository
from ..reservations.repository import ReservationRepository
from ..settings.service import SettingsService
from .schemas import ImportResult, RowError

logger = logging.getLogger(__name__)

NAME_HEADERS = ("emri", "name")
DATE_HEADERS = ("dita", "date")
TIME_HEADERS = ("ora", "time")

IMPORTED_NOTES = "Imported from CSV"
IMPORTED_SERVICE = "Imported"

REJECTION_LABELS = {
    RejectionReason.NON_WORKING_DAY: "non-working day",
    RejectionReason.PAST_SLOT: "past slot",
}


def _find_column(header: list[str], aliases: tuple) -> Optional[int]:
    for i, cell in enumerate(header):
        if cell.strip().lower() in aliases:
            return i
    return None


def _cell(row: list[str], index: int) -> str:
    return row[index].strip() if index < len(row) else ""


class CsvImportService:
    """Imports reservations from CSV text"""

    def __init__(self, db: Session, cache: Cache, clock: Clock):
        self.db = db
        self.cache = cache
        self.clock = clock
        self.settings_service = SettingsService(db, cache)

    def read_default_csv(self, path: Optional[str] = None) -> str:
        """Read the CSV file configured by IMPORT_CSV_PATH"""
        csv_path = Path(path or IMPORT_CSV_PATH)
        try:
            return csv_path.read_text(encoding="utf-8-sig")
        except FileNotFoundError as e:
            logger.error(f"❌ CSV file not found: {csv_path}")
            raise HTTPException(status_code=400, detail=f"CSV file not found: {csv_path}") from e

    def import_csv(self, text: Optional[str] = None) -> ImportResult:
        """Import the given CSV text, or the configured CSV file when none is given"""
        if text is None:
            text = self.read_default_csv()

        text = text.lstrip("\ufeff")
        if not text.strip():
            raise HTTPException(status_code=400, detail="CSV is empty")

        reader = csv.reader(io.StringIO(text))
        header = next((row for row in reader if any(cell.strip() for cell in row)), None)
        if header is None:
            raise HTTPException(status_code=400, detail="CSV is empty")

        name_col = _find_column(header, NAME_HEADERS)
        date_col = _find_column(header, DATE_HEADERS)
        time_col = _find_column(header, TIME_HEADERS)
        if name_col is None or date_col is None or time_col is None:
            raise HTTPException(
                status_code=400, detail="CSV must include headers for Emri/Name, Dita/Date, Ora/Time"
            )

        settings = self.settings_service.get_settings()
        now = self.clock()
        clients = ClientIndex(ClientRepository.get_clients(self.db))
        # Known reservations per date, including rows created earlier in this batch
        known: dict[str, list[Reservation]] = {}
        result = ImportResult()

        def skip(line: int, reason: Optional[str] = None) -> None:
            result.skipped += 1
            if reason:
                result.errors.append(RowError(line=line, reason=reason))

        for row in reader:
            line = reader.line_num
            if not any(cell.strip() for cell in row):
                continue

            name = _cell(row, name_col)
            if not name:
                skip(line, "missing name")
                continue

            day = parse_date(_cell(row, date_col))
            if day is None:
                skip(line, "invalid date")
                continue

            slot_time = parse_time(_cell(row, time_col))
            if slot_time is None:
                skip(line, "invalid time")
                continue

            if day not in known:
                known[day] = ReservationRepository.get_reservations(self.db, date=day)

            decision = can_book(settings, known[day], day, slot_time, now)
            if not decision.allowed:
                skip(line, REJECTION_LABELS.get(decision.reason))
                continue

            client, created = upsert_client_for_booking(
                clients, name, None, None, day, new_client_notes=IMPORTED_NOTES
            )
            if created:
                self.db.add(client)

            reservation = Reservation(
                client_id=client.id,
                client_name=client.name,
                client_phone=clean_text(client.phone),
                service=IMPORTED_SERVICE,
                date=day,
                time=slot_time,
                notes=IMPORTED_NOTES,
            )
            ReservationRepository.add_reservation(self.db, reservation)

            try:
                self.db.commit()
            except IntegrityError:
                # Slot taken by a concurrent writer; reload state the rollback discarded
                self.db.rollback()
                logger.warning(f"⚠️ Line {line}: slot {day} {slot_time} taken at commit")
                clients = ClientIndex(ClientRepository.get_clients(self.db))
                known.clear()
                skip(line)
                continue

            known[day].append(reservation)
            result.created += 1

        if result.created:
            self.cache.invalidate(RESERVATIONS, CLIENTS)

        logger.info(
            f"✅ CSV import finished: {result.created} created, {result.skipped} skipped, "
            f"{len(result.errors)} invalid rows"
        )
        return result
