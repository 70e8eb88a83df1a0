"""
Import reservations from a CSV schedule export
Usage: python import_csv.py [file.csv]

Without an argument the file configured by IMPORT_CSV_PATH (Oraret.csv) is read.
"""
import sys
import logging
from datetime import datetime
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent))

from fastapi import HTTPException

from barbershop import models  # noqa: F401
from barbershop.cache import cache
from barbershop.database import Base, SessionLocal, engine
from barbershop.domain.imports.service import CsvImportService

logging.basicConfig(level=logging.INFO, format='%(message)s')
logger = logging.getLogger(__name__)


def run_import(csv_file_path: str = None):
    """Import a CSV file into the database and print the summary"""
    Base.metadata.create_all(bind=engine, checkfirst=True)

    db = SessionLocal()
    try:
        service = CsvImportService(db, cache, datetime.now)
        text = service.read_default_csv(csv_file_path)
        logger.info(f"Importing {csv_file_path or 'default CSV file'}...")
        result = service.import_csv(text)
    finally:
        db.close()

    for error in result.errors:
        logger.info(f"  line {error.line}: {error.reason}")
    logger.info(f"✅ Import completed: {result.created} created, {result.skipped} skipped")
    return result


if __name__ == "__main__":
    try:
        run_import(sys.argv[1] if len(sys.argv) > 1 else None)
    except HTTPException as e:
        logger.error(f"❌ Import failed: {e.detail}")
        sys.exit(1)
    except Exception as e:
        logger.error(f"❌ Import failed: {e}")
        sys.exit(1)
