# app/flows.py
from typing import Optional

from prefect import flow, task, get_run_logger

from app.config import settings
from app.database import SessionLocal, init_db
from app.seed import fetch_seed_data, replace_transactions

@task(retries=2, retry_delay_seconds=30)
def fetch_seed_task(source: str, timeout: float) -> list:
    return fetch_seed_data(source, timeout=timeout)

@task
def replace_transactions_task(records: list) -> int:
    db = SessionLocal()
    try:
        return replace_transactions(db, records)
    finally:
        db.close()

@flow(name="Transaction Reseed Pipeline")
def run_reseed(source: Optional[str] = None):
    """
    Pulls the upstream dataset and replaces the transactions table with it.
    """
    logger = get_run_logger()
    source = source or settings.SEED_DATA_URL

    init_db()
    records = fetch_seed_task(source, settings.SEED_TIMEOUT)
    inserted = replace_transactions_task(records)

    logger.info(f"Reseeded {inserted} transactions from {source}")
    return inserted
