# app/seed.py
import json
import logging
from pathlib import Path

import pandas as pd
import requests
from sqlalchemy import delete
from sqlalchemy.orm import Session

from .models import SEED_COLUMNS, Transaction

logger = logging.getLogger(__name__)

# Upstream field name -> column name. Anything else in the payload is dropped.
SEED_FIELDS = {
    "title": "title",
    "description": "description",
    "price": "price",
    "category": "category",
    "dateOfSale": "date_of_sale",
    "sold": "sold",
}

class SeedFetchError(Exception):
    """Raised when the seed source can't be fetched or isn't a JSON array."""

def fetch_seed_data(source: str, timeout: float = 30.0) -> list:
    """
    Fetches the seed records from an http(s) URL, or reads them from a local JSON file.

    Args:
        source: URL or file path of a JSON array of transaction objects
        timeout: Seconds to wait for the HTTP response

    Returns:
        list: The raw records, untouched
    """
    try:
        if source.startswith(("http://", "https://")):
            response = requests.get(source, timeout=timeout)
            response.raise_for_status()
            payload = response.json()
        else:
            payload = json.loads(Path(source).read_text(encoding="utf-8"))
    except (requests.RequestException, OSError, ValueError) as e:
        raise SeedFetchError(f"Failed to fetch seed data from {source}: {e}") from e

    if not isinstance(payload, list):
        raise SeedFetchError(f"Seed data from {source} is not a JSON array")

    logger.info("seed_fetched source=%s records=%s", source, len(payload))
    return payload

def to_seed_frame(records: list) -> pd.DataFrame:
    """
    Turns raw seed records into a DataFrame shaped like the transactions table.

    Only type coercion happens here: unparseable prices and dates become NULL,
    and only a true value marks a record as sold.
    """
    df = pd.DataFrame.from_records(records) if records else pd.DataFrame()
    df = df.reindex(columns=list(SEED_FIELDS)).rename(columns=SEED_FIELDS)

    df["price"] = pd.to_numeric(df["price"], errors="coerce")
    # Mixed offsets are normalised to UTC, then stored naive
    df["date_of_sale"] = pd.to_datetime(
        df["date_of_sale"], errors="coerce", utc=True, format="mixed"
    ).dt.tz_localize(None)
    df["sold"] = df["sold"].eq(True)

    return df[SEED_COLUMNS]

def replace_transactions(db: Session, records: list) -> int:
    """
    Deletes every stored transaction, then bulk-inserts the given records.

    The delete is committed before the insert starts, so a failed insert leaves the table empty.

    Returns:
        int: Number of rows inserted
    """
    df = to_seed_frame(records)

    db.execute(delete(Transaction))
    db.commit()

    if df.empty:
        logger.info("seed_replaced inserted=0")
        return 0

    try:
        df.to_sql(
            Transaction.__tablename__,
            con=db.connection(),
            if_exists="append",
            index=False,
        )
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info("seed_replaced inserted=%s", len(df))
    return len(df)

def seed_database(db: Session, source: str, timeout: float = 30.0) -> int:
    """Fetches the seed data and replaces the whole transactions table with it."""
    records = fetch_seed_data(source, timeout=timeout)
    return replace_transactions(db, records)
