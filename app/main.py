# app/main.py
import logging
from contextlib import asynccontextmanager
from typing import List, Optional

from fastapi import FastAPI, HTTPException, Depends, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import settings, configure_logging
from .database import SessionLocal, init_db
from .schemas import (
    CategoryCount,
    CombinedView,
    Message,
    PriceRangeCount,
    Statistics,
    TransactionRecord,
)
from . import queries, seed

configure_logging()
logger = logging.getLogger(__name__)

# Keeps the OFFSET well inside a 64-bit integer
MAX_PAGE = 1_000_000
MAX_PER_PAGE = 1000

@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    yield

app = FastAPI(
    title="Transaction Dashboard API",
    description="API for seeding product transactions and querying monthly listings and analytics.",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins(),
    allow_methods=["GET"],
    allow_headers=["*"],
)

# Every error leaves the API as {"error": message}
@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})

# Dependency function for database session
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

# Dependency function for the seed source, overridden in tests
def get_seed_source():
    return settings.SEED_DATA_URL

def _server_error(event: str, e: Exception, **context) -> HTTPException:
    details = " ".join(f"{key}={value}" for key, value in context.items())
    logger.exception("%s %s", event, details)
    return HTTPException(status_code=500, detail=str(e))

@app.get("/")
def read_root():
    return {"message": "Welcome to the Transaction Dashboard API"}

@app.get("/api/init", response_model=Message)
def init_transactions(
    source: str = Depends(get_seed_source),
    db: Session = Depends(get_db),
):
    """
    Wipes the transactions table and reloads it from the seed source.
    A failure after the wipe leaves the table empty.
    """
    try:
        inserted = seed.seed_database(db, source, timeout=settings.SEED_TIMEOUT)
    except Exception as e:
        raise _server_error("seed_failed", e, source=source)

    return Message(message=f"Database initialized with {inserted} transactions")

@app.get("/api/transactions", response_model=List[TransactionRecord])
def list_transactions(
    month: Optional[str] = None,
    page: int = Query(1, ge=1, le=MAX_PAGE),
    per_page: int = Query(10, ge=1, le=MAX_PER_PAGE, alias="perPage"),
    search: str = "",
    db: Session = Depends(get_db),
):
    """
    Lists the month's transactions, optionally filtered by a search term.
    - **month**: English month name or three-letter abbreviation (plus "Sept"), any case, e.g. "March" or "mar".
      Anything else gives an empty list
    - **search**: Matches title or description (substring, case-insensitive) or an exact price
    - **page** / **perPage**: 1-based page number (up to 1,000,000) and page size (up to 1000)
    """
    try:
        return queries.list_transactions(db, month, page=page, per_page=per_page, search=search)
    except Exception as e:
        raise _server_error("list_transactions_failed", e, month=month, search=search)

@app.get("/api/statistics", response_model=Statistics)
def get_statistics(month: Optional[str] = None, db: Session = Depends(get_db)):
    try:
        return queries.get_statistics(db, month)
    except Exception as e:
        raise _server_error("statistics_failed", e, month=month)

@app.get("/api/barchart", response_model=List[PriceRangeCount])
def get_bar_chart(month: Optional[str] = None, db: Session = Depends(get_db)):
    try:
        return queries.get_bar_chart(db, month)
    except Exception as e:
        raise _server_error("barchart_failed", e, month=month)

@app.get("/api/piechart", response_model=List[CategoryCount])
def get_pie_chart(month: Optional[str] = None, db: Session = Depends(get_db)):
    try:
        return queries.get_pie_chart(db, month)
    except Exception as e:
        raise _server_error("piechart_failed", e, month=month)

@app.get("/api/combined", response_model=CombinedView)
def get_combined(month: Optional[str] = None, db: Session = Depends(get_db)):
    """
    Statistics, bar chart and pie chart for one month in a single response.
    """
    try:
        return queries.get_combined(db, month)
    except Exception as e:
        raise _server_error("combined_failed", e, month=month)
