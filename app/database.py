# app/database.py
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.event import listen

from .config import settings

DATABASE_URL = settings.get_database_url()

# 'check_same_thread' is only needed for SQLite, since FastAPI runs sync routes in a threadpool.
connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(DATABASE_URL, connect_args=connect_args)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()

def _unicode_lower(value):
    return value.lower() if isinstance(value, str) else value

def register_sqlite_functions(dbapi_con, con_record):
    """Replaces SQLite's ASCII-only lower() so case-insensitive search also folds accented letters."""
    dbapi_con.create_function("lower", 1, _unicode_lower, deterministic=True)

# Use the listen function from SQLAlchemy to apply this to every new connection
if DATABASE_URL.startswith("sqlite"):
    listen(engine, 'connect', register_sqlite_functions)

def init_db(bind=None):
    """Creates the transactions table (and its index) if it doesn't exist yet."""
    from . import models  # noqa: F401 - registers the table on Base.metadata
    Base.metadata.create_all(bind=bind or engine)
