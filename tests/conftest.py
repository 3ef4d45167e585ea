# tests/conftest.py
import pytest
import os
from datetime import datetime

os.environ["PREFECT_TEST_MODE"] = "1"
os.environ["PREFECT_LOGGING_LEVEL"] = "ERROR"
# Keep the app's own engine off disk; tests use test_engine below
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["QUERY_YEAR"] = "2023"

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from sqlalchemy.event import listen
from fastapi.testclient import TestClient

from app.main import app, get_db, get_seed_source
from app.database import Base, register_sqlite_functions
from app.models import Transaction

# One shared in-memory SQLite connection, so every session sees the same data
test_engine = create_engine(
    "sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool
)

# Same Unicode-aware lower() the app registers on its own SQLite connections
listen(test_engine, "connect", register_sqlite_functions)

TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)

@pytest.fixture(scope="function")
def db_session():
    """
    Creates a fresh database session for a single test.
    """
    Base.metadata.create_all(bind=test_engine)

    db = TestSessionLocal()
    try:
        yield db
    finally:
        db.close()
        # Drop tables to clean up
        Base.metadata.drop_all(bind=test_engine)

@pytest.fixture(scope="function")
def seed_source(tmp_path):
    """Path of a local seed file; tests write the records they need into it."""
    return tmp_path / "seed.json"

@pytest.fixture(scope="function")
def client(db_session, seed_source):
    """
    Overrides the dependency injection to use our test database and a local seed file.
    """
    def get_test_db_override():
        yield db_session

    app.dependency_overrides[get_db] = get_test_db_override
    app.dependency_overrides[get_seed_source] = lambda: str(seed_source)

    with TestClient(app) as c:
        yield c

    app.dependency_overrides.clear()

def _transaction(price, sold=True, date_of_sale=datetime(2023, 1, 15, 10, 0), category="electronics",
                 title="Item", description="An item"):
    return Transaction(
        title=title,
        description=description,
        price=price,
        category=category,
        date_of_sale=date_of_sale,
        sold=sold,
    )

@pytest.fixture(scope="function")
def seed_db_data(db_session):
    """
    Directly seeds the test database with a small spread of transactions.

    January 2023: three records priced 50, 150 and 999, two of them sold.
    The rest sit just outside January or in other months.
    """
    rows = [
        _transaction(50, sold=True, title="Mens Casual Shirt", description="Slim fit cotton shirt",
                     category="men's clothing", date_of_sale=datetime(2023, 1, 1, 0, 0)),
        _transaction(150, sold=False, title="Gold Ring", description="Solid gold 100% ring",
                     category="jewelery", date_of_sale=datetime(2023, 1, 20, 12, 30)),
        _transaction(999, sold=True, title="Laptop", description="Fast laptop with SSD",
                     category="electronics", date_of_sale=datetime(2023, 1, 31, 23, 59, 59)),
        # Boundary: first instant of February is not January
        _transaction(300, sold=True, title="Monitor", description="27 inch display",
                     category="electronics", date_of_sale=datetime(2023, 2, 1, 0, 0)),
        # Same month, different year
        _transaction(75, sold=True, title="Cotton Jacket", description="Warm jacket",
                     category="men's clothing", date_of_sale=datetime(2022, 1, 10, 9, 0)),
        _transaction(100, sold=False, title="Backpack", description="Fits 15 inch laptops",
                     category="men's clothing", date_of_sale=datetime(2023, 12, 31, 18, 0)),
        _transaction(101, sold=True, title="Earrings", description="Silver earrings",
                     category="jewelery", date_of_sale=datetime(2023, 12, 1, 0, 0)),
        _transaction(500, sold=True, title="Hard Drive", description="External drive",
                     category="electronics", date_of_sale=datetime(2024, 1, 1, 0, 0)),
    ]
    db_session.add_all(rows)
    db_session.commit()
    return rows
