# app/queries.py
import math
from typing import List, Optional

from sqlalchemy import and_, case, false, func, or_, select
from sqlalchemy.orm import Session

from .dates import month_range
from .models import Transaction
from .schemas import CategoryCount, CombinedView, PriceRangeCount, Statistics

# Lower bounds of the ten histogram buckets. Bucket n covers [lower_n, lower_n+1),
# so a price like 100.5 still lands in "0-100" and nothing falls between buckets.
PRICE_BUCKETS = [
    (0, "0-100"),
    (101, "101-200"),
    (201, "201-300"),
    (301, "301-400"),
    (401, "401-500"),
    (501, "501-600"),
    (601, "601-700"),
    (701, "701-800"),
    (801, "801-900"),
    (901, "901-above"),
]

def parse_price_term(search: str) -> Optional[float]:
    """Returns the search term as a number if it is one, otherwise None."""
    try:
        value = float(search.strip())
    except ValueError:
        return None
    return value if math.isfinite(value) else None

def build_filters(month: Optional[str], search: str = "", year: Optional[int] = None) -> list:
    """
    Builds the WHERE clauses shared by every query: the month's date range plus an optional search.

    An unrecognized month gives a filter that matches nothing.
    """
    date_range = month_range(month, year)
    if date_range is None:
        return [false()]

    filters = [
        Transaction.date_of_sale >= date_range.start,
        Transaction.date_of_sale < date_range.end,
    ]

    if search:
        # icontains lowers both the column and the term in SQL, so both sides fold the same way
        matches = [
            Transaction.title.icontains(search, autoescape=True),
            Transaction.description.icontains(search, autoescape=True),
        ]
        price = parse_price_term(search)
        if price is not None:
            matches.append(Transaction.price == price)
        filters.append(or_(*matches))

    return filters

def list_transactions(
    db: Session,
    month: Optional[str],
    page: int = 1,
    per_page: int = 10,
    search: str = "",
    year: Optional[int] = None,
) -> List[Transaction]:
    stmt = (
        select(Transaction)
        .where(*build_filters(month, search, year))
        .order_by(Transaction.id)
        .offset((page - 1) * per_page)
        .limit(per_page)
    )
    return list(db.scalars(stmt).all())

def get_statistics(db: Session, month: Optional[str], year: Optional[int] = None) -> Statistics:
    """Total sale amount plus sold/unsold counts for the month. All zero when nothing matches."""
    sold = Transaction.sold.is_(True)
    stmt = select(
        func.coalesce(func.sum(Transaction.price), 0),
        func.coalesce(func.sum(case((sold, 1), else_=0)), 0),
        func.coalesce(func.sum(case((sold, 0), else_=1)), 0),
    ).where(*build_filters(month, year=year))

    total_amount, sold_items, not_sold_items = db.execute(stmt).one()
    return Statistics(
        total_amount=total_amount,
        sold_items=sold_items,
        not_sold_items=not_sold_items,
    )

def _bucket_condition(index: int):
    lower = PRICE_BUCKETS[index][0]
    if index == len(PRICE_BUCKETS) - 1:
        return Transaction.price >= lower
    upper = PRICE_BUCKETS[index + 1][0]
    if index == 0:
        # Negative prices count towards the first bucket
        return Transaction.price < upper
    return and_(Transaction.price >= lower, Transaction.price < upper)

def get_bar_chart(db: Session, month: Optional[str], year: Optional[int] = None) -> List[PriceRangeCount]:
    """Counts per fixed price bucket, all ten in order, zero-filled."""
    columns = [
        func.coalesce(func.sum(case((_bucket_condition(i), 1), else_=0)), 0)
        for i in range(len(PRICE_BUCKETS))
    ]
    counts = db.execute(select(*columns).where(*build_filters(month, year=year))).one()

    return [
        PriceRangeCount(range=label, count=count)
        for (_, label), count in zip(PRICE_BUCKETS, counts)
    ]

def get_pie_chart(db: Session, month: Optional[str], year: Optional[int] = None) -> List[CategoryCount]:
    """Item count per category present in the month. Absent categories are omitted."""
    stmt = (
        select(Transaction.category, func.count())
        .where(*build_filters(month, year=year))
        .group_by(Transaction.category)
        .order_by(Transaction.category)
    )
    return [
        CategoryCount(category=category, item_count=count)
        for category, count in db.execute(stmt).all()
    ]

def get_combined(db: Session, month: Optional[str], year: Optional[int] = None) -> CombinedView:
    # Any failure here propagates; there is no partial result
    return CombinedView(
        statistics=get_statistics(db, month, year),
        bar_chart=get_bar_chart(db, month, year),
        pie_chart=get_pie_chart(db, month, year),
    )
