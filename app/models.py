# app/models.py
from sqlalchemy import Boolean, Column, DateTime, Float, Integer, String, Text

from .database import Base

# The seed loader writes to this table through pandas, so column names here are the DataFrame's too
SEED_COLUMNS = ["title", "description", "price", "category", "date_of_sale", "sold"]

class Transaction(Base):
    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String)
    description = Column(Text)
    price = Column(Float)
    category = Column(String)
    date_of_sale = Column(DateTime, index=True)  # naive UTC
    sold = Column(Boolean)
