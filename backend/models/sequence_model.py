# backend/models/sequence_model.py
from sqlalchemy import Column, Integer, BigInteger
from sqlalchemy.types import Unicode

from database.session import Base


class SequenceCounter(Base):
    """One row per named counter; `current_value` is the last number handed out."""

    __tablename__ = "sequence_counters"

    id            = Column(Integer, primary_key=True)
    name          = Column(Unicode(50), unique=True, nullable=False)
    current_value = Column(BigInteger, nullable=False, default=0)
