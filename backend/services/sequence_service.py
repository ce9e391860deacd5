# backend/services/sequence_service.py
"""
Named monotonic counters backed by the `sequence_counters` table.

The increment is a single `UPDATE ... SET current_value = current_value + 1`
executed inside the caller's transaction, so two concurrent creators can never
read the same number: the second one waits on the row until the first commits.
A rolled back transaction gives its number back.
"""
import logging

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from models.sequence_model import SequenceCounter

logger = logging.getLogger(__name__)

REQUIREMENT_SEQUENCE = "requirement"


def next_value(db: Session, name: str) -> int:
    """Increment the named counter and return the new value (first value is 1). Does not commit."""
    result = db.execute(
        update(SequenceCounter)
        .where(SequenceCounter.name == name)
        .values(current_value=SequenceCounter.current_value + 1)
    )
    if result.rowcount == 0:
        # first use of this counter; a racing first use fails on the unique name at commit
        db.add(SequenceCounter(name=name, current_value=1))
        db.flush()
        value = 1
    else:
        value = db.execute(
            select(SequenceCounter.current_value).where(SequenceCounter.name == name)
        ).scalar_one()

    logger.debug("Allocated %s #%s", name, value)
    return value


def format_req_id(number: int) -> str:
    return f"REQ-{number:03d}"
