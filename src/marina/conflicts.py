"""
Reservation conflict detection.

A candidate stay ``[check_in, check_out)`` conflicts with a stored one on the
same catway when the stored stay starts inside the candidate, ends inside the
candidate, or covers the candidate entirely. A stay ending on the day another
one starts is not a conflict.
"""
from __future__ import annotations

from datetime import date
from typing import Optional

from sqlalchemy import and_, or_, select
from sqlalchemy.orm import Session

from .models import Reservation


def overlaps(stored_in: date, stored_out: date, check_in: date, check_out: date) -> bool:
    """Return True if the stored stay collides with the candidate stay."""
    starts_inside = check_in <= stored_in < check_out
    ends_inside = check_in < stored_out <= check_out
    covers = stored_in <= check_in and stored_out >= check_out
    return starts_inside or ends_inside or covers


def _overlap_clause(check_in: date, check_out: date):
    # same three cases as overlaps(), expressed as SQL
    return or_(
        and_(Reservation.check_in >= check_in, Reservation.check_in < check_out),
        and_(Reservation.check_out > check_in, Reservation.check_out <= check_out),
        and_(Reservation.check_in <= check_in, Reservation.check_out >= check_out),
    )


def find_conflict(
    session: Session,
    catway_number: int,
    check_in: date,
    check_out: date,
    exclude_id: Optional[int] = None,
) -> Optional[Reservation]:
    """Return the first stored reservation colliding with the candidate, if any."""
    query = select(Reservation).filter(
        Reservation.catway_number == catway_number,
        _overlap_clause(check_in, check_out),
    )
    if exclude_id is not None:
        query = query.filter(Reservation.id != exclude_id)
    return session.scalars(query.order_by(Reservation.id)).first()


def has_conflict(
    session: Session,
    catway_number: int,
    check_in: date,
    check_out: date,
    exclude_id: Optional[int] = None,
) -> bool:
    return find_conflict(session, catway_number, check_in, check_out, exclude_id) is not None
