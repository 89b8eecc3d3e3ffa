"""
Repository layer for data access.

Each repository works on the SQLAlchemy session it is given and never
commits; transactions are owned by the service layer.
"""
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from .models import Catway, Reservation, User


class UserRepository:
    """Repository for User entity operations."""

    def __init__(self, session: Session):
        self.session = session

    def list_all(self) -> List[User]:
        return self.session.scalars(select(User).order_by(User.id)).all()

    def find(self, username: str) -> Optional[User]:
        """Find a user by username."""
        return self.session.scalars(
            select(User).filter_by(username=username)
        ).first()

    def create(self, username: str, email: str, pw_hash: str) -> User:
        user = User(username=username, email=email, pw_hash=pw_hash)
        self.session.add(user)
        return user

    def delete(self, user: User) -> None:
        self.session.delete(user)


class CatwayRepository:
    """Repository for Catway entity operations."""

    def __init__(self, session: Session):
        self.session = session

    def list_all(self) -> List[Catway]:
        return self.session.scalars(
            select(Catway).order_by(Catway.catway_number)
        ).all()

    def find(self, catway_number: int) -> Optional[Catway]:
        """Find a catway by its number."""
        return self.session.scalars(
            select(Catway).filter_by(catway_number=catway_number)
        ).first()

    def find_with_lock(self, catway_number: int) -> Optional[Catway]:
        """Find a catway by its number with a row-level lock for update."""
        return self.session.scalars(
            select(Catway).filter_by(catway_number=catway_number).with_for_update()
        ).first()

    def create(self, catway_number: int, type: str, catway_state: str) -> Catway:
        catway = Catway(catway_number=catway_number, type=type, catway_state=catway_state)
        self.session.add(catway)
        return catway

    def update(self, catway: Catway, fields: dict) -> Catway:
        """Apply a partial update; keys are model attribute names."""
        for name, value in fields.items():
            setattr(catway, name, value)
        return catway

    def delete(self, catway: Catway) -> None:
        self.session.delete(catway)


class ReservationRepository:
    """Repository for Reservation entity operations."""

    def __init__(self, session: Session):
        self.session = session

    def list_all(self) -> List[Reservation]:
        return self.session.scalars(
            select(Reservation).order_by(Reservation.catway_number, Reservation.check_in)
        ).all()

    def find(self, catway_number: int) -> Optional[Reservation]:
        """
        Find the reservation addressed by a catway number.
        When a catway holds several reservations, the oldest one is returned.
        """
        return self.session.scalars(
            select(Reservation)
            .filter_by(catway_number=catway_number)
            .order_by(Reservation.id)
        ).first()

    def create(self, **fields) -> Reservation:
        reservation = Reservation(**fields)
        self.session.add(reservation)
        return reservation

    def update(self, reservation: Reservation, fields: dict) -> Reservation:
        for name, value in fields.items():
            setattr(reservation, name, value)
        return reservation

    def delete(self, reservation: Reservation) -> None:
        self.session.delete(reservation)
