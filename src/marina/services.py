"""
Service layer for business logic.

Services own the transaction: they validate payloads, call the repositories
on the session they were given, commit, and translate persistence failures
into the errors of ``common.errors``.
"""
import threading
import weakref
from typing import Any, List, Optional

from flask import current_app
from flask_jwt_extended import create_access_token
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from common.errors import (
    ConflictError,
    ForbiddenError,
    NotFoundError,
    StorageError,
    ValidationError,
)
from common.extensions import bcrypt, db
from .conflicts import find_conflict
from .models import Catway, Reservation, User
from .repositories import CatwayRepository, ReservationRepository, UserRepository
from .schemas import (
    catway_number_in_range,
    validate_catway,
    validate_catway_update,
    validate_login,
    validate_reservation,
    validate_signup,
)


class _CatwayLocks:
    """One in-process lock per catway number.

    Entries are weak: a lock is dropped once no caller holds it any more.
    """

    def __init__(self):
        self._guard = threading.Lock()
        self._locks: weakref.WeakValueDictionary = weakref.WeakValueDictionary()

    def __call__(self, catway_number: int) -> threading.Lock:
        with self._guard:
            lock = self._locks.get(catway_number)
            if lock is None:
                lock = threading.Lock()
                self._locks[catway_number] = lock
            return lock

    def __len__(self) -> int:
        return len(self._locks)


_catway_locks = _CatwayLocks()


class _Service:
    def __init__(self, session: Optional[Session] = None):
        self.session = session if session is not None else db.session

    def _commit(self, integrity_message: str) -> None:
        """Commit the current transaction, rolling back on failure."""
        try:
            self.session.commit()
        except IntegrityError as e:
            self.session.rollback()
            raise ValidationError(integrity_message) from e
        except SQLAlchemyError as e:
            self.session.rollback()
            raise StorageError(str(e)) from e


class AuthService(_Service):
    """Password checks and access token issuing."""

    def __init__(self, session: Optional[Session] = None):
        super().__init__(session)
        self.users = UserRepository(self.session)

    @staticmethod
    def hash_password(password: str) -> str:
        return bcrypt.generate_password_hash(password).decode("utf-8")

    @staticmethod
    def verify_password(password: str, pw_hash: str) -> bool:
        return bcrypt.check_password_hash(pw_hash, password)

    def issue_token(self, username: str, password: str) -> str:
        """
        Check the credentials of a user and sign an access token for them.

        Raises:
            NotFoundError: no user has this username
            ForbiddenError: the password does not match
        """
        user = self.users.find(username)
        if user is None:
            raise NotFoundError("User not found")
        if not self.verify_password(password, user.pw_hash):
            raise ForbiddenError("Incorrect password")

        current_app.logger.info(f"User {username} logged in")
        return create_access_token(identity=user.username,
                                   additional_claims={"name": user.username})

    def login(self, payload: Any) -> str:
        credentials = validate_login(payload)
        return self.issue_token(credentials.username, credentials.password)


class UserService(_Service):
    def __init__(self, session: Optional[Session] = None):
        super().__init__(session)
        self.users = UserRepository(self.session)

    def signup(self, payload: Any) -> User:
        data = validate_signup(payload)
        user = self.users.create(
            username=data.username,
            email=data.email,
            pw_hash=AuthService.hash_password(data.password),
        )
        self._commit("Username already taken")
        current_app.logger.info(f"User {user.username} created")
        return user

    def list_users(self) -> List[User]:
        return self.users.list_all()

    def get(self, username: str) -> User:
        user = self.users.find(username)
        if user is None:
            raise NotFoundError("User not found")
        return user

    def delete(self, username: str) -> dict:
        user = self.get(username)
        deleted = user.to_dict()
        self.users.delete(user)
        self._commit("Unable to delete user")
        current_app.logger.info(f"User {username} deleted")
        return deleted


class CatwayService(_Service):
    def __init__(self, session: Optional[Session] = None):
        super().__init__(session)
        self.catways = CatwayRepository(self.session)

    def list_catways(self) -> List[Catway]:
        return self.catways.list_all()

    def get(self, catway_number: int) -> Catway:
        if not catway_number_in_range(catway_number):
            raise NotFoundError("Catway not found")
        catway = self.catways.find(catway_number)
        if catway is None:
            raise NotFoundError("Catway not found")
        return catway

    def create(self, payload: Any) -> Catway:
        data = validate_catway(payload)
        catway = self.catways.create(
            catway_number=data.catway_number,
            type=data.type.value,
            catway_state=data.catway_state,
        )
        self._commit(f"Catway {data.catway_number} already exists")
        current_app.logger.info(f"Catway {catway.catway_number} created")
        return catway

    def update(self, catway_number: int, payload: Any) -> Catway:
        fields = validate_catway_update(payload)
        catway = self.get(catway_number)
        self.catways.update(catway, fields)
        self._commit(f"Catway {fields.get('catway_number')} already exists")
        current_app.logger.info(f"Catway {catway_number} updated with {fields}")
        return catway

    def delete(self, catway_number: int) -> None:
        catway = self.get(catway_number)
        self.catways.delete(catway)
        self._commit("Unable to delete catway")
        current_app.logger.info(f"Catway {catway_number} deleted")


class ReservationService(_Service):
    """Bookings, with the no-overlap rule enforced on every write."""

    CONFLICT_MESSAGE = "Reservation conflict: the catway is already booked for this period"

    def __init__(self, session: Optional[Session] = None):
        super().__init__(session)
        self.reservations = ReservationRepository(self.session)
        self.catways = CatwayRepository(self.session)

    def list_reservations(self) -> List[Reservation]:
        return self.reservations.list_all()

    def get(self, catway_number: int) -> Reservation:
        if not catway_number_in_range(catway_number):
            raise NotFoundError("Reservation not found")
        reservation = self.reservations.find(catway_number)
        if reservation is None:
            raise NotFoundError("Reservation not found")
        return reservation

    def _check_and_write(self, data, write, exclude_id: Optional[int] = None) -> Reservation:
        # check and write happen under the catway lock and in one transaction
        with _catway_locks(data.catway_number):
            try:
                self.catways.find_with_lock(data.catway_number)
                conflict = find_conflict(
                    self.session,
                    data.catway_number,
                    data.check_in,
                    data.check_out,
                    exclude_id=exclude_id,
                )
                if conflict is not None:
                    self.session.rollback()
                    raise ConflictError(self.CONFLICT_MESSAGE)
                reservation = write()
            except SQLAlchemyError as e:
                self.session.rollback()
                raise StorageError(str(e)) from e
            self._commit("Unable to store reservation")
        return reservation

    def create(self, payload: Any) -> Reservation:
        data = validate_reservation(payload)
        reservation = self._check_and_write(
            data, lambda: self.reservations.create(**data.model_dump())
        )
        current_app.logger.info(
            f"Reservation {reservation.id} created on catway {reservation.catway_number} "
            f"from {reservation.check_in} to {reservation.check_out}"
        )
        return reservation

    def update(self, catway_number: int, payload: Any) -> Reservation:
        data = validate_reservation(payload)
        reservation = self.get(catway_number)
        self._check_and_write(
            data,
            lambda: self.reservations.update(reservation, data.model_dump()),
            exclude_id=reservation.id,
        )
        current_app.logger.info(f"Reservation {reservation.id} updated")
        return reservation

    def delete(self, catway_number: int) -> None:
        reservation = self.get(catway_number)
        self.reservations.delete(reservation)
        self._commit("Unable to delete reservation")
        current_app.logger.info(
            f"Reservation {reservation.id} on catway {catway_number} deleted"
        )
