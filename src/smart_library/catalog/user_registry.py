"""
User registry for the Smart Library catalog.

The registry owns every user record and assigns ids. Newly registered users
go to the front of the collection, so listings show the most recent
registrations first. Users restored from the record file are appended in file
order instead, which keeps a save/load cycle order-preserving.
"""

import logging
from collections import deque
from collections.abc import Iterator

from ..models.user import User
from .errors import DuplicateUserError, HasActiveLoansError, UserNotFoundError

logger = logging.getLogger(__name__)

DEFAULT_FIRST_USER_ID = 1001


class UserRegistry:
    """
    Ordered collection of users with monotonically assigned ids.

    Args:
        first_id: Id given to the first user registered in an empty registry
    """

    def __init__(self, first_id: int = DEFAULT_FIRST_USER_ID):
        self.first_id = first_id
        self._users: deque[User] = deque()
        self._next_id = first_id

    def __len__(self) -> int:
        return len(self._users)

    def __iter__(self) -> Iterator[User]:
        return iter(self._users)

    @property
    def next_id(self) -> int:
        """Id the next ``add`` will assign."""
        return self._next_id

    def add(self, name: str) -> User:
        """
        Register a new user with no borrowed books.

        Raises:
            pydantic.ValidationError: If the name is empty, too long or
                contains a record separator; no id is consumed
        """
        user = User(id=self._next_id, name=name)
        self._next_id += 1
        self._users.appendleft(user)

        logger.info("User '%s' added with ID: %d", user.name, user.id)
        return user

    def restore(self, user: User) -> User:
        """
        Append a previously saved user, keeping its id.

        Raises:
            DuplicateUserError: If a user with the same id is registered
        """
        if self.find_by_id(user.id) is not None:
            raise DuplicateUserError(user.id)

        self._users.append(user)
        self._next_id = max(self._next_id, user.id + 1)
        return user

    def find_by_id(self, user_id: int) -> User | None:
        for user in self._users:
            if user.id == user_id:
                return user
        return None

    def get(self, user_id: int) -> User:
        """
        Like ``find_by_id`` but raises instead of returning None.

        Raises:
            UserNotFoundError: If no user has this id
        """
        user = self.find_by_id(user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        return user

    def remove(self, user_id: int) -> User:
        """
        Unregister a user.

        Returns:
            The removed user

        Raises:
            UserNotFoundError: If no user has this id
            HasActiveLoansError: If the user still holds books
        """
        user = self.get(user_id)
        if user.has_active_loans:
            raise HasActiveLoansError(user.id, user.borrowed_count)

        self._users.remove(user)
        logger.info("User '%s' (ID: %d) removed", user.name, user.id)
        return user

    def list_all(self) -> list[User]:
        """Users in registry order (most recently registered first)."""
        return list(self._users)

    def clear(self) -> None:
        """Drop every user and restart id assignment at ``first_id``."""
        self._users.clear()
        self._next_id = self.first_id
