"""User CRUD operations on top of the repository."""

import logging
from typing import Union

from users_api.schemas import UpsertUser, User, UserError
from users_api.users_repo import UsersRepository

logger = logging.getLogger(__name__)


class UsersService:
    """
    Create, read, update and delete users by email.

    Missing or duplicate emails are reported as UserError values rather
    than exceptions. StorePoisonedError from the repository is not caught.
    """

    def __init__(self, repository: UsersRepository):
        self.repository = repository

    def create_user(self, request: UpsertUser) -> Union[User, UserError]:
        """Create a user. The email format must already be validated."""
        created = self.repository.insert_if_absent(
            request.email,
            lambda user_id: User(id=user_id, **request.model_dump()),
        )
        if created is None:
            logger.info(f"[create_user] Email already registered: {request.email}")
            return UserError.CONFLICT

        logger.info(f"[create_user] Created user id={created.id} email={created.email}")
        return created

    def get_user(self, email: str) -> Union[User, UserError]:
        user = self.repository.lookup(email)
        if user is None:
            return UserError.NOT_FOUND
        return user

    def update_user(self, email: str, request: UpsertUser) -> Union[User, UserError]:
        """
        Replace password, fullname and role of an existing user.

        The stored id and email are kept; ``request.email`` is ignored.
        """
        updated = self.repository.replace_if_present(
            email,
            lambda user_id, stored_email: User(
                id=user_id,
                email=stored_email,
                password=request.password,
                fullname=request.fullname,
                role=request.role,
            ),
        )
        if updated is None:
            logger.info(f"[update_user] No user for email: {email}")
            return UserError.NOT_FOUND

        logger.info(f"[update_user] Updated user id={updated.id}")
        return updated

    def delete_user(self, email: str) -> Union[User, UserError]:
        deleted = self.repository.remove_if_present(email)
        if deleted is None:
            logger.info(f"[delete_user] No user for email: {email}")
            return UserError.NOT_FOUND

        logger.info(f"[delete_user] Deleted user id={deleted.id}")
        return deleted
