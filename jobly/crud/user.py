"""
Data access for users and their job applications.

Passwords are hashed before they reach the store and are never part of a
returned record.
"""

import logging
from types import MappingProxyType
from typing import Dict, List, Mapping

from sqlalchemy.exc import IntegrityError

from jobly.core.database import SqlStore, is_unique_violation
from jobly.core.errors import DuplicateError, NotFoundError, UnauthorizedError
from jobly.core.security import get_password_hash, verify_password
from jobly.core.sql import sql_for_partial_update

logger = logging.getLogger(__name__)

USER_COLUMNS: Mapping[str, str] = MappingProxyType({
    "firstName": "first_name",
    "lastName": "last_name",
    "isAdmin": "is_admin",
})

USER_FIELDS = (
    'username, first_name AS "firstName", last_name AS "lastName", '
    'email, is_admin AS "isAdmin"'
)


class UserRepository:
    """Authenticate, register, update and delete users; record applications."""

    def __init__(self, store: SqlStore, columns: Mapping[str, str] = USER_COLUMNS):
        self.store = store
        self.columns = columns

    def authenticate(self, username: str, password: str) -> dict:
        """
        Return the user for a valid username/password pair.

        Raises:
            UnauthorizedError: If the user is unknown or the password is wrong
        """
        rows = self.store.execute(
            f"""SELECT {USER_FIELDS}, password
               FROM users
               WHERE username = $1""",
            [username],
        )
        if rows:
            user = rows[0]
            hashed = user.pop("password")
            if verify_password(password, hashed):
                return user

        logger.warning(f"Failed login for {username}")
        raise UnauthorizedError("Invalid username/password")

    def register(self, data: dict) -> dict:
        """
        Register a user from {username, password, firstName, lastName, email, isAdmin}.

        Raises:
            DuplicateError: If the username is taken
        """
        username = data["username"]
        if self.store.execute("SELECT username FROM users WHERE username = $1", [username]):
            raise DuplicateError(f"Duplicate username: {username}")

        try:
            rows = self.store.execute(
                f"""INSERT INTO users
                   (username, password, first_name, last_name, email, is_admin)
                   VALUES ($1, $2, $3, $4, $5, $6)
                   RETURNING {USER_FIELDS}""",
                [
                    username,
                    get_password_hash(data["password"]),
                    data["firstName"],
                    data["lastName"],
                    data["email"],
                    bool(data.get("isAdmin", False)),
                ],
            )
        except IntegrityError as e:
            if is_unique_violation(e):
                raise DuplicateError(f"Duplicate username: {username}") from e
            raise
        self.store.commit()

        logger.info(f"Registered user {username}")
        return rows[0]

    def _applied_jobs(self, usernames: List[str]) -> Dict[str, List[int]]:
        applied: Dict[str, List[int]] = {username: [] for username in usernames}
        if not usernames:
            return applied

        if len(usernames) == 1:
            rows = self.store.execute(
                """SELECT username, job_id
                   FROM applications
                   WHERE username = $1
                   ORDER BY job_id""",
                usernames,
            )
        else:
            rows = self.store.execute(
                """SELECT username, job_id
                   FROM applications
                   ORDER BY username, job_id"""
            )

        for row in rows:
            if row["username"] in applied:
                applied[row["username"]].append(row["job_id"])
        return applied

    def find_all(self) -> List[dict]:
        """All users with the ids of jobs they applied to, ordered by username."""
        users = self.store.execute(
            f"""SELECT {USER_FIELDS}
               FROM users
               ORDER BY username"""
        )
        applied = self._applied_jobs([user["username"] for user in users])
        for user in users:
            user["jobs"] = applied[user["username"]]
        return users

    def get(self, username: str) -> dict:
        """
        User with applied job ids: {..., jobs: [jobId, ...]}.

        Raises:
            NotFoundError: If the user does not exist
        """
        rows = self.store.execute(
            f"""SELECT {USER_FIELDS}
               FROM users
               WHERE username = $1""",
            [username],
        )
        if not rows:
            raise NotFoundError(f"No user: {username}")

        user = rows[0]
        user["jobs"] = self._applied_jobs([username])[username]
        return user

    def update(self, username: str, data: Mapping) -> dict:
        """
        Partial update with any of {firstName, lastName, password, email, isAdmin}.

        A new password is hashed before it is stored. Callers are responsible
        for deciding who may change isAdmin.

        Raises:
            BadRequestError: If data is empty
            NotFoundError: If the user does not exist
        """
        data = dict(data)
        if data.get("password"):
            data["password"] = get_password_hash(data["password"])

        update = sql_for_partial_update(data, self.columns)
        username_idx = len(update.values) + 1

        rows = self.store.execute(
            f"""UPDATE users
               SET {update.set_clause}
               WHERE username = ${username_idx}
               RETURNING {USER_FIELDS}""",
            [*update.values, username],
        )
        if not rows:
            raise NotFoundError(f"No user: {username}")
        self.store.commit()

        logger.info(f"Updated user {username}: {', '.join(data)}")
        return rows[0]

    def remove(self, username: str) -> None:
        """
        Raises:
            NotFoundError: If the user does not exist
        """
        rows = self.store.execute(
            """DELETE
               FROM users
               WHERE username = $1
               RETURNING username""",
            [username],
        )
        if not rows:
            raise NotFoundError(f"No user: {username}")
        self.store.commit()

        logger.info(f"Deleted user {username}")

    def apply_to_job(self, username: str, job_id: int) -> dict:
        """
        Record that a user applied to a job. Returns {applied: job_id}.

        Raises:
            NotFoundError: If the user or the job does not exist
            DuplicateError: If the user already applied to this job
        """
        if not self.store.execute("SELECT username FROM users WHERE username = $1", [username]):
            raise NotFoundError(f"User {username} does not exist.")

        if not self.store.execute("SELECT id FROM jobs WHERE id = $1", [job_id]):
            raise NotFoundError(f"Job with ID {job_id} does not exist.")

        try:
            rows = self.store.execute(
                """INSERT INTO applications (username, job_id)
                   VALUES ($1, $2)
                   RETURNING job_id AS applied""",
                [username, job_id],
            )
        except IntegrityError as e:
            if is_unique_violation(e):
                raise DuplicateError(
                    f"User {username} already has application for job {job_id}."
                ) from e
            raise
        self.store.commit()

        logger.info(f"User {username} applied to job {job_id}")
        return rows[0]
