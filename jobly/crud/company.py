"""
Data access for companies.

Records use the API's camelCase field names; COMPANY_COLUMNS translates
them to column names for partial updates.
"""

import logging
from types import MappingProxyType
from typing import List, Mapping, Optional

from sqlalchemy.exc import IntegrityError

from jobly.core.database import SqlStore, is_unique_violation
from jobly.core.errors import BadRequestError, DuplicateError, NotFoundError
from jobly.core.sql import (
    FilterRule,
    at_least,
    at_most,
    contains,
    sql_for_partial_update,
    sql_for_variable_where,
)

logger = logging.getLogger(__name__)

COMPANY_COLUMNS: Mapping[str, str] = MappingProxyType({
    "numEmployees": "num_employees",
    "logoUrl": "logo_url",
})

COMPANY_FILTERS: Mapping[str, FilterRule] = MappingProxyType({
    "name": contains("name"),
    "minEmployees": at_least("num_employees"),
    "maxEmployees": at_most("num_employees"),
})

COMPANY_FIELDS = (
    'handle, name, description, '
    'num_employees AS "numEmployees", logo_url AS "logoUrl"'
)


class CompanyRepository:
    """Create, search, update and delete companies."""

    def __init__(
        self,
        store: SqlStore,
        columns: Mapping[str, str] = COMPANY_COLUMNS,
        filters: Mapping[str, FilterRule] = COMPANY_FILTERS,
    ):
        self.store = store
        self.columns = columns
        self.filters = filters

    def create(self, data: dict) -> dict:
        """
        Create a company from {handle, name, description, numEmployees, logoUrl}.

        Raises:
            DuplicateError: If the handle (or name) is already taken
        """
        handle = data["handle"]
        if self.store.execute("SELECT handle FROM companies WHERE handle = $1", [handle]):
            raise DuplicateError(f"Duplicate company: {handle}")

        try:
            rows = self.store.execute(
                f"""INSERT INTO companies
                   (handle, name, description, num_employees, logo_url)
                   VALUES ($1, $2, $3, $4, $5)
                   RETURNING {COMPANY_FIELDS}""",
                [
                    handle,
                    data["name"],
                    data.get("description", ""),
                    data.get("numEmployees"),
                    data.get("logoUrl"),
                ],
            )
        except IntegrityError as e:
            if is_unique_violation(e):
                raise DuplicateError(f"Duplicate company: {handle}") from e
            raise
        self.store.commit()

        logger.info(f"Created company {handle}")
        return rows[0]

    def find_all(self) -> List[dict]:
        """All companies, ordered by name."""
        return self.store.execute(
            f"""SELECT {COMPANY_FIELDS}
               FROM companies
               ORDER BY name"""
        )

    def find_some(self, filters: Optional[Mapping]) -> List[dict]:
        """
        Companies matching {name, minEmployees, maxEmployees}, ordered by name.

        Raises:
            BadRequestError: For unsupported filters, non-numeric bounds, or
                minEmployees greater than maxEmployees
        """
        where = sql_for_variable_where(filters, self.filters)

        if filters and "minEmployees" in filters and "maxEmployees" in filters:
            # values are already validated as ints by the builder
            low, high = int(filters["minEmployees"]), int(filters["maxEmployees"])
            if low > high:
                raise BadRequestError("'minEmployees' must be less than or equal to 'maxEmployees'.")

        return self.store.execute(
            f"""SELECT {COMPANY_FIELDS}
               FROM companies
               {where.sql}
               ORDER BY name""",
            where.values,
        )

    def get(self, handle: str) -> dict:
        """
        Company with its jobs: {..., jobs: [{id, title, salary, equity}, ...]}.

        Raises:
            NotFoundError: If no company has this handle
        """
        rows = self.store.execute(
            f"""SELECT {COMPANY_FIELDS}
               FROM companies
               WHERE handle = $1""",
            [handle],
        )
        if not rows:
            raise NotFoundError(f"No company: {handle}")

        company = rows[0]
        company["jobs"] = self.store.execute(
            """SELECT id, title, salary, equity
               FROM jobs
               WHERE company_handle = $1
               ORDER BY id""",
            [handle],
        )
        return company

    def update(self, handle: str, data: Mapping) -> dict:
        """
        Partial update with any of {name, description, numEmployees, logoUrl}.

        Raises:
            BadRequestError: If data is empty
            NotFoundError: If no company has this handle
        """
        update = sql_for_partial_update(data, self.columns)
        handle_idx = len(update.values) + 1

        try:
            rows = self.store.execute(
                f"""UPDATE companies
                   SET {update.set_clause}
                   WHERE handle = ${handle_idx}
                   RETURNING {COMPANY_FIELDS}""",
                [*update.values, handle],
            )
        except IntegrityError as e:
            if is_unique_violation(e):
                raise DuplicateError(f"Duplicate company name: {data.get('name')}") from e
            raise
        if not rows:
            raise NotFoundError(f"No company: {handle}")
        self.store.commit()

        logger.info(f"Updated company {handle}: {', '.join(data)}")
        return rows[0]

    def remove(self, handle: str) -> None:
        """
        Raises:
            NotFoundError: If no company has this handle
        """
        rows = self.store.execute(
            """DELETE
               FROM companies
               WHERE handle = $1
               RETURNING handle""",
            [handle],
        )
        if not rows:
            raise NotFoundError(f"No company: {handle}")
        self.store.commit()

        logger.info(f"Deleted company {handle}")
