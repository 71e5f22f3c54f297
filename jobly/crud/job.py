"""
Data access for jobs.

Jobs are keyed by a generated integer id and always belong to a company.
"""

import logging
from types import MappingProxyType
from typing import List, Mapping, Optional

from jobly.core.database import SqlStore
from jobly.core.errors import BadRequestError, NotFoundError
from jobly.core.sql import (
    FilterRule,
    at_least,
    contains,
    positive_when_true,
    sql_for_partial_update,
    sql_for_variable_where,
)

logger = logging.getLogger(__name__)

# title, salary and equity are stored under their own names
JOB_COLUMNS: Mapping[str, str] = MappingProxyType({})

JOB_FILTERS: Mapping[str, FilterRule] = MappingProxyType({
    "title": contains("title"),
    "minSalary": at_least("salary"),
    "hasEquity": positive_when_true("equity"),
})

JOB_FIELDS = 'id, company_handle AS "companyHandle", title, salary, equity'


class JobRepository:
    """Create, search, update and delete jobs."""

    def __init__(
        self,
        store: SqlStore,
        columns: Mapping[str, str] = JOB_COLUMNS,
        filters: Mapping[str, FilterRule] = JOB_FILTERS,
    ):
        self.store = store
        self.columns = columns
        self.filters = filters

    def create(self, data: dict) -> dict:
        """
        Create a job from {companyHandle, title, salary, equity}.

        Returns the job including its generated id.

        Raises:
            BadRequestError: If the company does not exist
        """
        company_handle = data["companyHandle"]
        if not self.store.execute("SELECT handle FROM companies WHERE handle = $1", [company_handle]):
            raise BadRequestError(f"Company handle doesn't exist: {company_handle}")

        rows = self.store.execute(
            f"""INSERT INTO jobs
               (company_handle, title, salary, equity)
               VALUES ($1, $2, $3, $4)
               RETURNING {JOB_FIELDS}""",
            [company_handle, data["title"], data.get("salary"), data.get("equity")],
        )
        self.store.commit()

        job = rows[0]
        logger.info(f"Created job {job['id']}: {job['title']} ({company_handle})")
        return job

    def find_all(self) -> List[dict]:
        """All jobs, ordered by id."""
        return self.store.execute(
            f"""SELECT {JOB_FIELDS}
               FROM jobs
               ORDER BY id"""
        )

    def find_some(self, filters: Optional[Mapping]) -> List[dict]:
        """
        Jobs matching {title, minSalary, hasEquity}, ordered by id.

        hasEquity=true keeps only jobs with equity above zero; hasEquity=false
        does not filter.
        """
        where = sql_for_variable_where(filters, self.filters)
        return self.store.execute(
            f"""SELECT {JOB_FIELDS}
               FROM jobs
               {where.sql}
               ORDER BY id""",
            where.values,
        )

    def get(self, id: int) -> dict:
        """
        Job with its company: {id, title, salary, equity, company}.

        Raises:
            NotFoundError: If no job has this id
        """
        rows = self.store.execute(
            """SELECT j.id,
                      j.title,
                      j.salary,
                      j.equity,
                      c.handle,
                      c.name,
                      c.description,
                      c.num_employees AS "numEmployees",
                      c.logo_url AS "logoUrl"
               FROM jobs AS j
               JOIN companies AS c ON j.company_handle = c.handle
               WHERE j.id = $1""",
            [id],
        )
        if not rows:
            raise NotFoundError(f"No job: {id}")

        row = rows[0]
        return {
            "id": row["id"],
            "title": row["title"],
            "salary": row["salary"],
            "equity": row["equity"],
            "company": {
                "handle": row["handle"],
                "name": row["name"],
                "description": row["description"],
                "numEmployees": row["numEmployees"],
                "logoUrl": row["logoUrl"],
            },
        }

    def update(self, id: int, data: Mapping) -> dict:
        """
        Partial update with any of {title, salary, equity}.

        Raises:
            BadRequestError: If data is empty
            NotFoundError: If no job has this id
        """
        update = sql_for_partial_update(data, self.columns)
        id_idx = len(update.values) + 1

        rows = self.store.execute(
            f"""UPDATE jobs
               SET {update.set_clause}
               WHERE id = ${id_idx}
               RETURNING {JOB_FIELDS}""",
            [*update.values, id],
        )
        if not rows:
            raise NotFoundError(f"No job: {id}")
        self.store.commit()

        logger.info(f"Updated job {id}: {', '.join(data)}")
        return rows[0]

    def remove(self, id: int) -> None:
        """
        Raises:
            NotFoundError: If no job has this id
        """
        rows = self.store.execute(
            """DELETE
               FROM jobs
               WHERE id = $1
               RETURNING id""",
            [id],
        )
        if not rows:
            raise NotFoundError(f"No job: {id}")
        self.store.commit()

        logger.info(f"Deleted job {id}")
