"""
Record access layer for companies, jobs and users.

Each repository wraps a SqlStore and builds its statements with the shared
partial-update and variable-filter builders in jobly.core.sql.
"""

from jobly.crud.company import CompanyRepository
from jobly.crud.job import JobRepository
from jobly.crud.user import UserRepository

__all__ = ["CompanyRepository", "JobRepository", "UserRepository"]
