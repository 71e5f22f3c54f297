from pydantic import ConfigDict, Field
from typing import List, Optional

from jobly.schemas.company import CamelModel, CompanyResponse


class JobCreateRequest(CamelModel):
    """Schema for creating a new job"""
    company_handle: str = Field(..., min_length=1, max_length=25)
    title: str = Field(..., min_length=1)
    salary: Optional[int] = Field(None, ge=0)
    equity: Optional[float] = Field(None, ge=0, le=1)


class JobUpdateRequest(CamelModel):
    """Schema for a partial job update; id and company cannot change"""
    model_config = ConfigDict(extra="forbid")

    title: Optional[str] = Field(None, min_length=1)
    salary: Optional[int] = Field(None, ge=0)
    equity: Optional[float] = Field(None, ge=0, le=1)


class JobResponse(CamelModel):
    """Schema for job response"""
    id: int
    company_handle: str
    title: str
    salary: Optional[int] = None
    equity: Optional[float] = None


class JobDetailResponse(CamelModel):
    """Job with the company that posted it"""
    id: int
    title: str
    salary: Optional[int] = None
    equity: Optional[float] = None
    company: CompanyResponse


class JobEnvelope(CamelModel):
    job: JobResponse


class JobDetailEnvelope(CamelModel):
    job: JobDetailResponse


class JobListResponse(CamelModel):
    jobs: List[JobResponse]
