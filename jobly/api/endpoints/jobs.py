from fastapi import APIRouter, Depends, Request

from jobly.core.deps import ensure_admin, get_jobs
from jobly.crud import JobRepository
from jobly.schemas.company import DeletedResponse
from jobly.schemas.job import (
    JobCreateRequest,
    JobDetailEnvelope,
    JobEnvelope,
    JobListResponse,
    JobUpdateRequest,
)

router = APIRouter(prefix="/jobs", tags=["Jobs"])


@router.post("/", status_code=201, response_model=JobEnvelope, dependencies=[Depends(ensure_admin)])
def create_job(request: JobCreateRequest, jobs: JobRepository = Depends(get_jobs)):
    """Create a job for an existing company. Admin only."""
    return {"job": jobs.create(request.model_dump(by_alias=True))}


@router.get("/", response_model=JobListResponse)
def list_jobs(request: Request, jobs: JobRepository = Depends(get_jobs)):
    """
    List jobs ordered by id.

    Optional query filters:
    - title: case-insensitive partial match
    - minSalary: inclusive lower bound
    - hasEquity: true keeps jobs with non-zero equity; false does not filter
    """
    filters = dict(request.query_params)
    if not filters:
        return {"jobs": jobs.find_all()}
    return {"jobs": jobs.find_some(filters)}


@router.get("/{job_id}", response_model=JobDetailEnvelope)
def get_job(job_id: int, jobs: JobRepository = Depends(get_jobs)):
    """Retrieve a job and the company that posted it."""
    return {"job": jobs.get(job_id)}


@router.patch("/{job_id}", response_model=JobEnvelope, dependencies=[Depends(ensure_admin)])
def update_job(job_id: int, request: JobUpdateRequest, jobs: JobRepository = Depends(get_jobs)):
    """Partially update a job's title, salary or equity. Admin only."""
    return {"job": jobs.update(job_id, request.model_dump(exclude_unset=True, by_alias=True))}


@router.delete("/{job_id}", response_model=DeletedResponse, dependencies=[Depends(ensure_admin)])
def delete_job(job_id: int, jobs: JobRepository = Depends(get_jobs)):
    """Delete a job. Admin only."""
    jobs.remove(job_id)
    return {"deleted": job_id}
