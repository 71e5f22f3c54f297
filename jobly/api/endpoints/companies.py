from fastapi import APIRouter, Depends, Request

from jobly.core.deps import ensure_logged_in, get_companies
from jobly.crud import CompanyRepository
from jobly.schemas.company import (
    CompanyCreateRequest,
    CompanyDetailEnvelope,
    CompanyEnvelope,
    CompanyListResponse,
    CompanyUpdateRequest,
    DeletedResponse,
)

router = APIRouter(prefix="/companies", tags=["Companies"])


@router.post("/", status_code=201, response_model=CompanyEnvelope, dependencies=[Depends(ensure_logged_in)])
def create_company(request: CompanyCreateRequest, companies: CompanyRepository = Depends(get_companies)):
    """Create a company. Login required."""
    return {"company": companies.create(request.model_dump(by_alias=True))}


@router.get("/", response_model=CompanyListResponse)
def list_companies(request: Request, companies: CompanyRepository = Depends(get_companies)):
    """
    List companies ordered by name.

    Optional query filters:
    - name: case-insensitive partial match
    - minEmployees / maxEmployees: inclusive bounds on employee count

    Any other query parameter is rejected with 400.
    """
    filters = dict(request.query_params)
    if not filters:
        return {"companies": companies.find_all()}
    return {"companies": companies.find_some(filters)}


@router.get("/{handle}", response_model=CompanyDetailEnvelope)
def get_company(handle: str, companies: CompanyRepository = Depends(get_companies)):
    """Retrieve a company and its jobs."""
    return {"company": companies.get(handle)}


@router.patch("/{handle}", response_model=CompanyEnvelope, dependencies=[Depends(ensure_logged_in)])
def update_company(
    handle: str,
    request: CompanyUpdateRequest,
    companies: CompanyRepository = Depends(get_companies),
):
    """Partially update a company. Login required."""
    return {"company": companies.update(handle, request.model_dump(exclude_unset=True, by_alias=True))}


@router.delete("/{handle}", response_model=DeletedResponse, dependencies=[Depends(ensure_logged_in)])
def delete_company(handle: str, companies: CompanyRepository = Depends(get_companies)):
    """Delete a company and its jobs. Login required."""
    companies.remove(handle)
    return {"deleted": handle}
