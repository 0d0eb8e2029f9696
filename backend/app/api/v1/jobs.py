"""
Job API endpoints.

Posting, listing and deleting jobs. Listing endpoints answer 404 when no
job matches and 500 when the store fails.
"""

import datetime
from typing import Any, Optional

from fastapi import APIRouter, Depends, HTTPException, Response, status
from pydantic import BaseModel, field_validator

from app.api.deps import get_job_catalog
from app.api.v1.auth import RecordId
from app.core.errors import NotFound, OwnershipError, StoreError
from app.services import JobCatalog

router = APIRouter()


# ============== Pydantic Schemas ==============


class RegisterJobRequest(BaseModel):
    """Schema for posting a job."""

    title: str
    company: str
    location: str
    job_type: str
    apply_link: str
    date: datetime.date
    contact: str
    userId: RecordId
    jobSalary: str

    @field_validator("contact", "jobSalary", mode="before")
    @classmethod
    def numbers_as_text(cls, v: Any) -> Any:
        """Phone numbers and salaries may arrive as JSON numbers."""
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v


class OwnerRequest(BaseModel):
    userId: RecordId


class DeleteJobRequest(BaseModel):
    """Schema for deleting a job. ``userId`` is only checked when ownership is enforced."""

    jobId: RecordId
    userId: Optional[RecordId] = None


# ============== Helper Functions ==============


def _fetch_failed() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="Unable to fetch jobs",
    )


def _no_jobs() -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No jobs found")


# ============== API Endpoints ==============


@router.post("/registerjob")
def register_job(
    job: RegisterJobRequest,
    jobs: JobCatalog = Depends(get_job_catalog),
):
    try:
        jobs.create(
            owner_id=job.userId,
            title=job.title,
            company=job.company,
            location=job.location,
            job_type=job.job_type,
            apply_link=job.apply_link,
            date=job.date,
            contact=job.contact,
            salary=job.jobSalary,
        )
    except StoreError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Unable to create job",
        )

    return Response(status_code=status.HTTP_200_OK)


@router.post("/getuseruploadedjobs")
def get_user_uploaded_jobs(
    request: OwnerRequest,
    jobs: JobCatalog = Depends(get_job_catalog),
):
    """List the jobs posted by one user."""
    try:
        return jobs.list_by_owner(request.userId)
    except NotFound:
        raise _no_jobs()
    except StoreError:
        raise _fetch_failed()


@router.post("/deletejob")
def delete_job(
    request: DeleteJobRequest,
    jobs: JobCatalog = Depends(get_job_catalog),
):
    """Delete a job by id and return the deleted rows."""
    try:
        return jobs.delete_by_id(request.jobId, requester_id=request.userId)
    except NotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
    except OwnershipError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=e.message)
    except StoreError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Unable to delete job",
        )


@router.get("/getjobs")
def get_jobs(jobs: JobCatalog = Depends(get_job_catalog)):
    try:
        return jobs.list_all()
    except NotFound:
        raise _no_jobs()
    except StoreError:
        raise _fetch_failed()


@router.get("/getrecentjobs")
def get_recent_jobs(jobs: JobCatalog = Depends(get_job_catalog)):
    """Newest jobs by posting date."""
    try:
        return jobs.list_recent()
    except NotFound:
        raise _no_jobs()
    except StoreError:
        raise _fetch_failed()
