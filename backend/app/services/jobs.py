"""
Job Catalog.

Job postings linked to the user who posted them. Listing operations raise
``NotFound`` when nothing matches so callers can tell "no jobs" apart from
a store failure.
"""

from typing import Any, Optional

from app.core.config import settings
from app.core.errors import NotFound, OwnershipError
from app.core.logging_config import get_logger
from app.store.record_store import Order, RecordStore, Row

logger = get_logger("jobs")

JOBS_TABLE = "jobs"

JOB_COLUMNS = [
    "j_id",
    "j_title",
    "j_company",
    "j_location",
    "j_type",
    "j_link",
    "j_contact",
    "j_salary",
    "j_date",
]

# Newest posting first; equal dates fall back to the newest id
RECENT_ORDER = [Order("j_date", ascending=False), Order("j_id", ascending=False)]


class JobCatalog:
    """Create, delete and list job postings."""

    def __init__(self, store: RecordStore, enforce_ownership: bool = settings.ENFORCE_JOB_OWNERSHIP):
        self.store = store
        self.enforce_ownership = enforce_ownership

    def create(
        self,
        owner_id: int,
        title: str,
        company: str,
        location: str,
        job_type: str,
        apply_link: str,
        date: Any,
        contact: str,
        salary: str,
    ) -> None:
        """Insert a job for ``owner_id``. The owner is not looked up."""
        self.store.insert(
            JOBS_TABLE,
            [
                {
                    "j_title": title,
                    "j_company": company,
                    "j_location": location,
                    "j_type": job_type,
                    "j_link": apply_link,
                    "j_date": date,
                    "j_contact": contact,
                    "j_u_id": owner_id,
                    "j_salary": salary,
                }
            ],
        )
        logger.info(f"Job '{title}' posted by user {owner_id}")

    def delete_by_id(self, job_id: int, requester_id: Optional[int] = None) -> list[Row]:
        """
        Delete a job and return the deleted rows.

        Without ownership enforcement anyone may delete any job id. With it,
        ``requester_id`` must be the job's owner.

        Raises:
            NotFound: Ownership is enforced and the job does not exist
            OwnershipError: Ownership is enforced and the requester is not the owner
        """
        if self.enforce_ownership:
            rows = self.store.select(JOBS_TABLE, columns=["j_u_id"], filters={"j_id": job_id}, limit=1)
            if not rows:
                raise NotFound("Job not found")
            if requester_id is None or rows[0]["j_u_id"] != requester_id:
                logger.warning(f"User {requester_id} tried to delete job {job_id} they do not own")
                raise OwnershipError("Not allowed to delete this job")

        deleted = self.store.delete(JOBS_TABLE, {"j_id": job_id}, columns=JOB_COLUMNS)
        logger.info(f"Deleted job {job_id} ({len(deleted)} row(s))")
        return deleted

    def _list(self, **kwargs) -> list[Row]:
        jobs = self.store.select(JOBS_TABLE, columns=JOB_COLUMNS, **kwargs)
        if not jobs:
            raise NotFound("No jobs found")
        return jobs

    def list_all(self) -> list[Row]:
        return self._list()

    def list_by_owner(self, user_id: int) -> list[Row]:
        return self._list(filters={"j_u_id": user_id})

    def list_recent(self, limit: int = settings.RECENT_JOBS_LIMIT) -> list[Row]:
        return self._list(order_by=RECENT_ORDER, limit=limit)
