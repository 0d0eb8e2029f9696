"""
Service dependencies.

Services are built once in ``create_app`` and kept on ``app.state``; routes
receive them through ``Depends`` so tests can swap the store underneath.
"""

from fastapi import Request

from app.services import CredentialService, JobCatalog, UserDirectory


def get_credentials(request: Request) -> CredentialService:
    return request.app.state.credentials


def get_user_directory(request: Request) -> UserDirectory:
    return request.app.state.users


def get_job_catalog(request: Request) -> JobCatalog:
    return request.app.state.jobs
