"""
Authentication and user API endpoints.

Handles signup, credential checks, password reset/update and profile
updates. No session token is issued: each request carries the email and
password or the user id it acts on.
"""

from datetime import date
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, HTTPException, Response, status
from pydantic import BaseModel, Field

from app.api.deps import get_credentials, get_user_directory
from app.core.errors import NotFound, StoreError
from app.services import CredentialService, UserDirectory

router = APIRouter()

WRONG_CREDENTIALS_MESSAGE = "Wrong email/password"

# Store-assigned ids fit a signed 64-bit column
RecordId = Annotated[int, Field(ge=1, le=2**63 - 1)]


# ============== Pydantic Schemas ==============


class SignupRequest(BaseModel):
    """Schema for user registration."""

    firstname: str
    lastname: str
    email: str
    password: str
    gender: str
    dob: date


class CredentialsRequest(BaseModel):
    """Schema for email + password authentication."""

    email: str
    password: str


class EmailRequest(BaseModel):
    email: str


class UserIdRequest(BaseModel):
    id: RecordId


class UpdatePasswordRequest(BaseModel):
    id: RecordId
    password: str


class UpdateProfileRequest(BaseModel):
    """Schema for profile update. Both fields must be sent, either may be null."""

    id: RecordId
    title: Optional[str]
    qualification: Optional[str]


# ============== API Endpoints ==============


@router.post("/signup")
def signup(
    user_data: SignupRequest,
    users: UserDirectory = Depends(get_user_directory),
):
    """
    Register a new user.

    Does not check whether the email is taken; clients call
    ``/emailalreadyregistered`` first, and the store rejects duplicates.
    """
    try:
        users.register(
            firstname=user_data.firstname,
            lastname=user_data.lastname,
            email=user_data.email,
            password=user_data.password,
            gender=user_data.gender,
            dob=user_data.dob,
        )
    except StoreError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Unable to create user",
        )

    return Response(status_code=status.HTTP_200_OK)


@router.post("/authenticate")
def authenticate(
    credentials: CredentialsRequest,
    users: UserDirectory = Depends(get_user_directory),
):
    """
    Check an email/password pair.

    Returns the matching user in a one-element list. Unknown email and
    wrong password share the same message.
    """
    try:
        result = users.authenticate(credentials.email, credentials.password)
    except StoreError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Unable to authenticate user",
        )

    if not result.ok:
        return {"message": WRONG_CREDENTIALS_MESSAGE}

    return [result.user]


@router.post("/emailalreadyregistered")
def email_already_registered(
    request: EmailRequest,
    users: UserDirectory = Depends(get_user_directory),
):
    """Tell whether an email is taken. This endpoint deliberately reveals existence."""
    try:
        exists = users.exists_by_email(request.email)
    except StoreError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal Server Error",
        )

    if exists:
        return {"message": "Email already exists"}
    return {}


@router.post("/getuser")
def get_user(
    request: UserIdRequest,
    users: UserDirectory = Depends(get_user_directory),
):
    try:
        user = users.get_by_id(request.id)
    except StoreError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Unable to fetch user",
        )

    if user is None:
        return {"message": "Cannot find the User"}
    return user


@router.post("/forgotpassword")
def forgot_password(
    request: EmailRequest,
    credentials: CredentialService = Depends(get_credentials),
):
    """Send password reset instructions. The reset token is never returned."""
    try:
        credentials.request_password_reset(request.email)
    except NotFound:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Unable to send password reset",
        )
    except StoreError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Unable to send password reset",
        )

    return {"data": {}}


@router.post("/updatepassword")
def update_password(
    request: UpdatePasswordRequest,
    credentials: CredentialService = Depends(get_credentials),
):
    try:
        credentials.update_password(request.id, request.password)
    except NotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
    except StoreError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Unable to update password",
        )

    return {"message": "Password updated successfully"}


@router.post("/updateprofile")
def update_profile(
    request: UpdateProfileRequest,
    users: UserDirectory = Depends(get_user_directory),
):
    try:
        users.update_profile(request.id, request.title, request.qualification)
    except StoreError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Unable to update profile",
        )

    return {"message": "Profile updated successfully"}
