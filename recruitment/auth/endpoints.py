from datetime import datetime, timedelta

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from recruitment.auth.dao import DAO
from recruitment.auth.schema import (
    LoginRequest,
    CompanySignupRequest,
    CandidateSignupRequest,
    ForgotPasswordRequest,
    ResetPasswordRequest,
    UserOut,
)
from recruitment.companies.models import CompanyStatus
from recruitment.core.config import settings
from recruitment.core.dependencies import get_current_identity
from recruitment.core.errors import EmailDeliveryError
from recruitment.core.logger_setup import setup_logger
from recruitment.core.security import (
    Identity,
    Role,
    issue_token,
    hash_password,
    verify_password,
    generate_reset_token,
    hash_reset_token,
)
from recruitment.database import get_db
from recruitment.notifications.email_service import EmailService, get_email_service

router = APIRouter()
logger = setup_logger(__name__)

RESET_REQUESTED_MESSAGE = "If an account with that email exists, a password reset link has been sent."


def _user_payload(user, **extra):
    payload = UserOut.model_validate(user).to_json()
    payload.update(extra)
    return payload


@router.post("/login")
async def login(body: LoginRequest, db: Session = Depends(get_db)):
    logger.info(f"Login attempt for {body.email} as {body.role.value}")
    dao = DAO(db)
    user = dao.get_user_by_email(body.email)

    if not user or user.role != body.role.value or not verify_password(body.password, user.password_hash):
        logger.warning(f"Invalid credentials for {body.email}")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")

    extra = {}
    if body.role == Role.COMPANY:
        company = user.company
        if company is None or company.status != CompanyStatus.ACTIVE.value:
            logger.warning(f"Inactive company login refused: {body.email}")
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Account is inactive. Please contact admin.",
            )
        extra = {"companyName": company.company_name, "status": company.status}

    token = issue_token(Identity(id=user.id, email=user.email, role=body.role))
    logger.info(f"Login successful for user {user.id}")
    return {"success": True, "token": token, "user": _user_payload(user, **extra)}


@router.post("/company/signup")
async def company_signup(
    body: CompanySignupRequest,
    db: Session = Depends(get_db),
    email_service: EmailService = Depends(get_email_service),
):
    dao = DAO(db)
    if dao.email_taken(body.email):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="An account with this email already exists")

    initial_status = CompanyStatus.INACTIVE if settings.COMPANY_REQUIRES_APPROVAL else CompanyStatus.ACTIVE
    company = dao.create_company(
        email=body.email,
        password_hash=hash_password(body.password),
        company_name=body.company_name,
        display_name=body.display_name,
        status=initial_status,
    )
    logger.info(f"Company {company.id} registered with status {company.status}")

    try:
        email_service.send_welcome_email(body.email, company.company_name, Role.COMPANY.value)
    except EmailDeliveryError as e:
        logger.warning(f"Welcome email to {body.email} failed: {str(e)}")

    message = (
        "Company registered successfully. Awaiting admin approval."
        if initial_status == CompanyStatus.INACTIVE
        else "Company registered successfully."
    )
    return JSONResponse(
        content={
            "success": True,
            "message": message,
            "id": company.user_id,
            "company": {
                "id": company.id,
                "companyName": company.company_name,
                "displayName": company.display_name,
                "email": body.email,
                "status": company.status,
            },
        },
        status_code=status.HTTP_201_CREATED,
    )


@router.post("/candidate/signup")
async def candidate_signup(
    body: CandidateSignupRequest,
    db: Session = Depends(get_db),
    email_service: EmailService = Depends(get_email_service),
):
    dao = DAO(db)
    if dao.email_taken(body.email):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="An account with this email already exists")

    candidate = dao.create_candidate(
        email=body.email,
        password_hash=hash_password(body.password),
        first_name=(body.first_name or "").strip(),
        last_name=(body.last_name or "").strip(),
    )
    user = candidate.user
    logger.info(f"Candidate {candidate.id} registered for user {user.id}")

    try:
        email_service.send_welcome_email(user.email, candidate.full_name or user.email, Role.CANDIDATE.value)
    except EmailDeliveryError as e:
        logger.warning(f"Welcome email to {user.email} failed: {str(e)}")

    token = issue_token(Identity(id=user.id, email=user.email, role=Role.CANDIDATE))
    return JSONResponse(
        content={"success": True, "id": user.id, "token": token, "user": _user_payload(user)},
        status_code=status.HTTP_201_CREATED,
    )


@router.get("/me")
async def me(identity: Identity = Depends(get_current_identity), db: Session = Depends(get_db)):
    user = DAO(db).get_user(identity.id)
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")

    extra = {}
    if user.company is not None:
        extra = {"companyName": user.company.company_name, "status": user.company.status}
    elif user.candidate is not None:
        extra = {
            "firstName": user.candidate.first_name,
            "lastName": user.candidate.last_name,
            "submitted": user.candidate.submitted,
        }
    return {"success": True, "user": _user_payload(user, **extra)}


@router.post("/forgot-password")
async def forgot_password(
    body: ForgotPasswordRequest,
    db: Session = Depends(get_db),
    email_service: EmailService = Depends(get_email_service),
):
    dao = DAO(db)
    user = dao.get_user_by_email(body.email)

    # Same answer whether or not the account exists
    if not user or user.role != body.role.value:
        logger.info(f"Password reset requested for unknown account: {body.email} ({body.role.value})")
        return {"message": RESET_REQUESTED_MESSAGE}

    raw_token, token_hash = generate_reset_token()
    expires_at = datetime.utcnow() + timedelta(minutes=settings.RESET_TOKEN_EXPIRES_MINUTES)
    dao.set_reset_token(user, token_hash, expires_at)

    try:
        email_service.send_password_reset_email(user.email, raw_token, body.role.value)
    except EmailDeliveryError as e:
        logger.error(f"Password reset email to {user.email} failed: {str(e)}")

    return {"message": RESET_REQUESTED_MESSAGE}


@router.post("/reset-password")
async def reset_password(body: ResetPasswordRequest, db: Session = Depends(get_db)):
    dao = DAO(db)
    user = dao.get_user_by_reset_token(hash_reset_token(body.token), body.role)
    if not user:
        logger.warning("Password reset attempted with an invalid or expired token")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid or expired token")

    dao.update_password(user, hash_password(body.password))
    logger.info(f"Password reset for user {user.id}")
    return {"message": "Password has been reset successfully"}


@router.get("/validate-token")
async def validate_token(
    token: str = Query(..., min_length=1),
    role: Role = Query(...),
    db: Session = Depends(get_db),
):
    user = DAO(db).get_user_by_reset_token(hash_reset_token(token), role)
    if user:
        return {"valid": True}
    return JSONResponse(
        content={"valid": False, "message": "Invalid or expired token"},
        status_code=status.HTTP_400_BAD_REQUEST,
    )
