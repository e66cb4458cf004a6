from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from recruitment.applications.dao import DAO, DuplicateApplicationError
from recruitment.applications.models import Application, ApplicationStatus
from recruitment.applications.schema import (
    ApplicationCreate,
    ApplicationStatusUpdate,
    ApplicationDetailOut,
    ApplicationCandidateOut,
    ApplicationJobOut,
    ApplicationCompanyOut,
)
from recruitment.candidates.endpoints import get_caller_candidate
from recruitment.candidates.models import Candidate
from recruitment.companies.models import Company
from recruitment.core.dependencies import require_admin
from recruitment.core.errors import EmailDeliveryError
from recruitment.core.logger_setup import setup_logger
from recruitment.core.pagination import PageParams, pagination_envelope
from recruitment.core.security import Identity
from recruitment.database import get_db
from recruitment.jobs.dao import DAO as JobDAO
from recruitment.jobs.endpoints import get_caller_company
from recruitment.notifications.email_service import EmailService, get_email_service

router = APIRouter()
logger = setup_logger(__name__)


def parse_status_filter(value: Optional[str]) -> Optional[ApplicationStatus]:
    if not value or value.lower() == "all":
        return None
    try:
        return ApplicationStatus(value.upper())
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid status. Must be one of {[s.value for s in ApplicationStatus]}",
        )


def application_payload(application: Application):
    candidate = application.candidate
    return ApplicationDetailOut(
        id=application.id,
        candidate_id=application.candidate_id,
        job_id=application.job_id,
        company_id=application.company_id,
        status=application.status,
        created_at=application.created_at,
        updated_at=application.updated_at,
        answers=application.answers or {},
        profile_snapshot=application.profile_snapshot or {},
        documents=application.documents or {},
        candidate=ApplicationCandidateOut(
            id=candidate.id,
            first_name=candidate.first_name,
            last_name=candidate.last_name,
            email=candidate.user.email if candidate.user else None,
        ),
        job=ApplicationJobOut.model_validate(application.job),
        company=ApplicationCompanyOut.model_validate(application.company),
    ).to_json()


CHOICE_TYPES = ("select", "radio")


def _is_blank(answer):
    return answer is None or not str(answer).strip()


def check_answers(job, answers):
    """
    Match answers against the job's custom questions.

    Returns:
        ``(kept, missing, invalid)``: answers to known questions only, ids of
        unanswered required questions, ids whose choice is not an option
    """
    kept, missing, invalid = {}, [], []
    for question in job.extra_questions or []:
        question_id = question.get("id")
        answer = answers.get(question_id)
        if _is_blank(answer):
            if question.get("required"):
                missing.append(question_id)
            continue
        if question.get("type") in CHOICE_TYPES and answer not in (question.get("options") or []):
            invalid.append(question_id)
            continue
        kept[question_id] = answer
    return kept, missing, invalid


@router.post("")
async def submit_application(
    body: ApplicationCreate,
    candidate: Candidate = Depends(get_caller_candidate),
    db: Session = Depends(get_db),
):
    job = JobDAO(db).get_job(body.job_id)
    if not job:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Job not found")

    if body.candidate_id is not None and body.candidate_id != candidate.id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="candidateId does not match the authenticated candidate")
    if body.company_id is not None and body.company_id != job.company_id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="companyId does not match the job's company")

    if job.deadline is not None and job.deadline <= datetime.utcnow():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="The application deadline has passed")

    answers, missing, invalid = check_answers(job, body.answers or {})
    if missing:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"error": "Please answer all required questions", "missingQuestions": missing},
        )
    if invalid:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"error": "Answer is not one of the allowed options", "invalidQuestions": invalid},
        )

    try:
        application = DAO(db).submit_application(candidate, job, answers, body.profile, body.documents)
    except DuplicateApplicationError:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="You have already applied to this job")

    return JSONResponse(content=application_payload(application), status_code=status.HTTP_201_CREATED)


@router.get("/mine")
async def list_my_applications(candidate: Candidate = Depends(get_caller_candidate), db: Session = Depends(get_db)):
    applications = DAO(db).list_for_candidate(candidate.id)
    return {"applications": [application_payload(a) for a in applications]}


@router.get("/company")
async def list_company_applications(
    job_id: Optional[int] = Query(None, alias="jobId"),
    status_filter: Optional[str] = Query(None, alias="status"),
    company: Company = Depends(get_caller_company),
    db: Session = Depends(get_db),
):
    applications = DAO(db).list_for_company(company.id, job_id, parse_status_filter(status_filter))
    logger.info(f"Company {company.id} listed {len(applications)} applications")
    return {"applications": [application_payload(a) for a in applications]}


@router.patch("/{application_id}/status")
async def update_application_status(
    application_id: int,
    body: ApplicationStatusUpdate,
    company: Company = Depends(get_caller_company),
    db: Session = Depends(get_db),
    email_service: EmailService = Depends(get_email_service),
):
    dao = DAO(db)
    application = dao.get_company_application(application_id, company.id)
    if not application:
        logger.warning(f"Application {application_id} not found for company {company.id}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Application not found")

    application = dao.update_status(application, body.status)
    logger.info(f"Application {application.id} set to {application.status} by company {company.id}")

    candidate = application.candidate
    try:
        email_service.send_application_status_email(
            candidate.user.email, candidate.full_name, application.job.title, application.status
        )
    except EmailDeliveryError as e:
        logger.warning(f"Status email for application {application.id} failed: {str(e)}")

    return application_payload(application)


@router.get("/admin/all")
async def list_all_applications(
    search: Optional[str] = Query(None),
    status_filter: Optional[str] = Query(None, alias="status"),
    company_id: Optional[int] = Query(None, alias="companyId"),
    paging: PageParams = Depends(),
    identity: Identity = Depends(require_admin),
    db: Session = Depends(get_db),
):
    rows, total = DAO(db).search(
        search=search,
        status=parse_status_filter(status_filter),
        company_id=company_id,
        offset=paging.offset,
        limit=paging.limit,
    )
    logger.info(f"Admin {identity.id} listed applications page {paging.page} ({total} total)")
    return {
        "applications": [application_payload(a) for a in rows],
        "pagination": pagination_envelope(total, paging.page, paging.limit),
    }
