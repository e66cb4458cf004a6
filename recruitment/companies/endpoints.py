from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from recruitment.admin_actions.dao import DAO as AdminActionDAO
from recruitment.admin_actions.schema import AdminActionOut
from recruitment.applications.dao import DAO as ApplicationDAO
from recruitment.applications.models import ApplicationStatus
from recruitment.auth.dao import DAO as AuthDAO
from recruitment.companies.dao import DAO
from recruitment.companies.models import Company, CompanyStatus
from recruitment.companies.schema import (
    CompanySortField,
    SortOrder,
    CompanyCreate,
    CompanyStatusUpdate,
    CompanyPasswordReset,
    StylingUpdate,
    CompanyOut,
    CompanyDetailOut,
    CompanyJobSummary,
)
from recruitment.core.dependencies import require_admin
from recruitment.core.errors import EmailDeliveryError
from recruitment.core.logger_setup import setup_logger
from recruitment.core.pagination import PageParams, pagination_envelope
from recruitment.core.security import Identity, hash_password
from recruitment.database import get_db
from recruitment.jobs.endpoints import get_caller_company
from recruitment.notifications.email_service import EmailService, get_email_service

router = APIRouter()
logger = setup_logger(__name__)

RECENT_ACTIVITY_LIMIT = 10


def _get_company_or_404(dao: DAO, company_id: int) -> Company:
    company = dao.get_company(company_id)
    if not company:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Company not found")
    return company


# ========================================
# COMPANY: own profile
# ========================================

@router.get("/profile")
async def get_own_profile(company: Company = Depends(get_caller_company), db: Session = Depends(get_db)):
    return CompanyOut.from_company(company, DAO(db).count_jobs(company.id)).to_json()


@router.patch("/styling")
async def update_styling(
    body: StylingUpdate,
    company: Company = Depends(get_caller_company),
    db: Session = Depends(get_db),
):
    company = DAO(db).update_styling(company, body.styling)
    logger.info(f"Styling updated for company {company.id}")
    return {"message": "Styling saved successfully", "styling": company.styling}


# ========================================
# ADMIN: manage companies
# ========================================

@router.get("")
async def list_companies(
    search: Optional[str] = Query(None),
    status_filter: Optional[str] = Query(None, alias="status"),
    sort_by: CompanySortField = Query(CompanySortField.createdAt, alias="sortBy"),
    order: SortOrder = Query(SortOrder.desc),
    paging: PageParams = Depends(),
    identity: Identity = Depends(require_admin),
    db: Session = Depends(get_db),
):
    company_status = None
    if status_filter and status_filter.lower() != "all":
        try:
            company_status = CompanyStatus(status_filter.upper())
        except ValueError:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Invalid status. Must be ACTIVE, INACTIVE, or SUSPENDED",
            )

    rows, total = DAO(db).search(
        search=search,
        status=company_status,
        sort_by=sort_by.value,
        order=order.value,
        offset=paging.offset,
        limit=paging.limit,
    )
    return {
        "companies": [CompanyOut.from_company(company, count).to_json() for company, count in rows],
        "pagination": pagination_envelope(total, paging.page, paging.limit),
    }


@router.get("/stats/dashboard")
async def dashboard_stats(identity: Identity = Depends(require_admin), db: Session = Depends(get_db)):
    dao = DAO(db)
    application_dao = ApplicationDAO(db)
    recent, _ = AdminActionDAO(db).list_actions(limit=RECENT_ACTIVITY_LIMIT)
    return {
        "companies": {
            "total": dao.count_companies(),
            "active": dao.count_companies(CompanyStatus.ACTIVE),
        },
        "applications": {
            "total": application_dao.count_all(),
            "pending": application_dao.count_all(ApplicationStatus.PENDING),
        },
        "recentActivity": [AdminActionOut.from_record(r).to_json() for r in recent],
    }


@router.get("/{company_id}")
async def get_company(company_id: int, identity: Identity = Depends(require_admin), db: Session = Depends(get_db)):
    dao = DAO(db)
    company = _get_company_or_404(dao, company_id)
    base = CompanyOut.from_company(company, len(company.jobs))
    return CompanyDetailOut(
        **base.model_dump(),
        jobs=[CompanyJobSummary.model_validate(job) for job in company.jobs],
    ).to_json()


@router.post("")
async def create_company(
    body: CompanyCreate,
    identity: Identity = Depends(require_admin),
    db: Session = Depends(get_db),
):
    auth_dao = AuthDAO(db)
    if auth_dao.email_taken(body.email):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="A user with this email already exists")

    company = auth_dao.create_company(
        email=body.email,
        password_hash=hash_password(body.password),
        company_name=body.company_name,
        display_name=body.display_name,
        status=body.status,
        payment_status=body.payment_status,
    )
    AdminActionDAO(db).record_for_user(identity.id, "CREATE_COMPANY", f"Created company {company.company_name} ({body.email})")

    return JSONResponse(
        content={"message": "Company created successfully", "company": CompanyOut.from_company(company).to_json()},
        status_code=status.HTTP_201_CREATED,
    )


@router.patch("/{company_id}/status")
async def update_company_status(
    company_id: int,
    body: CompanyStatusUpdate,
    identity: Identity = Depends(require_admin),
    db: Session = Depends(get_db),
    email_service: EmailService = Depends(get_email_service),
):
    dao = DAO(db)
    company = _get_company_or_404(dao, company_id)
    previous = company.status

    company = dao.update_status(company, body.status)
    AdminActionDAO(db).record_for_user(
        identity.id,
        "UPDATE_COMPANY_STATUS",
        f"Company {company.company_name} (id {company.id}): {previous} -> {company.status}",
    )

    if body.status == CompanyStatus.ACTIVE and previous != CompanyStatus.ACTIVE.value:
        try:
            email_service.send_company_activated_email(company.user.email, company.company_name)
        except EmailDeliveryError as e:
            logger.warning(f"Activation email for company {company.id} failed: {str(e)}")

    return {
        "message": "Company status updated successfully",
        "company": CompanyOut.from_company(company, dao.count_jobs(company.id)).to_json(),
    }


@router.delete("/{company_id}")
async def delete_company(company_id: int, identity: Identity = Depends(require_admin), db: Session = Depends(get_db)):
    dao = DAO(db)
    company = _get_company_or_404(dao, company_id)
    description = f"Deleted company {company.company_name} (id {company.id}, {company.user.email})"

    dao.delete_company(company)
    AdminActionDAO(db).record_for_user(identity.id, "DELETE_COMPANY", description)
    return {"message": "Company deleted successfully"}


@router.post("/{company_id}/reset-password")
async def reset_company_password(
    company_id: int,
    body: CompanyPasswordReset,
    identity: Identity = Depends(require_admin),
    db: Session = Depends(get_db),
):
    dao = DAO(db)
    company = _get_company_or_404(dao, company_id)

    dao.update_password(company, hash_password(body.new_password))
    AdminActionDAO(db).record_for_user(
        identity.id, "RESET_COMPANY_PASSWORD", f"Reset password for company {company.company_name} (id {company.id})"
    )
    return {"message": "Password reset successfully"}
