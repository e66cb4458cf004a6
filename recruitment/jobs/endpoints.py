from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from recruitment.companies.models import Company
from recruitment.core.dependencies import require_company
from recruitment.core.logger_setup import setup_logger
from recruitment.core.security import Identity
from recruitment.database import get_db
from recruitment.jobs.dao import DAO
from recruitment.jobs.schema import (
    JobCreate,
    JobUpdate,
    JobOut,
    JobWithCountOut,
    PublicJobOut,
)

router = APIRouter()
logger = setup_logger(__name__)


def get_caller_company(
    identity: Identity = Depends(require_company),
    db: Session = Depends(get_db),
) -> Company:
    """Resolve the COMPANY caller's company row."""
    company = DAO(db).get_company_for_user(identity.id)
    if not company:
        logger.warning(f"No company profile for user {identity.id}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Company not found")
    return company


def _job_fields(body: JobCreate, exclude_unset: bool = False):
    data = body.model_dump(exclude_unset=exclude_unset)
    if "extra_questions" in data and data["extra_questions"] is not None:
        data["extra_questions"] = [q.to_json() for q in body.extra_questions]
    return data


@router.get("/my-jobs")
async def list_my_jobs(company: Company = Depends(get_caller_company), db: Session = Depends(get_db)):
    logger.info(f"Listing jobs for company {company.id}")
    rows = DAO(db).list_jobs_with_counts(company.id)
    return [
        JobWithCountOut(**JobOut.model_validate(job).model_dump(), applications_count=count).to_json()
        for job, count in rows
    ]


@router.get("/public/{job_id}")
async def get_public_job(job_id: int, db: Session = Depends(get_db)):
    job = DAO(db).get_job(job_id)
    if not job:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Job not found")
    return PublicJobOut.model_validate(job).to_json()


@router.get("/{job_id}")
async def get_job(job_id: int, company: Company = Depends(get_caller_company), db: Session = Depends(get_db)):
    job = DAO(db).get_owned_job(job_id, company.id)
    if not job:
        logger.warning(f"Job {job_id} not found for company {company.id}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Job not found")
    return JobOut.model_validate(job).to_json()


@router.post("")
async def create_job(body: JobCreate, company: Company = Depends(get_caller_company), db: Session = Depends(get_db)):
    job = DAO(db).create_job(company.id, _job_fields(body))
    logger.info(f"Job {job.id} created by company {company.id}")
    return JSONResponse(content=JobOut.model_validate(job).to_json(), status_code=status.HTTP_201_CREATED)


@router.put("/{job_id}")
async def update_job(
    job_id: int,
    body: JobUpdate,
    company: Company = Depends(get_caller_company),
    db: Session = Depends(get_db),
):
    dao = DAO(db)
    job = dao.get_owned_job(job_id, company.id)
    if not job:
        logger.warning(f"Update of job {job_id} refused for company {company.id}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Job not found")

    job = dao.update_job(job, _job_fields(body, exclude_unset=True))
    return JobOut.model_validate(job).to_json()


@router.delete("/{job_id}")
async def delete_job(job_id: int, company: Company = Depends(get_caller_company), db: Session = Depends(get_db)):
    dao = DAO(db)
    job = dao.get_owned_job(job_id, company.id)
    if not job:
        logger.warning(f"Delete of job {job_id} refused for company {company.id}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Job not found")

    dao.delete_job(job)
    return {"message": "Job deleted successfully"}
