from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from recruitment.candidates.dao import DAO
from recruitment.candidates.models import Candidate
from recruitment.candidates.schema import CandidateProfileUpdate, CandidateProfileOut
from recruitment.core.dependencies import require_candidate
from recruitment.core.logger_setup import setup_logger
from recruitment.core.security import Identity
from recruitment.database import get_db

router = APIRouter()
logger = setup_logger(__name__)


def get_caller_candidate(
    identity: Identity = Depends(require_candidate),
    db: Session = Depends(get_db),
) -> Candidate:
    """Resolve the CANDIDATE caller's candidate row."""
    candidate = DAO(db).get_candidate_for_user(identity.id)
    if not candidate:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Candidate profile not found")
    return candidate


def profile_payload(candidate: Candidate):
    return CandidateProfileOut(
        id=candidate.id,
        first_name=candidate.first_name,
        last_name=candidate.last_name,
        email=candidate.user.email,
        profile=candidate.profile or {},
        submitted=bool(candidate.submitted),
    ).to_json()


@router.get("/profile")
async def get_profile(candidate: Candidate = Depends(get_caller_candidate)):
    return profile_payload(candidate)


@router.put("/profile")
async def update_profile(
    body: CandidateProfileUpdate,
    candidate: Candidate = Depends(get_caller_candidate),
    db: Session = Depends(get_db),
):
    if candidate.submitted:
        logger.warning(f"Edit of submitted profile refused for candidate {candidate.id}")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Profile cannot be edited after application submission",
        )

    candidate = DAO(db).update_profile(candidate, body.first_name, body.last_name, body.profile)
    logger.info(f"Profile updated for candidate {candidate.id}")
    return profile_payload(candidate)
