from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from recruitment.admin_actions.dao import DAO
from recruitment.admin_actions.schema import AdminActionCreate, AdminActionOut
from recruitment.core.dependencies import require_admin
from recruitment.core.logger_setup import setup_logger
from recruitment.core.pagination import pagination_envelope
from recruitment.core.security import Identity
from recruitment.database import get_db

router = APIRouter()
logger = setup_logger(__name__)


@router.get("/all")
async def list_admin_actions(
    search: Optional[str] = Query(None),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    identity: Identity = Depends(require_admin),
    db: Session = Depends(get_db),
):
    rows, total = DAO(db).list_actions(search=search, offset=(page - 1) * limit, limit=limit)
    return {
        "actions": [AdminActionOut.from_record(r).to_json() for r in rows],
        "pagination": pagination_envelope(total, page, limit),
    }


@router.post("")
async def create_admin_action(
    body: AdminActionCreate,
    identity: Identity = Depends(require_admin),
    db: Session = Depends(get_db),
):
    dao = DAO(db)
    admin = dao.get_admin_for_user(identity.id)
    if not admin:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Admin not found")

    record = dao.add_action(admin.id, body.action, body.details)
    return JSONResponse(content=AdminActionOut.from_record(record).to_json(), status_code=status.HTTP_201_CREATED)
