# backend/routers/media_router.py
from fastapi import APIRouter, Depends, File, Form, UploadFile
from sqlalchemy.orm import Session

from database.session import get_db
from models.user_model import User
from routers.deps import require_roles
from schemas.media import MediaUploadOut
from services import policy
from services.media_service import media_service

router = APIRouter(prefix="/media", tags=["media"])


@router.post("/upload", response_model=MediaUploadOut, status_code=201)
async def upload_media(
    kind: str = Form(..., description="gallery section or certificate key"),
    file: UploadFile = File(...),
    user: User = Depends(require_roles("manufacturer", "distributor", "retailer")),
    db: Session = Depends(get_db),
):
    profile = policy.caller_profile(db, user)
    content = await file.read()
    result = await media_service.upload_company_file(
        content=content, filename=file.filename, company_id=profile.id, kind=kind
    )
    return MediaUploadOut(**result)
