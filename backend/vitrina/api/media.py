from fastapi import APIRouter, Depends, UploadFile, File, Query
from pydantic import BaseModel, Field
from typing import List
from datetime import datetime
from vitrina.api.deps import get_storage, admin_required
from vitrina.services.storage import ObjectStorage

router = APIRouter(prefix="/api/admin/media", tags=["admin-media"])


# === Schemas ===

class MediaObjectResponse(BaseModel):
    name: str
    url: str
    created_at: datetime
    size: int

    class Config:
        from_attributes = True


class MediaDeleteRequest(BaseModel):
    names: List[str] = Field(min_length=1)


# === Routes ===

@router.get("/", response_model=List[MediaObjectResponse])
def list_media(
    limit: int = Query(100, ge=1, le=500),
    offset: int = Query(0, ge=0),
    storage: ObjectStorage = Depends(get_storage),
    _: dict = Depends(admin_required)
):
    """Imágenes del bucket, las más nuevas primero"""
    return storage.list(limit=limit, offset=offset)


@router.post("/", response_model=MediaObjectResponse)
async def upload_media(
    file: UploadFile = File(...),
    storage: ObjectStorage = Depends(get_storage),
    _: dict = Depends(admin_required)
):
    """Sube una imagen (se corrige orientación y se convierte a JPEG)"""
    content = await file.read()
    return storage.upload(file.filename or "image", content)


@router.post("/delete")
def delete_media(
    data: MediaDeleteRequest,
    storage: ObjectStorage = Depends(get_storage),
    _: dict = Depends(admin_required)
):
    removed = storage.remove(data.names)
    return {"message": "Images deleted", "deleted": removed}
