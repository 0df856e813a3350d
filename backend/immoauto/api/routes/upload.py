from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from immoauto.core.database import get_db
from immoauto.core.deps import get_current_user
from immoauto.models.user import User
from immoauto.schemas.common import ApiResponse, MessageResponse
from immoauto.schemas.upload import UploadedImage, UploadRequest
from immoauto.services import uploads

router = APIRouter(prefix="/upload", tags=["upload"])


@router.post("/images", response_model=ApiResponse[list[UploadedImage]], status_code=201)
def upload_images(payload: UploadRequest, current_user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    images = uploads.upload_images(db, payload.images, current_user)
    return {"success": True, "message": f"{len(images)} image(s) uploaded", "data": images}


@router.get("/images/{image_id}")
def get_image(image_id: int, db: Session = Depends(get_db)):
    image = uploads.get_image(db, image_id)
    return Response(
        content=uploads.image_bytes(image),
        media_type=image.mime_type,
        headers={"Cache-Control": "public, max-age=31536000"},
    )


@router.delete("/images/{image_id}", response_model=MessageResponse)
def delete_image(image_id: int, current_user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    uploads.delete_image(db, image_id, current_user)
    return {"success": True, "message": "Image deleted"}
