from fastapi import APIRouter, Depends

from threadline.core.config import settings
from threadline.core.storage import media_storage
from threadline.modules.media.service import MediaService

router = APIRouter(prefix=f"{settings.API_PREFIX}/media", tags=["media"])

def get_media_service() -> MediaService:
    return MediaService(media_storage)

@router.get("/{path:path}")
def serve_media(path: str, media_service: MediaService = Depends(get_media_service)):
    return media_service.get_media(path)
