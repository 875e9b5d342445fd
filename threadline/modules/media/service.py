import logging
import mimetypes

from botocore.exceptions import BotoCoreError, ClientError
from fastapi import HTTPException
from starlette.responses import FileResponse, StreamingResponse

from threadline.core.storage import MediaStorage

logger = logging.getLogger(__name__)

CACHE_HEADERS = {"Cache-Control": "public, max-age=86400"}

class MediaService:
    def __init__(self, storage: MediaStorage):
        self.storage = storage

    def get_media(self, path: str):
        """Serve a stored file from the bucket, or from local disk when no bucket is configured"""
        if self.storage.client:
            try:
                obj = self.storage.get_object(path)
            except ClientError as e:
                logger.warning(f"File {path} not found in bucket: {e}")
                raise HTTPException(status_code=404, detail="File not found")
            except BotoCoreError as e:
                logger.error(f"Failed to retrieve file {path} from bucket: {e}")
                raise HTTPException(status_code=502, detail="Media storage unavailable")

            return StreamingResponse(
                obj["Body"].iter_chunks(),
                media_type=obj.get("ContentType") or "application/octet-stream",
                headers=CACHE_HEADERS,
            )

        file_path = self.storage.local_path(path)
        if file_path is None or not file_path.is_file():
            logger.info(f"File {path} not found in local storage")
            raise HTTPException(status_code=404, detail="File not found")

        content_type = mimetypes.guess_type(file_path.name)[0] or "application/octet-stream"
        return FileResponse(file_path, media_type=content_type, headers=CACHE_HEADERS)
