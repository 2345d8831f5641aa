# backend/photofind/routes/photos.py
import logging

from botocore.exceptions import BotoCoreError, ClientError
from fastapi import APIRouter, Header, HTTPException, Request
from opentelemetry import trace

from photofind.routes.cors import INDEX_CORS_HEADERS, preflight
from photofind.services import get_blob

router = APIRouter(prefix="/photos", tags=["photos"])
logger = logging.getLogger("photofind.routes.photos")
tracer = trace.get_tracer(__name__)


@router.options("/{object_key:path}")
def photos_preflight(object_key: str):
    return preflight(INDEX_CORS_HEADERS)


@router.put("/{object_key:path}")
async def upload_photo(
    object_key: str,
    request: Request,
    content_type: str = Header("image/jpeg"),
    custom_labels: str = Header("", alias="x-amz-meta-customlabels"),
):
    """
    Upload proxy: stores the raw body in the photos bucket with the uploader's
    labels as object metadata. Indexing is driven by the bucket's
    object-created notification, not by this request.
    """
    with tracer.start_as_current_span("photos.upload") as span:
        data = await request.body()
        if not data:
            raise HTTPException(status_code=400, detail="Empty upload")
        span.set_attribute("photo.key", object_key)

        try:
            stored = get_blob().put_photo(object_key, data, content_type, custom_labels)
        except ClientError as e:
            logger.exception("Failed to store photo key=%s", object_key)
            raise HTTPException(
                status_code=500,
                detail=f"Failed to store image: {e.response.get('Error', {}).get('Message', str(e))}",
            )
        except BotoCoreError as e:
            logger.exception("Failed to store photo key=%s", object_key)
            raise HTTPException(status_code=500, detail=f"Failed to store image: {e}")

        return {"ok": True, **stored}
