"""
JSON API routes (prefix /api). Everything else under /api is a JSON 404.
"""
import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from webid_demo import config
from webid_demo.federation import get_aws_config
from webid_demo.session_store import Session
from webid_demo.sessions import get_session
from webid_demo.storage import list_object_keys

logger = logging.getLogger(__name__)
router = APIRouter()

NOT_FOUND_MESSAGE = "Nothing to see here"
LOGIN_REQUIRED_MESSAGE = "Please login first"


@router.get("/s3/list")
def list_s3_objects(session: Session = Depends(get_session)):
    """Keys of the configured bucket, listed with credentials federated from the Google login."""
    if not session.is_authenticated:
        return JSONResponse({"message": LOGIN_REQUIRED_MESSAGE}, status_code=403)

    aws_config = get_aws_config(session)
    entries = list_object_keys(aws_config, config.AWS_S3_BUCKET_NAME)
    return {"entries": entries}


_ALL_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"]


@router.api_route("", methods=_ALL_METHODS, include_in_schema=False)
@router.api_route("/{path:path}", methods=_ALL_METHODS, include_in_schema=False)
def not_found():
    return JSONResponse({"message": NOT_FOUND_MESSAGE}, status_code=404)
