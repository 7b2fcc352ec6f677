"""Face verification API routes.

This module provides the HTTP endpoints of the service: a health check and
the verification endpoint that compares a reference photo (fetched by URL)
with an uploaded selfie.
"""

import logging
from typing import Dict, Optional, Union

from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from ..config import Settings, get_settings
from ..core.face_detection import FaceDetectionError, FaceDetectorAdapter, get_detector
from ..core.verification import FaceVerifier
from ..models.types import ErrorResponse, HealthStatus, LabeledFailure, VerificationResult
from ..utils.image import ImageProcessingError, decode_image_bytes, fetch_image_bytes

logger = logging.getLogger(__name__)

router = APIRouter()

GENERIC_FAILURE_MSG = "Face verification failed"

def _error(status_code: int, msg: str) -> JSONResponse:
    content: ErrorResponse = {'msg': msg}
    return JSONResponse(status_code=status_code, content=content)

@router.get("/", response_model=HealthStatus)
async def health() -> Dict:
    """Report that the service is up."""
    return {
        'service': "Face Verification Service",
        'status': "running",
        'accuracyMode': "HIGH"
    }

@router.post(
    "/verify",
    response_model=VerificationResult,
    responses={
        400: {'model': ErrorResponse},
        413: {'model': ErrorResponse},
        500: {'model': ErrorResponse}
    }
)
async def verify(
    referenceImageUrl: Optional[str] = Form(None),
    selfie: Optional[UploadFile] = File(None),
    detector: FaceDetectorAdapter = Depends(get_detector),
    settings: Settings = Depends(get_settings)
) -> Union[Dict, JSONResponse]:
    """Verify that the selfie shows the person in the reference photo.

    Args:
        referenceImageUrl: URL of the reference photo (e.g. an ID document).
        selfie: Uploaded selfie image.

    Returns:
        On success, a dictionary containing:
            - verified: Whether the faces belong to the same person
            - distance: Euclidean distance between the face embeddings
            - matchPercentage: Display score (0-100)
            - threshold: Distance cutoff the decision used
        Otherwise ``{"msg": ...}`` with a 400 for missing input or a rejected
        image, 413 for an oversized selfie and 500 for internal failures.
    """
    if not referenceImageUrl or selfie is None:
        return _error(
            status.HTTP_400_BAD_REQUEST,
            "referenceImageUrl and selfie file required"
        )

    try:
        # Read at most one byte past the cap
        selfie_bytes = await selfie.read(settings.max_upload_bytes + 1)
        if len(selfie_bytes) > settings.max_upload_bytes:
            logger.warning(f"Selfie upload over {settings.max_upload_bytes} bytes rejected")
            return _error(413, "Selfie file too large")

        logger.info("Fetching reference image...")
        reference_bytes = await run_in_threadpool(
            fetch_image_bytes, referenceImageUrl, settings.fetch_timeout
        )

        logger.info("Decoding reference image...")
        reference_image = await run_in_threadpool(decode_image_bytes, reference_bytes)

        # The selfie is decoded only after the reference passes
        verifier = FaceVerifier(detector, settings)
        outcome = await run_in_threadpool(
            verifier.verify, reference_image, lambda: decode_image_bytes(selfie_bytes)
        )

    except ImageProcessingError as e:
        logger.error(f"Image error: {str(e)}", exc_info=True)
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, GENERIC_FAILURE_MSG)
    except FaceDetectionError as e:
        logger.error(f"Face model error: {str(e)}", exc_info=True)
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, GENERIC_FAILURE_MSG)
    except Exception:
        logger.exception("Verification error")
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, GENERIC_FAILURE_MSG)

    if isinstance(outcome, LabeledFailure):
        return _error(status.HTTP_400_BAD_REQUEST, outcome.message)

    return outcome
