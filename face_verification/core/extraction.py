"""Per-image embedding extraction.

An image yields an embedding only when it passes the resolution gate and
contains exactly one face that is wide enough. Every other outcome is a
``RejectionReason``; model failures are raised, never turned into a reason.
"""

import logging
from typing import List, Union

import numpy as np

from ..config import Settings
from ..models.types import Detection, ExtractionResult, RejectionReason
from .face_detection import FaceDetectorAdapter
from .quality import check_image_quality, image_size

logger = logging.getLogger(__name__)

def enforce_single_face(
    detections: List[Detection], settings: Settings
) -> Union[Detection, RejectionReason]:
    """Accept exactly one sufficiently large face.

    Checked in order: no face, more than one face, face narrower than
    ``min_face_width``. A multi-face image is rejected even if one of the
    faces would pass on its own.

    Returns:
        The single detection, or the reason it was rejected.
    """
    if not detections:
        return RejectionReason.NO_FACE
    if len(detections) > 1:
        return RejectionReason.MULTIPLE_FACES

    detection = detections[0]
    if detection['box']['width'] < settings.min_face_width:
        return RejectionReason.FACE_TOO_SMALL
    return detection

class EmbeddingExtractor:
    """Produces one embedding per valid image."""

    def __init__(self, detector: FaceDetectorAdapter, settings: Settings):
        self.detector = detector
        self.settings = settings

    def extract(self, image: np.ndarray) -> ExtractionResult:
        rejection = check_image_quality(image, self.settings)
        if rejection is not None:
            width, height = image_size(image)
            logger.info(f"Image {width}x{height} below {self.settings.min_image_size}px floor")
            return ExtractionResult.failure(rejection)

        detections = self.detector.detect(image)
        logger.info(f"Detected {len(detections)} faces")

        outcome = enforce_single_face(detections, self.settings)
        if isinstance(outcome, RejectionReason):
            return ExtractionResult.failure(outcome)
        return ExtractionResult.success(outcome['embedding'])
