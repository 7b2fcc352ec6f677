"""Reference-versus-selfie verification."""

import logging
from typing import Callable, Union

import numpy as np

from ..config import Settings
from ..models.types import ImageSide, LabeledFailure, VerificationResult
from .extraction import EmbeddingExtractor
from .face_detection import FaceDetectorAdapter
from .similarity import score_embeddings

logger = logging.getLogger(__name__)

class FaceVerifier:
    """Decides whether a reference photo and a selfie show the same person.

    The reference is processed first; if it is rejected the selfie is never
    sent to the detector.
    """

    def __init__(self, detector: FaceDetectorAdapter, settings: Settings):
        self.extractor = EmbeddingExtractor(detector, settings)
        self.settings = settings

    def verify(
        self,
        reference_image: np.ndarray,
        selfie_image: Union[np.ndarray, Callable[[], np.ndarray]]
    ) -> Union[VerificationResult, LabeledFailure]:
        """Run extraction on both images and score the pair.

        Args:
            reference_image: Decoded reference photo.
            selfie_image: Decoded selfie, or a callable producing it. A callable
                is only invoked once the reference has passed, so a bad
                selfie never masks a reference rejection.

        Returns:
            The verification result, or a failure labeled with the image that
            was rejected.

        Raises:
            FaceDetectionError: If the face models fail on either image.
            ImageProcessingError: If a selfie loader cannot decode the selfie.
        """
        logger.info("Processing reference image...")
        reference = self.extractor.extract(reference_image)
        if not reference.ok:
            return self._reject(ImageSide.REFERENCE, reference.reason)

        if callable(selfie_image):
            selfie_image = selfie_image()

        logger.info("Processing selfie image...")
        selfie = self.extractor.extract(selfie_image)
        if not selfie.ok:
            return self._reject(ImageSide.SELFIE, selfie.reason)

        return score_embeddings(
            reference.embedding, selfie.embedding, self.settings.match_threshold
        )

    @staticmethod
    def _reject(side, reason) -> LabeledFailure:
        failure = LabeledFailure(side=side, reason=reason)
        logger.warning(f"Verification rejected: {failure.message}")
        return failure
