"""Embedding comparison and the verified/not-verified decision."""

import logging

import numpy as np

from ..models.types import VerificationResult

logger = logging.getLogger(__name__)

def euclidean_distance(embedding_a: np.ndarray, embedding_b: np.ndarray) -> float:
    """L2 norm of the element-wise difference.

    Raises:
        ValueError: If the embeddings differ in length.
    """
    a = np.asarray(embedding_a, dtype=np.float64).ravel()
    b = np.asarray(embedding_b, dtype=np.float64).ravel()
    if a.shape != b.shape:
        raise ValueError(
            f"Embedding length mismatch: {a.shape[0]} != {b.shape[0]}"
        )
    return float(np.linalg.norm(a - b))

def score_embeddings(
    embedding_a: np.ndarray, embedding_b: np.ndarray, threshold: float
) -> VerificationResult:
    """Compare two face embeddings.

    ``matchPercentage`` is a linear display heuristic, ``(1 - distance) * 100``
    clamped to [0, 100]. It is not a calibrated probability: a distance right
    at the threshold still shows roughly 52%.

    Args:
        embedding_a: First face embedding.
        embedding_b: Second face embedding.
        threshold: Distance cutoff; only distances strictly below it verify.

    Returns:
        Decision with the rounded distance, the percentage and the threshold used.
    """
    distance = euclidean_distance(embedding_a, embedding_b)

    match_percentage = min(100.0, max(0.0, (1 - distance) * 100))
    # Decided on the unrounded distance
    verified = distance < threshold

    logger.info(
        f"Face distance: {distance:.4f}, match: {match_percentage:.2f}%, "
        f"verified: {verified}"
    )

    return {
        'verified': bool(verified),
        'distance': round(distance, 4),
        'matchPercentage': round(match_percentage, 2),
        'threshold': threshold
    }
