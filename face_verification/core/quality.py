"""Minimum-resolution gate applied before any detection work."""

from typing import Optional, Tuple

import numpy as np

from ..config import Settings
from ..models.types import RejectionReason

def image_size(image: np.ndarray) -> Tuple[int, int]:
    """Return ``(width, height)`` of a decoded image."""
    height, width = image.shape[:2]
    return int(width), int(height)

def check_image_quality(image: np.ndarray, settings: Settings) -> Optional[RejectionReason]:
    """Check that both image dimensions reach the configured floor.

    Args:
        image: Decoded image array (height first, as OpenCV stores it).
        settings: Service configuration providing ``min_image_size``.

    Returns:
        None if the image passes, otherwise ``RejectionReason.TOO_LOW_QUALITY``.
    """
    width, height = image_size(image)
    if width < settings.min_image_size or height < settings.min_image_size:
        return RejectionReason.TOO_LOW_QUALITY
    return None
