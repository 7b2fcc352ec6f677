"""Image source utilities.

This module fetches reference images over HTTP and decodes raw image bytes
into OpenCV arrays. Every failure surfaces as an ``ImageProcessingError``
subclass so callers can tell it apart from a face rejection.
"""

import logging

import cv2
import numpy as np
import requests

logger = logging.getLogger(__name__)

class ImageProcessingError(Exception):
    """Base exception for image processing errors."""
    pass

class ImageFetchError(ImageProcessingError):
    """Exception raised when a remote image cannot be downloaded."""
    pass

class ImageDecodingError(ImageProcessingError):
    """Exception raised when there are no image bytes to decode."""
    pass

class ImageFormatError(ImageProcessingError):
    """Exception raised when image data cannot be read as an image."""
    pass

def fetch_image_bytes(url: str, timeout: float) -> bytes:
    """Download an image.

    Args:
        url: Location of the image.
        timeout: Connect and read timeout in seconds.

    Returns:
        Raw response body.

    Raises:
        ImageFetchError: On network failure or a non-success response.
    """
    try:
        response = requests.get(url, timeout=timeout)
    except requests.RequestException as e:
        raise ImageFetchError(f"Failed to fetch reference image: {str(e)}") from e

    if not response.ok:
        raise ImageFetchError(
            f"Failed to fetch reference image: HTTP {response.status_code}"
        )

    logger.debug(f"Fetched {len(response.content)} bytes from {url}")
    return response.content

def decode_image_bytes(image_bytes: bytes) -> np.ndarray:
    """Decode raw image bytes to an OpenCV image.

    Args:
        image_bytes: Encoded image (JPEG, PNG, ...).

    Returns:
        Decoded image as numpy array in BGR format.

    Raises:
        ImageDecodingError: If no bytes were given.
        ImageFormatError: If the bytes cannot be read as an image.
    """
    if not image_bytes:
        raise ImageDecodingError("Image data is empty")

    nparr = np.frombuffer(image_bytes, np.uint8)
    try:
        image = cv2.imdecode(nparr, cv2.IMREAD_COLOR)
    except cv2.error as e:
        raise ImageFormatError(f"Failed to decode image data: {str(e)}") from e

    if image is None:
        raise ImageFormatError("Failed to decode image data")

    return image
