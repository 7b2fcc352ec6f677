"""Utility functions for image sources"""
from .image import (
    fetch_image_bytes,
    decode_image_bytes,
    ImageProcessingError,
    ImageFetchError,
    ImageDecodingError,
    ImageFormatError
)

__all__ = [
    'fetch_image_bytes',
    'decode_image_bytes',
    'ImageProcessingError',
    'ImageFetchError',
    'ImageDecodingError',
    'ImageFormatError'
]
