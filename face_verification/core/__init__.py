"""Core face verification functionality"""
from .quality import check_image_quality
from .face_detection import (
    FaceDetectorAdapter,
    OpenCVFaceDetector,
    ModelLoader,
    FaceDetectionError,
    ModelLoadError,
    DetectorInvocationError,
    get_detector
)
from .extraction import enforce_single_face, EmbeddingExtractor
from .similarity import euclidean_distance, score_embeddings
from .verification import FaceVerifier

__all__ = [
    'check_image_quality',
    'FaceDetectorAdapter',
    'OpenCVFaceDetector',
    'ModelLoader',
    'FaceDetectionError',
    'ModelLoadError',
    'DetectorInvocationError',
    'get_detector',
    'enforce_single_face',
    'EmbeddingExtractor',
    'euclidean_distance',
    'score_embeddings',
    'FaceVerifier'
]
