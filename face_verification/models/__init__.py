"""Data models and type definitions"""
from .types import (
    Box,
    Detection,
    VerificationResult,
    ErrorResponse,
    HealthStatus,
    RejectionReason,
    ImageSide,
    ExtractionResult,
    LabeledFailure
)

__all__ = [
    'Box',
    'Detection',
    'VerificationResult',
    'ErrorResponse',
    'HealthStatus',
    'RejectionReason',
    'ImageSide',
    'ExtractionResult',
    'LabeledFailure'
]
