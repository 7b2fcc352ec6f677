"""Data models and type definitions"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional

import numpy as np
from typing_extensions import TypedDict

class Box(TypedDict):
    x: int
    y: int
    width: int
    height: int

class Detection(TypedDict):
    box: Box
    confidence: float
    embedding: np.ndarray

class VerificationResult(TypedDict):
    verified: bool
    distance: float
    matchPercentage: float
    threshold: float

class ErrorResponse(TypedDict):
    msg: str

class HealthStatus(TypedDict):
    service: str
    status: str
    accuracyMode: str

class RejectionReason(Enum):
    """User-facing reasons an image cannot be used for verification."""

    TOO_LOW_QUALITY = "Image too low quality. Use better camera."
    NO_FACE = "No face detected"
    MULTIPLE_FACES = "Multiple faces detected"
    FACE_TOO_SMALL = "Face too small. Move closer to camera."

    @property
    def message(self) -> str:
        return self.value

class ImageSide(Enum):
    REFERENCE = "Reference image"
    SELFIE = "Selfie"

@dataclass(frozen=True, eq=False)
class ExtractionResult:
    """Outcome of running the extraction pipeline on one image.

    Exactly one of ``embedding`` and ``reason`` is set.
    """

    embedding: Optional[np.ndarray] = None
    reason: Optional[RejectionReason] = None

    def __post_init__(self):
        if (self.embedding is None) == (self.reason is None):
            raise ValueError("ExtractionResult needs exactly one of embedding or reason")

    @classmethod
    def success(cls, embedding: np.ndarray) -> "ExtractionResult":
        return cls(embedding=embedding)

    @classmethod
    def failure(cls, reason: RejectionReason) -> "ExtractionResult":
        return cls(reason=reason)

    @property
    def ok(self) -> bool:
        return self.reason is None

@dataclass(frozen=True)
class LabeledFailure:
    """A rejection attributed to the image that caused it."""

    side: ImageSide
    reason: RejectionReason

    @property
    def message(self) -> str:
        return f"{self.side.value} error: {self.reason.message}"
