"""Service configuration.

All tunables are read once from the environment and stay fixed for the
lifetime of the process.
"""

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Mapping, Optional

@dataclass(frozen=True)
class Settings:
    """Process-wide, read-only configuration."""

    match_threshold: float = 0.48         # Euclidean distance cutoff
    min_face_width: int = 120             # Face box width floor in pixels
    min_image_size: int = 300             # Applied to both width and height
    detector_input_size: int = 512
    detector_min_confidence: float = 0.5
    max_detections: int = 5
    max_upload_bytes: int = 5 * 1024 * 1024
    fetch_timeout: float = 15.0
    model_dir: str = "models"
    log_level: str = "INFO"
    port: int = 5000

    def __post_init__(self):
        if self.match_threshold <= 0:
            raise ValueError("match_threshold must be positive")
        if not 0.0 <= self.detector_min_confidence <= 1.0:
            raise ValueError("detector_min_confidence must be between 0 and 1")
        for name in ("min_face_width", "min_image_size", "detector_input_size",
                     "max_detections", "max_upload_bytes"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive")
        if self.fetch_timeout <= 0:
            raise ValueError("fetch_timeout must be positive")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from environment variables, falling back to defaults.

        Args:
            environ: Mapping to read from. Defaults to ``os.environ``.

        Raises:
            ValueError: If a variable is present but not a valid value.
        """
        env = os.environ if environ is None else environ
        defaults = cls()
        return cls(
            match_threshold=float(env.get("FACE_MATCH_THRESHOLD", defaults.match_threshold)),
            min_face_width=int(env.get("MIN_FACE_WIDTH", defaults.min_face_width)),
            min_image_size=int(env.get("MIN_IMAGE_SIZE", defaults.min_image_size)),
            detector_input_size=int(env.get("DETECTOR_INPUT_SIZE", defaults.detector_input_size)),
            detector_min_confidence=float(
                env.get("DETECTOR_MIN_CONFIDENCE", defaults.detector_min_confidence)
            ),
            max_detections=int(env.get("MAX_DETECTIONS", defaults.max_detections)),
            max_upload_bytes=int(env.get("MAX_UPLOAD_BYTES", defaults.max_upload_bytes)),
            fetch_timeout=float(env.get("FETCH_TIMEOUT", defaults.fetch_timeout)),
            model_dir=env.get("MODEL_DIR", defaults.model_dir),
            log_level=env.get("LOG_LEVEL", defaults.log_level).upper(),
            port=int(env.get("PORT", defaults.port)),
        )

@lru_cache()
def get_settings() -> Settings:
    """Return the cached process-wide settings."""
    return Settings.from_env()
