"""Face detection and embedding module.

This module wraps the external face models behind a single ``detect`` call.
Faces are located with the OpenCV DNN SSD detector (res10 Caffe model), and
each located face is refined with the 68-point landmark model and turned into
a 128-d embedding by ``face_recognition``. All models are loaded once per
process, on first use.
"""

import logging
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, List, Optional, Tuple

import cv2
import numpy as np
from typing_extensions import Protocol

from ..config import Settings, get_settings
from ..models.types import Box, Detection

logger = logging.getLogger(__name__)

class FaceDetectionError(Exception):
    """Base exception for face model failures."""
    pass

class ModelLoadError(FaceDetectionError):
    """Exception raised when the face models cannot be loaded."""
    pass

class DetectorInvocationError(FaceDetectionError):
    """Exception raised when a loaded model fails on an image."""
    pass

class FaceDetectorAdapter(Protocol):
    """Anything that turns an image into a list of face detections."""

    def detect(self, image: np.ndarray) -> List[Detection]:
        ...

@dataclass(frozen=True)
class FaceModels:
    detector_net: Any
    encode_faces: Callable[..., List[np.ndarray]]

class ModelLoader:
    """Loads the face models exactly once.

    Concurrent first callers wait on the lock and share the single loaded
    bundle. A failed load leaves the loader empty so a later call retries.
    """

    DETECTOR_CONFIG = "deploy.prototxt"
    DETECTOR_WEIGHTS = "res10_300x300_ssd_iter_140000.caffemodel"

    def __init__(self, model_dir: str, load_fn: Optional[Callable[[], FaceModels]] = None):
        self.model_dir = Path(model_dir)
        self._load_fn = load_fn or self._load
        self._lock = threading.Lock()
        self._models: Optional[FaceModels] = None

    @property
    def loaded(self) -> bool:
        return self._models is not None

    def get(self) -> FaceModels:
        models = self._models
        if models is not None:
            return models
        with self._lock:
            if self._models is None:
                logger.info("Loading face models...")
                self._models = self._load_fn()
                logger.info("Face models loaded")
            return self._models

    def _load(self) -> FaceModels:
        config_path = self.model_dir / self.DETECTOR_CONFIG
        weights_path = self.model_dir / self.DETECTOR_WEIGHTS
        for path in (config_path, weights_path):
            if not path.is_file():
                raise ModelLoadError(
                    f"Missing model file {path}. Run download_models to fetch it."
                )

        try:
            net = cv2.dnn.readNetFromCaffe(str(config_path), str(weights_path))
        except cv2.error as e:
            raise ModelLoadError(f"Failed to load face detector: {str(e)}") from e

        # Importing face_recognition loads the landmark and embedding models.
        # It calls quit() when its model package is missing.
        try:
            import face_recognition
        except (ImportError, SystemExit) as e:
            raise ModelLoadError(f"Failed to load face_recognition models: {e!r}") from e

        return FaceModels(detector_net=net, encode_faces=face_recognition.face_encodings)

class OpenCVFaceDetector:
    """Face detector adapter backed by OpenCV DNN and face_recognition."""

    # Mean values the res10 SSD model was trained with (BGR)
    MEAN_VALUES = (104.0, 177.0, 123.0)

    def __init__(self, settings: Settings, loader: Optional[ModelLoader] = None):
        self.settings = settings
        self.loader = loader or ModelLoader(settings.model_dir)
        # cv2.dnn.Net is not safe for concurrent forward passes
        self._inference_lock = threading.Lock()

    def detect(self, image: np.ndarray) -> List[Detection]:
        """Detect faces and compute one embedding per face.

        Args:
            image: Input image in BGR format.

        Returns:
            At most ``max_detections`` detections, highest confidence first.

        Raises:
            ModelLoadError: If the models cannot be loaded.
            DetectorInvocationError: If a model fails on this image.
        """
        models = self.loader.get()
        candidates = self._locate_faces(models.detector_net, image)
        if not candidates:
            return []

        rgb_image = cv2.cvtColor(image, cv2.COLOR_BGR2RGB)
        # face_recognition expects (top, right, bottom, left)
        locations = [
            (box['y'], box['x'] + box['width'], box['y'] + box['height'], box['x'])
            for _, box in candidates
        ]
        try:
            encodings = models.encode_faces(
                rgb_image, known_face_locations=locations, model="large"
            )
        except Exception as e:
            raise DetectorInvocationError(f"Failed to extract embeddings: {str(e)}") from e

        if len(encodings) != len(candidates):
            raise DetectorInvocationError(
                f"Expected {len(candidates)} embeddings, got {len(encodings)}"
            )

        return [
            {'box': box, 'confidence': confidence, 'embedding': np.asarray(encoding)}
            for (confidence, box), encoding in zip(candidates, encodings)
        ]

    def _locate_faces(self, net: Any, image: np.ndarray) -> List[Tuple[float, Box]]:
        height, width = image.shape[:2]
        size = self.settings.detector_input_size

        try:
            blob = cv2.dnn.blobFromImage(image, 1.0, (size, size), self.MEAN_VALUES)
            with self._inference_lock:
                net.setInput(blob)
                output = net.forward()
        except cv2.error as e:
            raise DetectorInvocationError(f"Face detector failed: {str(e)}") from e

        scale = np.array([width, height, width, height])
        results: List[Tuple[float, Box]] = []
        for i in range(output.shape[2]):
            confidence = float(output[0, 0, i, 2])
            if confidence < self.settings.detector_min_confidence:
                continue

            x1, y1, x2, y2 = (output[0, 0, i, 3:7] * scale).astype(int)
            x1, y1 = max(0, int(x1)), max(0, int(y1))
            x2, y2 = min(width, int(x2)), min(height, int(y2))
            if x2 <= x1 or y2 <= y1:
                continue

            results.append((confidence, {
                'x': x1,
                'y': y1,
                'width': x2 - x1,
                'height': y2 - y1
            }))

        results.sort(key=lambda item: item[0], reverse=True)
        logger.debug(f"Detector kept {len(results)} candidate faces")
        return results[:self.settings.max_detections]

# Create global detector instance; its models load on first detection
detector = OpenCVFaceDetector(get_settings())

def get_detector() -> OpenCVFaceDetector:
    """Return the process-wide detector."""
    return detector
