import cv2
import numpy as np
import pytest

from face_verification.config import Settings

EMBEDDING_SIZE = 128

class ScriptedDetector:
    """Fake detector that replays a fixed list of responses and counts calls."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = 0

    def detect(self, image):
        self.calls += 1
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

def make_embedding(first=0.0):
    embedding = np.zeros(EMBEDDING_SIZE)
    embedding[0] = first
    return embedding

def make_detection(width=200, height=None, embedding=None):
    return {
        'box': {'x': 10, 'y': 10, 'width': width, 'height': height or width},
        'confidence': 0.99,
        'embedding': make_embedding() if embedding is None else embedding
    }

def make_image(width=400, height=400):
    return np.zeros((height, width, 3), dtype=np.uint8)

def encode_png(image):
    ok, buffer = cv2.imencode('.png', image)
    assert ok
    return buffer.tobytes()

@pytest.fixture
def settings():
    return Settings()
