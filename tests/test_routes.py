import pytest
from fastapi.testclient import TestClient

from face_verification.api import routes
from face_verification.config import Settings, get_settings
from face_verification.core.face_detection import DetectorInvocationError, get_detector
from face_verification.main import app
from face_verification.utils.image import ImageFetchError

from conftest import ScriptedDetector, encode_png, make_detection, make_embedding, make_image

REFERENCE_URL = 'http://images.example.com/id-photo.jpg'

@pytest.fixture
def client():
    app.dependency_overrides[get_settings] = lambda: Settings()
    yield TestClient(app)
    app.dependency_overrides.clear()

@pytest.fixture
def use_detector():
    def install(*responses):
        detector = ScriptedDetector(*responses)
        app.dependency_overrides[get_detector] = lambda: detector
        return detector
    return install

@pytest.fixture
def reference_image(monkeypatch):
    def serve(image=None):
        data = encode_png(make_image() if image is None else image)
        monkeypatch.setattr(routes, 'fetch_image_bytes', lambda url, timeout: data)
    serve()
    return serve

def post_verify(client, selfie=None, url=REFERENCE_URL):
    selfie_bytes = encode_png(make_image() if selfie is None else selfie)
    return client.post(
        '/verify',
        data={'referenceImageUrl': url},
        files={'selfie': ('selfie.png', selfie_bytes, 'image/png')}
    )

def detection_with(first):
    return [make_detection(embedding=make_embedding(first))]

def test_health(client):
    response = client.get('/')

    assert response.status_code == 200
    assert response.json()['status'] == 'running'

def test_verified_pair(client, use_detector, reference_image):
    use_detector(detection_with(0.0), detection_with(0.3))

    response = post_verify(client)

    assert response.status_code == 200
    assert response.json() == {
        'verified': True,
        'distance': 0.3,
        'matchPercentage': 70.0,
        'threshold': 0.48
    }

def test_unverified_pair(client, use_detector, reference_image):
    use_detector(detection_with(0.0), detection_with(0.6))

    response = post_verify(client)

    assert response.status_code == 200
    body = response.json()
    assert body['verified'] is False
    assert body['matchPercentage'] == 40.0

def test_low_quality_selfie(client, use_detector, reference_image):
    detector = use_detector(detection_with(0.0))

    response = post_verify(client, selfie=make_image(200, 200))

    assert response.status_code == 400
    assert response.json() == {
        'msg': "Selfie error: Image too low quality. Use better camera."
    }
    assert detector.calls == 1

def test_multiple_faces_in_reference(client, use_detector, reference_image):
    detector = use_detector([make_detection(), make_detection()])

    response = post_verify(client)

    assert response.status_code == 400
    assert response.json() == {'msg': "Reference image error: Multiple faces detected"}
    assert detector.calls == 1

def test_missing_selfie(client, use_detector):
    detector = use_detector()

    response = client.post('/verify', data={'referenceImageUrl': REFERENCE_URL})

    assert response.status_code == 400
    assert response.json() == {'msg': "referenceImageUrl and selfie file required"}
    assert detector.calls == 0

def test_missing_reference_url(client, use_detector):
    use_detector()

    response = client.post(
        '/verify',
        files={'selfie': ('selfie.png', encode_png(make_image()), 'image/png')}
    )

    assert response.status_code == 400

def test_oversized_selfie(client, use_detector, reference_image):
    app.dependency_overrides[get_settings] = lambda: Settings(max_upload_bytes=10)
    detector = use_detector()

    response = post_verify(client)

    assert response.status_code == 413
    assert response.json() == {'msg': "Selfie file too large"}
    assert detector.calls == 0

def test_fetch_failure_is_generic_server_error(client, use_detector, monkeypatch):
    use_detector()

    def failing_fetch(url, timeout):
        raise ImageFetchError("Failed to fetch reference image: HTTP 404")

    monkeypatch.setattr(routes, 'fetch_image_bytes', failing_fetch)

    response = post_verify(client)

    assert response.status_code == 500
    assert response.json() == {'msg': "Face verification failed"}

def test_undecodable_selfie_is_generic_server_error(client, use_detector, reference_image):
    use_detector()

    response = client.post(
        '/verify',
        data={'referenceImageUrl': REFERENCE_URL},
        files={'selfie': ('selfie.png', b'not an image', 'image/png')}
    )

    assert response.status_code == 500
    assert response.json() == {'msg': "Face verification failed"}

def test_model_failure_does_not_leak_details(client, use_detector, reference_image):
    use_detector(DetectorInvocationError("cv2 internal stack trace"))

    response = post_verify(client)

    assert response.status_code == 500
    assert response.json() == {'msg': "Face verification failed"}

def test_reference_rejection_wins_over_corrupt_selfie(client, use_detector, reference_image):
    reference_image(make_image(200, 200))
    detector = use_detector()

    response = client.post(
        '/verify',
        data={'referenceImageUrl': REFERENCE_URL},
        files={'selfie': ('selfie.png', b'garbage', 'image/png')}
    )

    assert response.status_code == 400
    assert response.json() == {
        'msg': "Reference image error: Image too low quality. Use better camera."
    }
    assert detector.calls == 0

def test_selfie_exactly_at_upload_cap_accepted(client, use_detector, reference_image):
    selfie_bytes = encode_png(make_image())
    app.dependency_overrides[get_settings] = lambda: Settings(max_upload_bytes=len(selfie_bytes))
    use_detector(detection_with(0.0), detection_with(0.3))

    response = client.post(
        '/verify',
        data={'referenceImageUrl': REFERENCE_URL},
        files={'selfie': ('selfie.png', selfie_bytes, 'image/png')}
    )

    assert response.status_code == 200
    assert response.json()['verified'] is True
