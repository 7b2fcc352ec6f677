import pytest

from face_verification.config import Settings

def test_defaults():
    settings = Settings.from_env({})

    assert settings.match_threshold == 0.48
    assert settings.min_face_width == 120
    assert settings.min_image_size == 300
    assert settings.detector_input_size == 512
    assert settings.detector_min_confidence == 0.5
    assert settings.max_detections == 5
    assert settings.max_upload_bytes == 5 * 1024 * 1024
    assert settings.port == 5000

def test_reads_environment():
    settings = Settings.from_env({
        'FACE_MATCH_THRESHOLD': '0.6',
        'MIN_FACE_WIDTH': '80',
        'MIN_IMAGE_SIZE': '250',
        'MODEL_DIR': '/opt/models',
        'LOG_LEVEL': 'debug',
        'PORT': '8080',
    })

    assert settings.match_threshold == 0.6
    assert settings.min_face_width == 80
    assert settings.min_image_size == 250
    assert settings.model_dir == '/opt/models'
    assert settings.log_level == 'DEBUG'
    assert settings.port == 8080

@pytest.mark.parametrize('env', [
    {'FACE_MATCH_THRESHOLD': 'abc'},
    {'FACE_MATCH_THRESHOLD': '0'},
    {'MIN_IMAGE_SIZE': '-1'},
    {'DETECTOR_MIN_CONFIDENCE': '1.5'},
    {'MAX_DETECTIONS': '0'},
])
def test_invalid_values_rejected(env):
    with pytest.raises(ValueError):
        Settings.from_env(env)

def test_settings_are_immutable(settings):
    with pytest.raises(AttributeError):
        settings.match_threshold = 0.9
