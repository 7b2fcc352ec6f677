"""Download the face detector model files into the configured model directory."""

import logging
import sys
from pathlib import Path

import requests

from .config import get_settings
from .core.face_detection import ModelLoader

logger = logging.getLogger(__name__)

MODEL_URLS = {
    ModelLoader.DETECTOR_CONFIG: 'https://raw.githubusercontent.com/opencv/opencv/master/samples/dnn/face_detector/deploy.prototxt',
    ModelLoader.DETECTOR_WEIGHTS: 'https://raw.githubusercontent.com/opencv/opencv_3rdparty/dnn_samples_face_detector_20170830/res10_300x300_ssd_iter_140000.caffemodel'
}

def download_file(url: str, path: Path, timeout: float) -> None:
    logger.info(f"Downloading {path.name}...")
    response = requests.get(url, timeout=timeout)
    response.raise_for_status()
    path.write_bytes(response.content)
    logger.info(f"Downloaded {path.name}")

def download_models(model_dir: str, timeout: float = 60.0) -> bool:
    """Fetch any missing model files.

    Returns:
        True when every file is present afterwards.
    """
    directory = Path(model_dir)
    directory.mkdir(parents=True, exist_ok=True)

    for filename, url in MODEL_URLS.items():
        path = directory / filename
        if path.exists():
            continue
        try:
            download_file(url, path, timeout)
        except requests.RequestException as e:
            logger.error(f"Error downloading {filename}: {str(e)}")
            logger.error(
                f"Download the model files manually into '{directory}': "
                + ", ".join(MODEL_URLS)
            )
            return False
    return True

def main():
    logging.basicConfig(level=logging.INFO)
    settings = get_settings()
    return 0 if download_models(settings.model_dir) else 1

if __name__ == "__main__":
    sys.exit(main())
