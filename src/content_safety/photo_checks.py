"""
Pluggable photo checks used by the fake profile analyzer.

The defaults do no pixel analysis: stock photo lookup and face matching need
an external service, so they return neutral values that never flag a photo.
Subclass a check and pass it to ``FakeProfileAnalyzer`` to back it with a
real implementation. Checks may block on I/O; the analyzer runs them in a
thread pool under a timeout.
"""

from io import BytesIO
from pathlib import Path
from typing import Sequence, Union

from PIL import Image, UnidentifiedImageError

from .constants import (
    DEFAULT_FACE_CONSISTENCY,
    DEFAULT_IMAGE_QUALITY,
    PROFESSIONAL_PHOTO_PIXELS,
)
from .exceptions import PhotoProcessingError
from .logging_config import get_logger
from .models import Photo

logger = get_logger(__name__)


class StockPhotoCheck:
    """Reverse image search for stock photos. Default: never flags."""

    def is_stock_photo(self, photo: Photo) -> bool:
        return False


class ProfessionalPhotoCheck:
    """Flags photos above 12 megapixels as likely professional shots."""

    def __init__(self, min_pixels: int = PROFESSIONAL_PHOTO_PIXELS):
        self.min_pixels = min_pixels

    def is_professional(self, photo: Photo) -> bool:
        return photo.pixel_count > self.min_pixels


class FaceConsistencyCheck:
    """Scores how likely all photos show the same person, 0 to 1.

    Default: a constant high consistency.
    """

    def consistency(self, photos: Sequence[Photo]) -> float:
        return DEFAULT_FACE_CONSISTENCY


class ImageQualityCheck:
    """Scores sharpness/lighting of a photo, 0 to 1. Default: a constant."""

    def quality(self, photo: Photo) -> float:
        return DEFAULT_IMAGE_QUALITY


def load_photo(image: Union[str, Path, bytes]) -> Photo:
    """
    Read a photo's dimensions with Pillow.

    Args:
        image: Path to an image file or the raw image bytes

    Returns:
        Photo with width and height set

    Raises:
        PhotoProcessingError: If the image cannot be opened
    """
    if isinstance(image, bytes):
        source = None
        stream = BytesIO(image)
    else:
        source = str(image)
        stream = source

    try:
        with Image.open(stream) as img:
            width, height = img.size
    except (OSError, UnidentifiedImageError, Image.DecompressionBombError) as e:
        raise PhotoProcessingError(f"Cannot read image {source or '<bytes>'}: {e}")

    logger.debug(f"Loaded photo {source or '<bytes>'}: {width}x{height}")
    return Photo(width=width, height=height, source=source)
