# materials/texture_loader.py
import logging
import os
import numpy as np
from PIL import Image, UnidentifiedImageError

logger = logging.getLogger(__name__)

def load_image_data(image_path: str, gamma: float = 2.0) -> np.ndarray:
    """
    Load an image file as a (height, width, 3) float array of linear colors.

    Args:
        image_path: Path to the image file
        gamma: Encoding gamma of the file; pixel values are raised to this
            power to undo it

    Returns:
        Array with values in [0, 1]

    Raises:
        FileNotFoundError: If the image file doesn't exist
        ValueError: If the image format is unsupported
    """
    if not os.path.exists(image_path):
        raise FileNotFoundError(f"Texture file not found: {image_path}")

    try:
        with Image.open(image_path) as img:
            if img.mode != 'RGB':
                img = img.convert('RGB')
            data = np.asarray(img, dtype=np.float64) / 255.0
    except (UnidentifiedImageError, OSError) as e:
        raise ValueError(f"Error loading texture {image_path}: {e}") from e

    logger.debug("Loaded texture %s (%dx%d)", image_path, data.shape[1], data.shape[0])
    return data ** gamma
