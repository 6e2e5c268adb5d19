# renderer/tone_mapping.py
"""
Operators that turn a (height, width, 3) array of linear radiance into
8-bit display values. NaN and negative radiance read as black in all of them.
"""
import numpy as np

def _finite(linear, posinf):
    return np.nan_to_num(np.asarray(linear, dtype=np.float64), nan=0.0, posinf=posinf, neginf=0.0)

def _quantize(display):
    return (display * 255.0 + 0.5).clip(0, 255).astype(np.uint8)

def luminance(linear):
    """Rec. 709 luminance of each pixel."""
    return 0.2126 * linear[..., 0] + 0.7152 * linear[..., 1] + 0.0722 * linear[..., 2]

def gamma_correct(linear, gamma=2.0):
    """
    Clamp each channel to [0, 1], then gamma encode. Infinite radiance
    saturates to white.
    """
    clamped = np.clip(_finite(linear, posinf=1.0), 0.0, 1.0)
    return _quantize(clamped ** (1.0 / gamma))

def reinhard_tone_mapping(linear, exposure=1.0, white_point=1.0, gamma=2.2):
    """
    Reinhard's operator x / (1 + x / white_point) applied per channel after
    scaling by `exposure`; highlights roll off instead of clipping.
    """
    scaled = np.maximum(_finite(linear, posinf=0.0), 0.0) * exposure
    compressed = scaled / (1.0 + scaled / white_point)
    return _quantize(np.clip(compressed, 0.0, 1.0) ** (1.0 / gamma))

def auto_exposure_tone_mapping(linear, gamma=2.2, target_midgray=0.18):
    """
    Reinhard mapping with the exposure chosen so the mean scene luminance
    lands on `target_midgray`.
    """
    linear = _finite(linear, posinf=0.0)
    mean_luminance = luminance(linear).mean() + 1e-5
    return reinhard_tone_mapping(linear, exposure=target_midgray / mean_luminance, gamma=gamma)

TONE_MAPPERS = {
    "clamp": gamma_correct,
    "reinhard": reinhard_tone_mapping,
    "auto": auto_exposure_tone_mapping,
}
