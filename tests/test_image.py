"""Tests for the Canvas writer and tone mapping."""

import numpy as np
import pytest
from PIL import Image

from core.vector import Vector3
from renderer.image import Canvas
from renderer.tone_mapping import auto_exposure_tone_mapping, gamma_correct, reinhard_tone_mapping


class TestCanvas:
    def test_rejects_empty_size(self) -> None:
        with pytest.raises(ValueError):
            Canvas(0, 4)

    def test_y_zero_is_bottom_row(self) -> None:
        canvas = Canvas(3, 2)
        canvas.set_pixel(0, 0, Vector3(1, 0, 0))
        assert canvas.data[1, 0, 0] == 1.0
        assert canvas.get_pixel(0, 0) == Vector3(1, 0, 0)

    def test_from_array(self) -> None:
        data = np.random.default_rng(0).uniform(size=(2, 5, 3))
        canvas = Canvas.from_array(data)
        assert (canvas.width, canvas.height) == (5, 2)
        np.testing.assert_array_equal(canvas.data, data)

    def test_save_png(self, tmp_path) -> None:
        canvas = Canvas(2, 2)
        canvas.set_pixel(0, 1, Vector3(1, 1, 1))
        canvas.set_pixel(1, 0, Vector3(0.25, 0, 4.0))
        path = tmp_path / "out" / "image.png"
        canvas.save(str(path))

        with Image.open(path) as img:
            pixels = np.asarray(img.convert("RGB"))
        assert pixels.shape == (2, 2, 3)
        assert tuple(pixels[0, 0]) == (255, 255, 255)
        # gamma 2: sqrt(0.25) = 0.5; channels above 1 clamp to 255.
        assert tuple(pixels[1, 1]) == (128, 0, 255)

    def test_unknown_tone_map(self) -> None:
        with pytest.raises(ValueError):
            Canvas(1, 1).to_uint8("filmic")


class TestToneMapping:
    def test_gamma_correct_handles_non_finite_values(self) -> None:
        linear = np.array([[[np.nan, np.inf, -1.0]]])
        assert gamma_correct(linear).tolist() == [[[0, 255, 0]]]

    def test_gamma_correct_is_monotonic(self) -> None:
        ramp = np.linspace(0, 1, 11).reshape(1, 11, 1).repeat(3, axis=2)
        out = gamma_correct(ramp)[0, :, 0]
        assert (np.diff(out.astype(int)) >= 0).all()
        assert out[0] == 0 and out[-1] == 255

    def test_reinhard_compresses_highlights(self) -> None:
        bright = np.full((1, 1, 3), 100.0)
        out = reinhard_tone_mapping(bright)
        assert (out < 255).all()
        assert (out > 200).all()

    def test_auto_exposure_output_range(self) -> None:
        data = np.random.default_rng(1).uniform(0, 10, size=(4, 4, 3))
        out = auto_exposure_tone_mapping(data)
        assert out.dtype == np.uint8
        assert out.shape == (4, 4, 3)
