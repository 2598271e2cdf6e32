import numpy as np
import pytest

from pyhdrio.errors import ImageIOError, InvalidArgumentError
from pyhdrio.io.exr import EXR_AVAILABLE, load_exr, save_exr
from pyhdrio.tensor import Tensor


@pytest.mark.skipif(EXR_AVAILABLE, reason="OpenEXR is installed")
def test_load_exr_without_openexr_raises_importerror(tmp_path):
    with pytest.raises(ImportError) as exc:
        load_exr(tmp_path / "x.exr")
    assert "pip install" in str(exc.value)


def test_save_exr_checks_channels_first(tmp_path):
    with pytest.raises(InvalidArgumentError):
        save_exr(Tensor.zeros((2, 2, 1)), tmp_path / "x.exr")


def test_exr_roundtrip(tmp_path):
    pytest.importorskip("OpenEXR")
    arr = np.random.default_rng(0).random((3, 5, 3), dtype=np.float32) * 10.0
    path = tmp_path / "x.exr"

    save_exr(arr, path)
    loaded = load_exr(path)

    assert loaded.dims == (3, 5, 3)
    np.testing.assert_array_equal(loaded.data, arr)


def test_load_exr_missing_file(tmp_path):
    pytest.importorskip("OpenEXR")
    with pytest.raises(ImageIOError):
        load_exr(tmp_path / "missing.exr")


def test_load_exr_requires_rgb_planes(tmp_path):
    OpenEXR = pytest.importorskip("OpenEXR")
    Imath = pytest.importorskip("Imath")

    path = tmp_path / "luma.exr"
    header = OpenEXR.Header(2, 2)
    header["channels"] = {"Y": Imath.Channel(Imath.PixelType(Imath.PixelType.FLOAT))}
    out = OpenEXR.OutputFile(str(path), header)
    out.writePixels({"Y": np.zeros((2, 2), dtype=np.float32).tobytes()})
    out.close()

    with pytest.raises(InvalidArgumentError):
        load_exr(path)


def test_load_exr_rejects_extra_planes(tmp_path):
    OpenEXR = pytest.importorskip("OpenEXR")
    Imath = pytest.importorskip("Imath")

    path = tmp_path / "rgba.exr"
    float_channel = Imath.Channel(Imath.PixelType(Imath.PixelType.FLOAT))
    header = OpenEXR.Header(2, 2)
    header["channels"] = {name: float_channel for name in "RGBA"}
    out = OpenEXR.OutputFile(str(path), header)
    out.writePixels({name: np.ones((2, 2), dtype=np.float32).tobytes() for name in "RGBA"})
    out.close()

    with pytest.raises(InvalidArgumentError):
        load_exr(path)


def test_save_exr_into_missing_directory(tmp_path):
    pytest.importorskip("OpenEXR")
    with pytest.raises(ImageIOError):
        save_exr(Tensor.zeros((2, 2, 3)), tmp_path / "missing" / "x.exr")
