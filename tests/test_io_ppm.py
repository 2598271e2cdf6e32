import numpy as np
import pytest

from pyhdrio.errors import CorruptDataError, ImageIOError, InvalidArgumentError, UnsupportedFormatError
from pyhdrio.io.ppm import decode_ppm, encode_ppm, gamma_encode_u8, load_ppm, save_ppm
from pyhdrio.tensor import Tensor

HEADER = b"P6\n2 1\n255\n"


def test_encode_header_and_size():
    data = encode_ppm(np.zeros((1, 2, 3), dtype=np.float32))
    assert data.startswith(HEADER)
    assert len(data) == len(HEADER) + 6


def test_encode_keeps_row_order():
    arr = np.zeros((2, 1, 3), dtype=np.float32)
    arr[0] = 1.0
    body = encode_ppm(arr)[len(b"P6\n1 2\n255\n") :]
    assert list(body) == [255, 255, 255, 0, 0, 0]


def test_encode_interleaves_rgb():
    arr = np.asarray([[[1.0, 0.0, 0.0], [0.0, 0.0, 1.0]]], dtype=np.float32)
    body = encode_ppm(arr)[len(HEADER) :]
    assert list(body) == [255, 0, 0, 0, 0, 255]


def test_gamma_encode_clamps_and_never_wraps():
    values = np.asarray([-1.0, -1e-3, 0.0, 1.0, 1.5, 300.0, np.inf, -np.inf, np.nan], dtype=np.float32)
    out = gamma_encode_u8(values)
    assert out.dtype == np.uint8
    assert out.tolist() == [0, 0, 0, 255, 255, 255, 255, 0, 0]


def test_gamma_encode_truncates_after_gamma():
    x = np.float32(0.5)
    expected = int(np.power(x, np.float32(1.0 / 2.2)) * np.float32(255.0))
    assert int(gamma_encode_u8(np.asarray([x]))[0]) == expected == 186


def test_gamma_encode_random_inputs_in_range():
    values = np.random.default_rng(0).normal(scale=10.0, size=1000).astype(np.float32)
    out = gamma_encode_u8(values)
    assert out.min() >= 0
    assert out.max() <= 255
    assert np.all(out[values < 0] == 0)
    assert np.all(out[values >= 1] == 255)


def test_save_load_roundtrip_for_extremes(tmp_path):
    arr = np.zeros((2, 3, 3), dtype=np.float32)
    arr[0, 1] = 1.0
    arr[1, 2, 1] = 1.0
    path = tmp_path / "x.ppm"

    save_ppm(arr, path)
    loaded = load_ppm(path)

    assert loaded.dims == (2, 3, 3)
    np.testing.assert_array_equal(loaded.data, arr)


def test_decode_inverts_gamma():
    data = b"P6\n1 1\n255\n" + bytes([186, 0, 255])
    t = decode_ppm(data)
    assert t.data[0, 0, 0] == pytest.approx(0.5, abs=5e-3)
    assert t.data[0, 0, 1] == 0.0
    assert t.data[0, 0, 2] == pytest.approx(1.0)


def test_decode_skips_header_comments():
    data = b"P6\n# written by hand\n1 1 # size\n255\n" + bytes([255, 255, 255])
    t = decode_ppm(data)
    assert t.data[0, 0].tolist() == [1.0, 1.0, 1.0]


@pytest.mark.parametrize("magic", [b"P3", b"P5"])
def test_decode_rejects_other_netpbm_variants(magic):
    with pytest.raises(UnsupportedFormatError):
        decode_ppm(magic + b"\n1 1\n255\n" + bytes(3))


@pytest.mark.parametrize("data", [b"PF\n1 1\n-1.0\n" + bytes(12), b"not an image at all", b""])
def test_decode_rejects_non_ppm_data(data):
    with pytest.raises(CorruptDataError):
        decode_ppm(data)


def test_decode_rejects_16_bit():
    with pytest.raises(UnsupportedFormatError):
        decode_ppm(b"P6\n1 1\n65535\n" + bytes(6))


@pytest.mark.parametrize("data", [b"P6\n1 1\n255\n" + bytes(2), b"P6\n1 1\n255", b"P6\n1 x\n255\n"])
def test_decode_rejects_corrupt_data(data):
    with pytest.raises(CorruptDataError):
        decode_ppm(data)


def test_encode_requires_three_channels():
    with pytest.raises(InvalidArgumentError):
        encode_ppm(Tensor.zeros((2, 2, 1)))


def test_save_into_missing_directory_raises_ioerror(tmp_path):
    with pytest.raises(ImageIOError):
        save_ppm(np.zeros((1, 1, 3), dtype=np.float32), tmp_path / "missing" / "x.ppm")
