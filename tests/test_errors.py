import pytest

from pyhdrio.errors import (
    CorruptDataError,
    ImageIOError,
    InvalidArgumentError,
    PyHdrIOError,
    UnsupportedFormatError,
)


@pytest.mark.parametrize(
    "cls,builtin",
    [
        (InvalidArgumentError, ValueError),
        (ImageIOError, OSError),
        (CorruptDataError, ValueError),
        (UnsupportedFormatError, CorruptDataError),
    ],
)
def test_error_hierarchy(cls, builtin):
    assert issubclass(cls, PyHdrIOError)
    assert issubclass(cls, builtin)


def test_top_level_lazy_exports():
    import pyhdrio

    assert pyhdrio.InvalidArgumentError is InvalidArgumentError
    assert callable(pyhdrio.load_image)
    assert callable(pyhdrio.autoexposure)
    with pytest.raises(AttributeError):
        pyhdrio.does_not_exist
