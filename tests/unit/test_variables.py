"""Tests for parameter-block variables."""

import numpy as np
import pytest

from hypergeo.core.variables.variable import Cartesian, Pixel


class TestVariable:
    """Test binding variables to caller-owned buffers."""

    def test_view_aliases_buffer(self):
        """Variables never copy their buffer."""
        buffer = np.zeros(2)
        pixel = Pixel(buffer)

        buffer[0] = 3.0
        assert pixel.x == 3.0

        pixel.data[1] = -1.5
        assert buffer[1] == -1.5

    def test_memory(self):
        """memory() exposes the bound view and its size."""
        buffer = np.arange(4.0)
        data, size = Cartesian(buffer).memory()

        assert size == 4
        assert np.shares_memory(data, buffer)

    def test_read_only_view(self):
        """Read-only views cannot write, the caller's buffer stays writeable."""
        buffer = np.array([1.0, 2.0])
        pixel = Pixel(buffer, read_only=True)

        assert pixel.read_only
        with pytest.raises(ValueError):
            pixel.data[0] = 5.0

        buffer[0] = 5.0
        assert pixel.x == 5.0

    def test_mutable_view_of_read_only_buffer(self):
        """A mutable view needs a writeable buffer."""
        buffer = np.zeros(2)
        buffer.flags.writeable = False

        with pytest.raises(ValueError):
            Pixel(buffer)

        assert Pixel(buffer, read_only=True).read_only

    def test_size_mismatch(self):
        """Binding never reshapes storage."""
        with pytest.raises(ValueError):
            Pixel(np.zeros(3))

        with pytest.raises(ValueError):
            Cartesian(np.zeros(2), dim=3)

    def test_invalid_buffers(self):
        """Only contiguous floating-point numpy arrays can be bound."""
        with pytest.raises(ValueError):
            Pixel([1.0, 2.0])

        with pytest.raises(ValueError):
            Pixel(np.zeros(2, dtype=np.int64))

        with pytest.raises(ValueError):
            Cartesian(np.zeros(6)[::2])

    def test_dtype(self):
        """Scalar type follows the bound buffer."""
        pixel = Pixel(np.zeros(2, dtype=np.float32))

        assert pixel.dtype == np.float32
        assert np.asarray(pixel).dtype == np.float32
        assert np.asarray(pixel, dtype=np.float64).dtype == np.float64

    def test_cartesian_dynamic_size(self):
        """Cartesian variables take their size from the buffer when unspecified."""
        assert Cartesian(np.zeros(5)).size == 5
        assert Cartesian(np.zeros(3), dim=3).size == 3

    def test_array_copy_is_independent(self):
        """np.array() on a variable copies, np.asarray() keeps the view."""
        buffer = np.array([1.0, 2.0])

        copied = np.array(Pixel(buffer, read_only=True))
        copied[0] = 99.0

        assert buffer[0] == 1.0
        assert not np.shares_memory(copied, buffer)
        assert np.shares_memory(np.asarray(Pixel(buffer)), buffer)
