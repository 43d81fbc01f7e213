"""Parameter blocks as non-owning views over caller-owned buffers."""

import numpy as np
from abc import ABC
from typing import Optional, Tuple

from ..math.numeric import numeric_traits


def _bind(buffer: np.ndarray, read_only: bool) -> np.ndarray:
    """Create the 1-D view a variable stores; never copies."""
    if not isinstance(buffer, np.ndarray):
        raise ValueError(f"Variables bind numpy arrays, got {type(buffer).__name__}")
    numeric_traits(buffer.dtype)
    if not buffer.flags.c_contiguous:
        raise ValueError("Variable buffer must be C-contiguous")

    # reshape of a contiguous array is a new view; its flags are independent
    view = buffer.reshape(-1)

    if read_only:
        view.flags.writeable = False
    elif not view.flags.writeable:
        raise ValueError("Cannot bind a mutable variable to a read-only buffer")

    return view


class Variable(ABC):
    """Contiguous parameter block bound to external storage.

    Subclasses set num_parameters to the fixed element count, or leave it
    None and assign it per instance before binding.
    """

    num_parameters: Optional[int] = None

    def __init__(self, buffer: np.ndarray, read_only: bool = False):
        """Bind to buffer.

        Args:
            buffer: Contiguous floating-point array owned by the caller
            read_only: Whether this view may mutate the buffer
        """
        data = _bind(buffer, read_only)
        if self.num_parameters is not None and data.size != self.num_parameters:
            raise ValueError(f"{type(self).__name__} expects {self.num_parameters} "
                             f"parameters, got buffer of size {data.size}")
        self._data = data

    @property
    def data(self) -> np.ndarray:
        return self._data

    @property
    def size(self) -> int:
        return self._data.size

    @property
    def dtype(self) -> np.dtype:
        return self._data.dtype

    @property
    def read_only(self) -> bool:
        return not self._data.flags.writeable

    def memory(self) -> Tuple[np.ndarray, int]:
        """Get the bound buffer view and its element count."""
        return self._data, self._data.size

    def _require_mutable(self) -> None:
        if self.read_only:
            raise ValueError(f"{type(self).__name__} view is read-only")

    def __array__(self, dtype=None, copy=None):
        if copy:
            return np.array(self._data, dtype=dtype, copy=True)
        if dtype is None:
            return self._data
        return self._data.astype(dtype)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._data.tolist()})"


class Cartesian(Variable):
    """Vector-space variable of any dimension."""

    def __init__(self, buffer: np.ndarray, read_only: bool = False, dim: Optional[int] = None):
        if dim is not None:
            self.num_parameters = dim
        super().__init__(buffer, read_only)


class Pixel(Cartesian):
    """2D image-plane point."""

    num_parameters = 2

    def __init__(self, buffer: np.ndarray, read_only: bool = False):
        super().__init__(buffer, read_only)

    @property
    def x(self) -> float:
        return float(self._data[0])

    @property
    def y(self) -> float:
        return float(self._data[1])
