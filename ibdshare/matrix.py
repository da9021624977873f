"""Dense matrices indexed by sorted integer row and column names."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any


def _sorted_unique(names: Iterable[int], what: str) -> list[int]:
    ordered = sorted(names)
    if any(a >= b for a, b in zip(ordered, ordered[1:])):
        raise ValueError(f"{what} names must be unique")
    return ordered


class NamedMatrix:
    """A row-major matrix whose rows and columns carry sorted, unique names."""

    def __init__(self, row_names: Iterable[int], col_names: Iterable[int]) -> None:
        self._row_names = _sorted_unique(row_names, "row")
        self._col_names = _sorted_unique(col_names, "column")
        self._row_map = {name: idx for idx, name in enumerate(self._row_names)}
        self._col_map = {name: idx for idx, name in enumerate(self._col_names)}
        self._data: list[Any] = [0] * (len(self._row_names) * len(self._col_names))

    @classmethod
    def from_shape(cls, nrow: int, ncol: int) -> NamedMatrix:
        """Zero-filled matrix named ``0..nrow`` by ``0..ncol``."""
        return cls(range(nrow), range(ncol))

    @classmethod
    def from_shape_and_data(cls, nrow: int, ncol: int, data: Sequence[Any]) -> NamedMatrix:
        """Matrix named ``0..nrow`` by ``0..ncol`` holding row-major ``data``."""
        if nrow * ncol != len(data):
            raise ValueError(f"data has {len(data)} values, shape needs {nrow * ncol}")
        mat = cls(range(nrow), range(ncol))
        mat._data = list(data)
        return mat

    def shape(self) -> tuple[int, int]:
        """Return ``(nrows, ncols)``."""
        return len(self._row_names), len(self._col_names)

    def _index(self, row_idx: int, col_idx: int) -> int:
        nrow, ncol = self.shape()
        if not (0 <= row_idx < nrow and 0 <= col_idx < ncol):
            raise IndexError(f"position ({row_idx}, {col_idx}) outside shape {self.shape()}")
        return row_idx * ncol + col_idx

    def set_by_positions(self, row_idx: int, col_idx: int, value: Any) -> None:
        self._data[self._index(row_idx, col_idx)] = value

    def set_by_names(self, row_name: int, col_name: int, value: Any) -> None:
        self._data[self._index(self._row_map[row_name], self._col_map[col_name])] = value

    def get_by_positions(self, row_idx: int, col_idx: int) -> Any:
        return self._data[self._index(row_idx, col_idx)]

    def get_by_names(self, row_name: int, col_name: int) -> Any:
        return self._data[self._index(self._row_map[row_name], self._col_map[col_name])]

    def contains_matrix_by_names(self, other: NamedMatrix) -> bool:
        """True when every row and column name of ``other`` is present here."""
        return all(r in self._row_map for r in other._row_names) and all(
            c in self._col_map for c in other._col_names
        )

    def update_from(self, other: NamedMatrix) -> None:
        """Copy every value of ``other`` into the cells with the same names."""
        if not self.contains_matrix_by_names(other):
            raise ValueError("other matrix has names not present in this matrix")
        for r, row_name in enumerate(other._row_names):
            for c, col_name in enumerate(other._col_names):
                self.set_by_names(row_name, col_name, other.get_by_positions(r, c))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NamedMatrix):
            return NotImplemented
        return (
            self._row_names == other._row_names
            and self._col_names == other._col_names
            and self._data == other._data
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"NamedMatrix(rows={self._row_names!r}, cols={self._col_names!r})"

    def transpose(self) -> None:
        """Transpose the matrix in place, swapping row and column names."""
        nrow, ncol = self.shape()
        rows = [self._data[r * ncol : (r + 1) * ncol] for r in range(nrow)]
        self._data = [value for column in zip(*rows) for value in column]
        self._row_names, self._col_names = self._col_names, self._row_names
        self._row_map, self._col_map = self._col_map, self._row_map

    def row_slice(self, row_idx: int) -> list[Any]:
        """Return a copy of the values in row ``row_idx``."""
        nrow, ncol = self.shape()
        if not 0 <= row_idx < nrow:
            raise IndexError(f"row {row_idx} outside {nrow} rows")
        return self._data[row_idx * ncol : (row_idx + 1) * ncol]

    def into_parts(self) -> tuple[list[int], list[int], list[Any]]:
        """Return ``(row_names, col_names, row-major data)``."""
        return list(self._row_names), list(self._col_names), list(self._data)