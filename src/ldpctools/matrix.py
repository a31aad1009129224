"""
Parity Check Matrix Module

Sparse GF(2) incidence structure between bit nodes and check nodes
(the Tanner graph of a code), stored row-wise with a column index for
symmetric traversal.
"""

from typing import Iterable, Iterator, Optional, Sequence, Tuple

import numpy as np
from scipy.sparse import csr_matrix

from . import gf2


class ParityCheckMatrix:
    """
    Immutable sparse binary matrix with ``number_of_checks`` rows and
    ``block_size`` columns.

    Each row lists the bits taking part in one parity check. Rows and
    columns are kept as sorted tuples so that the structure can be shared
    freely once built.

    Parameters
    ----------
    block_size : int
        Number of columns (bits)
    rows : iterable of iterables of int
        Bit indices of each check. Order within a row is irrelevant but a
        bit may not appear twice in the same row.

    Examples
    --------
    >>> H = ParityCheckMatrix(3, [[0, 1], [1, 2]])
    >>> H.column(1)
    (0, 1)
    """

    def __init__(self, block_size: int, rows: Iterable[Iterable[int]]):
        if block_size < 0:
            raise ValueError(f"block size must be non-negative, got {block_size}")
        self._block_size = int(block_size)

        built_rows = []
        columns = [[] for _ in range(self._block_size)]
        for check, row in enumerate(rows):
            row = tuple(sorted(int(bit) for bit in row))
            if len(set(row)) != len(row):
                raise ValueError(f"check {check} contains a repeated bit: {row}")
            if row and (row[0] < 0 or row[-1] >= self._block_size):
                raise ValueError(
                    f"check {check} has a bit outside of 0..{self._block_size}: {row}"
                )
            for bit in row:
                columns[bit].append(check)
            built_rows.append(row)

        self._rows = tuple(built_rows)
        self._columns = tuple(tuple(col) for col in columns)
        self._number_of_edges = sum(len(row) for row in self._rows)
        self._csr = self._build_csr()

    @classmethod
    def from_edges(
        cls,
        block_size: int,
        number_of_checks: int,
        edges: Iterable[Tuple[int, int]],
    ) -> "ParityCheckMatrix":
        """
        Build a matrix from ``(check, bit)`` pairs.

        Raises
        ------
        ValueError
            If a pair repeats or an index is out of range.
        """
        rows = [[] for _ in range(number_of_checks)]
        for check, bit in edges:
            if not 0 <= check < number_of_checks:
                raise ValueError(
                    f"check index {check} outside of 0..{number_of_checks}"
                )
            rows[check].append(bit)
        return cls(block_size, rows)

    @classmethod
    def from_dense(cls, array) -> "ParityCheckMatrix":
        """Build a matrix from a dense 2D array of zeros and ones."""
        array = np.asarray(array)
        if array.ndim != 2:
            raise ValueError(f"expected a 2D array, got shape {array.shape}")
        if np.any((array != 0) & (array != 1)):
            raise ValueError("dense parity check matrix must be binary")
        return cls(array.shape[1], [np.flatnonzero(row) for row in array])

    @classmethod
    def from_edge_list(
        cls,
        text: str,
        block_size: Optional[int] = None,
        number_of_checks: Optional[int] = None,
    ) -> "ParityCheckMatrix":
        """
        Parse the canonical text form written by :meth:`to_edge_list`.

        Each non-blank line holds ``check bit``. When a dimension is not
        given it is inferred as one more than the largest index seen, so
        trailing checks or bits without edges are lost; pass
        ``block_size`` and ``number_of_checks`` to restore such a shape.
        Regular codes with non-zero degrees always round-trip.
        """
        edges = []
        for lineno, line in enumerate(text.splitlines(), start=1):
            line = line.strip()
            if not line:
                continue
            parts = line.split()
            if len(parts) != 2:
                raise ValueError(f"line {lineno}: expected 'check bit', got {line!r}")
            try:
                edges.append((int(parts[0]), int(parts[1])))
            except ValueError:
                raise ValueError(f"line {lineno}: indices must be integers, got {line!r}") from None

        if number_of_checks is None:
            number_of_checks = max((c for c, _ in edges), default=-1) + 1
        if block_size is None:
            block_size = max((b for _, b in edges), default=-1) + 1
        return cls.from_edges(block_size, number_of_checks, edges)

    def _build_csr(self) -> csr_matrix:
        indptr = np.zeros(len(self._rows) + 1, dtype=np.int64)
        indptr[1:] = np.cumsum([len(row) for row in self._rows])
        indices = np.fromiter(
            (bit for row in self._rows for bit in row),
            dtype=np.int64,
            count=self._number_of_edges,
        )
        data = np.ones(self._number_of_edges, dtype=np.int64)
        return csr_matrix(
            (data, indices, indptr),
            shape=(len(self._rows), self._block_size),
        )

    @property
    def block_size(self) -> int:
        return self._block_size

    @property
    def number_of_checks(self) -> int:
        return len(self._rows)

    @property
    def number_of_edges(self) -> int:
        return self._number_of_edges

    @property
    def shape(self) -> Tuple[int, int]:
        return (self.number_of_checks, self._block_size)

    def row(self, check: int) -> Tuple[int, ...]:
        """Sorted bit indices of the given check."""
        if not 0 <= check < len(self._rows):
            raise IndexError(f"check {check} outside of 0..{len(self._rows)}")
        return self._rows[check]

    def column(self, bit: int) -> Tuple[int, ...]:
        """Sorted check indices the given bit takes part in."""
        if not 0 <= bit < self._block_size:
            raise IndexError(f"bit {bit} outside of 0..{self._block_size}")
        return self._columns[bit]

    def rows(self) -> Iterator[Tuple[int, ...]]:
        return iter(self._rows)

    def columns(self) -> Iterator[Tuple[int, ...]]:
        return iter(self._columns)

    def row_degrees(self) -> np.ndarray:
        return np.array([len(row) for row in self._rows], dtype=np.int64)

    def column_degrees(self) -> np.ndarray:
        return np.array([len(col) for col in self._columns], dtype=np.int64)

    def edges(self) -> Iterator[Tuple[int, int]]:
        """Yield ``(check, bit)`` pairs sorted by check then bit."""
        for check, row in enumerate(self._rows):
            for bit in row:
                yield check, bit

    def syndrome(self, word: Sequence[int]) -> np.ndarray:
        """
        GF(2) product of this matrix with a dense binary word.

        Parameters
        ----------
        word : sequence of int
            ``block_size`` entries, each 0 or 1

        Returns
        -------
        np.ndarray
            uint8 vector of length ``number_of_checks``; entry ``c`` is the
            XOR of the word's bits at row ``c``

        Raises
        ------
        ValueError
            If the word has the wrong length or a non-binary entry.
        """
        word = np.asarray(word)
        if word.ndim != 1 or word.shape[0] != self._block_size:
            raise ValueError(
                f"word of shape {word.shape} is incompatible with "
                f"block size {self._block_size}"
            )
        if np.any((word != 0) & (word != 1)):
            raise ValueError("word must be binary")
        product = self._csr @ word.astype(np.int64)
        return (np.asarray(product) % 2).astype(np.uint8)

    def syndrome_of_positions(self, positions: Iterable[int]) -> np.ndarray:
        """
        Syndrome of the word whose ones sit at ``positions``.

        Work is proportional to the number of positions times their
        column degrees.
        """
        syndrome = np.zeros(self.number_of_checks, dtype=np.uint8)
        for bit in positions:
            checks = self.column(bit)
            if checks:
                syndrome[list(checks)] ^= 1
        return syndrome

    def to_csr(self) -> csr_matrix:
        """Return a scipy CSR copy of the matrix."""
        return self._csr.copy()

    def to_dense(self) -> np.ndarray:
        return self._csr.toarray().astype(np.uint8)

    def rank(self) -> int:
        return gf2.rank(self.to_dense())

    def nullspace(self) -> np.ndarray:
        """Dense basis (as rows) of the words with zero syndrome."""
        return gf2.nullspace(self.to_dense())

    def to_edge_list(self) -> str:
        """
        Canonical text form: one ``"check bit"`` line per edge, sorted.
        """
        return "".join(f"{check} {bit}\n" for check, bit in self.edges())

    def __eq__(self, other):
        if not isinstance(other, ParityCheckMatrix):
            return NotImplemented
        return self._block_size == other._block_size and self._rows == other._rows

    def __hash__(self):
        return hash((self._block_size, self._rows))

    def __repr__(self):
        return (
            f"ParityCheckMatrix(checks={self.number_of_checks}, "
            f"bits={self._block_size}, edges={self._number_of_edges})"
        )
