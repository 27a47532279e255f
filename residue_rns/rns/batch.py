"""
Vectorized RNS arithmetic over numpy arrays.

A batch of B values over a ModulusSet of N moduli is an array of shape
(B, N): row b holds the residues of value b, column i holds everything
reduced mod m_i.  Because RNS arithmetic never carries between
components, every operation below is a single broadcast numpy op per
batch, with no loop over moduli.

dtype policy:
  - every modulus < 2^31: int64.  Residues fit in 31 bits, so a*b fits
    in 62 bits and a+b, a-b cannot overflow.
    Inputs are range-checked against [0, m_i) before any arithmetic.
  - otherwise: object dtype (Python ints, exact but slow), with a
    RuntimeWarning.
"""

from typing import Iterable, List, Sequence
import warnings

import numpy as np

from ..errors import InvalidResidues, ModuliMismatch
from ..moduli import ModulusSet
from .reference import crt_reconstruct, crt_reconstruct_signed, rns_encode


_INT64_SAFE_MODULUS = 1 << 31


class RnsBatch:
    """Batch encoder / arithmetic / decoder bound to one ModulusSet.

    Usage:
        batch = RnsBatch(prime_moduli(8))
        a = batch.encode([1, 2, 3])
        b = batch.encode([10, 20, 30])
        batch.decode(batch.mul(a, b))   # [10, 40, 90]
    """

    def __init__(self, moduli: ModulusSet):
        if not isinstance(moduli, ModulusSet):
            raise TypeError(f"moduli must be a ModulusSet, got {type(moduli).__name__}")
        self.moduli = moduli
        self.N = len(moduli)

        if max(moduli.moduli) < _INT64_SAFE_MODULUS:
            self.dtype = np.dtype(np.int64)
        else:
            warnings.warn(
                f"Largest modulus {max(moduli.moduli)} is >= 2^31; "
                "batch arithmetic falls back to object dtype.",
                RuntimeWarning,
            )
            self.dtype = np.dtype(object)

        self._m_row = np.array(moduli.moduli, dtype=self.dtype)[np.newaxis, :]

    # -- encode / decode ----------------------------------------------------

    def encode(self, values: Iterable[int]) -> np.ndarray:
        """Encode a 1-D sequence of integers into a (B, N) residue array."""
        if isinstance(values, np.ndarray) and values.dtype.kind == "i" and self.dtype != object:
            v = values.astype(np.int64).reshape(-1, 1)
            return np.mod(v, self._m_row)

        rows = [rns_encode(int(v), self.moduli.moduli) for v in values]
        if not rows:
            return np.zeros((0, self.N), dtype=self.dtype)
        return np.array(rows, dtype=self.dtype)

    def decode(self, residues: np.ndarray) -> List[int]:
        """CRT-decode every row to a Python int in [0, M)."""
        arr = self._check(residues)
        return [crt_reconstruct(row.tolist(), self.moduli.moduli) for row in arr]

    def decode_signed(self, residues: np.ndarray) -> List[int]:
        """CRT-decode every row to a Python int in [-M/2, M/2)."""
        arr = self._check(residues)
        return [crt_reconstruct_signed(row.tolist(), self.moduli.moduli) for row in arr]

    def to_tuples(self, residues: np.ndarray) -> list:
        """Rows as ResidueTuple objects over this batch's ModulusSet."""
        from ..residue import ResidueTuple
        arr = self._check(residues)
        return [ResidueTuple(tuple(row.tolist()), self.moduli) for row in arr]

    def from_tuples(self, tuples: Sequence) -> np.ndarray:
        """Stack ResidueTuple objects into a (B, N) residue array."""
        for t in tuples:
            if t.moduli != self.moduli:
                raise ModuliMismatch(self.moduli, t.moduli)
        if not tuples:
            return np.zeros((0, self.N), dtype=self.dtype)
        return np.array([t.residues for t in tuples], dtype=self.dtype)

    # -- arithmetic ---------------------------------------------------------

    def add(self, a: np.ndarray, b: np.ndarray) -> np.ndarray:
        """Element-wise (a + b) mod m_i."""
        return np.mod(self._check(a) + self._check(b), self._m_row)

    def sub(self, a: np.ndarray, b: np.ndarray) -> np.ndarray:
        """Element-wise (a - b) mod m_i."""
        return np.mod(self._check(a) - self._check(b), self._m_row)

    def mul(self, a: np.ndarray, b: np.ndarray) -> np.ndarray:
        """Element-wise (a * b) mod m_i."""
        return np.mod(self._check(a) * self._check(b), self._m_row)

    def neg(self, a: np.ndarray) -> np.ndarray:
        """Element-wise (-a) mod m_i."""
        return np.mod(-self._check(a), self._m_row)

    # -- helpers ------------------------------------------------------------

    def _check(self, residues: np.ndarray) -> np.ndarray:
        arr = np.asarray(residues, dtype=self.dtype)
        if arr.ndim == 1:
            arr = arr.reshape(1, -1)
        if arr.ndim != 2 or arr.shape[1] != self.N:
            raise InvalidResidues(
                f"Expected residue array of shape (B, {self.N}), got {arr.shape}"
            )
        if not ((arr >= 0).all() and (arr < self._m_row).all()):
            raise InvalidResidues("Residues must lie in [0, m_i) for each column")
        return arr
