"""
Peak data carried by a source scan.

MzSpectrum holds the m/z and intensity arrays of one scan. It travels with
the source scan and the metadata entity while they are in memory, but it is
never part of the stored metadata record.
"""

from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray


@dataclass(slots=True)
class MzSpectrum:
    """
    m/z-intensity pairs of a single scan.

    For profile mode data these represent the continuous signal; for
    centroid data they represent discrete peaks.

    Attributes:
        mz: Array of m/z values (sorted in ascending order).
        intensity: Array of intensity values corresponding to mz.

    Example:
        >>> import numpy as np
        >>> spectrum = MzSpectrum(
        ...     mz=np.array([100.0, 150.0, 200.0]),
        ...     intensity=np.array([1000.0, 5000.0, 2500.0]),
        ... )
        >>> spectrum.n_points
        3
        >>> spectrum.mz_range
        (100.0, 200.0)
    """
    mz: NDArray[np.float64]
    intensity: NDArray[np.float64]

    def __post_init__(self) -> None:
        """Validate spectrum data consistency."""
        self.mz = np.asarray(self.mz, dtype=np.float64)
        self.intensity = np.asarray(self.intensity, dtype=np.float64)
        if self.mz.ndim != 1:
            raise ValueError(f"mz must be 1-dimensional, got shape {self.mz.shape}")
        if self.intensity.ndim != 1:
            raise ValueError(f"intensity must be 1-dimensional, got shape {self.intensity.shape}")
        if len(self.mz) != len(self.intensity):
            raise ValueError(
                f"mz and intensity must have same length, "
                f"got {len(self.mz)} and {len(self.intensity)}"
            )

    @property
    def n_points(self) -> int:
        """Number of data points in the spectrum."""
        return len(self.mz)

    @property
    def is_empty(self) -> bool:
        return self.n_points == 0

    @property
    def mz_range(self) -> tuple[float, float]:
        """
        Return (min_mz, max_mz) tuple.

        Raises:
            ValueError: If spectrum is empty.
        """
        if self.is_empty:
            raise ValueError("Cannot get mz_range of empty spectrum")
        return float(self.mz[0]), float(self.mz[-1])

    @property
    def total_intensity(self) -> float:
        """Sum of all intensities (equivalent to TIC if complete)."""
        return float(np.sum(self.intensity))

    @property
    def base_peak_index(self) -> int:
        """Index of the most intense peak."""
        if self.is_empty:
            raise ValueError("Cannot get base_peak_index of empty spectrum")
        return int(np.argmax(self.intensity))

    @property
    def base_peak_mz(self) -> float:
        return float(self.mz[self.base_peak_index])

    @property
    def base_peak_intensity(self) -> float:
        return float(self.intensity[self.base_peak_index])

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MzSpectrum):
            return NotImplemented
        return (
            np.array_equal(self.mz, other.mz)
            and np.array_equal(self.intensity, other.intensity)
        )

    def __len__(self) -> int:
        return self.n_points

    def __repr__(self) -> str:
        if self.is_empty:
            return "MzSpectrum(empty)"
        mz_min, mz_max = self.mz_range
        return f"MzSpectrum({self.n_points} points, m/z {mz_min:.2f}-{mz_max:.2f})"
