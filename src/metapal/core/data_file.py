"""
MsDataFile: the scans of a single acquisition run.

This module defines the MsDataFile class that holds all source scans of one
data file in acquisition order, together with file-level metadata such as
the instrument and the source path.
"""

from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Optional, overload

import numpy as np
from numpy.typing import NDArray

from .ms_data_scan import MsDataScan

if TYPE_CHECKING:
    from ..models.conversion import ConversionOptions, ConversionResult


@dataclass(frozen=True, slots=True)
class DataFileMetadata:
    """
    File-level metadata for an acquisition run.

    Attributes:
        source_file: Path to the original source file.
        instrument_model: Instrument model name (e.g., "Q Exactive HF").
        instrument_serial: Instrument serial number.
        software_version: Acquisition software version.
        extras: Additional vendor-specific metadata.
    """
    source_file: Optional[Path] = None
    instrument_model: Optional[str] = None
    instrument_serial: Optional[str] = None
    software_version: Optional[str] = None
    extras: dict = field(default_factory=dict)

    @property
    def source_filename(self) -> Optional[str]:
        """Return just the filename from source_file."""
        return self.source_file.name if self.source_file else None


class MsDataFile(Sequence[MsDataScan]):
    """
    All scans of one acquisition run, in acquisition order.

    Scan numbers must be strictly increasing; the collection is read-only
    once built.

    Example:
        >>> from metapal.core import MsDataFile, MsDataScan, MZAnalyzerType, Polarity
        >>>
        >>> scans = [
        ...     MsDataScan(1, 1, True, Polarity.POSITIVE, 0.0, MZAnalyzerType.ORBITRAP),
        ...     MsDataScan(2, 2, True, Polarity.POSITIVE, 0.1, MZAnalyzerType.ORBITRAP),
        ... ]
        >>> data_file = MsDataFile(scans)
        >>> len(data_file)
        2
        >>> data_file.get_one_based_scan(2).msn_order
        2
    """

    def __init__(
        self,
        scans: Optional[list[MsDataScan]] = None,
        metadata: Optional[DataFileMetadata] = None,
    ):
        """
        Initialize an MsDataFile.

        Args:
            scans: Scans in acquisition order.
            metadata: File-level metadata.

        Raises:
            ValueError: If scan numbers are not strictly increasing.
        """
        self._scans: tuple[MsDataScan, ...] = tuple(scans or ())
        self.metadata = metadata or DataFileMetadata()

        self._scan_index: dict[int, int] = {}
        previous = 0
        for idx, scan in enumerate(self._scans):
            if scan.one_based_scan_number <= previous:
                raise ValueError(
                    f"Scan numbers must be strictly increasing, got "
                    f"{scan.one_based_scan_number} after {previous}"
                )
            previous = scan.one_based_scan_number
            self._scan_index[scan.one_based_scan_number] = idx

    # -------------------------------------------------------------------------
    # Sequence protocol implementation
    # -------------------------------------------------------------------------

    @overload
    def __getitem__(self, index: int) -> MsDataScan: ...

    @overload
    def __getitem__(self, index: slice) -> tuple[MsDataScan, ...]: ...

    def __getitem__(self, index: int | slice) -> MsDataScan | tuple[MsDataScan, ...]:
        """Get scan by index (acquisition order)."""
        return self._scans[index]

    def __len__(self) -> int:
        return len(self._scans)

    def __iter__(self) -> Iterator[MsDataScan]:
        return iter(self._scans)

    def __contains__(self, item: object) -> bool:
        """Check if scan or scan number is in the file."""
        if isinstance(item, int):
            return item in self._scan_index
        if isinstance(item, MsDataScan):
            return item.one_based_scan_number in self._scan_index
        return False

    # -------------------------------------------------------------------------
    # Access methods
    # -------------------------------------------------------------------------

    def get_one_based_scan(self, scan_number: int) -> MsDataScan:
        """
        Get scan by its one-based scan number.

        Raises:
            KeyError: If scan number not found.
        """
        if scan_number not in self._scan_index:
            raise KeyError(f"Scan number {scan_number} not found in data file")
        return self._scans[self._scan_index[scan_number]]

    def iter_ms_level(self, ms_level: int) -> Iterator[MsDataScan]:
        """
        Iterate over scans of a specific MS level.

        Args:
            ms_level: MS level to filter by (1, 2, etc.).

        Yields:
            Scans with the specified MS level.
        """
        for scan in self._scans:
            if scan.msn_order == ms_level:
                yield scan

    @property
    def scan_numbers(self) -> list[int]:
        """List of all scan numbers in order."""
        return [scan.one_based_scan_number for scan in self._scans]

    @property
    def retention_times(self) -> NDArray[np.float64]:
        """Array of all scan start times in minutes."""
        return np.array([scan.retention_time for scan in self._scans], dtype=np.float64)

    def get_ms_level_counts(self) -> dict[int, int]:
        """
        Count scans per MS level.

        Returns:
            Dictionary mapping MS level to count.
        """
        counts: dict[int, int] = {}
        for scan in self._scans:
            counts[scan.msn_order] = counts.get(scan.msn_order, 0) + 1
        return counts

    # -------------------------------------------------------------------------
    # Conversion
    # -------------------------------------------------------------------------

    def to_models(
        self,
        data_file_id: int,
        options: Optional['ConversionOptions'] = None,
    ) -> 'ConversionResult':
        """
        Convert every scan into a metadata entity owned by ``data_file_id``.

        See :func:`metapal.models.conversion.convert_scans`.
        """
        from ..models.conversion import convert_scans

        return convert_scans(self._scans, data_file_id, options=options)

    def __repr__(self) -> str:
        ms_counts = self.get_ms_level_counts()
        ms_str = ", ".join(f"MS{k}:{v}" for k, v in sorted(ms_counts.items()))

        source = ""
        if self.metadata.source_filename:
            source = f", source={self.metadata.source_filename}"

        return f"MsDataFile({len(self)} scans, {ms_str}{source})"
