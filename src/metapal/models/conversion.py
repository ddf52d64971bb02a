"""
Batch conversion of source scans into metadata entities.

Each scan is converted on its own: a scan whose instrument values cannot be
mapped onto PSI-MS terms, or whose values break an entity invariant, never
affects the conversion of the other scans.
Whether such a scan is skipped or aborts the batch is decided by the caller
through ConversionOptions.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Optional

from ..core.ms_data_scan import MsDataScan
from .ms_data_scan_model import MsDataScanModel


logger = logging.getLogger(__name__)


class ErrorPolicy(Enum):
    """What to do with a scan that cannot be converted."""
    RAISE = auto()  # Propagate the first failure
    SKIP = auto()   # Record the failure and continue


@dataclass
class ConversionOptions:
    """Options for batch scan conversion."""
    on_error: ErrorPolicy = ErrorPolicy.SKIP


@dataclass(frozen=True)
class ScanConversionFailure:
    """A scan that could not be converted."""
    scan_number: int
    native_id: Optional[str]
    error: ValueError  # UnsupportedInstrumentValue for unmapped instrument values


@dataclass
class ConversionResult:
    """Result of converting the scans of one data file."""
    data_file_id: int
    models: list[MsDataScanModel] = field(default_factory=list)
    failures: list[ScanConversionFailure] = field(default_factory=list)

    @property
    def n_converted(self) -> int:
        return len(self.models)

    @property
    def n_failed(self) -> int:
        return len(self.failures)

    @property
    def success(self) -> bool:
        """True when every scan was converted."""
        return not self.failures


def convert_scans(
    scans: Iterable[MsDataScan],
    data_file_id: int,
    options: Optional[ConversionOptions] = None,
) -> ConversionResult:
    """
    Convert the scans of one data file, in order.

    Args:
        scans: Source scans in acquisition order.
        data_file_id: Key of the data file record owning the scans.
        options: Conversion options (default: skip failing scans).

    Returns:
        ConversionResult with one model per converted scan.

    Raises:
        ValueError: If scan numbers are not strictly increasing.
        UnsupportedInstrumentValue: On the first scan with an unmapped
            instrument value when ``options.on_error`` is ErrorPolicy.RAISE;
            other per-scan ValueErrors propagate the same way.
    """
    options = options or ConversionOptions()
    scans = list(scans)

    previous = 0
    for scan in scans:
        if scan.one_based_scan_number <= previous:
            raise ValueError(
                f"Scan numbers must be strictly increasing, got "
                f"{scan.one_based_scan_number} after {previous}"
            )
        previous = scan.one_based_scan_number

    result = ConversionResult(data_file_id=data_file_id)
    for scan in scans:
        try:
            model = MsDataScanModel.from_ms_data_scan(scan, data_file_id)
        except ValueError as e:
            if options.on_error is ErrorPolicy.RAISE:
                raise
            logger.warning(f"Skipping scan {scan.one_based_scan_number}: {e}")
            result.failures.append(
                ScanConversionFailure(
                    scan_number=scan.one_based_scan_number,
                    native_id=scan.native_id,
                    error=e,
                )
            )
            continue
        result.models.append(model)

    logger.info(
        f"Converted {result.n_converted}/{len(scans)} scans "
        f"for data file {data_file_id}"
    )
    return result
