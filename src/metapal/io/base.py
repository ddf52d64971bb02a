from abc import ABC, abstractmethod
from collections.abc import Iterator
from pathlib import Path
from typing import ClassVar

from ..core.data_file import DataFileMetadata, MsDataFile
from ..core.ms_data_scan import MsDataScan


class ScanReader(ABC):
    """
    Abstract base class for scan sources.

    A reader turns one acquisition file into source scans. All file-format
    specific readers must implement this interface.
    """

    # Class-level attributes
    format_name: ClassVar[str]  # e.g., "mzML"
    supported_extensions: ClassVar[list[str]]  # e.g., [".mzml"]

    def __init__(self, path: Path | str):
        self.path = Path(path)
        self._validate_path()

    def _validate_path(self) -> None:
        """Validate file exists and has correct extension."""
        if not self.path.exists():
            raise FileNotFoundError(f"File not found: {self.path}")

        suffix = self.path.suffix.lower()
        if suffix not in self.supported_extensions:
            raise ValueError(
                f"Unsupported extension {suffix} for {self.format_name} reader. "
                f"Expected: {self.supported_extensions}"
            )

    @abstractmethod
    def __enter__(self) -> 'ScanReader':
        ...

    @abstractmethod
    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        ...

    @abstractmethod
    def __iter__(self) -> Iterator[MsDataScan]:
        """Iterate over all scans in the file, in acquisition order."""
        ...

    @abstractmethod
    def __len__(self) -> int:
        """Total number of scans."""
        ...

    @abstractmethod
    def get_scan(self, scan_number: int) -> MsDataScan:
        """Random access to a specific scan."""
        ...

    @property
    @abstractmethod
    def run_metadata(self) -> dict:
        """
        File-level metadata.

        Expected keys (when available):
        - instrument_model: str
        - instrument_serial: str
        - software_version: str
        - source_file: str
        """
        ...

    def to_data_file(self) -> MsDataFile:
        """
        Load every scan into an MsDataFile.

        This loads all scans, peak data included, into memory. For large
        files, consider iterating directly instead.
        """
        scans = list(self)
        run_metadata = self.run_metadata
        metadata = DataFileMetadata(
            source_file=self.path,
            instrument_model=run_metadata.get('instrument_model'),
            instrument_serial=run_metadata.get('instrument_serial'),
            software_version=run_metadata.get('software_version'),
        )
        return MsDataFile(scans, metadata=metadata)
