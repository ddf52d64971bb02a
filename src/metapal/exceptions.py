"""
Exceptions raised by metapal.
"""

from typing import Any


class MetapalError(Exception):
    """Base class for all metapal errors."""


class UnsupportedInstrumentValue(MetapalError, ValueError):
    """
    A raw instrument attribute has no controlled-vocabulary mapping.

    Raised while converting a single scan; the scan cannot be converted and
    retrying with the same input gives the same result.

    Attributes:
        attribute: Name of the instrument attribute (e.g. "mass analyzer").
        value: The raw value that could not be mapped.
    """

    def __init__(self, attribute: str, value: Any):
        self.attribute = attribute
        self.value = value
        super().__init__(f"No PSI-MS term for {attribute} value {value!r}")
