"""
errors.py - Fatal conditions raised by the neighbourhood join.

Every error here aborts the run: the pipeline either writes a fully enriched
boundary document or nothing at all.
"""

from typing import Any, Optional


class NeighbourhoodJoinError(Exception):
    """Base class for every fatal join error."""


class MalformedRecord(NeighbourhoodJoinError):
    """A structural field does not have the expected type."""

    def __init__(self, message: str, value: Any = None):
        super().__init__(message)
        self.value = value


class MissingAreaName(MalformedRecord):
    """A boundary feature has no usable area-name property."""


class MissingCategoryRow(NeighbourhoodJoinError):
    """The census table does not hold exactly one row of the requested category."""

    def __init__(self, category: str, found: int):
        super().__init__(f"Expected exactly one '{category}' row in census data, found {found}")
        self.category = category
        self.found = found


class UnjoinedNeighbourhood(NeighbourhoodJoinError):
    """A boundary's canonical name is absent from one of the statistic maps."""

    def __init__(self, name: str, missing: str, raw_name: Optional[str] = None):
        source = f" (from '{raw_name}')" if raw_name and raw_name != name else ""
        super().__init__(f"Neighbourhood '{name}'{source} has no entry in {missing}")
        self.name = name
        self.missing = missing
        self.raw_name = raw_name
