"""
Neighbourhood join package for the Toronto case map

Reconciles neighbourhood names across the boundary, case and census datasets
and attaches per-neighbourhood statistics to the boundary features.
"""

__version__ = "0.1.0"

from .boundaries import enrich_feature_collection, enrich_features
from .cases import CaseRecord, aggregate_case_counts
from .census import CensusCategory, CensusRow, build_population_table
from .errors import (
    MalformedRecord,
    MissingAreaName,
    MissingCategoryRow,
    NeighbourhoodJoinError,
    UnjoinedNeighbourhood,
)
from .names import find_unregistered_names, normalize
from .registry import CANONICAL_NAMES

__all__ = [
    "normalize",
    "find_unregistered_names",
    "CANONICAL_NAMES",
    "CaseRecord",
    "aggregate_case_counts",
    "CensusCategory",
    "CensusRow",
    "build_population_table",
    "enrich_features",
    "enrich_feature_collection",
    "NeighbourhoodJoinError",
    "MalformedRecord",
    "MissingAreaName",
    "MissingCategoryRow",
    "UnjoinedNeighbourhood",
]
