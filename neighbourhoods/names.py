"""
names.py - Neighbourhood name normalization.

The boundary, case and census datasets are maintained independently and
spell a handful of neighbourhoods differently. ``normalize`` maps a raw name
from any of the three sources onto the canonical spelling in
``registry.CANONICAL_NAMES`` so the datasets can be joined by exact match.

Usage:
    from neighbourhoods.names import normalize

    normalize("Mimico (includes Humber Bay Shores) (17)")  # "Mimico"
    normalize("Briar Hill - Belgravia")                     # "Briar Hill-Belgravia"
"""

from types import MappingProxyType
from typing import Iterable, List, Mapping

from .registry import CANONICAL_NAME_SET

QUALIFIER_SEPARATOR = " ("

# Known non-canonical spellings -> canonical spelling. Targets are never keys.
NAME_VARIANTS: Mapping[str, str] = MappingProxyType(
    {
        "Weston-Pelham Park": "Weston-Pellam Park",
        "Briar Hill - Belgravia": "Briar Hill-Belgravia",
        "Cabbagetown-South St. James Town": "Cabbagetown-South St.James Town",
        "North St. James Town": "North St.James Town",
        "Danforth-East York": "Danforth East York",
    }
)


def strip_qualifier(raw: str) -> str:
    """Drop everything from the first ``" ("`` onwards."""
    return raw.split(QUALIFIER_SEPARATOR, 1)[0]


def normalize(raw: str) -> str:
    """Map a raw neighbourhood name to its canonical form.

    Unknown spellings pass through unchanged; they fail later at the join.
    """
    name = strip_qualifier(raw)
    return NAME_VARIANTS.get(name, name)


def find_unregistered_names(raw_names: Iterable[str]) -> List[str]:
    """Return the sorted normalized names that are not in the canonical registry."""
    return sorted({normalize(raw) for raw in raw_names} - CANONICAL_NAME_SET)
