"""
census.py - Neighbourhood census profile decoding and the population table.

The census dataset is a wide table: each row is one statistic and every
neighbourhood is a column. Column names are data, so a row keeps them in a
plain ``name -> optional text`` mapping. Rows are tagged with a closed set of
categories; only the single "Population, 2016" row feeds the join.
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Sequence

import pandas as pd
from loguru import logger

from .errors import MalformedRecord, MissingCategoryRow
from .names import normalize

METADATA_COLUMNS = ("_id", "Category", "Topic", "Data Source", "Characteristic")
POPULATION_PATTERN = r"[0-9]+"


class CensusCategory(Enum):
    """Row tags the pipeline distinguishes; everything else is ``OTHER``."""

    NEIGHBOURHOOD_INFORMATION = "Neighbourhood Information"
    POPULATION_2016 = "Population, 2016"
    OTHER = "Other"


@dataclass(frozen=True)
class CensusRow:
    category: CensusCategory
    raw_category: str
    topic: Optional[str] = None
    characteristic: Optional[str] = None
    values: Mapping[str, Optional[str]] = field(default_factory=lambda: MappingProxyType({}))


def classify_row(category: str, characteristic: Optional[str] = None) -> CensusCategory:
    """Decode the row tag from its category and characteristic text."""
    tag = characteristic if characteristic is not None else category
    if tag.strip() == CensusCategory.POPULATION_2016.value:
        return CensusCategory.POPULATION_2016
    if category.strip() == CensusCategory.NEIGHBOURHOOD_INFORMATION.value:
        return CensusCategory.NEIGHBOURHOOD_INFORMATION
    return CensusCategory.OTHER


def _cell_text(column: str, value: Any) -> Optional[str]:
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    raise MalformedRecord(f"Census cell '{column}' has unsupported value {value!r}", value)


def _metadata_text(data: Dict[str, Any], key: str) -> Optional[str]:
    value = data.get(key)
    if value is None or isinstance(value, str):
        return value
    raise MalformedRecord(f"Census field '{key}' must be a string, got {type(value).__name__}", value)


def decode_census_row(data: Any) -> CensusRow:
    """Build a ``CensusRow`` from one decoded JSON object.

    Raises:
        MalformedRecord: if the row is not an object, lacks a text ``Category``
            or holds a cell that is neither text, a number nor null
    """
    if not isinstance(data, dict):
        raise MalformedRecord(f"Census row must be an object, got {type(data).__name__}", data)

    category = data.get("Category")
    if not isinstance(category, str):
        raise MalformedRecord(f"Census row has no text 'Category': {category!r}", category)

    characteristic = _metadata_text(data, "Characteristic")
    values = {
        column: _cell_text(column, value)
        for column, value in data.items()
        if column not in METADATA_COLUMNS
    }

    return CensusRow(
        category=classify_row(category, characteristic),
        raw_category=category,
        topic=_metadata_text(data, "Topic"),
        characteristic=characteristic,
        values=MappingProxyType(values),
    )


def select_row(
    rows: Sequence[CensusRow], category: CensusCategory = CensusCategory.POPULATION_2016
) -> CensusRow:
    """Return the one row tagged ``category``.

    Raises:
        MissingCategoryRow: if zero or several rows carry the tag
    """
    matches = [row for row in rows if row.category is category]
    if len(matches) != 1:
        raise MissingCategoryRow(category.value, len(matches))
    return matches[0]


def build_population_table(rows: Sequence[CensusRow]) -> Dict[str, int]:
    """Map canonical neighbourhood name to its 2016 population.

    Suppressed cells and cells that do not parse as a non-negative integer
    (after dropping thousands separators) are skipped.

    Raises:
        MissingCategoryRow: if the population row is absent or duplicated
        MalformedRecord: if two columns normalize to the same neighbourhood
    """
    logger.info("👥 Building population table from census profile...")

    row = select_row(rows, CensusCategory.POPULATION_2016)
    cells = pd.Series(dict(row.values), dtype="object")

    present = cells.dropna()
    cleaned = present.str.replace(",", "", regex=False).str.strip()
    is_number = cleaned.str.fullmatch(POPULATION_PATTERN).astype(bool)
    numeric = cleaned[is_number]

    suppressed = len(cells) - len(present)
    rejected = sorted(str(column) for column in cleaned[~is_number].index)
    if suppressed:
        logger.info(f"  ⏭️ Skipped {suppressed} suppressed cells")
    if rejected:
        logger.debug(f"  ⏭️ Skipped {len(rejected)} non-numeric columns: {rejected}")

    populations: Dict[str, int] = {}
    for raw_name, text in numeric.items():
        name = normalize(str(raw_name))
        if name in populations:
            raise MalformedRecord(f"Census columns collide on neighbourhood '{name}'", raw_name)
        populations[name] = int(text)

    logger.success(f"  ✅ Population recorded for {len(populations)} neighbourhoods")
    return populations
