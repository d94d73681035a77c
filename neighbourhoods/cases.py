"""
cases.py - Case records and per-neighbourhood case counts.

Each record in the case dataset describes one incident. Only the
neighbourhood field takes part in the join; the remaining descriptive
attributes are carried on ``CaseRecord`` untouched.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence

import pandas as pd
from loguru import logger

from .errors import MalformedRecord
from .names import normalize

NEIGHBOURHOOD_FIELD = "Neighbourhood Name"


@dataclass(frozen=True)
class CaseRecord:
    """One case row from the case dataset."""

    neighbourhood: Optional[str] = None
    record_id: Optional[int] = None
    outbreak_associated: Optional[str] = None
    age_group: Optional[str] = None
    fsa: Optional[str] = None


def _optional_str(data: Dict[str, Any], key: str) -> Optional[str]:
    value = data.get(key)
    if value is None or isinstance(value, str):
        return value
    raise MalformedRecord(f"Case field '{key}' must be a string, got {type(value).__name__}", value)


def decode_case_record(
    data: Any, neighbourhood_field: str = NEIGHBOURHOOD_FIELD
) -> CaseRecord:
    """Build a ``CaseRecord`` from one decoded JSON object.

    Args:
        data: A single element of the case dataset array
        neighbourhood_field: Key holding the free-text neighbourhood name

    Returns:
        CaseRecord with the neighbourhood left as raw text

    Raises:
        MalformedRecord: if the record is not an object or a text field has another type
    """
    if not isinstance(data, dict):
        raise MalformedRecord(f"Case record must be an object, got {type(data).__name__}", data)

    record_id = data.get("_id")
    if record_id is not None and (isinstance(record_id, bool) or not isinstance(record_id, int)):
        raise MalformedRecord(f"Case record '_id' must be an integer, got {record_id!r}", record_id)

    return CaseRecord(
        neighbourhood=_optional_str(data, neighbourhood_field),
        record_id=record_id,
        outbreak_associated=_optional_str(data, "Outbreak Associated"),
        age_group=_optional_str(data, "Age Group"),
        fsa=_optional_str(data, "FSA"),
    )


def aggregate_case_counts(records: Sequence[CaseRecord]) -> Dict[str, int]:
    """Count case records per canonical neighbourhood name.

    Records without a neighbourhood are skipped. Only names that occur in
    ``records`` appear in the result.
    """
    logger.info(f"🧮 Aggregating {len(records):,} case records by neighbourhood...")

    names = pd.Series([record.neighbourhood for record in records], dtype="object")
    skipped = int(names.isna().sum())
    counts = names.dropna().map(normalize).value_counts()

    if skipped:
        logger.info(f"  ⏭️ Skipped {skipped:,} records with no neighbourhood")

    result = {str(name): int(count) for name, count in sorted(counts.items())}
    logger.success(f"  ✅ Counted {sum(result.values()):,} cases across {len(result)} neighbourhoods")
    return result
