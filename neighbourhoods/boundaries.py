"""
boundaries.py - Attach neighbourhood statistics to boundary features.

Features are plain GeoJSON dicts. Enrichment returns new feature dicts whose
property bags are the originals extended with ``covid_case_count`` and
``population``; geometries and pre-existing properties are passed through
as-is. A single feature that cannot be joined aborts the whole batch.
"""

from typing import Any, Dict, List, Mapping, Sequence

from loguru import logger

from .errors import MalformedRecord, MissingAreaName, UnjoinedNeighbourhood
from .names import normalize

AREA_NAME_FIELD = "AREA_NAME"
CASE_COUNT_PROPERTY = "covid_case_count"
POPULATION_PROPERTY = "population"

Feature = Dict[str, Any]


def area_name(feature: Mapping[str, Any], area_name_field: str = AREA_NAME_FIELD) -> str:
    """Return the raw area name of a boundary feature."""
    if not isinstance(feature, Mapping):
        raise MalformedRecord(f"Boundary feature must be an object, got {type(feature).__name__}", feature)

    properties = feature.get("properties")
    if not isinstance(properties, dict):
        raise MissingAreaName("Boundary feature has no property bag", feature.get("id"))

    name = properties.get(area_name_field)
    if not isinstance(name, str):
        raise MissingAreaName(
            f"Boundary feature property '{area_name_field}' is missing or not a string", name
        )
    return name


def enrich_feature(
    feature: Mapping[str, Any],
    counts: Mapping[str, int],
    populations: Mapping[str, int],
    area_name_field: str = AREA_NAME_FIELD,
) -> Feature:
    raw_name = area_name(feature, area_name_field)
    name = normalize(raw_name)

    if name not in counts:
        raise UnjoinedNeighbourhood(name, "case counts", raw_name)
    if name not in populations:
        raise UnjoinedNeighbourhood(name, "population table", raw_name)

    properties = feature["properties"]
    for key in (CASE_COUNT_PROPERTY, POPULATION_PROPERTY):
        if key in properties:
            raise MalformedRecord(f"Boundary feature '{raw_name}' already has property '{key}'", key)

    return {
        **feature,
        "properties": {
            **properties,
            CASE_COUNT_PROPERTY: int(counts[name]),
            POPULATION_PROPERTY: int(populations[name]),
        },
    }


def enrich_features(
    features: Sequence[Mapping[str, Any]],
    counts: Mapping[str, int],
    populations: Mapping[str, int],
    area_name_field: str = AREA_NAME_FIELD,
) -> List[Feature]:
    """Join case counts and populations onto every feature.

    Args:
        features: GeoJSON feature dicts
        counts: Canonical name -> case count
        populations: Canonical name -> population
        area_name_field: Property holding the raw area name

    Returns:
        New feature dicts, in input order, each with both statistics set

    Raises:
        MissingAreaName: if a feature has no text area name
        UnjoinedNeighbourhood: if a canonical name is absent from either map
    """
    logger.info(f"🔗 Joining statistics onto {len(features)} boundary features...")
    enriched = [enrich_feature(feature, counts, populations, area_name_field) for feature in features]
    logger.success(f"  ✅ Enriched {len(enriched)} features")
    return enriched


def enrich_feature_collection(
    collection: Mapping[str, Any],
    counts: Mapping[str, int],
    populations: Mapping[str, int],
    area_name_field: str = AREA_NAME_FIELD,
) -> Dict[str, Any]:
    """Return a copy of a FeatureCollection with every feature enriched."""
    if collection.get("type") != "FeatureCollection":
        raise MalformedRecord(
            f"Boundary document must be a FeatureCollection, got {collection.get('type')!r}",
            collection.get("type"),
        )
    features = collection.get("features")
    if not isinstance(features, list):
        raise MalformedRecord("FeatureCollection 'features' must be an array", features)

    return {**collection, "features": enrich_features(features, counts, populations, area_name_field)}
