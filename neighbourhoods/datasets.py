"""
datasets.py - Reading the three input datasets and writing the enriched map.

Origins of the default inputs:
- Neighbourhoods.geojson: https://open.toronto.ca/dataset/neighbourhoods/
- COVID19 cases.json: https://open.toronto.ca/dataset/covid-19-cases-in-toronto/
- neighbourhood-profiles-2016.json: https://open.toronto.ca/dataset/neighbourhood-profiles/
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, List, Mapping

from loguru import logger
from shapely.errors import ShapelyError
from shapely.geometry import shape

from .cases import NEIGHBOURHOOD_FIELD, CaseRecord, decode_case_record
from .census import CensusRow, decode_census_row
from .errors import MalformedRecord

POLYGON_TYPES = ("Polygon", "MultiPolygon")


def load_json(path: str | Path) -> Any:
    """Load a whole JSON document into memory."""
    path = Path(path)
    logger.debug(f"  📄 Reading {path}")
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def _load_array(path: str | Path, description: str) -> List[Any]:
    data = load_json(path)
    if not isinstance(data, list):
        raise MalformedRecord(f"{description} must be a JSON array, got {type(data).__name__}", path)
    return data


def validate_boundary_geometry(feature: Mapping[str, Any]) -> None:
    """Check that a feature carries a Polygon or MultiPolygon geometry.

    Topologically invalid polygons are reported but not repaired; the
    output must keep the source geometry byte for byte.
    """
    geometry = feature.get("geometry") if isinstance(feature, Mapping) else None
    if not isinstance(geometry, dict):
        raise MalformedRecord("Boundary feature has no geometry", geometry)

    try:
        geom = shape(geometry)
    except (ValueError, TypeError, KeyError, AttributeError, ShapelyError) as e:
        raise MalformedRecord(f"Boundary geometry could not be read: {e}", geometry) from e

    if geom.geom_type not in POLYGON_TYPES:
        raise MalformedRecord(f"Boundary geometry must be polygonal, got {geom.geom_type}", geom.geom_type)
    if not geom.is_valid:
        name = (feature.get("properties") or {}).get("AREA_NAME", feature.get("id"))
        logger.warning(f"  ⚠️ Invalid {geom.geom_type} geometry for '{name}', keeping as-is")


def load_boundaries(path: str | Path) -> Dict[str, Any]:
    """Load the boundary FeatureCollection and validate its geometries."""
    logger.info("🗺️ Loading neighbourhood boundaries...")
    collection = load_json(path)

    if not isinstance(collection, dict) or collection.get("type") != "FeatureCollection":
        raise MalformedRecord(f"{path} is not a GeoJSON FeatureCollection", path)
    features = collection.get("features")
    if not isinstance(features, list):
        raise MalformedRecord(f"{path} has no 'features' array", path)

    for feature in features:
        validate_boundary_geometry(feature)

    logger.info(f"  ✅ Loaded {len(features)} boundary features")
    return collection


def load_case_records(
    path: str | Path, neighbourhood_field: str = NEIGHBOURHOOD_FIELD
) -> List[CaseRecord]:
    logger.info("🦠 Loading case records...")
    records = [
        decode_case_record(item, neighbourhood_field) for item in _load_array(path, "Case dataset")
    ]
    logger.info(f"  ✅ Loaded {len(records):,} case records")
    return records


def load_census_rows(path: str | Path) -> List[CensusRow]:
    logger.info("📊 Loading census profile...")
    rows = [decode_census_row(item) for item in _load_array(path, "Census dataset")]
    logger.info(f"  ✅ Loaded {len(rows):,} census rows")
    return rows


def ensure_output_directory(output_path: str | Path) -> Path:
    """Ensure output directory exists and return Path object."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    return output_path


def write_feature_collection(collection: Mapping[str, Any], path: str | Path) -> Path:
    """Serialize the whole document, then swap it into place.

    The document is written to a temporary file beside the target and renamed
    over it, so the target is either the complete new document or untouched.
    """
    document = json.dumps(collection, separators=(",", ":"), ensure_ascii=False)
    output_path = ensure_output_directory(path)

    temp = tempfile.NamedTemporaryFile(
        "w", encoding="utf-8", dir=output_path.parent, prefix=f".{output_path.name}.", delete=False
    )
    try:
        with temp as f:
            f.write(document)
        os.replace(temp.name, output_path)
    except OSError:
        Path(temp.name).unlink(missing_ok=True)
        raise

    logger.success(f"💾 Saved enriched boundaries: {output_path}")
    return output_path
