"""Shared fixtures: small boundary, case and census documents."""

import json
from pathlib import Path
from typing import Any, Dict, List

import pytest
import yaml
from loguru import logger

SQUARE = {
    "type": "Polygon",
    "coordinates": [[[-79.5, 43.6], [-79.4, 43.6], [-79.4, 43.7], [-79.5, 43.7], [-79.5, 43.6]]],
}

BOUNDARY_NAMES = [
    "Mimico (includes Humber Bay Shores) (17)",
    "Briar Hill-Belgravia (108)",
    "Weston-Pellam Park (91)",
    "Danforth East York (59)",
]


def make_feature(name: Any, geometry: Dict[str, Any] = SQUARE, **properties) -> Dict[str, Any]:
    return {
        "type": "Feature",
        "properties": {"AREA_NAME": name, **properties},
        "geometry": geometry,
    }


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    logger.remove()


@pytest.fixture
def boundary_collection() -> Dict[str, Any]:
    return {
        "type": "FeatureCollection",
        "name": "Neighbourhoods",
        "features": [
            make_feature(name, AREA_SHORT_CODE=index) for index, name in enumerate(BOUNDARY_NAMES, 1)
        ],
    }


@pytest.fixture
def case_documents() -> List[Dict[str, Any]]:
    return [
        {"_id": 1, "Outbreak Associated": "Sporadic", "Age Group": "20 to 29 Years",
         "Neighbourhood Name": "Mimico (includes Humber Bay Shores)", "FSA": "M8V"},
        {"_id": 2, "Outbreak Associated": "Outbreak Associated", "Age Group": "90 and older",
         "Neighbourhood Name": "Mimico (includes Humber Bay Shores)", "FSA": "M8V"},
        {"_id": 3, "Outbreak Associated": "Sporadic", "Age Group": "40 to 49 Years",
         "Neighbourhood Name": "Briar Hill - Belgravia", "FSA": "M6E"},
        {"_id": 4, "Outbreak Associated": "Sporadic", "Age Group": None,
         "Neighbourhood Name": "Weston-Pelham Park", "FSA": "M6N"},
        {"_id": 5, "Outbreak Associated": "Sporadic", "Age Group": "50 to 59 Years",
         "Neighbourhood Name": "Danforth-East York", "FSA": "M4C"},
        {"_id": 6, "Outbreak Associated": "Sporadic", "Age Group": "60 to 69 Years",
         "Neighbourhood Name": None, "FSA": None},
    ]


@pytest.fixture
def census_documents() -> List[Dict[str, Any]]:
    return [
        {"_id": 1, "Category": "Neighbourhood Information", "Topic": "Neighbourhood Information",
         "Data Source": "City of Toronto", "Characteristic": "Neighbourhood Number",
         "City of Toronto": None, "Briar Hill-Belgravia": "108", "Danforth East York": "59",
         "Mimico (includes Humber Bay Shores)": "17", "Weston-Pellam Park": "91"},
        {"_id": 3, "Category": "Population", "Topic": "Population and dwellings",
         "Data Source": "Census Profile 98-316-X2016001", "Characteristic": "Population, 2016",
         "City of Toronto": "2,731,571", "Briar Hill-Belgravia": "14,257",
         "Danforth East York": "17,180", "Mimico (includes Humber Bay Shores)": "33,964",
         "Weston-Pellam Park": "11,098"},
        {"_id": 4, "Category": "Population", "Topic": "Population and dwellings",
         "Data Source": "Census Profile 98-316-X2016001", "Characteristic": "Population, 2011",
         "City of Toronto": "2,615,060", "Briar Hill-Belgravia": "14,302",
         "Danforth East York": "16,724", "Mimico (includes Humber Bay Shores)": "26,541",
         "Weston-Pellam Park": "11,051"},
    ]


def write_json(path: Path, data: Any) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


@pytest.fixture
def project(tmp_path, boundary_collection, case_documents, census_documents) -> Path:
    """A project directory with inputs under data/ and a config.yaml at its root."""
    write_json(tmp_path / "data" / "Neighbourhoods.geojson", boundary_collection)
    write_json(tmp_path / "data" / "cases.json", case_documents)
    write_json(tmp_path / "data" / "profiles.json", census_documents)

    config = {
        "project_name": "Test Map",
        "input_files": {
            "boundaries_geojson": "data/Neighbourhoods.geojson",
            "cases_json": "data/cases.json",
            "census_json": "data/profiles.json",
        },
        "output_files": {"enriched_geojson": "docs/out.geojson"},
    }
    (tmp_path / "config.yaml").write_text(yaml.safe_dump(config), encoding="utf-8")
    return tmp_path
