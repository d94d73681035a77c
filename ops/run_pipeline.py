#!/usr/bin/env python3
"""
Neighbourhood Map Pipeline - Click CLI

Joins COVID-19 case counts and 2016 census population onto the Toronto
neighbourhood boundaries and writes the enriched GeoJSON for the web map.

The run is all-or-nothing: any malformed input or any boundary that cannot
be matched to both statistics aborts before the output file is touched.

Usage:
    python -m ops.run_pipeline [OPTIONS] [COMMAND]

Examples:
    python -m ops.run_pipeline                                  # Enrich with ops/config.yaml
    python -m ops.run_pipeline enrich --dry-run                 # Join without writing output
    python -m ops.run_pipeline check-names                      # Report names missing from the registry
    python -m ops.run_pipeline --set output_files.enriched_geojson=out/map.geojson
    python -m ops.run_pipeline --verbose                        # Enable DEBUG level logging
"""

import sys
import time
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import click
import yaml
from loguru import logger

from neighbourhoods.boundaries import area_name, enrich_feature_collection
from neighbourhoods.cases import aggregate_case_counts
from neighbourhoods.census import CensusCategory, build_population_table, select_row
from neighbourhoods.errors import NeighbourhoodJoinError
from neighbourhoods.datasets import (
    load_boundaries,
    load_case_records,
    load_census_rows,
    write_feature_collection,
)
from neighbourhoods.names import find_unregistered_names
from ops.config_loader import Config


class PipelineContext:
    """Click context object holding the loaded config."""

    def __init__(self, config: Config, trace: bool = False):
        self.config = config
        self.trace = trace


class ConfigOverride(click.ParamType):
    """Custom parameter type for KEY=VALUE config overrides."""

    name = "config_override"

    def convert(self, value, param, ctx) -> Tuple[str, Any]:
        if "=" not in value:
            self.fail(f"Invalid format: {value}. Use KEY=VALUE", param, ctx)

        key, val = value.split("=", 1)

        if val.lower() in ("true", "false"):
            parsed_val: Any = val.lower() == "true"
        elif val.isdigit():
            parsed_val = int(val)
        else:
            parsed_val = val

        return key, parsed_val


def apply_override(data: Dict[str, Any], key: str, value: Any) -> None:
    """Set a nested config value using dot notation."""
    keys = key.split(".")
    current = data
    for k in keys[:-1]:
        if not isinstance(current.get(k), dict):
            current[k] = {}
        current = current[k]
    current[keys[-1]] = value
    logger.debug(f"Added override: {key} = {value}")


def run_enrichment(config: Config, write: bool = True) -> Dict[str, Any]:
    """Load all inputs, join them and (optionally) write the enriched map.

    Returns:
        The enriched FeatureCollection

    Raises:
        NeighbourhoodJoinError: on malformed input or a failed join
    """
    start = time.time()
    area_field = config.get_column_name("area_name")

    boundaries = load_boundaries(config.get_input_path("boundaries_geojson"))
    records = load_case_records(
        config.get_input_path("cases_json"), config.get_column_name("case_neighbourhood")
    )
    census_rows = load_census_rows(config.get_input_path("census_json"))

    counts = aggregate_case_counts(records)
    populations = build_population_table(census_rows)
    enriched = enrich_feature_collection(boundaries, counts, populations, area_field)

    if write:
        write_feature_collection(enriched, config.get_output_path("enriched_geojson"))
    else:
        logger.info("🔍 Dry run: enriched map not written")

    logger.info(f"⏱️ Total time: {time.time() - start:.1f}s")
    return enriched


def collect_unregistered_names(config: Config) -> Dict[str, List[str]]:
    """Normalize every raw name in each source and list those outside the registry."""
    area_field = config.get_column_name("area_name")

    boundaries = load_boundaries(config.get_input_path("boundaries_geojson"))
    records = load_case_records(
        config.get_input_path("cases_json"), config.get_column_name("case_neighbourhood")
    )
    population_row = select_row(
        load_census_rows(config.get_input_path("census_json")), CensusCategory.POPULATION_2016
    )

    return {
        "boundaries": find_unregistered_names(
            area_name(feature, area_field) for feature in boundaries["features"]
        ),
        "cases": find_unregistered_names(
            record.neighbourhood for record in records if record.neighbourhood is not None
        ),
        "census": find_unregistered_names(population_row.values.keys()),
    }


@click.group(invoke_without_command=True)
@click.option(
    "--config-file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to config.yaml (default: PIPELINE_CONFIG_PATH, ./config.yaml, ops/config.yaml)",
)
@click.option(
    "--set",
    "config_overrides",
    multiple=True,
    type=ConfigOverride(),
    help="Set config values using dot notation (e.g., input_files.cases_json=data/cases.json)",
)
@click.option("-v", "--verbose", is_flag=True, help="Enable DEBUG level logging")
@click.option(
    "--trace", is_flag=True, help="Enable TRACE level logging for deep debugging (maximum detail)"
)
@click.option("--log-file", type=str, help="Also log to specified file")
@click.pass_context
def cli(ctx, config_file: Optional[Path], config_overrides, verbose: bool, trace: bool, log_file: Optional[str]):
    """
    Toronto Neighbourhood Map Pipeline

    Attach COVID-19 case counts and 2016 population to every neighbourhood
    boundary. Runs `enrich` when no command is given.
    """
    setup_logging(verbose=verbose, enable_trace=trace)

    if log_file:
        log_level = "TRACE" if trace else ("DEBUG" if verbose else "INFO")
        logger.add(
            log_file,
            level=log_level,
            format="{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{function}:{line} | {message}",
            rotation="10 MB",
            retention="7 days",
        )
        logger.info(f"📄 Also logging to file: {log_file}")

    try:
        config = Config(config_file)
    except (FileNotFoundError, OSError, ValueError, yaml.YAMLError) as e:
        logger.critical(f"Configuration error: {e}")
        logger.info("💡 Make sure config.yaml exists and is valid")
        ctx.exit(1)

    for key, value in config_overrides:
        apply_override(config.data, key, value)

    logger.info(f"📋 Project: {config.get('project_name')}")
    ctx.obj = PipelineContext(config, trace=trace)

    if ctx.invoked_subcommand is None:
        ctx.invoke(enrich)


@cli.command()
@click.option("--dry-run", is_flag=True, help="Join everything but do not write the output file")
@click.pass_context
def enrich(ctx, dry_run: bool):
    """Join case counts and population onto the neighbourhood boundaries."""
    config = ctx.obj.config

    logger.info("🗺️ Neighbourhood Enrichment")
    logger.info("=" * 40)

    try:
        enriched = run_enrichment(config, write=not dry_run)
    except (NeighbourhoodJoinError, OSError, ValueError) as e:
        handle_critical_error(e, "Neighbourhood enrichment", enable_trace=ctx.obj.trace)
        logger.info("💡 No output was written")
        ctx.exit(1)

    logger.success(f"🎉 Enriched {len(enriched['features'])} neighbourhoods")


@cli.command("check-names")
@click.pass_context
def check_names(ctx):
    """Report raw neighbourhood names that do not normalize to a registered name."""
    config = ctx.obj.config

    try:
        unregistered = collect_unregistered_names(config)
    except (NeighbourhoodJoinError, OSError, ValueError) as e:
        handle_critical_error(e, "Name check", enable_trace=ctx.obj.trace)
        ctx.exit(1)

    problems = 0
    for source, names in unregistered.items():
        if names:
            problems += len(names)
            logger.error(f"❌ {source}: {len(names)} unregistered names")
            for name in names:
                logger.error(f"    • {name}")
        else:
            logger.success(f"✅ {source}: all names registered")

    if problems:
        logger.info("💡 Add the spelling to NAME_VARIANTS in neighbourhoods/names.py")
        ctx.exit(1)


def setup_logging(verbose: bool = False, enable_trace: bool = False) -> None:
    """
    Configure loguru logging with appropriate levels.

    Args:
        verbose: If True, set log level to DEBUG
        enable_trace: If True, enable TRACE level logging for deep debugging
    """
    logger.remove()

    if enable_trace:
        log_level = "TRACE"
        log_format = "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | <level>{message}</level>"
    elif verbose:
        log_level = "DEBUG"
        log_format = "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | <level>{message}</level>"
    else:
        log_level = "INFO"
        log_format = (
            "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <level>{message}</level>"
        )

    logger.add(
        sys.stderr,
        format=log_format,
        level=log_level,
        colorize=True,
        backtrace=enable_trace,
        diagnose=enable_trace,
    )

    if verbose:
        logger.debug("🔧 Verbose logging enabled (DEBUG level)")
    if enable_trace:
        logger.trace("🔍 Trace logging enabled - maximum detail mode")


def handle_critical_error(error: Exception, context: str = "", enable_trace: bool = False) -> None:
    """
    Log a fatal error, with a full traceback in TRACE mode.

    Args:
        error: The exception that occurred
        context: Additional context about where the error occurred
        enable_trace: If True, also log the full traceback at TRACE level
    """
    if enable_trace:
        logger.opt(exception=error).trace(f"💥 Traceback for {type(error).__name__}")

    logger.critical(f"💥 CRITICAL ERROR: {context}")
    logger.critical(f"Exception: {type(error).__name__}: {error}")

    if not enable_trace:
        logger.info("💡 For detailed debugging, run with --trace flag")


if __name__ == "__main__":
    cli()
