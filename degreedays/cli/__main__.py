from __future__ import annotations

import argparse
import asyncio
import sys
import time
from datetime import date
from pathlib import Path

from dotenv import load_dotenv

from degreedays.config.loader import ConfigError, load_config
from degreedays.logging.error_log import ErrorLogBuffer, record_for
from degreedays.logging.init import log_summary, set_debug, setup_logging
from degreedays.models.heating_record import HeatingQuery
from degreedays.models.months import parse_month
from degreedays.services.progress import is_tty_enabled
from degreedays.services.resolver import DataResolver
from degreedays.services.session import ViewSession, available_years
from degreedays.services.summary import DATA_SOURCE_LINE, render_record_lines, render_summary_line
from degreedays.source.fetcher import CsvFetcher

"""CLI entrypoint: pick year / month / location, show the heating requirement.

Flow:
- Load .env and config
- Build the selection (defaults: current year, current month, configured location)
- Resolve once through a ViewSession and render its state
- Print a SUMMARY line and return an exit code
"""

EXIT_SUCCESS = 0
EXIT_FATAL = 1
EXIT_RESOLUTION_FAILED = 2


def _load_env_file(path: Path, override: bool = True) -> None:
    """Load .env via python-dotenv so DEGREEDAYS_* variables take effect."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=override)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="FMI heating degree-day viewer")
    p.add_argument("--year", type=int, help="Data year (default: current year)")
    p.add_argument("--month", help="Month as 1-12, English name or Roman numeral (default: current month)")
    p.add_argument("--location", help="Location name or part of it (default: from config)")
    p.add_argument("--config", type=Path, help="Path to YAML config (default: config/degreedays.yml)")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument("--list-years", action="store_true", help="Print selectable years and exit")
    p.add_argument("--list-locations", action="store_true", help="Print the locations available for the year")
    return p.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # Only read sys.argv when argv is None; [] from tests means "no arguments"
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    _load_env_file(Path(".env"), override=True)

    try:
        cfg = load_config(args.config)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    if args.debug:
        set_debug(logger)
        logger.debug("debug mode enabled")

    today = date.today()
    years = available_years(cfg.year_span, today=today)
    if args.list_years:
        for y in years:
            print(y)
        return EXIT_SUCCESS

    year = args.year if args.year is not None else years[0]
    if year not in years:
        logger.error(f"year {year} not available (choose {years[-1]}..{years[0]})")
        return EXIT_FATAL
    try:
        month = parse_month(args.month).index if args.month else today.month - 1
    except ValueError as e:
        logger.error(f"month: {e}")
        return EXIT_FATAL
    location = args.location if args.location is not None else cfg.default_location

    fetcher = CsvFetcher(
        cfg.source_url,
        timeout=cfg.timeout_seconds,
        encoding=cfg.encoding,
        show_progress=is_tty_enabled(),
    )
    resolver = DataResolver(fetcher, delimiter=cfg.delimiter)
    session = ViewSession(resolver, years=years, default_location=cfg.default_location)
    query = HeatingQuery(year=year, month=month, location_query=location)

    logger.info("Loading data...")
    start = time.perf_counter()
    state = asyncio.run(session.refresh(query))
    elapsed = time.perf_counter() - start
    resolution = session.resolution
    if resolution is None:
        logger.error("lookup did not complete")
        return EXIT_FATAL

    if state.displayable:
        for line in render_record_lines(resolution):
            logger.info(line)
    else:
        logger.error(f"Error: {state.error}")

    if args.list_locations:
        print("Locations: " + ", ".join(state.locations))

    logger.info(DATA_SOURCE_LINE)

    if cfg.error_log and not resolution.ok:
        buffer = ErrorLogBuffer(Path(cfg.logs_directory))
        buffer.append(record_for(resolution))
        path = buffer.flush()
        logger.debug(f"error log written: {path}")

    summary_line = render_summary_line(resolution, elapsed)
    # log_summary adds the "SUMMARY " prefix itself
    log_summary(summary_line[len("SUMMARY "):])

    return EXIT_SUCCESS if resolution.ok else EXIT_RESOLUTION_FAILED


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
