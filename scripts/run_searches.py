"""
Run a batch of concurrent keyword searches against the movie catalog.

This script:
1) Loads the catalog (built-in movies, or a JSONL file via --data)
2) Creates the admission gate (default 5 slots) and the report sink
3) Starts one search thread per keyword and waits for all of them
4) Prints every report, then a completion line

Usage:
    python -m scripts.run_searches
    python -m scripts.run_searches dragon magic war --slots 2 --delay-ms 50

Exit codes: 0 all searches finished, 1 fatal startup failure, 2 some searches failed.
"""

import argparse  # command-line options
import sys  # exit codes and log sink
from typing import List, Optional  # type hints

from loguru import logger  # console logging

from filmgate.concurrency import AdmissionGate  # bounded catalog access
from filmgate.config import SearchConfig  # defaults + environment overrides
from filmgate.data_loader import DataLoader  # catalog ingestion
from filmgate.dispatcher import Dispatcher  # thread-per-keyword runner
from filmgate.errors import FilmGateError  # fatal startup failures
from filmgate.report import ReportSink  # serialized stdout writer

EXIT_OK = 0
EXIT_FATAL = 1
EXIT_TASK_FAILED = 2


def build_parser() -> argparse.ArgumentParser:
	p = argparse.ArgumentParser(prog="run_searches", description="Concurrent keyword search over the movie catalog")
	p.add_argument("keywords", nargs="*", help="Keywords to search for (defaults to the configured list)")
	p.add_argument("--slots", type=int, default=None, help="Maximum concurrent catalog searches")
	p.add_argument("--delay-ms", type=int, default=None, help="Simulated load per search in milliseconds")
	p.add_argument("--max-results", type=int, default=None, help="Matches kept per keyword")
	p.add_argument("--data", default=None, help="JSONL catalog file (built-in movies when omitted)")
	p.add_argument("--acquire-timeout", type=float, default=None, help="Seconds to wait for a slot before failing")
	p.add_argument("--log-level", default=None, help="Loguru level for diagnostics on stderr")
	return p


def main(argv: Optional[List[str]] = None) -> int:
	args = build_parser().parse_args(argv)

	try:
		config = SearchConfig.from_env().with_overrides(
			db_slots=args.slots,
			work_delay_ms=args.delay_ms,
			max_results=args.max_results,
			data_path=args.data,
			acquire_timeout_s=args.acquire_timeout,
			log_level=args.log_level,
		)
		logger.level(config.log_level.upper())  # unknown level names raise ValueError
	except ValueError as e:  # GateConfigurationError is a ValueError too
		logger.error(f"[CLI] Invalid configuration: {e}")
		return EXIT_FATAL

	# Diagnostics go to stderr so stdout holds only the reports
	logger.remove()
	logger.add(sys.stderr, level=config.log_level.upper())

	keywords = args.keywords or list(config.keywords)

	try:
		catalog = DataLoader().load_catalog(config.data_path)  # read dataset
		gate = AdmissionGate(config.db_slots)  # N concurrent searches
		dispatcher = Dispatcher(catalog, gate=gate, sink=ReportSink(), config=config)
		summary = dispatcher.run(keywords)
	except (FilmGateError, FileNotFoundError) as e:
		logger.error(f"[CLI] Fatal startup failure: {e}")
		return EXIT_FATAL

	print("\nAll searches finished.")
	if summary.failed:
		logger.error(f"[CLI] {len(summary.failed)} of {len(summary.tasks)} searches failed")
		return EXIT_TASK_FAILED
	return EXIT_OK


if __name__ == '__main__':
	sys.exit(main())  # propagate exit code
