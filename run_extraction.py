"""
Run the email-to-ticket extraction on plain-text email files.

Reads:
  - one or more .txt / .eml files (raw email text)
  - optionally a contributors JSON file: [{"id", "name", "email", "active"}, ...]

Produces:
  - a JSON list of parse outcomes (ticket or failure message), one per file,
    on stdout or in --output
"""
import argparse
import json
import logging
import sys
from pathlib import Path

from src.config import settings
from src.models.extraction_config import ExtractionConfig
from src.ticketing.pipeline import parse_email_to_ticket_safe

# ---------------------------------------------------------------------------
# Setup logging
# ---------------------------------------------------------------------------
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s — %(message)s",
    stream=sys.stderr,
)
logger = logging.getLogger("run_extraction")

EMAIL_SUFFIXES = {".txt", ".eml"}


def collect_files(paths):
    """Expand directories into their .txt/.eml files, sorted by name."""
    files = []
    for path in paths:
        if path.is_dir():
            files.extend(sorted(p for p in path.iterdir() if p.suffix.lower() in EMAIL_SUFFIXES))
        else:
            files.append(path)
    return files


def load_registry(path):
    if path is None:
        return []
    with open(path, encoding="utf-8") as f:
        rows = json.load(f)
    logger.info("contributors      : %d", len(rows))
    return rows


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Extract support tickets from raw email text files.")
    parser.add_argument("paths", nargs="+", type=Path, help=".txt/.eml files or directories")
    parser.add_argument("--contributors", type=Path, default=None, help="contributors JSON file")
    parser.add_argument("--output", type=Path, default=None, help="write results here instead of stdout")
    args = parser.parse_args(argv)

    config = ExtractionConfig.from_settings()
    contributors = load_registry(args.contributors)
    logger.info("config            : %r", config)

    results = []
    failures = 0
    for path in collect_files(args.paths):
        raw = path.read_text(encoding="utf-8", errors="replace")
        outcome = parse_email_to_ticket_safe(raw, contributors, config)
        if not outcome.ok:
            failures += 1
            logger.error("%s: %s", path.name, outcome.error)
        else:
            logger.info("%s: %s", path.name, outcome.ticket.summary)
        results.append({"file": str(path), **outcome.to_dict()})

    payload = json.dumps(results, ensure_ascii=False, indent=2)
    if args.output:
        args.output.write_text(payload, encoding="utf-8")
        logger.info("Output written to: %s", args.output)
    else:
        print(payload)

    logger.info("Parsed %d file(s), %d failure(s)", len(results), failures)
    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
