import argparse
import logging

from catalog_etl.config import LOG_LEVEL, ON_ERROR, ON_ERROR_CHOICES, SINK_DB, SOURCE_DB
from catalog_etl.run import run


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="catalog-etl",
        description="Migrate the course catalog and extract meeting times",
    )
    p.add_argument("--source", default=SOURCE_DB, help="Source SQLite database")
    p.add_argument("--sink", default=SINK_DB, help="Sink SQLite database (recreated)")
    p.add_argument(
        "--on-error",
        choices=ON_ERROR_CHOICES,
        default=ON_ERROR,
        help="Abort the run on the first bad course, or skip it",
    )
    return p


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s - %(levelname)s - %(message)s")

    summary = run(source_db=args.source, sink_db=args.sink, on_error=args.on_error)
    print(f"Loaded {summary.records} course dates into {args.sink}")


if __name__ == "__main__":
    main()
