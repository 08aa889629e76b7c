import argparse
import sys
from typing import List, Optional

from csvcheck import __version__
from csvcheck.batch import process_csv_files

EXIT_SUCCESS = 0
EXIT_FAILURE = 1


def die(msg: str) -> int:
    print(msg, file=sys.stderr)
    return EXIT_FAILURE


def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(prog="csvcheck", description="Check that files are well-formed CSV.")
    ap.add_argument("filenames", nargs="*", metavar="FILENAMES", help="CSV filenames (including wildcards)")
    ap.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    args = ap.parse_args(argv)

    if not args.filenames:
        return die("No filenames provided.")

    errors = process_csv_files(args.filenames)
    if errors:
        for err in errors:
            print(err, file=sys.stderr)
        return EXIT_FAILURE

    print("All files are valid CSVs.")
    return EXIT_SUCCESS


if __name__ == "__main__":
    raise SystemExit(main())
