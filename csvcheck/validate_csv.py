from pathlib import Path
from typing import Optional, Union
import csv
import sys

# utf-8-sig accepts a leading BOM and rejects any other undecodable byte
CSV_ENCODING = "utf-8-sig"

# no cap on field length; sys.maxsize overflows a C long on some platforms
try:
    csv.field_size_limit(sys.maxsize)
except OverflowError:
    csv.field_size_limit(2**31 - 1)


def validate_csv_file(path: Union[str, Path], encoding: str = CSV_ENCODING) -> Optional[str]:
    """
    Parse `path` as CSV and return None if it is well formed, otherwise a
    short description of the first problem found.

    The first non-blank record is the header and every later record must
    have the same number of fields. Field values are never inspected.
    """
    path = Path(path)

    try:
        with path.open(newline="", encoding=encoding) as f:
            reader = csv.reader(f, strict=True)
            header = None
            record = 0
            try:
                for row in reader:
                    if not row:
                        continue
                    if header is None:
                        header = row
                        continue
                    record += 1
                    if len(row) != len(header):
                        return (
                            f"record {record} (line {reader.line_num}): found record with "
                            f"{len(row)} fields, but the header has {len(header)} fields"
                        )
            except csv.Error as e:
                return f"line {reader.line_num}: {e}"
    except UnicodeDecodeError as e:
        return f"invalid UTF-8 data: {e}"
    except OSError as e:
        return e.strerror or str(e)

    return None
