from typing import Callable, Iterable, List

from csvcheck.patterns import PatternSyntaxError, expand_pattern
from csvcheck.validate_csv import validate_csv_file


def process_csv_files(patterns: Iterable[str], echo: Callable[[str], None] = print) -> List[str]:
    """
    Expand each pattern and validate every file it matches.

    `echo` receives each pattern before it is expanded. Returns every
    failure as a message, in the order patterns were given and files were
    found; an empty list means all files are valid.
    """
    errors: List[str] = []

    for pattern in patterns:
        echo(pattern)

        try:
            entries = expand_pattern(pattern)
        except PatternSyntaxError as e:
            errors.append(f"Invalid file pattern {pattern}: {e}")
            continue

        for path, error in entries:
            if error is not None:
                errors.append(f"Error reading file {pattern}: {error}")
                continue

            reason = validate_csv_file(path)
            if reason is not None:
                errors.append(f"Failed to load {path}: {reason}")

    return errors
