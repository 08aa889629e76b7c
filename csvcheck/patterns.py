import fnmatch
import os
from pathlib import Path
from typing import Iterator, List, Optional, Tuple

GlobEntry = Tuple[Optional[Path], Optional[OSError]]

_SEPARATORS = {"/", os.sep}
if os.altsep:
    _SEPARATORS.add(os.altsep)


class PatternSyntaxError(ValueError):
    def __init__(self, pattern: str, pos: int, msg: str) -> None:
        super().__init__(f"Pattern syntax error near position {pos}: {msg}")
        self.pattern = pattern
        self.pos = pos
        self.msg = msg


def _has_wildcard(value: str) -> bool:
    return any(ch in value for ch in "*?[")


def check_pattern(pattern: str) -> None:
    """Raise PatternSyntaxError if `pattern` is not a valid glob."""
    i = 0
    n = len(pattern)
    while i < n:
        ch = pattern[i]
        if ch == "*":
            run = 1
            while i + run < n and pattern[i + run] == "*":
                run += 1
            if run > 2:
                raise PatternSyntaxError(pattern, i, "wildcards are either regular `*` or recursive `**`")
            if run == 2:
                before_ok = i == 0 or pattern[i - 1] in _SEPARATORS
                after_ok = i + 2 == n or pattern[i + 2] in _SEPARATORS
                if not (before_ok and after_ok):
                    raise PatternSyntaxError(pattern, i, "recursive wildcards must form a single path component")
            i += run
        elif ch == "[":
            j = i + 1
            if j < n and pattern[j] == "!":
                j += 1
            # "]" right after the opening bracket is a class member
            if j < n and pattern[j] == "]":
                j += 1
            close = pattern.find("]", j)
            if close == -1:
                raise PatternSyntaxError(pattern, i, "invalid range pattern")
            i = close + 1
        else:
            i += 1


def _join(base: Optional[Path], name: str) -> Path:
    return Path(name) if base is None else base / name


def _listdir(base: Optional[Path]) -> List[str]:
    with os.scandir(base if base is not None else ".") as it:
        return [entry.name for entry in it]


def _match_component(base: Optional[Path], component: str, rest: List[str]) -> Iterator[GlobEntry]:
    if not os.path.isdir(base if base is not None else "."):
        return
    try:
        names = _listdir(base)
    except OSError as e:
        yield None, e
        return

    for name in names:
        if not fnmatch.fnmatchcase(name, component):
            continue
        path = _join(base, name)
        if not rest:
            yield path, None
            continue
        try:
            is_dir = path.is_dir()
        except OSError as e:
            yield None, e
            continue
        if is_dir:
            yield from _walk(path, rest)


def _match_recursive(base: Optional[Path], rest: List[str]) -> Iterator[GlobEntry]:
    top = base if base is not None else Path(".")
    if not os.path.isdir(top):
        return

    if rest:
        # zero directories
        yield from _walk(base, rest)

    errors: List[OSError] = []
    for dirpath, dirnames, filenames in os.walk(top, onerror=errors.append):
        while errors:
            yield None, errors.pop(0)
        # Path drops the leading "./" that os.walk puts on relative dirs
        current = Path(dirpath)
        if rest:
            for d in dirnames:
                yield from _walk(current / d, rest)
        else:
            # directories are not yielded, unlike the Rust glob crate
            for f in filenames:
                yield current / f, None
    while errors:
        yield None, errors.pop(0)


def _walk(base: Optional[Path], parts: List[str]) -> Iterator[GlobEntry]:
    if not parts:
        if base is not None and os.path.lexists(base):
            yield base, None
        return

    head, rest = parts[0], parts[1:]
    if head == "**":
        yield from _match_recursive(base, rest)
    elif _has_wildcard(head):
        yield from _match_component(base, head, rest)
    else:
        yield from _walk(_join(base, head), rest)


def expand_pattern(pattern: str) -> Iterator[GlobEntry]:
    """
    Expand a glob pattern into the paths it matches.

    The pattern is checked up front, so a malformed pattern raises
    PatternSyntaxError here rather than on first iteration. The returned
    iterator yields ``(path, None)`` for every match and ``(None, error)``
    for every directory that could not be read, in the order the
    filesystem lists them.
    """
    check_pattern(pattern)
    if not pattern:
        return iter(())
    return _walk(None, list(Path(pattern).parts))
