import re
from re import Pattern

_GLOB_CACHE: dict[str, Pattern[str]] = {}


def compile_glob(pattern: str) -> Pattern[str]:
    """Convert a glob pattern supporting ** into a compiled regex.

    ``**`` matches across directory separators (including zero directories
    when written as ``**/``); ``*`` and ``?`` stay within one segment.

    Args:
        pattern: The glob pattern string.

    Returns:
        A compiled regex pattern object.
    """
    cached = _GLOB_CACHE.get(pattern)
    if cached:
        return cached

    regex_parts: list[str] = []
    i = 0
    length = len(pattern)
    while i < length:
        char = pattern[i]
        if char == "*":
            if i + 1 < length and pattern[i + 1] == "*":
                if i + 2 < length and pattern[i + 2] == "/":
                    regex_parts.append("(?:.*/)?")
                    i += 2
                else:
                    regex_parts.append(".*")
                    i += 1
            else:
                regex_parts.append("[^/]*")
        elif char == "?":
            regex_parts.append("[^/]")
        else:
            regex_parts.append(re.escape(char))
        i += 1

    compiled = re.compile("^" + "".join(regex_parts) + "$")
    _GLOB_CACHE[pattern] = compiled
    return compiled


def normalize_path(path: str) -> str:
    path = path.replace("\\", "/")
    return path[2:] if path.startswith("./") else path


def path_matches(path: str, pattern: str) -> bool:
    """Match a file path against a glob, or a plain directory prefix when the pattern has no wildcard."""
    path = normalize_path(path)
    if not any(ch in pattern for ch in "*?"):
        prefix = pattern.rstrip("/") + "/"
        return path.startswith(prefix) or path == pattern.rstrip("/")
    return compile_glob(pattern).match(path) is not None
