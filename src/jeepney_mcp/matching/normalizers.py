import re
import unicodedata
from functools import lru_cache

# Route code anywhere in free text ("Route 12a" -> "12a")
ROUTE_CODE_IN_TEXT = re.compile(r"\b(\d{1,3}[A-Za-z]?)\b")

# Prefixes people put before a code
CODE_PREFIXES = re.compile(r"^(?:route|jeepney|jeep|line|code|the)\s+", re.IGNORECASE)


@lru_cache(maxsize=4096)
def remove_accents(text: str) -> str:
    """Remove accents from text.

    Example: "Pardo–Mañalac" -> "Pardo–Manalac"
    """
    normalized = unicodedata.normalize("NFD", text)
    return "".join(c for c in normalized if unicodedata.category(c) != "Mn")


@lru_cache(maxsize=4096)
def normalize_text(text: str) -> str:
    """Normalize text for fuzzy matching.

    Lowercases, removes accents, and collapses whitespace.

    Example: "  Talamban –  Carbon " -> "talamban – carbon"
    """
    result = remove_accents(text.lower().strip())
    return " ".join(result.split())


def normalize_route_code(code: str) -> str:
    """Canonical form of a route code for comparisons.

    Example: " 12c " -> "12C"
    """
    return code.strip().upper()


def extract_route_code(query: str) -> str | None:
    """Extract a jeepney route code from query text.

    Examples:
        "12C" -> "12C"
        "route 04b" -> "04B"
        "jeepney 62b" -> "62B"
        "Talamban" -> None
    """
    stripped = CODE_PREFIXES.sub("", query.strip())
    match = ROUTE_CODE_IN_TEXT.fullmatch(stripped)
    if match:
        return normalize_route_code(match.group(1))

    match = ROUTE_CODE_IN_TEXT.search(query)
    if match and CODE_PREFIXES.match(query.strip()):
        return normalize_route_code(match.group(1))

    return None
