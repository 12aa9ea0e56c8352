"""Translation of Julia ``[compat]`` entries into npm semver ranges.

Julia's compat syntax differs from npm's in a few ways that matter here:

* clauses are separated by commas and combined with OR;
* a bare version means caret (``1.2.3`` is ``^1.2.3``), whereas npm treats a
  bare version as an X-range, which behaves like tilde;
* there is no AND operator, so whitespace-separated comparators are invalid;
* ``≥`` is accepted and ``<=``/``≤`` are not.

:func:`translate_compat_range` turns a compat entry into a range that
:class:`semantic_version.NpmSpec` evaluates with Julia's meaning.
"""

from __future__ import annotations

import re
from typing import Any, List, Mapping, Optional

from julia_version.constants import COMPAT_ENTRY
from julia_version.exceptions import InvalidCompatRangeError
from julia_version.utils.logger import get_logger
from julia_version.utils.version_utils import parse_range

logger = get_logger("compat")

_WHITESPACE_RE = re.compile(r"\s+")

# A space between a prefix comparator and its version, e.g. ">= 1.2".
_OPERATOR_SPACE_RE = re.compile(r"(>=|>|≥|<) (?=\d)")

# Spaces that are not part of a " - " hyphen range.
_SUBRANGE_SEPARATOR_RE = re.compile(r"(?<! -) (?!- )")


def is_valid_range(expression: str) -> bool:
    """Return True if *expression* is a valid npm range."""
    return parse_range(expression) is not None


def _translate_clause(clause: str) -> Optional[str]:
    clause = clause.strip()

    # An empty range isn't supported by Julia
    if not clause:
        return None

    clause = clause.replace("≥", ">=").replace("≤", "<=")
    clause = _WHITESPACE_RE.sub(" ", clause)
    clause = _OPERATOR_SPACE_RE.sub(r"\1", clause)

    if (
        not is_valid_range(clause)
        or len(_SUBRANGE_SEPARATOR_RE.split(clause)) > 1
        or clause.startswith("<=")
        or clause == "*"
    ):
        return None

    if clause[0].isdigit() and " " not in clause:
        clause = "^" + clause

    return clause


def translate_compat_range(compat: str) -> Optional[str]:
    """Convert a Julia compat entry into an npm semver range.

    Examples:
        >>> translate_compat_range("1.6, 1.8 - 1.10")
        '^1.6 || 1.8 - 1.10'
        >>> translate_compat_range(">= 1.6")
        '>=1.6'
        >>> translate_compat_range("<=1.6") is None
        True

    Args:
        compat: The compat entry, e.g. ``"1.6, ~1.8"``.

    Returns:
        The equivalent range, or ``None`` if any clause is invalid.
    """
    ranges: List[str] = []
    for clause in compat.split(","):
        translated = _translate_clause(clause)
        if translated is None:
            logger.debug("Rejected compat clause %r in %r", clause, compat)
            return None
        ranges.append(translated)

    combined = " || ".join(ranges)
    return combined if is_valid_range(combined) else None


def compat_range_from_project(project: Mapping[str, Any]) -> str:
    """Determine the npm range of the Julia compat entry of a parsed project.

    Args:
        project: Parsed ``Project.toml`` contents.

    Returns:
        The translated range, or ``"*"`` when no Julia compat entry exists.

    Raises:
        InvalidCompatRangeError: The compat entry cannot be translated.
    """
    compat = project.get("compat") or {}
    if not isinstance(compat, Mapping) or COMPAT_ENTRY not in compat:
        return "*"

    raw = compat[COMPAT_ENTRY]
    compat_range = translate_compat_range(raw) if isinstance(raw, str) else None
    if not compat_range:
        raise InvalidCompatRangeError(raw)

    return compat_range
