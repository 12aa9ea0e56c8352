"""Parsing and validation of user-supplied inputs.

The ``version`` input may be a single specifier or a list of specifiers,
written as a bare scalar, a JSON array or a YAML block list::

    1.10
    ["1", "lts", "min"]
    - 1
    - nightly   # comments are allowed

The input is parsed with PyYAML's ``BaseLoader``, which never infers
scalar types. With a regular loader ``1.10`` would become the float
``1.1``; here it stays the string ``"1.10"``.
"""

from __future__ import annotations

import re
from typing import Any, List

import yaml

from julia_version.constants import IF_MISSING_CHOICES
from julia_version.exceptions import (
    InvalidIfMissingError,
    InvalidSpecifierError,
    UnparsableInputError,
)
from julia_version.models.specifier import VersionSpecifier, classify_specifier
from julia_version.utils.logger import get_logger

logger = get_logger("input")

_NR = r"(?:0|[1-9])[0-9]*"
_NIGHTLY = rf"(?:{_NR}\.{_NR}-)?nightly"
_NUMERIC_VERSION = rf"[\^~]?{_NR}(?:\.{_NR}(?:\.{_NR})?)?"
_ALIAS = r"lts|min|manifest"

#: Grammar every user-supplied specifier must match.
VERSION_SPECIFIER_RE = re.compile(rf"^(?:{_NUMERIC_VERSION}|{_NIGHTLY}|{_ALIAS})$")


def _load_strings(raw: str) -> Any:
    try:
        return yaml.load(raw, Loader=yaml.BaseLoader)
    except yaml.YAMLError as exc:
        raise UnparsableInputError(raw) from exc


def parse_version_specifiers(raw: str) -> List[str]:
    """Parse the ``version`` input into a list of validated specifiers.

    Args:
        raw: Raw input text.

    Returns:
        Specifiers in input order, exactly as written.

    Raises:
        UnparsableInputError: Input is not a string or a list of strings.
        InvalidSpecifierError: An element does not match the specifier grammar.
    """
    document = _load_strings(raw.strip())

    if isinstance(document, str):
        specifiers = [document]
    elif isinstance(document, list) and all(isinstance(el, str) for el in document):
        specifiers = list(document)
    else:
        raise UnparsableInputError(raw)

    for specifier in specifiers:
        if not VERSION_SPECIFIER_RE.fullmatch(specifier):
            raise InvalidSpecifierError(specifier)

    logger.debug("Parsed version specifiers: %s", specifiers)
    return specifiers


def parse_specifiers(raw: str) -> List[VersionSpecifier]:
    """Parse the ``version`` input into classified specifiers.

    Same rules as :func:`parse_version_specifiers`.
    """
    return [classify_specifier(s) for s in parse_version_specifiers(raw)]


def parse_if_missing(raw: str) -> str:
    """Validate the ``if-missing`` policy.

    Returns:
        ``"warn"`` or ``"error"``.

    Raises:
        InvalidIfMissingError: Any other value.
    """
    if raw not in IF_MISSING_CHOICES:
        raise InvalidIfMissingError(raw)
    return raw
