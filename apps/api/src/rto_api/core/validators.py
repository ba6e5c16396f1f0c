"""
Credential Configuration Validators

Sanity checks for third-party identifiers stored alongside encrypted
credentials. These are not cryptographic checks.
"""

import re

TEMPLATE_IDENTIFIER_PATTERN = re.compile(r"[A-Za-z0-9_\-:.]{6,}")


def is_valid_template_identifier(value: object) -> bool:
    """
    Check a messaging template identifier (e.g. a Twilio Content SID).

    Must be at least 6 characters of letters, digits, ``_``, ``-``, ``:``
    or ``.``.
    """
    if not isinstance(value, str):
        return False
    return TEMPLATE_IDENTIFIER_PATTERN.fullmatch(value) is not None
