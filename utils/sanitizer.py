"""
Input Sanitization Module

Cleans free-text form input before it is stored. Output escaping is left
to Jinja's autoescape.
"""

import re

CONTROL_CHARS = re.compile(r'[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]')


def sanitize_text(text, max_length=10000):
    """
    Strip control characters and surrounding whitespace, then truncate.

    Newlines are kept so descriptions and addresses keep their layout.

    Args:
        text: The text to sanitize (can be None)
        max_length: Maximum allowed length (default 10000)

    Returns:
        Sanitized string, truncated if necessary
    """
    if text is None:
        return ''

    if not isinstance(text, str):
        text = str(text)

    text = CONTROL_CHARS.sub('', text).strip()

    if len(text) > max_length:
        text = text[:max_length]

    return text


def sanitize_name(name, max_length=200):
    """
    Sanitize a single-line name (ingredient, composition, cost).

    Returns an empty string when nothing is left after cleaning; callers
    treat that as a missing name.
    """
    if not name:
        return ''

    if not isinstance(name, str):
        name = str(name)

    # Remove control characters and null bytes
    name = re.sub(r'[\x00-\x1f\x7f-\x9f]', ' ', name)

    # Collapse multiple spaces
    name = re.sub(r'\s+', ' ', name).strip()

    if len(name) > max_length:
        name = name[:max_length].rstrip()

    return name


def sanitize_tax_id(value, max_length=20):
    """Keep digits, letters and the usual NIP separators."""
    if not value:
        return ''
    value = re.sub(r'[^0-9A-Za-z\- ]', '', str(value)).strip()
    return value[:max_length]
