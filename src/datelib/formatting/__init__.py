# src/datelib/formatting/__init__.py
"""
datelib.formatting
~~~~~~~~~~~~~~~~~~

Locale-aware rendering of markers and marker ranges.

Basic usage::

    from datelib.formatting import create_formatter

    fmt = create_formatter(day="numeric", month="long", year="numeric")
    env.format(marker, fmt)                 # → 'June 8, 2018'
    env.format_range(m0, m1, fmt)           # → 'June 8 - 9, 2018'

Ranges collapse the fields both ends share; a zone label that cannot be
resolved is left out rather than guessed.

Public API
----------
create_formatter     Build a formatter from options or a callable.
FormatterConfig      Declarative field/style mapping.
Locale, get_locale   Locale tables ("en", "en-gb", "de").
"""

from __future__ import annotations

from datelib.formatting.formatter import (
    DEFAULT_SEPARATOR,
    DateFormatter,
    FormatInfo,
    FormatterConfig,
    FuncFormatter,
    NativeFormatter,
    VerboseDate,
    compute_marker_diff_severity,
    create_formatter,
    find_common_insertion,
    format_week_number,
)
from datelib.formatting.locale import Locale, get_locale, locales, register_locale

__all__ = [
    "DEFAULT_SEPARATOR",
    "DateFormatter",
    "FormatInfo",
    "FormatterConfig",
    "FuncFormatter",
    "Locale",
    "NativeFormatter",
    "VerboseDate",
    "compute_marker_diff_severity",
    "create_formatter",
    "find_common_insertion",
    "format_week_number",
    "get_locale",
    "locales",
    "register_locale",
]
