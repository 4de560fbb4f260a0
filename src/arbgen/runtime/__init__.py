"""Runtime support imported by generated localization modules.

Provides plural and select dispatch, Babel-backed date and number
formatting, and the delegate base class.

Python 3.13+. Depends on Babel for CLDR data.
"""

from .delegate import LocalizationsDelegate
from .formatting import LocaleFormatter, format_date, format_datetime_skeleton, format_number
from .plural_rules import select_plural_category
from .selection import plural, select

__all__ = [
    "LocaleFormatter",
    "LocalizationsDelegate",
    "format_date",
    "format_datetime_skeleton",
    "format_number",
    "plural",
    "select",
    "select_plural_category",
]
