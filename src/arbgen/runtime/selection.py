"""Plural and select primitives called by generated accessors.

Python 3.13+.
"""

from collections.abc import Mapping
from decimal import Decimal

from .plural_rules import select_plural_category

__all__ = ["plural", "select"]


def plural(
    howmany: int | float | Decimal,
    locale: str,
    *,
    exact: Mapping[int, str] | None = None,
    zero: str | None = None,
    one: str | None = None,
    two: str | None = None,
    few: str | None = None,
    many: str | None = None,
    other: str,
) -> str:
    """Pick the plural form of a message.

    Resolution order: an exact-value branch equal to howmany, then the branch
    for the CLDR category of howmany in locale, then other.

    Args:
        howmany: The count
        locale: Locale code
        exact: "=N" branches keyed by N
        zero, one, two, few, many: Category branches (None when absent)
        other: Mandatory fallback

    Example:
        >>> plural(0, "en", exact={0: "No items"}, one="One item", other="Many")
        'No items'
        >>> plural(1, "en", exact={0: "No items"}, one="One item", other="Many")
        'One item'
    """
    # 1 == 1.0 == Decimal(1) and they hash alike, so float/Decimal counts hit int keys.
    if exact and howmany in exact:
        return exact[howmany]

    forms = {"zero": zero, "one": one, "two": two, "few": few, "many": many}
    form = forms.get(select_plural_category(howmany, locale))
    return form if form is not None else other


def select(choice: object, cases: Mapping[str, str], *, other: str) -> str:
    """Pick the case branch matching choice, else other.

    Example:
        >>> select("nonbinary", {"male": "He", "female": "She"}, other="They")
        'They'
    """
    key = choice if isinstance(choice, str) else str(choice)
    return cases.get(key, other)
