"""Hypothesis strategies for ARB message text and related values.

Provides custom strategies for property-based testing of the tokenizer,
parser, identifier mapping and generated-code string literals.
"""

from __future__ import annotations

import string

from hypothesis import strategies as st
from hypothesis.strategies import composite

from arbgen.constants import PLURAL_CATEGORIES

# Language codes Babel knows, with and without regions
LOCALE_TAGS = st.sampled_from([
    "en", "en_US", "en_GB",
    "de", "de_DE", "de_AT",
    "fr", "fr_CA",
    "es", "es_419",
    "pt", "pt_BR",
    "ru", "pl", "ar", "ja", "lv", "uk",
    "zh", "zh_Hant", "zh_Hant_TW", "sr_Latn",
])  # fmt: skip


@composite
def placeholder_names(draw: st.DrawFn) -> str:
    """Generate camelCase placeholder names that map to valid identifiers."""
    first = draw(st.sampled_from(string.ascii_lowercase))
    rest = draw(st.text(alphabet=string.ascii_lowercase + string.digits, max_size=10))
    tail = draw(st.sampled_from(["", "Count", "Name", "Value"]))
    return first + rest + tail


@composite
def plain_text(draw: st.DrawFn) -> str:
    """Generate literal text without braces or apostrophes."""
    alphabet = st.characters(
        exclude_characters="{}'",
        exclude_categories=("Cs",),
    )
    return draw(st.text(alphabet=alphabet, min_size=1, max_size=30))


@composite
def python_string_values(draw: st.DrawFn) -> str:
    """Generate arbitrary strings including quotes, backslashes and controls."""
    return draw(
        st.text(
            alphabet=st.characters(exclude_categories=("Cs",)),
            max_size=40,
        )
        | st.sampled_from(['"', "\\", '\\"', "\n\r\t", "\x00\x7f", "'''", '"""', " "])
    )


@composite
def plural_messages(draw: st.DrawFn) -> tuple[str, set[str]]:
    """Generate a plural message and the set of branch keys it declares.

    Always contains the other branch; exact and category branches are unique.
    """
    name = draw(placeholder_names())
    categories = draw(
        st.lists(st.sampled_from(PLURAL_CATEGORIES[:-1]), unique=True, max_size=5)
    )
    exacts = draw(st.lists(st.integers(min_value=0, max_value=99), unique=True, max_size=3))
    keys = [f"={n}" for n in exacts] + categories + ["other"]
    order = draw(st.permutations(keys))
    branches = " ".join(f"{key}{{{draw(plain_text())}}}" for key in order)
    return f"{{{name}, plural, {branches}}}", set(keys)


@composite
def message_texts(draw: st.DrawFn) -> str:
    """Generate syntactically valid ICU message texts."""
    pieces = draw(
        st.lists(
            st.one_of(
                plain_text(),
                placeholder_names().map(lambda n: f"{{{n}}}"),
                plural_messages().map(lambda pair: pair[0]),
            ),
            max_size=5,
        )
    )
    return "".join(pieces)
