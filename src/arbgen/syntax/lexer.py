"""Modal tokenizer for ICU message text.

The tokenizer alternates between two modes:

- string mode: literal text; "{" opens an expression, "}" closes the
  enclosing submessage.
- expression mode: identifiers, numbers, "," and "="; "{" opens a
  submessage (string mode), "}" closes the expression.

Whitespace is insignificant in expression mode and preserved in string mode.
Consecutive literal characters (including unescaped quoted runs) are
collapsed into a single TEXT token.

Python 3.13+. Zero external dependencies.
"""

import re
from dataclasses import dataclass
from typing import NoReturn

from arbgen.constants import DEFAULT_ESCAPE_CHAR
from arbgen.diagnostics import Diagnostic, ErrorTemplate, MessageParseError, SourceLocation
from arbgen.enums import TokenKind

__all__ = ["Token", "tokenize"]

# A structural "{" in unescaped mode must be followed (after spaces) by this.
_IDENT_START = re.compile(r"\s*[A-Za-z_]")

# Words in expression mode: identifiers, branch keys, skeletons, numbers.
_WORD = re.compile(r"[A-Za-z0-9_]+")

_PUNCTUATION: dict[str, TokenKind] = {
    ",": TokenKind.COMMA,
    "=": TokenKind.EQUAL_SIGN,
}


@dataclass(frozen=True, slots=True)
class Token:
    """A lexical token.

    Attributes:
        kind: Token kind
        value: Token text (unescaped for TEXT tokens)
        start: Offset of the first source character
        end: Offset one past the last source character
    """

    kind: TokenKind
    value: str
    start: int
    end: int

    def describe(self) -> str:
        """Human-readable token description for error messages."""
        if self.kind == TokenKind.EOF:
            return "end of message"
        return f"'{self.value}'"


class _Tokenizer:
    """Single-use tokenizer state: position, mode stack, pending text."""

    __slots__ = (
        "_escape_char",
        "_filename",
        "_key",
        "_modes",
        "_pending",
        "_pending_start",
        "_pos",
        "_text",
        "_tokens",
        "_use_escaping",
    )

    def __init__(
        self, text: str, *, use_escaping: bool, escape_char: str, key: str, filename: str
    ) -> None:
        self._text = text
        self._use_escaping = use_escaping
        self._escape_char = escape_char
        self._key = key
        self._filename = filename
        self._pos = 0
        # True = string mode, False = expression mode. Bottom is the top-level string.
        self._modes: list[bool] = [True]
        self._tokens: list[Token] = []
        self._pending: list[str] = []
        self._pending_start = 0

    def run(self) -> tuple[Token, ...]:
        while self._pos < len(self._text):
            if self._modes[-1]:
                self._string_step()
            else:
                self._expression_step()
        self._flush_text()
        end = len(self._text)
        self._tokens.append(Token(TokenKind.EOF, "", end, end))
        return tuple(self._tokens)

    # ------------------------------------------------------------------
    # String mode
    # ------------------------------------------------------------------

    def _string_step(self) -> None:
        text = self._text
        ch = text[self._pos]

        if self._use_escaping and ch == self._escape_char:
            self._quoted()
            return

        if ch == "{":
            if self._use_escaping or _IDENT_START.match(text, self._pos + 1):
                self._emit(TokenKind.OPEN_BRACE, "{")
                self._modes.append(False)
            else:
                self._literal(ch)
            return

        if ch == "}":
            if len(self._modes) > 1:
                self._emit(TokenKind.CLOSE_BRACE, "}")
                self._modes.pop()
            elif self._use_escaping:
                # Stray top-level brace; the parser reports it.
                self._emit(TokenKind.CLOSE_BRACE, "}")
            else:
                self._literal(ch)
            return

        self._literal(ch)

    def _quoted(self) -> None:
        """Handle the escape character at the current position.

        Two escape characters produce one. Otherwise the characters up to the
        next escape character are literal; an unterminated quote runs to the
        end of the text.
        """
        text = self._text
        esc = self._escape_char
        start = self._pos
        if not self._pending:
            self._pending_start = start
        if text.startswith(esc, start + 1):
            self._pending.append(esc)
            self._pos = start + 2
            return
        close = text.find(esc, start + 1)
        if close == -1:
            self._pending.append(text[start + 1 :])
            self._pos = len(text)
        else:
            self._pending.append(text[start + 1 : close])
            self._pos = close + 1

    def _literal(self, ch: str) -> None:
        if not self._pending:
            self._pending_start = self._pos
        self._pending.append(ch)
        self._pos += 1

    def _flush_text(self) -> None:
        if self._pending:
            value = "".join(self._pending)
            self._tokens.append(Token(TokenKind.TEXT, value, self._pending_start, self._pos))
            self._pending.clear()

    # ------------------------------------------------------------------
    # Expression mode
    # ------------------------------------------------------------------

    def _expression_step(self) -> None:
        text = self._text
        ch = text[self._pos]

        if ch.isspace():
            self._pos += 1
        elif ch == "{":
            self._emit(TokenKind.OPEN_BRACE, "{")
            self._modes.append(True)
        elif ch == "}":
            self._emit(TokenKind.CLOSE_BRACE, "}")
            self._modes.pop()
        elif ch in _PUNCTUATION:
            self._emit(_PUNCTUATION[ch], ch)
        elif match := _WORD.match(text, self._pos):
            word = match.group()
            kind = TokenKind.NUMBER if word.isdigit() else TokenKind.IDENTIFIER
            self._tokens.append(Token(kind, word, self._pos, match.end()))
            self._pos = match.end()
        else:
            self._fail(
                ErrorTemplate.unexpected_token(
                    ["identifier", "number", "','", "'='", "'{'", "'}'"],
                    f"'{ch}'",
                    self._location(),
                )
            )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _emit(self, kind: TokenKind, value: str) -> None:
        self._flush_text()
        self._tokens.append(Token(kind, value, self._pos, self._pos + len(value)))
        self._pos += len(value)

    def _location(self) -> SourceLocation:
        return SourceLocation(
            file=self._filename, message_key=self._key, text=self._text, index=self._pos
        )

    def _fail(self, diagnostic: Diagnostic) -> NoReturn:
        raise MessageParseError(
            diagnostic,
            filename=self._filename,
            message_key=self._key,
            text=self._text,
            index=self._pos,
        )


def tokenize(
    text: str,
    *,
    use_escaping: bool = False,
    escape_char: str = DEFAULT_ESCAPE_CHAR,
    key: str = "",
    filename: str = "",
) -> tuple[Token, ...]:
    """Split ICU message text into tokens.

    Args:
        text: Message text
        use_escaping: Treat escape_char as ICU quoting
        escape_char: Quoting character (default apostrophe)
        key: Message key, for error locations
        filename: ARB filename, for error locations

    Returns:
        Tokens ending with a single EOF token

    Raises:
        MessageParseError: On a character that cannot start a token

    Example:
        >>> [t.kind for t in tokenize("Hi {name}")]
        [<TokenKind.TEXT: 'text'>, <TokenKind.OPEN_BRACE: 'open_brace'>, ...]
    """
    return _Tokenizer(
        text, use_escaping=use_escaping, escape_char=escape_char, key=key, filename=filename
    ).run()
