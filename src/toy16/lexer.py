from __future__ import annotations
import re
from dataclasses import dataclass
from typing import List, Literal, Optional, Union

from .diagnostics import lex_error

TokenKind = Literal["number", "identifier", "colon", "eof"]

NUMBER: TokenKind = "number"
IDENTIFIER: TokenKind = "identifier"
COLON: TokenKind = "colon"
EOF: TokenKind = "eof"

NUMBER_RE = re.compile(r"[0-9]+")
IDENT_RE = re.compile(r"[A-Za-z][A-Za-z0-9]*")

WHITESPACE = " \t\n"

@dataclass(frozen=True)
class Token:
    """A lexed token spanning text[start:end].

    value is the decimal value for numbers, the identifier text for
    identifiers and None for colons and the end-of-file marker.
    """
    kind: TokenKind
    start: int
    end: int
    value: Optional[Union[int, str]] = None

def tokenize(text: str) -> List[Token]:
    """Split source text into tokens, ending with a zero-width EOF token.

    Raises LexError on the first character that cannot start a token.
    """
    tokens: List[Token] = []
    idx = 0
    n = len(text)
    while idx < n:
        ch = text[idx]
        if ch in WHITESPACE:
            idx += 1
        elif ch == ":":
            tokens.append(Token(COLON, idx, idx + 1))
            idx += 1
        elif ch == "/":
            nxt = text[idx + 1] if idx + 1 < n else ""
            if nxt == "/":
                eol = text.find("\n", idx)
                idx = n if eol == -1 else eol
            elif nxt == "*":
                # the closer must start after the opener, so '/*/' stays open
                close = text.find("*/", idx + 2)
                if close == -1:
                    raise lex_error(text, idx, idx + 2, "Expected end of comment")
                idx = close + 2
            else:
                raise lex_error(text, idx, idx + 1, "Expected the start of a comment")
        else:
            m = NUMBER_RE.match(text, idx)
            if m:
                tokens.append(Token(NUMBER, idx, m.end(), int(m.group())))
                idx = m.end()
                continue
            m = IDENT_RE.match(text, idx)
            if m:
                tokens.append(Token(IDENTIFIER, idx, m.end(), m.group()))
                idx = m.end()
                continue
            raise lex_error(text, idx, idx + 1, "Unknown character")
    tokens.append(Token(EOF, n, n))
    return tokens
