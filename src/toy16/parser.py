# src/toy16/parser.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .lexer import Token, NUMBER, IDENTIFIER, COLON, EOF, TokenKind
from .ast import Label, Instruction, Reg, Imm, Sym, Patch, Operand
from .isa import spec as isa_spec, REG, WREG, NUM
from .regs import reg_num, is_reg, is_writable
from .encoding import encode
from .utils import is_unsigned_nbit
from .diagnostics import ParseError, parse_error

@dataclass
class ParseResult:
    """Salida de la pasada 1: palabras con huecos, etiquetas y parches."""
    words: List[int] = field(default_factory=list)
    labels: Dict[str, Label] = field(default_factory=dict)
    patches: List[Patch] = field(default_factory=list)
    instructions: List[Instruction] = field(default_factory=list)
    eof: Optional[Token] = None

class Parser:
    """
    Recursive-descent parser over the token list.

    Grammar, repeated until EOF:
        statement := [IDENT ':'] IDENT arg*
    where the argument list is dictated by the matched instruction.
    Labels are recorded at the index of the instruction they prefix;
    immediates naming a label become zero placeholders plus a Patch.
    The first error raises ParseError and aborts the whole parse.
    """

    def __init__(self, tokens: List[Token], text: str):
        self.tokens = tokens
        self.text = text
        self.idx = 0

    # ---- helpers de tokens ----

    def peek(self) -> Token:
        return self.tokens[self.idx]

    def expect(self, kind: TokenKind, message: str) -> Token:
        tok = self.peek()
        if tok.kind != kind:
            raise self.error_at(tok, message)
        self.idx += 1
        return tok

    def match(self, kind: TokenKind) -> Optional[Token]:
        tok = self.peek()
        if tok.kind != kind:
            return None
        self.idx += 1
        return tok

    def error_at(self, tok: Token, message: str) -> ParseError:
        return parse_error(self.text, tok.start, tok.end, message)

    # ---- gramática ----

    def parse(self) -> ParseResult:
        out = ParseResult()
        while self.peek().kind != EOF:
            head = self.expect(IDENTIFIER, "Expected an instruction")
            if self.match(COLON):
                name = str(head.value)
                if name in out.labels:
                    raise self.error_at(head, "Labels must be unique")
                out.labels[name] = Label(name=name, index=len(out.words), token=head)
                head = self.expect(IDENTIFIER, "Expected an instruction")
            self._instruction(head, out)
        out.eof = self.peek()
        return out

    def _instruction(self, head: Token, out: ParseResult) -> None:
        try:
            ispec = isa_spec(str(head.value))
        except KeyError:
            raise self.error_at(head, "Expected a valid instruction") from None
        operands: List[Operand] = []
        for kind in ispec.args:
            if kind in (REG, WREG):
                operands.append(self._register(kind == WREG))
            elif kind == NUM:
                operands.append(self._number_or_label())
        instr = Instruction(mnemonic=str(head.value).upper(), operands=operands, token=head)
        word, patch = encode(instr, ispec, index=len(out.words))
        if patch is not None:
            out.patches.append(patch)
        out.instructions.append(instr)
        out.words.append(word)

    def _register(self, write: bool) -> Reg:
        tok = self.expect(IDENTIFIER, "Expected a register")
        name = str(tok.value)
        if not is_reg(name):
            raise self.error_at(tok, "Expected a valid register")
        if write and not is_writable(name):
            raise self.error_at(
                tok, f"Expected a writable register, and {name} is not a writable register"
            )
        return Reg(name=name, num=reg_num(name), token=tok)

    def _number_or_label(self) -> Operand:
        ident = self.match(IDENTIFIER)
        if ident is not None:
            return Sym(name=str(ident.value), token=ident)
        tok = self.expect(NUMBER, "Expected a number or label")
        if not is_unsigned_nbit(int(tok.value), 8):
            raise self.error_at(tok, "Number exceeds 8-bit integer limit")
        return Imm(value=int(tok.value), token=tok)

def parse(tokens: List[Token], text: str) -> ParseResult:
    """Pasada 1 sobre los tokens de 'text'."""
    return Parser(tokens, text).parse()
