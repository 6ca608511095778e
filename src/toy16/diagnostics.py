'''
clase Diagnostic, renderizado de extractos con '^' y excepciones del ensamblador
'''

from __future__ import annotations
from dataclasses import dataclass
from typing import List, Literal, Tuple

# Origen del diagnóstico: lexer o parser
Kind = Literal["lex", "parse"]

def _line_range(text: str, start: int, end: int) -> Tuple[int, int, int]:
    """Devuelve (primera línea, última línea, offset de la primera), base 0."""
    start = min(start, len(text))
    end = max(min(end, len(text)), start)
    first = last = -1
    first_offset = 0
    offset = 0
    lines = text.split("\n")
    for i, line in enumerate(lines):
        # +1 por el '\n' que split() quitó
        if first == -1 and start < offset + len(line) + 1:
            first = i
            first_offset = offset
        if first != -1 and end <= offset + len(line) + 1:
            last = i
            break
        offset += len(line) + 1
    return first, last, first_offset

def render_excerpt(text: str, start: int, end: int, message: str) -> str:
    """Reproduce las líneas que solapan [start, end) y las subraya con '^'.

    Si el rango cruza varias líneas se subraya la parte que cae en cada una.
    Siempre se dibuja al menos un '^', aunque el rango tenga ancho cero.
    """
    lines = text.split("\n")
    first, last, offset = _line_range(text, start, end)
    out: List[str] = [f"Failed to parse code: {message}."]
    for i in range(first, last + 1):
        line = lines[i]
        line_end = offset + len(line)
        true_start = max(start, offset)
        pad = true_start - offset
        carets = max(min(end, line_end) - true_start, 1)
        out.append(line)
        out.append(" " * pad + "^" * carets)
        offset += len(line) + 1
    if first == last:
        out.append(f"At line {first + 1}")
    else:
        out.append(f"At lines {first + 1}-{last + 1}")
    return "\n".join(out)

@dataclass(frozen=True)
class Diagnostic:
    """Error del ensamblador anclado a un rango de bytes del fuente.

    Guarda el texto completo para poder renderizar el extracto más tarde;
    quien lo reciba puede mostrarlo con render() o procesar los campos.
    """
    kind: Kind
    message: str
    start: int
    end: int
    source: str

    @property
    def line(self) -> int:
        """Línea (base 1) donde empieza el rango."""
        return _line_range(self.source, self.start, self.end)[0] + 1

    @property
    def end_line(self) -> int:
        """Línea (base 1) donde termina el rango."""
        return _line_range(self.source, self.start, self.end)[1] + 1

    def render(self) -> str:
        return render_excerpt(self.source, self.start, self.end, self.message)

    def __str__(self) -> str:
        return self.render()

class AssemblyError(Exception):
    """Error fatal de ensamblado; el primero que aparece aborta todo."""

    def __init__(self, diagnostic: Diagnostic):
        super().__init__(diagnostic.render())
        self.diagnostic = diagnostic

class LexError(AssemblyError):
    pass

class ParseError(AssemblyError):
    pass

def lex_error(text: str, start: int, end: int, message: str) -> LexError:
    """Crea un LexError anclado a [start, end)."""
    return LexError(Diagnostic("lex", message, start, end, text))

def parse_error(text: str, start: int, end: int, message: str) -> ParseError:
    """Crea un ParseError anclado a [start, end)."""
    return ParseError(Diagnostic("parse", message, start, end, text))
