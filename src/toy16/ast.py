'''
dataclases de AST (Label, Instruction, operandos y parches de etiquetas)
'''

from __future__ import annotations
from dataclasses import dataclass
from typing import List, Union

from .lexer import Token

# ---- Nodos a nivel de fuente ----

@dataclass(frozen=True)
class Label:
    """Etiqueta en el código fuente (p.ej., 'loop:') y la instrucción que marca."""
    name: str
    index: int
    token: Token

@dataclass(frozen=True)
class Instruction:
    """Instrucción con mnemónico (en mayúsculas) y operandos tipados."""
    mnemonic: str
    operands: List['Operand']
    token: Token

# ---- Operandos ----

@dataclass(frozen=True)
class Reg:
    """Registro con su índice 0..15."""
    name: str
    num: int
    token: Token

@dataclass(frozen=True)
class Imm:
    """Inmediato numérico de 8 bits."""
    value: int
    token: Token

@dataclass(frozen=True)
class Sym:
    """Etiqueta referenciada por un inmediato; se resuelve en la segunda pasada."""
    name: str
    token: Token

Operand = Union[Reg, Imm, Sym]

# ---- Pasada 2 ----

@dataclass(frozen=True)
class Patch:
    """Referencia pendiente: palabra a parchear, token y posición del campo."""
    index: int
    token: Token
    shift: int

    @property
    def name(self) -> str:
        return str(self.token.value)
