# src/toy16/encoding.py
from __future__ import annotations
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .ast import Instruction, Reg, Imm, Sym, Patch
from .isa import InstructionDef, NUM, arg_width
from .utils import u16, u8

WORD_BITS = 16
OPCODE_SHIFT = 12
IMM_MASK = 0xFF

# ---------------- Decodificación ----------------

@dataclass(frozen=True)
class Decoded:
    """Campos de una palabra: opcode y los tres nibbles que le siguen.

    imm reinterpreta arg1:arg2 (bits 11:4) como un único valor de 8 bits.
    """
    opcode: int
    arg1: int
    arg2: int
    arg3: int

    @property
    def imm(self) -> int:
        return (self.arg1 << 4) | self.arg2

def decode(word: int) -> Decoded:
    w = u16(word)
    return Decoded(w >> OPCODE_SHIFT, (w >> 8) & 0xF, (w >> 4) & 0xF, w & 0xF)

# ---------------- Empaquetado ----------------

def pack(opcode: int, fields: List[Tuple[int, int]]) -> int:
    """Empaqueta opcode y campos (valor, ancho) de izquierda a derecha.

    Los bits bajos que sobran se rellenan con ceros para que todas las
    palabras tengan 16 bits.
    """
    word = opcode & 0xF
    used = 4
    for value, width in fields:
        word = (word << width) | (value & ((1 << width) - 1))
        used += width
    if used > WORD_BITS:
        raise ValueError(f"instruction fields use {used} bits, more than {WORD_BITS}")
    return u16(word << (WORD_BITS - used))

def encode(instr: Instruction, spec: InstructionDef, index: int = 0) -> Tuple[int, Optional[Patch]]:
    """Codifica una instrucción ya validada.

    Devuelve (palabra, parche); el parche es None salvo que el inmediato sea
    una etiqueta, en cuyo caso el campo queda a 0 hasta la segunda pasada.
    """
    fields: List[Tuple[int, int]] = []
    patch: Optional[Patch] = None
    used = 4
    for kind, op in zip(spec.args, instr.operands):
        width = arg_width(kind)
        used += width
        if isinstance(op, Reg):
            fields.append((op.num, width))
        elif isinstance(op, Imm):
            fields.append((u8(op.value), width))
        elif isinstance(op, Sym):
            if kind != NUM:
                raise ValueError(f"label '{op.name}' used for a {kind} argument")
            patch = Patch(index=index, token=op.token, shift=WORD_BITS - used)
            fields.append((0, width))
    return pack(spec.opcode, fields), patch

def patch_imm(word: int, value: int, shift: int) -> int:
    """Sobrescribe el campo de 8 bits en 'shift' sin tocar el resto."""
    mask = IMM_MASK << shift
    return u16((word & ~mask) | ((value & IMM_MASK) << shift))
