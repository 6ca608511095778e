'''
tabla formal de instrucciones (opcodes y tipos de argumentos)
'''

from __future__ import annotations
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Literal, Mapping, Optional, Tuple

# Tipos de argumento:
# - REG:  registro de lectura (4 bits)
# - WREG: registro de escritura (4 bits, no admite 'zero' ni 'status')
# - NUM:  inmediato de 8 bits o referencia a etiqueta
ArgKind = Literal["reg", "writereg", "num"]

REG: ArgKind = "reg"
WREG: ArgKind = "writereg"
NUM: ArgKind = "num"

_ARG_WIDTH = {REG: 4, WREG: 4, NUM: 8}

@dataclass(frozen=True)
class InstructionDef:
    """Especificación de una instrucción.

    - opcode: campo de 4 bits (bits 15:12 de la palabra)
    - args: tipos de argumento en el orden en que se escriben
    """
    opcode: int
    args: Tuple[ArgKind, ...] = ()

# Constantes de opcode
OP_NOP  = 0
OP_HALT = 1
OP_ADD  = 2
OP_SUB  = 3
OP_AND  = 4
OP_OR   = 5
OP_XOR  = 6
OP_NOT  = 7
OP_SET  = 8
OP_IST  = 9
OP_JMP  = 10
OP_JIP  = 11
OP_LOD  = 12
OP_STO  = 13
OP_SHL  = 14
OP_SHR  = 15

_ALU3 = (REG, REG, WREG)

_SPEC: Dict[str, InstructionDef] = {
    "NOP":  InstructionDef(OP_NOP),
    "HALT": InstructionDef(OP_HALT),
    "ADD":  InstructionDef(OP_ADD, _ALU3),
    "SUB":  InstructionDef(OP_SUB, _ALU3),
    "AND":  InstructionDef(OP_AND, _ALU3),
    "OR":   InstructionDef(OP_OR,  _ALU3),
    "XOR":  InstructionDef(OP_XOR, _ALU3),
    "NOT":  InstructionDef(OP_NOT, (REG, WREG)),
    "SET":  InstructionDef(OP_SET, (REG, WREG)),
    "IST":  InstructionDef(OP_IST, (NUM, WREG)),
    "JMP":  InstructionDef(OP_JMP, (REG,)),
    "JIP":  InstructionDef(OP_JIP, (REG, REG)),
    "LOD":  InstructionDef(OP_LOD, (REG, WREG)),
    "STO":  InstructionDef(OP_STO, (REG, REG)),
    "SHL":  InstructionDef(OP_SHL, _ALU3),
    "SHR":  InstructionDef(OP_SHR, _ALU3),
}

# Vista de solo lectura de la tabla
SPEC: Mapping[str, InstructionDef] = MappingProxyType(_SPEC)

_BY_OPCODE = {d.opcode: name for name, d in _SPEC.items()}

def spec(mnemonic: str) -> InstructionDef:
    """Devuelve la especificación de una instrucción (sin distinguir mayúsculas)."""
    m = mnemonic.upper()
    if m not in SPEC:
        raise KeyError(f"Unknown instruction: {mnemonic}")
    return SPEC[m]

def mnemonic_for(opcode: int) -> Optional[str]:
    """Mnemónico asociado a un opcode, o None si no existe."""
    return _BY_OPCODE.get(opcode)

def arg_width(kind: ArgKind) -> int:
    """Bits que ocupa un argumento del tipo dado."""
    return _ARG_WIDTH[kind]
