'''
intérprete: estado de la CPU, ciclo fetch-decode-execute y flags
'''

from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

from .encoding import decode
from .isa import (
    OP_NOP, OP_HALT, OP_ADD, OP_SUB, OP_AND, OP_OR, OP_XOR, OP_NOT,
    OP_SET, OP_IST, OP_JMP, OP_JIP, OP_LOD, OP_STO, OP_SHL, OP_SHR,
)
from .regs import REGISTERS, ZERO, STATUS, reg_num
from .utils import u8, u16

logger = logging.getLogger(__name__)

MEMORY_SIZE = 256
REGISTER_COUNT = len(REGISTERS)

# Bits del registro 'status'
FLAG_ZERO = 0b001
FLAG_NEGATIVE = 0b010
FLAG_OVERFLOW = 0b100

class ExecutionError(RuntimeError):
    """Fallo en tiempo de ejecución (sin ubicación en el fuente)."""

def classify(result: int) -> int:
    """Calcula el byte de status a partir del resultado sin truncar."""
    status = 0
    if result == 0:
        status |= FLAG_ZERO
    if result < 0:
        status |= FLAG_NEGATIVE | FLAG_OVERFLOW
    if result >= 256:
        status |= FLAG_OVERFLOW
    return status

@dataclass(frozen=True)
class Flags:
    """Vista con nombre del registro 'status'."""
    zero: bool
    negative: bool
    overflow: bool

    @classmethod
    def from_status(cls, status: int) -> "Flags":
        return cls(
            zero=bool(status & FLAG_ZERO),
            negative=bool(status & FLAG_NEGATIVE),
            overflow=bool(status & FLAG_OVERFLOW),
        )

class Interpreter:
    """Máquina de 16 registros de 8 bits y 256 bytes de memoria.

    Cada instancia es dueña de su memoria y sus registros; se pueden crear
    varias en el mismo proceso sin que compartan estado. El ritmo de
    ejecución lo decide quien llama a step().
    """

    def __init__(self, words: Iterable[int]):
        self.words: Tuple[int, ...] = tuple(u16(w) for w in words)
        self.reset()

    def reset(self) -> None:
        """Vuelve al estado inicial: memoria y registros a cero, PC a 0."""
        self.memory = bytearray(MEMORY_SIZE)
        self.registers = bytearray(REGISTER_COUNT)
        self.program_counter = 0
        self.terminated = False

    # ---- lectura del estado ----

    def register(self, name: str) -> int:
        """Valor de un registro por nombre ('r0'..'r13', 'zero', 'status')."""
        return self.registers[reg_num(name)]

    @property
    def flags(self) -> Flags:
        return Flags.from_status(self.registers[STATUS])

    @property
    def next_word(self) -> Optional[int]:
        """Palabra que ejecutaría el próximo step(), o None si no hay."""
        if self.terminated or self.program_counter >= len(self.words):
            return None
        return self.words[self.program_counter]

    # ---- ejecución ----

    def step(self) -> None:
        """Ejecuta exactamente una instrucción.

        Tras cada instrucción (salvo HALT) 'zero' vuelve a 0 y 'status' se
        sobrescribe; las instrucciones que no calculan flags lo dejan a 0.
        Los saltos ponen PC = destino - 1 para que el incremento final
        caiga justo en el destino.
        """
        if self.terminated:
            return
        if self.program_counter >= len(self.words):
            logger.debug("program counter %d out of bounds (%d words)",
                         self.program_counter, len(self.words))
            raise ExecutionError("tried to execute instruction that was out of bounds")

        d = decode(self.words[self.program_counter])
        r = self.registers
        status = 0

        def store(dest: int, result: int) -> int:
            r[dest] = u8(result)
            return classify(result)

        op = d.opcode
        if op == OP_NOP:
            pass
        elif op == OP_HALT:
            self.terminated = True
            logger.debug("halted at %d", self.program_counter)
            return
        elif op == OP_ADD:
            status = store(d.arg3, r[d.arg1] + r[d.arg2])
        elif op == OP_SUB:
            status = store(d.arg3, r[d.arg1] - r[d.arg2])
        elif op == OP_AND:
            status = store(d.arg3, r[d.arg1] & r[d.arg2])
        elif op == OP_OR:
            status = store(d.arg3, r[d.arg1] | r[d.arg2])
        elif op == OP_XOR:
            status = store(d.arg3, r[d.arg1] ^ r[d.arg2])
        elif op == OP_NOT:
            status = store(d.arg2, ~r[d.arg1])
        elif op == OP_SET:
            status = store(d.arg2, r[d.arg1])
        elif op == OP_IST:
            status = store(d.arg3, d.imm)
        elif op == OP_JMP:
            self.program_counter = r[d.arg1] - 1
        elif op == OP_JIP:
            if r[d.arg2] != 0:
                self.program_counter = r[d.arg1] - 1
        elif op == OP_LOD:
            status = store(d.arg2, self.memory[r[d.arg1]])
        elif op == OP_STO:
            self.memory[r[d.arg1]] = r[d.arg2]
        elif op == OP_SHL:
            status = store(d.arg3, r[d.arg1] << r[d.arg2])
        elif op == OP_SHR:
            status = store(d.arg3, r[d.arg1] >> r[d.arg2])

        r[ZERO] = 0
        r[STATUS] = status
        self.program_counter += 1
