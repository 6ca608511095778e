from __future__ import annotations
from typing import Iterable, List, Optional, Sequence

from .utils import to_hex16, to_bin16
from .isa import SPEC, NUM, arg_width, mnemonic_for
from .regs import REGISTERS
from .cpu import Interpreter

def to_hex_lines(words: Iterable[int]) -> List[str]:
    return [to_hex16(w) for w in words]

def to_bin_lines(words: Iterable[int]) -> List[str]:
    return [to_bin16(w) for w in words]

def disassemble(word: int, registers: Optional[Sequence[int]] = None) -> str:
    """Texto de una palabra según los argumentos de su instrucción.

    Con 'registers' cada registro muestra también su valor actual,
    p.ej. 'ADD r0 (3) r1 (4) r2 (0)'.
    """
    name = mnemonic_for((word >> 12) & 0xF)
    if name is None:
        return "???"
    parts = [name]
    shift = 12
    for kind in SPEC[name].args:
        width = arg_width(kind)
        shift -= width
        value = (word >> shift) & ((1 << width) - 1)
        if kind == NUM:
            parts.append(str(value))
        elif registers is None:
            parts.append(REGISTERS[value])
        else:
            parts.append(f"{REGISTERS[value]} ({registers[value]})")
    return " ".join(parts)

def describe_next(cpu: Interpreter) -> str:
    """Qué haría el próximo step()."""
    if cpu.terminated:
        return "no more instructions (the program has halted)"
    word = cpu.next_word
    if word is None:
        return "no more instructions (program counter is out of bounds)"
    return disassemble(word, cpu.registers)

def format_state(cpu: Interpreter) -> str:
    """Volcado legible del estado: PC, registros, flags, memoria no nula y siguiente instrucción."""
    f = cpu.flags
    lines = [
        f"pc={cpu.program_counter} terminated={cpu.terminated}",
        " ".join(f"{name}={cpu.registers[i]}" for i, name in enumerate(REGISTERS)),
        f"flags: Z={int(f.zero)} N={int(f.negative)} V={int(f.overflow)}",
    ]
    used = [(addr, v) for addr, v in enumerate(cpu.memory) if v]
    if used:
        lines.append("memory: " + " ".join(f"[{addr}]={v}" for addr, v in used))
    lines.append(f"next: {describe_next(cpu)}")
    return "\n".join(lines)
