'''
nombres del banco de registros, índices y validaciones de escritura
'''

from __future__ import annotations
from typing import Dict, FrozenSet, Tuple

# Orden fijo: r0..r13 de propósito general, luego 'zero' y 'status'
REGISTERS: Tuple[str, ...] = tuple(f"r{i}" for i in range(14)) + ("zero", "status")

ZERO = 14
STATUS = 15

# Registros que no pueden ser destino de una instrucción
READ_ONLY: FrozenSet[str] = frozenset({"zero", "status"})

_INDEX: Dict[str, int] = {name: i for i, name in enumerate(REGISTERS)}

def is_reg(token: str) -> bool:
    """Indica si el token es un nombre de registro válido (distingue mayúsculas)."""
    return token in _INDEX

def reg_num(token: str) -> int:
    """Devuelve el índice 0..15 del registro o lanza ValueError."""
    try:
        return _INDEX[token]
    except KeyError:
        raise ValueError(f"Invalid register: {token}") from None

def is_writable(token: str) -> bool:
    """True si el registro existe y puede usarse como destino."""
    return is_reg(token) and token not in READ_ONLY
