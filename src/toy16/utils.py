'''
bit-twiddling (u8, u16, rangos, formatos)
'''

from __future__ import annotations

# Máscaras para 8 y 16 bits sin signo
U8_MASK = 0xFF
U16_MASK = 0xFFFF

def u8(x: int) -> int:
    """Trunca el valor al rango de 8 bits sin signo."""
    return x & U8_MASK

def u16(x: int) -> int:
    """Trunca el valor al rango de 16 bits sin signo."""
    return x & U16_MASK

def is_unsigned_nbit(x: int, n: int) -> bool:
    """Devuelve True si x está en [0, 2^n) (sin signo de n bits)."""
    if n <= 0:
        raise ValueError("n debe ser positivo")
    return 0 <= x < (1 << n)

def to_bin16(x: int) -> str:
    """Representación binaria de 16 bits (cadena)."""
    return format(u16(x), "016b")

def to_hex16(x: int, *, prefix: bool = True) -> str:
    """Representación hexadecimal de 16 bits (cadena), con o sin prefijo 0x."""
    s = format(u16(x), "04x")
    return ("0x" + s) if prefix else s
