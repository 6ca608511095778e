# src/toy16/linker.py
from __future__ import annotations
from typing import Dict, List

from .ast import Label, Patch
from .encoding import patch_imm
from .diagnostics import parse_error

# ---------- Pasada 2: resolución de etiquetas ----------

def symtab(labels: Dict[str, Label]) -> Dict[str, int]:
    """Tabla nombre -> índice de instrucción."""
    return {name: label.index for name, label in labels.items()}

def resolve(words: List[int], labels: Dict[str, Label], patches: List[Patch], text: str) -> List[int]:
    """Rellena cada hueco de etiqueta con el índice de su instrucción.

    Devuelve una lista nueva; solo cambia el campo de 8 bits del inmediato,
    el opcode y los registros quedan intactos. Una etiqueta inexistente
    lanza ParseError anclado a la referencia.
    """
    table = symtab(labels)
    out = list(words)
    for p in patches:
        target = table.get(p.name)
        if target is None:
            raise parse_error(text, p.token.start, p.token.end, "This label does not exist")
        out[p.index] = patch_imm(out[p.index], target, p.shift)
    return out
