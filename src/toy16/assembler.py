from __future__ import annotations
import argparse, logging, sys
from typing import Callable, List, Optional

from .lexer import tokenize
from .parser import parse
from .linker import resolve
from .diagnostics import AssemblyError, parse_error
from .cpu import Interpreter, ExecutionError
from .writers import to_hex_lines, to_bin_lines, format_state, describe_next

logger = logging.getLogger(__name__)

# El índice de instrucción tiene que caber en un byte
MAX_INSTRUCTIONS = 255

def assemble_text(text: str) -> List[int]:
    """Lexer, PASADA 1 (parser) y PASADA 2 (etiquetas) sobre 'text'.

    Devuelve las palabras de 16 bits. El primer error lanza LexError o
    ParseError y no se devuelve nada parcial.
    """
    tokens = tokenize(text)
    result = parse(tokens, text)
    words = resolve(result.words, result.labels, result.patches, text)
    if len(words) > MAX_INSTRUCTIONS:
        eof = result.eof if result.eof is not None else tokens[-1]
        raise parse_error(
            text, eof.start, eof.end,
            f"Too many instructions (there are {len(words)} instructions "
            f"but at most {MAX_INSTRUCTIONS} are allowed)",
        )
    logger.debug("assembled %d words, %d labels, %d patches",
                 len(words), len(result.labels), len(result.patches))
    return words

def run(cpu: Interpreter, max_steps: int, trace: Optional[Callable[[str], None]] = None) -> int:
    """Ejecuta hasta HALT o hasta max_steps pasos; devuelve los pasos dados.

    Si se pasa 'trace', recibe 'pc: instrucción' antes de cada paso.
    """
    steps = 0
    while not cpu.terminated and steps < max_steps:
        if trace is not None:
            trace(f"{cpu.program_counter}: {describe_next(cpu)}")
        cpu.step()
        steps += 1
    if not cpu.terminated:
        logger.warning("stopped after %d steps without halting", steps)
    return steps

def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="toy16 assembler and interpreter")
    ap.add_argument("source", help="archivo .asm de entrada")
    ap.add_argument("--format", choices=("hex", "bin"), default="hex",
                    help="formato del listado de palabras")
    ap.add_argument("--run", action="store_true",
                    help="ejecuta el programa y muestra el estado final")
    ap.add_argument("--max-steps", type=int, default=10000,
                    help="límite de pasos con --run")
    ap.add_argument("--trace", action="store_true",
                    help="muestra cada instrucción antes de ejecutarla (implica --run)")
    ap.add_argument("-v", "--verbose", action="store_true",
                    help="logging en nivel DEBUG")
    args = ap.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )

    try:
        with open(args.source, "r", encoding="utf-8") as f:
            text = f.read()
    except OSError as ex:
        print(f"ERROR: could not read {args.source}: {ex}", file=sys.stderr)
        return 2

    try:
        words = assemble_text(text)
    except AssemblyError as ex:
        print(ex.diagnostic.render(), file=sys.stderr)
        return 1

    lines = to_bin_lines(words) if args.format == "bin" else to_hex_lines(words)
    for line in lines:
        print(line)

    if args.run or args.trace:
        cpu = Interpreter(words)
        try:
            steps = run(cpu, args.max_steps, trace=print if args.trace else None)
        except ExecutionError as ex:
            print(f"ERROR: {ex}", file=sys.stderr)
            print(format_state(cpu))
            return 1
        print(f"{steps} steps")
        print(format_state(cpu))
    return 0

if __name__ == "__main__":
    raise SystemExit(main())
