"""
Runs a cipher program against a signature token.
"""

import re

from mediafetch.cipher.program import CipherProgram, Reverse, SliceFrom, SwapWithIndex
from mediafetch.exceptions import CipherMismatch

# An unscrambled signature is two long hex groups joined by a dot (40.40).
_SIGNATURE_SHAPE = re.compile(r"^[0-9A-Fa-f]{30,}\.[0-9A-Fa-f]{30,}$")


def decipher(program: CipherProgram | str, token: str) -> str:
    """
    Applies each opcode in order.

    Total for any input: slicing past the end yields an empty string, and a
    swap on an empty string does nothing.
    """
    if isinstance(program, str):
        program = CipherProgram.parse(program)
    chars = list(token)
    for op in program.opcodes:
        if isinstance(op, Reverse):
            chars.reverse()
        elif isinstance(op, SliceFrom):
            chars = chars[op.n :]
        elif isinstance(op, SwapWithIndex):
            if chars:
                j = op.n % len(chars)
                chars[0], chars[j] = chars[j], chars[0]
    return "".join(chars)


def check_shape(signature: str, program: CipherProgram | None = None) -> CipherMismatch | None:
    """Returns a diagnostic if `signature` does not look like a deciphered signature."""
    if _SIGNATURE_SHAPE.match(signature):
        return None
    head, dot, tail = signature.partition(".")
    shape = f"{len(head)}.{len(tail)}" if dot else str(len(signature))
    label = f" with cipher {program.version_key}" if program and program.version_key else ""
    return CipherMismatch(f"deciphered signature{label} has unexpected shape {shape}: {signature}")
