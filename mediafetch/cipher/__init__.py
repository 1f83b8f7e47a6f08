"""
Signature Cipher Layer.

This package holds the static cipher table, the opcode interpreter, the
player-script synthesizer used for unknown versions, and the resolver that
combines them.
"""

from .interpreter import check_shape, decipher
from .program import CipherProgram, Reverse, SliceFrom, SwapWithIndex
from .resolver import CipherResolver, DecipherOutcome
from .synthesizer import PlayerScript, SynthesisResult, script_url, version_key_from_url
from .table import CIPHER_TABLE, lookup

__all__ = [
    "CIPHER_TABLE",
    "CipherProgram",
    "CipherResolver",
    "DecipherOutcome",
    "PlayerScript",
    "Reverse",
    "SliceFrom",
    "SwapWithIndex",
    "SynthesisResult",
    "check_shape",
    "decipher",
    "lookup",
    "script_url",
    "version_key_from_url",
]
