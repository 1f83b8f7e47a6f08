"""
Cipher programs: a player timestamp plus a short sequence of string
rearrangement opcodes.

Text form: `"1588 r s3 w19 r s2"` where `r` reverses, `sN` drops the first N
characters and `wN` swaps character 0 with character N. The compact form
`"rs3w19"` (no separators) is accepted too.
"""

import re
from dataclasses import dataclass

_OP_REGEX = re.compile(r"^(?P<op>[rsw])(?P<arg>\d*)$")
# Separate an opcode letter from whatever precedes it: "rs3w19" -> "r s3 w19".
_COMPACT_REGEX = re.compile(r"(?<=\S)(?=[a-z])")


@dataclass(frozen=True)
class Reverse:
    def __str__(self) -> str:
        return "r"


@dataclass(frozen=True)
class SliceFrom:
    n: int

    def __str__(self) -> str:
        return f"s{self.n}"


@dataclass(frozen=True)
class SwapWithIndex:
    n: int

    def __str__(self) -> str:
        return f"w{self.n}"


Opcode = Reverse | SliceFrom | SwapWithIndex


@dataclass(frozen=True)
class CipherProgram:
    version_key: str | None
    timestamp: int | None
    opcodes: tuple[Opcode, ...]

    @classmethod
    def parse(cls, text: str, version_key: str | None = None) -> "CipherProgram":
        """
        Parses program text.

        Raises:
            ValueError: The text contains something other than a leading
                timestamp and r/sN/wN opcodes.
        """
        spaced = _COMPACT_REGEX.sub(" ", text.strip())
        tokens = spaced.split()
        timestamp = None
        if tokens and tokens[0].isdigit():
            timestamp = int(tokens.pop(0))

        opcodes = []
        for token in tokens:
            match = _OP_REGEX.match(token)
            if not match:
                raise ValueError(f"Bogus cipher opcode '{token}' in '{text}'")
            op, arg = match.group("op"), match.group("arg")
            if op == "r":
                if arg:
                    raise ValueError(f"Reverse takes no argument: '{token}'")
                opcodes.append(Reverse())
                continue
            if not arg:
                raise ValueError(f"Opcode '{token}' needs a numeric argument")
            opcodes.append(SliceFrom(int(arg)) if op == "s" else SwapWithIndex(int(arg)))
        return cls(version_key=version_key, timestamp=timestamp, opcodes=tuple(opcodes))

    @property
    def ops_text(self) -> str:
        return " ".join(str(op) for op in self.opcodes)

    def __str__(self) -> str:
        if self.timestamp is None:
            return self.ops_text
        return f"{self.timestamp} {self.ops_text}".rstrip()
