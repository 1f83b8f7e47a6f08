"""
Derives a cipher program from a minified player script by matching the shape
of its signature-scrambling code.

This is a best-effort heuristic over untrusted input: every failure is
reported in the returned `SynthesisResult` rather than raised.
"""

import asyncio
import logging
import re
from dataclasses import dataclass

import aiohttp

from mediafetch.cipher.program import CipherProgram
from mediafetch.exceptions import SynthesisError

log = logging.getLogger(__name__)

SCRIPT_URL_TEMPLATE = "http://s.ytimg.com/yts/jsbin/{version_key}.js"

# A JS identifier, optionally one level dotted ("a.b").
_ID = r"[$a-zA-Z][a-zA-Z\d]*"
_V = rf"{_ID}(?:\.{_ID})?"

_STS_REGEX = re.compile(r"\bsts:(\d+)\b")
_DISPATCH_REGEX = re.compile(rf"{_V}=({_V})\.sig\|\|({_V})\(\1\.s\)")
_FUNCTION_TEMPLATES = (
    r"\bfunction\s+{name}\s*\(" + _V + r"\)\s*\{{(.*?)\}}",
    r"\bvar\s+{name}\s*=\s*function\s*\(" + _V + r"\)\s*\{{(.*?)\}}",
)
_INLINE_SWAP_REGEX = re.compile(
    rf"var\s({_V})=({_V})\[0\];\2\[0\]=\2\[(\d+)%\2\.length\];\2\[\3\]=\1;"
)
_INLINE_SWAP_NAME = "swapInline"
_STATEMENT_SPLIT = re.compile(r"\s*;\s*")

_SPLIT_STMT = re.compile(rf'^({_V})=\1\.{_V}\(""\)$')
_REVERSE_STMT = re.compile(rf"^({_V})=\1\.{_V}\(\)$")
_SLICE_STMT = re.compile(rf"^({_V})=\1\.{_V}\((\d+)\)$")
_ASSIGN_CALL_STMT = re.compile(rf"^({_V})=({_V})\(\1,(\d+)\)$")
_BARE_CALL_STMT = re.compile(rf"^()({_V})\({_V},(\d+)\)$")
_JOIN_STMT = re.compile(rf'^return\s+{_V}\.{_V}\(""\)$')

_HELPER_TEMPLATE = r"\b{name}:\s*function\s*\(.*?\)\s*(\{{[^{{}}]+\}})"
_HELPER_SWAP = re.compile(rf"var\s({_V})=({_V})\[0\];")
_HELPER_REVERSE = re.compile(rf"\b{_V}\.reverse\(")
_HELPER_SLICE = (
    re.compile(rf"return\s*{_V}\.slice"),
    re.compile(rf"\b{_V}\.splice"),
)

_VERSION_KEY_REGEX = re.compile(r"/jsbin\\?/((?:html5)?player-.+?)\.js")


@dataclass(frozen=True)
class SynthesisResult:
    """Either a program or the reason none could be derived."""

    program: CipherProgram | None = None
    error: SynthesisError | None = None

    @property
    def ok(self) -> bool:
        return self.program is not None


def version_key_from_url(url: str) -> str | None:
    """Extracts the player version key from a player script URL."""
    match = _VERSION_KEY_REGEX.search(url)
    return match.group(1).replace("\\", "") if match else None


def script_url(version_key: str) -> str:
    return SCRIPT_URL_TEMPLATE.format(version_key=version_key)


class PlayerScript:
    """
    Holds the text of a player script and pattern-matches the cipher out of
    it. Function names are minified and change every release, so only the
    code structure is matched.
    """

    def __init__(self, text: str, last_modified: str | None = None):
        self._text = text
        self.last_modified = last_modified

    @classmethod
    async def fetch(
        cls, url: str, proxy: str | None = None, max_retries: int = 3
    ) -> "PlayerScript":
        """
        Downloads a player script with retry logic.

        Raises:
            SynthesisError: The script could not be downloaded.
        """
        timeout = aiohttp.ClientTimeout(total=45, connect=15)
        async with aiohttp.ClientSession(timeout=timeout) as session:
            for attempt in range(1, max_retries + 1):
                try:
                    log.debug(f"Attempt {attempt}/{max_retries} to fetch player script...")
                    async with session.get(url, proxy=proxy) as response:
                        response.raise_for_status()
                        text = await response.text()
                        last_modified = response.headers.get("Last-Modified")
                    log.debug(f"Fetched player script ({len(text)} bytes) from {url}")
                    return cls(text, last_modified)
                except (aiohttp.ClientError, asyncio.TimeoutError) as e:
                    log.warning(f"Player script fetch attempt {attempt} failed: {e}")
                    if attempt == max_retries:
                        raise SynthesisError(
                            f"Failed to fetch player script after {max_retries} attempts: {url}"
                        ) from e
                    await asyncio.sleep(2**attempt)

        raise SynthesisError("Player script fetching failed unexpectedly.")

    def extract_timestamp(self) -> int | None:
        match = _STS_REGEX.search(self._text)
        return int(match.group(1)) if match else None

    def extract_dispatch_function(self) -> str | None:
        """Finds `F` in `var x = y.sig || F(y.s)`."""
        match = _DISPATCH_REGEX.search(self._text)
        return match.group(2) if match else None

    def extract_function_body(self, name: str) -> str | None:
        escaped = re.escape(name)
        for template in _FUNCTION_TEMPLATES:
            match = re.search(template.format(name=escaped), self._text, re.DOTALL)
            if match:
                return match.group(1)
        return None

    def classify_helper(self, name: str) -> str | None:
        """Returns 'w', 'r' or 's' for a helper method, by the shape of its body."""
        short = name.rsplit(".", 1)[-1]
        if short == _INLINE_SWAP_NAME:
            return "w"
        match = re.search(
            _HELPER_TEMPLATE.format(name=re.escape(short)), self._text, re.DOTALL
        )
        if not match:
            return None
        body = match.group(1)
        if _HELPER_SWAP.search(body):
            return "w"
        if _HELPER_REVERSE.search(body):
            return "r"
        if any(pattern.search(body) for pattern in _HELPER_SLICE):
            return "s"
        return None

    def synthesize(self, version_key: str | None = None) -> SynthesisResult:
        """Derives the cipher program. Never raises."""
        try:
            program = self._synthesize(version_key)
        except SynthesisError as e:
            log.debug(f"Cipher synthesis failed: {e}")
            return SynthesisResult(error=e)
        log.debug(f"Synthesized cipher for {version_key or 'player'}: {program}")
        return SynthesisResult(program=program)

    def _synthesize(self, version_key: str | None) -> CipherProgram:
        label = version_key or "player script"
        sts = self.extract_timestamp()
        if sts is None:
            raise SynthesisError(f"{label}: no sts parameter")

        name = self.extract_dispatch_function()
        if not name:
            raise SynthesisError(f"{label}: no signature dispatch found")

        body = self.extract_function_body(name)
        if body is None:
            raise SynthesisError(f"{label}: cannot find body of function '{name}'")

        # A swap used only once is inlined; turn it back into a call.
        body = _INLINE_SWAP_REGEX.sub(
            rf"\g<2>={_INLINE_SWAP_NAME}(\g<2>,\g<3>);", body
        )

        ops = []
        for statement in _STATEMENT_SPLIT.split(body):
            statement = statement.strip()
            if not statement or _SPLIT_STMT.match(statement) or _JOIN_STMT.match(statement):
                continue
            if _REVERSE_STMT.match(statement):
                ops.append("r")
                continue
            if match := _SLICE_STMT.match(statement):
                ops.append(f"s{match.group(2)}")
                continue
            match = _ASSIGN_CALL_STMT.match(statement) or _BARE_CALL_STMT.match(statement)
            if not match:
                raise SynthesisError(f"{label}: unparsable statement '{statement}'")
            helper, n = match.group(2), match.group(3)
            kind = self.classify_helper(helper)
            if kind is None:
                raise SynthesisError(f"{label}: unrecognized cipher helper {helper}({n})")
            ops.append("r" if kind == "r" else f"{kind}{n}")

        try:
            return CipherProgram.parse(f"{sts} {' '.join(ops)}", version_key)
        except ValueError as e:
            raise SynthesisError(f"{label}: {e}") from e
