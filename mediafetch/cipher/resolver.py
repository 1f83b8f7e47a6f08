"""
Turns a (version key, scrambled signature) pair into a usable signature:
table lookup, optional synthesis from the player script, decipher, shape check.
"""

import logging
from dataclasses import dataclass

from mediafetch.cipher.interpreter import check_shape, decipher
from mediafetch.cipher.program import CipherProgram
from mediafetch.cipher.synthesizer import PlayerScript, script_url
from mediafetch.cipher.table import lookup
from mediafetch.exceptions import CipherMismatch, UnknownCipherError

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class DecipherOutcome:
    signature: str
    program: CipherProgram
    diagnostic: CipherMismatch | None = None

    @property
    def ok(self) -> bool:
        return self.diagnostic is None


class CipherResolver:
    """
    Resolves programs by version key. Programs synthesized from a player
    script are cached for the life of the resolver only.
    """

    def __init__(self, allow_synthesis: bool = True, proxy: str | None = None):
        self.allow_synthesis = allow_synthesis
        self.proxy = proxy
        self._synthesized: dict[str, CipherProgram] = {}

    def program_for(self, version_key: str, script: PlayerScript | None = None) -> CipherProgram:
        """
        Looks `version_key` up in the table, then in synthesized programs,
        then (if `script` is given) synthesizes one from it.

        Raises:
            UnknownCipherError: No program could be found or derived.
        """
        text = lookup(version_key)
        if text is not None:
            return CipherProgram.parse(text, version_key)
        if version_key in self._synthesized:
            return self._synthesized[version_key]
        if script is None:
            raise UnknownCipherError(f"unknown cipher {version_key}")

        log.warning(f"[yellow]Unknown cipher {version_key}; guessing from player script[/yellow]")
        result = script.synthesize(version_key)
        if not result.ok:
            raise UnknownCipherError(
                f"unknown cipher {version_key}: {result.error}"
            ) from result.error
        self._synthesized[version_key] = result.program
        return result.program

    async def resolve(
        self,
        version_key: str,
        token: str,
        script_url_override: str | None = None,
    ) -> DecipherOutcome:
        """
        Deciphers `token`, downloading the player script only when the version
        is not in the table and synthesis is allowed.
        """
        script = None
        if (
            self.allow_synthesis
            and lookup(version_key) is None
            and version_key not in self._synthesized
        ):
            script = await PlayerScript.fetch(
                script_url_override or script_url(version_key), proxy=self.proxy
            )
        return self.resolve_with(version_key, token, script)

    def resolve_with(
        self, version_key: str, token: str, script: PlayerScript | None = None
    ) -> DecipherOutcome:
        program = self.program_for(version_key, script)
        signature = decipher(program, token)
        diagnostic = check_shape(signature, program)
        if diagnostic:
            log.warning(f"[yellow]{diagnostic}[/yellow]")
        return DecipherOutcome(signature=signature, program=program, diagnostic=diagnostic)
