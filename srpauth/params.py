"""SRP protocol parameters: group, hash function, padding and revision."""

import enum
import logging
from typing import Callable, Optional, Union

from cryptography.hazmat.primitives import hashes

from srpauth.common.bighex import BigHex
from srpauth.common.utils import is_valid_integer
from srpauth.crypto import groups
from srpauth.crypto.hashing import Hasher

logger = logging.getLogger(__name__)

DEFAULT_HASH = "sha256"

HashSpec = Union[Hasher, str, Callable[[], hashes.HashAlgorithm], None]


class Revision(enum.Enum):
    """SRP protocol revisions."""
    THREE = "3"   # SRP-3, k = 1
    SIX = "6"     # SRP-6, k = 3
    SIX_A = "6a"  # SRP-6a, k = H(N, PAD(g))

    @classmethod
    def parse(cls, value: Union["Revision", str]) -> "Revision":
        """Accepts a Revision or its textual form ("3", "6", "6a", "SIX_A")."""
        if isinstance(value, Revision):
            return value
        text = str(value).strip().lower()
        for revision in cls:
            if text in (revision.value, revision.name.lower()):
                return revision
        raise ValueError(f"Unknown SRP revision: {value!r}")


def _make_hasher(spec: HashSpec) -> Hasher:
    if spec is None:
        return Hasher.from_name(DEFAULT_HASH)
    if isinstance(spec, Hasher):
        return spec
    if isinstance(spec, str):
        return Hasher.from_name(spec)
    return Hasher(spec)


class Params:
    """
    Immutable bundle of N, g, H, the padded length and the revision.
    A client and a server must share equal Params to interoperate.
    """

    __slots__ = ("_prime", "_generator", "_hasher", "_padded_length", "_revision", "_multiplier")

    def __init__(
        self,
        hash_algorithm: HashSpec = None,
        prime: Union[str, BigHex, None] = None,
        generator: Union[str, BigHex, None] = None,
        padded_length: Optional[int] = None,
        revision: Union[Revision, str, None] = None,
    ):
        default_group = groups.get_group(groups.DEFAULT_GROUP_BITS)
        prime = BigHex.coerce(prime if prime is not None else default_group.prime)
        generator = BigHex.coerce(generator if generator is not None else default_group.generator)
        if padded_length is None:
            padded_length = len(prime.to_hex())

        if prime <= 0:
            raise ValueError("The prime N must be positive")
        if padded_length <= 0:
            raise ValueError("padded_length must be a positive number of hex digits")

        object.__setattr__(self, "_prime", prime)
        object.__setattr__(self, "_generator", generator)
        object.__setattr__(self, "_hasher", _make_hasher(hash_algorithm))
        object.__setattr__(self, "_padded_length", padded_length)
        object.__setattr__(self, "_revision", Revision.parse(revision) if revision is not None else Revision.SIX_A)
        # k is computed on first use
        object.__setattr__(self, "_multiplier", None)

    def __setattr__(self, name, value):
        raise AttributeError("Params is immutable")

    # --- Factories ---

    @classmethod
    def create(
        cls,
        hash_name: str = DEFAULT_HASH,
        prime: Union[str, BigHex, None] = None,
        generator: Union[str, BigHex, None] = None,
        padded_length: Optional[int] = None,
        revision: Union[Revision, str, None] = None,
    ) -> "Params":
        """Parameters for a named hash function and an optional custom group."""
        return cls(Hasher.from_name(hash_name), prime, generator, padded_length, revision)

    @classmethod
    def for_group(
        cls,
        bits: int,
        hash_name: str = DEFAULT_HASH,
        revision: Union[Revision, str, None] = None,
    ) -> "Params":
        """Parameters for one of the standard groups (1024 ... 8192 bits)."""
        group = groups.get_group(bits)
        return cls.create(hash_name, group.prime, group.generator, revision=revision)

    @classmethod
    def from_env(cls) -> "Params":
        """Parameters chosen by SRP_GROUP_BITS, SRP_HASH and SRP_REVISION."""
        from srpauth.common.config import load_settings

        settings = load_settings()
        logger.debug(
            "Loading SRP parameters from environment: %s-bit group, %s, revision %s",
            settings.group_bits, settings.hash_name, settings.revision,
        )
        return cls.for_group(settings.group_bits, settings.hash_name, settings.revision)

    # --- Properties ---

    @property
    def N(self) -> BigHex:
        """Large safe prime (N = 2q+1, where q is prime)."""
        return self._prime

    prime = N

    @property
    def g(self) -> BigHex:
        """Generator modulo N."""
        return self._generator

    generator = g

    @property
    def hasher(self) -> Hasher:
        return self._hasher

    @property
    def H(self) -> Callable[..., BigHex]:
        """The one-way hash function."""
        return self._hasher.compute_hash

    @property
    def hash_size_bytes(self) -> int:
        return self._hasher.hash_size_bytes

    @property
    def padded_length(self) -> int:
        return self._padded_length

    @property
    def revision(self) -> Revision:
        return self._revision

    @property
    def k(self) -> BigHex:
        """Multiplier parameter: k = H(N, PAD(g)) in SRP-6a, 3 in SRP-6, 1 in SRP-3."""
        if self._multiplier is None:
            if self._revision is Revision.THREE:
                multiplier = BigHex.from_hex("01")
            elif self._revision is Revision.SIX:
                multiplier = BigHex.from_hex("03")
            else:
                multiplier = self.H(self.N, self.pad(self.g))
            object.__setattr__(self, "_multiplier", multiplier)
        return self._multiplier

    multiplier = k

    # --- Helpers ---

    def pad(self, value: BigHex) -> BigHex:
        """Renders value with padded_length hex digits."""
        return value.pad(self._padded_length)

    def is_valid_salt(self, salt) -> bool:
        """True if salt is a hex string of exactly 2 * hash_size_bytes digits."""
        return is_valid_integer(salt, self.hash_size_bytes * 2)

    def is_valid_verifier(self, verifier) -> bool:
        """True if verifier is a hex string of exactly padded_length digits."""
        return is_valid_integer(verifier, self._padded_length)

    def __repr__(self) -> str:
        return (
            f'Params.create("{self._hasher.algorithm_name}", "{self.N.to_hex()}", '
            f'"{self.g.to_hex()}", {self._padded_length}, "{self._revision.value}")'
        )
