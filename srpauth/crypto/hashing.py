"""SRP hash capability on top of cryptography's hash primitives."""

from typing import Callable, Dict, Optional

from cryptography.hazmat.primitives import hashes

from srpauth.common.bighex import BigHex
from srpauth.common.errors import UnknownHashAlgorithmError

# A factory returns a fresh HashAlgorithm instance, e.g. hashes.SHA256
HashFactory = Callable[[], hashes.HashAlgorithm]

_REGISTRY: Dict[str, HashFactory] = {
    "md5": hashes.MD5,
    "sha1": hashes.SHA1,
    "sha-1": hashes.SHA1,
    "sha224": hashes.SHA224,
    "sha-224": hashes.SHA224,
    "sha256": hashes.SHA256,
    "sha-256": hashes.SHA256,
    "sha384": hashes.SHA384,
    "sha-384": hashes.SHA384,
    "sha512": hashes.SHA512,
    "sha-512": hashes.SHA512,
    "sha3-256": hashes.SHA3_256,
    "sha3-512": hashes.SHA3_512,
    "blake2b": lambda: hashes.BLAKE2b(64),
    "blake2s": lambda: hashes.BLAKE2s(32),
}


def register_algorithm(factory: HashFactory, *names: str) -> None:
    """
    Makes a custom hash factory selectable by name.
    Existing names are overwritten.
    """
    if not names:
        raise ValueError("At least one name is required")
    for name in names:
        _REGISTRY[name.strip().lower()] = factory


def get_factory(name: str) -> HashFactory:
    """Looks up a registered hash factory, case-insensitively."""
    if not isinstance(name, str):
        raise UnknownHashAlgorithmError(f"Hash algorithm name must be a string, got {name!r}")
    try:
        return _REGISTRY[name.strip().lower()]
    except KeyError:
        raise UnknownHashAlgorithmError(f"Unknown hash algorithm: {name}") from None


def is_registered(name: str) -> bool:
    return isinstance(name, str) and name.strip().lower() in _REGISTRY


def _get_bytes(value) -> bytes:
    # str -> UTF-8, BigHex -> big-endian magnitude, anything else -> nothing
    if isinstance(value, str):
        return value.encode("utf-8")
    if isinstance(value, BigHex):
        return value.to_bytes()
    return b""


class Hasher:
    """
    Concatenation-then-hash function used by every SRP formula.

    H("alice", ":", "secret") hashes b"alice:secret";
    H(s, x) hashes the padded big-endian bytes of s followed by those of x.
    """

    def __init__(self, factory: HashFactory, name: Optional[str] = None):
        algorithm = factory()
        if not isinstance(algorithm, hashes.HashAlgorithm):
            raise TypeError("Hash factory must return a cryptography HashAlgorithm")

        self._factory = factory
        self._digest_size = algorithm.digest_size
        self._name = name or algorithm.name

    @classmethod
    def from_name(cls, name: str) -> "Hasher":
        """Builds a hasher for a registered algorithm name (md5, sha1, sha256...)."""
        return cls(get_factory(name), name.strip().lower())

    @property
    def hash_size_bytes(self) -> int:
        return self._digest_size

    @property
    def algorithm_name(self) -> str:
        return self._name

    def compute_hash(self, *values) -> BigHex:
        """
        Hashes the concatenated byte forms of the values.
        None and empty strings contribute zero bytes.
        """
        digest = hashes.Hash(self._factory())
        for value in values:
            digest.update(_get_bytes(value))
        return BigHex.from_bytes(digest.finalize())

    __call__ = compute_hash

    def __repr__(self) -> str:
        return f"<Hasher: {self._name}>"
