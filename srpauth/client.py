"""Client side of SRP-6a: salt, private key, verifier, ephemeral, session."""

import logging
from typing import Optional, Union

from srpauth.common.bighex import BigHex, constant_time_equals
from srpauth.common.errors import InvalidEphemeralError, ProofMismatchError
from srpauth.common.protocol import Ephemeral, Session
from srpauth.params import Params

logger = logging.getLogger(__name__)

HexValue = Union[str, BigHex]

#   N    A large safe prime (N = 2q+1, where q is prime)
#   g    A generator modulo N
#   k    Multiplier parameter (k = H(N, PAD(g)) in SRP-6a)
#   s    User's salt
#   I    Username
#   p    Cleartext Password
#   H()  One-way hash function
#   u    Random scrambling parameter
#   a,b  Secret ephemeral values
#   A,B  Public ephemeral values
#   x    Private key (derived from p and s)
#   v    Password verifier


class SrpClient:
    """
    Client-side computations. Holds nothing but the parameters,
    so one instance can serve any number of concurrent logins.
    """

    def __init__(self, params: Optional[Params] = None):
        self.params = params or Params()

    def generate_salt(self, length_bytes: Optional[int] = None) -> str:
        """
        Random salt, as long as the hash output unless length_bytes is given.
        """
        if length_bytes is None:
            length_bytes = self.params.hash_size_bytes
        return BigHex.random(length_bytes).to_hex()

    def derive_private_key(self, salt: HexValue, username: str, password: str) -> str:
        """
        x = H(s, H(I | ':' | p))
        Deterministic, so the client can recompute it from a re-entered password.
        """
        H = self.params.H
        s = BigHex.coerce(salt)
        I = username or ""
        p = password or ""

        x = H(s, H(f"{I}:{p}"))
        return x.to_hex()

    def derive_verifier(self, private_key: HexValue) -> str:
        """v = g^x mod N"""
        N = self.params.N
        g = self.params.g
        x = BigHex.coerce(private_key)

        return g.mod_pow(x, N).to_hex()

    def generate_ephemeral(self) -> Ephemeral:
        """a = random, A = g^a mod N"""
        a = BigHex.random(self.params.hash_size_bytes)
        A = self.compute_a(a)
        return Ephemeral(secret=a.to_hex(), public=A.to_hex())

    def compute_a(self, a: HexValue) -> BigHex:
        """A = g^a mod N"""
        return self.params.g.mod_pow(BigHex.coerce(a), self.params.N)

    def compute_u(self, A: HexValue, B: HexValue) -> BigHex:
        """u = H(PAD(A), PAD(B))"""
        pad = self.params.pad
        return self.params.H(pad(BigHex.coerce(A)), pad(BigHex.coerce(B)))

    def compute_s(self, a: HexValue, B: HexValue, u: HexValue, x: HexValue) -> BigHex:
        """S = (B - k * g^x) ^ (a + u * x) mod N"""
        N = self.params.N
        g = self.params.g
        k = self.params.k
        a, B, u, x = (BigHex.coerce(value) for value in (a, B, u, x))

        return (B - (k * g.mod_pow(x, N))).mod_pow(a + (u * x), N)

    def derive_session(
        self,
        client_secret_ephemeral: HexValue,
        server_public_ephemeral: HexValue,
        salt: HexValue,
        username: str,
        private_key: HexValue,
    ) -> Session:
        """
        Computes the shared key K and the client proof M1.

        Raises InvalidEphemeralError if the server's B is 0 mod N.
        """
        N = self.params.N
        g = self.params.g
        H = self.params.H

        a = BigHex.coerce(client_secret_ephemeral)
        B = BigHex.coerce(server_public_ephemeral)
        s = BigHex.coerce(salt)
        I = username or ""
        x = BigHex.coerce(private_key)

        A = g.mod_pow(a, N)

        # B % N > 0
        if B % N == 0:
            logger.warning("Rejected server public ephemeral for user %r: B mod N == 0", I)
            raise InvalidEphemeralError("The server sent an invalid public ephemeral")

        u = self.compute_u(A, B)
        S = self.compute_s(a, B, u, x)
        K = H(S)

        # M1 = H(H(N) xor H(g), H(I), s, A, B, K)
        M1 = H(H(N) ^ H(g), H(I), s, A, B, K)

        logger.debug("Derived client session for user %r", I)
        return Session(key=K.to_hex(), proof=M1.to_hex())

    def verify_session(
        self,
        client_public_ephemeral: HexValue,
        client_session: Session,
        server_session_proof: HexValue,
    ) -> None:
        """
        Checks the server's proof H(A, M1, K).
        Raises ProofMismatchError if the server did not derive the same key.
        """
        H = self.params.H
        A = BigHex.coerce(client_public_ephemeral)
        M = BigHex.coerce(client_session.proof)
        K = BigHex.coerce(client_session.key)

        expected = H(A, M, K)
        actual = BigHex.coerce(server_session_proof)

        if not constant_time_equals(expected, actual):
            logger.warning("Server session proof did not match")
            raise ProofMismatchError("Server provided session proof is invalid")
