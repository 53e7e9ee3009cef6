"""Server side of SRP-6a: ephemeral from the verifier, session + client proof check."""

import logging
from typing import Optional, Union

from srpauth.common.bighex import BigHex, constant_time_equals
from srpauth.common.errors import InvalidEphemeralError, ProofMismatchError
from srpauth.common.protocol import Ephemeral, Session
from srpauth.params import Params

logger = logging.getLogger(__name__)

HexValue = Union[str, BigHex]


class SrpServer:
    """
    Server-side computations. The server only ever sees the verifier,
    never the password or the private key x.
    """

    def __init__(self, params: Optional[Params] = None):
        self.params = params or Params()

    def generate_ephemeral(self, verifier: HexValue) -> Ephemeral:
        """b = random, B = k*v + g^b mod N"""
        b = BigHex.random(self.params.hash_size_bytes)
        B = self.compute_b(verifier, b)
        return Ephemeral(secret=b.to_hex(), public=B.to_hex())

    def compute_b(self, verifier: HexValue, b: HexValue) -> BigHex:
        """
        B = (k*v + g^b) mod N
        Rendered at the padded length, the same width as the client's A.
        """
        N = self.params.N
        g = self.params.g
        k = self.params.k
        v = BigHex.coerce(verifier)
        b = BigHex.coerce(b)

        return self.params.pad(((k * v) + g.mod_pow(b, N)) % N)

    def compute_u(self, A: HexValue, B: HexValue) -> BigHex:
        """u = H(PAD(A), PAD(B))"""
        pad = self.params.pad
        return self.params.H(pad(BigHex.coerce(A)), pad(BigHex.coerce(B)))

    def compute_s(self, A: HexValue, b: HexValue, u: HexValue, v: HexValue) -> BigHex:
        """S = (A * v^u mod N) ^ b mod N"""
        N = self.params.N
        A, b, u, v = (BigHex.coerce(value) for value in (A, b, u, v))

        return (A * v.mod_pow(u, N)).mod_pow(b, N)

    def derive_session(
        self,
        server_secret_ephemeral: HexValue,
        client_public_ephemeral: HexValue,
        salt: HexValue,
        username: str,
        verifier: HexValue,
        client_session_proof: HexValue,
    ) -> Session:
        """
        Checks the client's proof M1 and returns K with the server proof H(A, M1, K).

        Raises InvalidEphemeralError if A is 0 mod N and
        ProofMismatchError if the client does not know the password.
        """
        N = self.params.N
        g = self.params.g
        H = self.params.H

        b = BigHex.coerce(server_secret_ephemeral)
        A = BigHex.coerce(client_public_ephemeral)
        s = BigHex.coerce(salt)
        I = username or ""
        v = BigHex.coerce(verifier)

        B = self.compute_b(v, b)

        # A % N > 0
        if A % N == 0:
            logger.warning("Rejected client public ephemeral for user %r: A mod N == 0", I)
            raise InvalidEphemeralError("The client sent an invalid public ephemeral")

        u = self.compute_u(A, B)
        S = self.compute_s(A, b, u, v)
        K = H(S)

        # M = H(H(N) xor H(g), H(I), s, A, B, K)
        M = H(H(N) ^ H(g), H(I), s, A, B, K)

        actual = BigHex.coerce(client_session_proof)
        if not constant_time_equals(M, actual):
            logger.warning("Client session proof for user %r did not match", I)
            raise ProofMismatchError("Client provided session proof is invalid")

        # P = H(A, M, K)
        P = H(A, M, K)

        logger.debug("Verified client session for user %r", I)
        return Session(key=K.to_hex(), proof=P.to_hex())
