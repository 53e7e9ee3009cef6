"""Pydantic models for the values an SRP exchange hands back: ephemeral, session."""

from pydantic import BaseModel, ConfigDict, field_validator

from srpauth.common.utils import is_hex


class _HexPair(BaseModel):
    model_config = ConfigDict(frozen=True)

    @field_validator("*")
    @classmethod
    def _hex_text(cls, value: str) -> str:
        if not value or not is_hex(value):
            raise ValueError("must be a non-empty hex string")
        return value


class Ephemeral(_HexPair):
    """
    One-time key pair for a single authentication attempt.
    Only `public` is sent to the peer (A from the client, B from the server).
    """
    secret: str  # a or b, hex
    public: str  # A or B, hex


class Session(_HexPair):
    """
    Result of a successful session derivation.
    The client's proof is M1; the server's proof is H(A, M1, K).
    """
    key: str    # K = H(S), hex
    proof: str  # M1 or M2, hex
