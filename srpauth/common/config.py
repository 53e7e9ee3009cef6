"""Default SRP parameter selection from the environment / .env file."""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from srpauth.common.errors import ConfigurationError
from srpauth.crypto import groups, hashing
from srpauth.params import DEFAULT_HASH, Revision

# Load environment variables from .env file
load_dotenv()

ENV_GROUP_BITS = "SRP_GROUP_BITS"
ENV_HASH = "SRP_HASH"
ENV_REVISION = "SRP_REVISION"


class SrpSettings(BaseModel):
    """
    Validated view of the SRP_* environment variables.
    """
    model_config = ConfigDict(frozen=True)

    group_bits: int = groups.DEFAULT_GROUP_BITS
    hash_name: str = DEFAULT_HASH
    revision: Revision = Revision.SIX_A

    @field_validator("group_bits")
    @classmethod
    def _standard_group(cls, bits: int) -> int:
        if bits not in groups.GROUPS:
            raise ValueError(f"{bits} is not a standard SRP group size")
        return bits

    @field_validator("hash_name")
    @classmethod
    def _registered_hash(cls, name: str) -> str:
        if not hashing.is_registered(name):
            raise ValueError(f"{name!r} is not a registered hash algorithm")
        return name.strip().lower()

    @field_validator("revision", mode="before")
    @classmethod
    def _known_revision(cls, value) -> Revision:
        return Revision.parse(value)


def load_settings() -> SrpSettings:
    """Reads SRP_GROUP_BITS, SRP_HASH and SRP_REVISION, falling back to defaults."""
    try:
        return SrpSettings(
            group_bits=os.getenv(ENV_GROUP_BITS, str(groups.DEFAULT_GROUP_BITS)),
            hash_name=os.getenv(ENV_HASH, DEFAULT_HASH),
            revision=os.getenv(ENV_REVISION, Revision.SIX_A.value),
        )
    except ValidationError as e:
        raise ConfigurationError(f"Invalid SRP configuration: {e}") from e
