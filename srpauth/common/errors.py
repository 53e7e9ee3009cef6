"""Exception hierarchy for SRP computations."""


class SrpError(Exception):
    """Base class for every error raised by srpauth."""
    pass


class FormatError(SrpError, ValueError):
    """Text is not a valid (optionally signed) hexadecimal number."""
    pass


class DivideByZeroError(SrpError, ZeroDivisionError):
    """Division, modulo or modular exponentiation by zero."""
    pass


class SecurityError(SrpError):
    """Custom exception for protocol security failures."""
    pass


class InvalidEphemeralError(SecurityError):
    """The peer sent a public ephemeral value that is 0 mod N."""
    pass


class ProofMismatchError(SecurityError):
    """A session proof does not match the locally computed one."""
    pass


class UnknownHashAlgorithmError(SrpError, ValueError):
    """No hash algorithm is registered under the requested name."""
    pass


class UnknownGroupError(SrpError, ValueError):
    """No standard SRP group has the requested bit size."""
    pass


class ConfigurationError(SrpError):
    """Environment configuration could not be turned into parameters."""
    pass
