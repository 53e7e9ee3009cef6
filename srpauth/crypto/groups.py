"""Standard SRP groups (RFC 5054, Appendix A)."""

from typing import Dict, NamedTuple

from srpauth.common.errors import UnknownGroupError


class SrpGroup(NamedTuple):
    bits: int
    prime: str      # hex
    generator: str  # hex


# ---------------------------
# SRP-specific groups (RFC 5054)
# ---------------------------
PRIME_1024 = """
EEAF0AB9ADB38DD69C33F80AFA8FC5E86072618775FF3C0B9EA2314C9C256576
D674DF7496EA81D3383B4813D692C6E0E0D5D8E250B98BE48E495C1D6089DAD1
5DC7D7B46154D6B6CE8EF4AD69B15D4982559B297BCF1885C529F566660E57EC
68EDBC3C05726CC02FD4CBF4976EAA9AFD5138FE8376435B9FC61D2FC0EB06E3
""".replace("\n", "")

PRIME_1536 = """
9DEF3CAFB939277AB1F12A8617A47BBBDBA51DF499AC4C80BEEEA9614B19CC4D
5F4F5F556E27CBDE51C6A94BE4607A291558903BA0D0F84380B655BB9A22E8DC
DF028A7CEC67F0D08134B1C8B97989149B609E0BE3BAB63D47548381DBC5B1FC
764E3F4B53DD9DA1158BFD3E2B9C8CF56EDF019539349627DB2FD53D24B7C486
65772E437D6C7F8CE442734AF7CCB7AE837C264AE3A9BEB87F8A2FE9B8B5292E
5A021FFF5E91479E8CE7A28C2442C6F315180F93499A234DCF76E3FED135F9BB
""".replace("\n", "")

PRIME_2048 = """
AC6BDB41324A9A9BF166DE5E1389582FAF72B6651987EE07FC3192943DB56050
A37329CBB4A099ED8193E0757767A13DD52312AB4B03310DCD7F48A9DA04FD50
E8083969EDB767B0CF6095179A163AB3661A05FBD5FAAAE82918A9962F0B93B8
55F97993EC975EEAA80D740ADBF4FF747359D041D5C33EA71D281E446B14773B
CA97B43A23FB801676BD207A436C6481F1D2B9078717461A5B9D32E688F87748
544523B524B0D57D5EA77A2775D2ECFA032CFBDBF52FB3786160279004E57AE6
AF874E7303CE53299CCC041C7BC308D82A5698F3A8D0C38271AE35F8E9DBFBB6
94B5C803D89F7AE435DE236D525F54759B65E372FCD68EF20FA7111F9E4AFF73
""".replace("\n", "")

# ---------------------------
# MODP groups (RFC 3526), reused by RFC 5054 for 3072 bits and up
# ---------------------------
PRIME_3072 = """
FFFFFFFFFFFFFFFFC90FDAA22168C234C4C6628B80DC1CD129024E088A67CC74
020BBEA63B139B22514A08798E3404DDEF9519B3CD3A431B302B0A6DF25F1437
4FE1356D6D51C245E485B576625E7EC6F44C42E9A637ED6B0BFF5CB6F406B7ED
EE386BFB5A899FA5AE9F24117C4B1FE649286651ECE45B3DC2007CB8A163BF05
98DA48361C55D39A69163FA8FD24CF5F83655D23DCA3AD961C62F356208552BB
9ED529077096966D670C354E4ABC9804F1746C08CA18217C32905E462E36CE3B
E39E772C180E86039B2783A2EC07A28FB5C55DF06F4C52C9DE2BCBF695581718
3995497CEA956AE515D2261898FA051015728E5A8AAAC42DAD33170D04507A33
A85521ABDF1CBA64ECFB850458DBEF0A8AEA71575D060C7DB3970F85A6E1E4C7
ABF5AE8CDB0933D71E8C94E04A25619DCEE3D2261AD2EE6BF12FFA06D98A0864
D87602733EC86A64521F2B18177B200CBBE117577A615D6C770988C0BAD946E2
08E24FA074E5AB3143DB5BFCE0FD108E4B82D120A93AD2CAFFFFFFFFFFFFFFFF
""".replace("\n", "")

# RFC 3526 defines each MODP prime as
#   p = 2^n - 2^(n-64) - 1 + 2^64 * (floor(2^(n-130) * pi) + offset)
MODP_OFFSETS = {
    3072: 1690314,
    4096: 240904,
    6144: 929484,
    8192: 4743158,
}


def _arctan_inverse(x: int, one: int) -> int:
    """arctan(1/x) in fixed point, scaled by `one`."""
    total = term = one // x
    x_squared = x * x
    n = 1
    sign = -1
    while term:
        term //= x_squared
        n += 2
        total += sign * (term // n)
        sign = -sign
    return total


def pi_fixed_point(precision: int) -> int:
    """
    floor(pi * 2^precision), via Machin's formula
    pi = 16 arctan(1/5) - 4 arctan(1/239).
    """
    guard = 64
    one = 1 << (precision + guard)
    pi = 16 * _arctan_inverse(5, one) - 4 * _arctan_inverse(239, one)
    return pi >> guard


def modp_prime(bits: int) -> int:
    """Computes the RFC 3526 MODP prime of the given size."""
    offset = MODP_OFFSETS[bits]
    return (1 << bits) - (1 << (bits - 64)) - 1 + (1 << 64) * (pi_fixed_point(bits - 130) + offset)


def _hex(value: int) -> str:
    return format(value, "X")


GROUPS: Dict[int, SrpGroup] = {
    1024: SrpGroup(1024, PRIME_1024, "02"),
    1536: SrpGroup(1536, PRIME_1536, "02"),
    2048: SrpGroup(2048, PRIME_2048, "02"),
    3072: SrpGroup(3072, PRIME_3072, "05"),
    4096: SrpGroup(4096, _hex(modp_prime(4096)), "05"),
    6144: SrpGroup(6144, _hex(modp_prime(6144)), "05"),
    8192: SrpGroup(8192, _hex(modp_prime(8192)), "13"),
}

DEFAULT_GROUP_BITS = 2048


def get_group(bits: int) -> SrpGroup:
    """Returns the standard group with the given prime size."""
    try:
        return GROUPS[bits]
    except KeyError:
        supported = ", ".join(str(b) for b in sorted(GROUPS))
        raise UnknownGroupError(f"No standard SRP group of {bits} bits (supported: {supported})") from None
