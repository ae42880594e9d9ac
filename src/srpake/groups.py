from types import MappingProxyType
from .util import size_bits, size_bytes
from .primes import is_safe_prime

"""Safe-prime groups.

SRP works in the multiplicative group of integers modulo a large safe
prime N = 2q+1, with q also prime. The group Zp* then has order N-1 = 2q,
so every element other than 1 and N-1 has order q or 2q, and any of them
can serve as the generator g. All protocol arithmetic happens mod N.

    G = I2048                      # or BUILTIN_GROUPS[3072], or a fresh one
    G.N, G.g, G.q
    G.element_size_bytes           # byte length of N, used for padding
    G.is_valid_public(A)           # A mod N != 0
    G.check_safe_prime()           # slow: full primality test of q and N
"""

class SRPGroup:
    def __init__(self, N, g):
        if N < 7 or N % 2 == 0:
            raise ValueError("N must be a large odd (safe) prime")
        if not 1 < g < N - 1:
            raise ValueError("g must lie in (1, N-1)")
        self.N = N # the field size
        self.g = g
        self.q = (N - 1) // 2 # order of the prime subgroup
        self.element_size_bits = size_bits(self.N)
        self.element_size_bytes = size_bytes(self.N)

        # in a safe-prime group g^q is 1 (g has order q) or -1 (order 2q).
        # Anything else means N is not 2q+1 with q prime.
        if pow(g, self.q, N) not in (1, N - 1):
            raise ValueError("g does not have order q or 2q modulo N")

    @property
    def bits(self):
        return self.element_size_bits

    def generator_order(self):
        if pow(self.g, self.q, self.N) == 1:
            return self.q
        return 2 * self.q

    def is_valid_public(self, X):
        return X % self.N != 0

    def check_safe_prime(self):
        return is_safe_prime(self.N)

    def __eq__(self, other):
        if not isinstance(other, SRPGroup):
            return NotImplemented
        return (self.N, self.g) == (other.N, other.g)

    def __hash__(self):
        return hash((self.N, self.g))

    def __repr__(self):
        return "<SRPGroup %d-bit g=%d>" % (self.bits, self.g)


def _from_hex(*lines):
    return int("".join(lines), 16)

# These are the well-known safe primes published for Diffie-Hellman and SRP
# use. N is 2q+1 for prime q in every case; test_group.py checks that.

# RFC 3526 group 5, g=2 (2 is a quadratic residue here, so it has order q)
I1536 = SRPGroup(
    N=_from_hex(
        'ffffffffffffffffc90fdaa22168c234c4c6628b80dc1cd129024'
        'e088a67cc74020bbea63b139b22514a08798e3404ddef9519b3cd'
        '3a431b302b0a6df25f14374fe1356d6d51c245e485b576625e7ec'
        '6f44c42e9a637ed6b0bff5cb6f406b7edee386bfb5a899fa5ae9f'
        '24117c4b1fe649286651ece45b3dc2007cb8a163bf0598da48361'
        'c55d39a69163fa8fd24cf5f83655d23dca3ad961c62f356208552'
        'bb9ed529077096966d670c354e4abc9804f1746c08ca237327fff'
        'fffffffffffff'),
    g=2,
    )

# RFC 5054 appendix A, 2048-bit group, g=2
I2048 = SRPGroup(
    N=_from_hex(
        'AC6BDB41324A9A9BF166DE5E1389582FAF72B6651987EE07FC319294'
        '3DB56050A37329CBB4A099ED8193E0757767A13DD52312AB4B03310D'
        'CD7F48A9DA04FD50E8083969EDB767B0CF6095179A163AB3661A05FB'
        'D5FAAAE82918A9962F0B93B855F97993EC975EEAA80D740ADBF4FF74'
        '7359D041D5C33EA71D281E446B14773BCA97B43A23FB801676BD207A'
        '436C6481F1D2B9078717461A5B9D32E688F87748544523B524B0D57D'
        '5EA77A2775D2ECFA032CFBDBF52FB3786160279004E57AE6AF874E73'
        '03CE53299CCC041C7BC308D82A5698F3A8D0C38271AE35F8E9DBFBB6'
        '94B5C803D89F7AE435DE236D525F54759B65E372FCD68EF20FA7111F'
        '9E4AFF73'),
    g=2,
    )

# RFC 5054 appendix A, 3072-bit group (same prime as RFC 3526 group 15), g=5
I3072 = SRPGroup(
    N=_from_hex(
        'FFFFFFFFFFFFFFFFC90FDAA22168C234C4C6628B80DC1CD129024E08'
        '8A67CC74020BBEA63B139B22514A08798E3404DDEF9519B3CD3A431B'
        '302B0A6DF25F14374FE1356D6D51C245E485B576625E7EC6F44C42E9'
        'A637ED6B0BFF5CB6F406B7EDEE386BFB5A899FA5AE9F24117C4B1FE6'
        '49286651ECE45B3DC2007CB8A163BF0598DA48361C55D39A69163FA8'
        'FD24CF5F83655D23DCA3AD961C62F356208552BB9ED529077096966D'
        '670C354E4ABC9804F1746C08CA18217C32905E462E36CE3BE39E772C'
        '180E86039B2783A2EC07A28FB5C55DF06F4C52C9DE2BCBF695581718'
        '3995497CEA956AE515D2261898FA051015728E5A8AAAC42DAD33170D'
        '04507A33A85521ABDF1CBA64ECFB850458DBEF0A8AEA71575D060C7D'
        'B3970F85A6E1E4C7ABF5AE8CDB0933D71E8C94E04A25619DCEE3D226'
        '1AD2EE6BF12FFA06D98A0864D87602733EC86A64521F2B18177B200C'
        'BBE117577A615D6C770988C0BAD946E208E24FA074E5AB3143DB5BFC'
        'E0FD108E4B82D120A93AD2CAFFFFFFFFFFFFFFFF'),
    g=5,
    )

BUILTIN_GROUPS = MappingProxyType({
    1536: I1536,
    2048: I2048,
    3072: I3072,
    })
