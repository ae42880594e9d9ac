import os
from hashlib import sha256
from .const import _LOGGER, DEFAULT_HASH
from .errors import UnsupportedWidth
from .groups import SRPGroup, BUILTIN_GROUPS, I1536, I2048, I3072
from .primes import generate_safe_prime, find_generator
from .transcript import get_hash, transcript_number
from .util import number_to_bytes

# A Params object is everything two peers must agree on before they can
# talk: the group (N, g), the hash function, and the multiplier k derived
# from both. k = H(N, g) with g padded to the length of N, so it is fixed
# by the other three and never has to be transmitted.

class Params:
    def __init__(self, group, hash_name=DEFAULT_HASH):
        assert isinstance(group, SRPGroup), repr(group)
        self.group = group
        self.hash_name = hash_name
        self.hash = get_hash(hash_name)
        self.digest_size = self.hash().digest_size

        self.N = group.N
        self.g = group.g
        self.bits = group.bits
        self.element_size_bytes = group.element_size_bytes

        # the digest can exceed N only for toy-sized generated groups
        self.k = transcript_number(self, self.N, self.g) % self.N

    def fingerprint(self):
        # Records and sessions carry this so that a mismatch in N, g or the
        # hash shows up as an error instead of as a silent key disagreement.
        pieces = [number_to_bytes(self.N, self.N),
                  number_to_bytes(self.g, self.N),
                  self.hash_name.encode("ascii"),
                  ]
        return sha256(b"".join(pieces)).hexdigest()

    def validate(self):
        """Full check that N is a safe prime (slow for large N). Built-in
        groups are known-good, use this on parameters from elsewhere."""
        if not self.group.check_safe_prime():
            raise ValueError("N is not a safe prime")
        return True

    def __eq__(self, other):
        if not isinstance(other, Params):
            return NotImplemented
        return self.fingerprint() == other.fingerprint()

    def __hash__(self):
        return hash(self.fingerprint())

    def __repr__(self):
        return "<Params %d-bit g=%d %s>" % (self.bits, self.g, self.hash_name)

# Params1536 is roughly as strong as a 90-bit symmetric key, Params2048 has
# 112-bit security and Params3072 has 128-bit security.
Params1536 = Params(I1536)
Params2048 = Params(I2048)
Params3072 = Params(I3072)

DefaultParams = Params2048

_BUILTIN_PARAMS = {p.bits: p for p in (Params1536, Params2048, Params3072)}

def lookup(bits, hash_name=DEFAULT_HASH):
    if bits not in BUILTIN_GROUPS:
        raise UnsupportedWidth("no built-in group with a %s-bit modulus "
                               "(have: %s)" % (bits, ", ".join(
                                   str(b) for b in sorted(BUILTIN_GROUPS))))
    if hash_name == DEFAULT_HASH:
        return _BUILTIN_PARAMS[bits]
    return Params(BUILTIN_GROUPS[bits], hash_name)

def generate(bits, hash_name=DEFAULT_HASH, max_attempts=None,
             entropy_f=os.urandom):
    N = generate_safe_prime(bits, max_attempts=max_attempts,
                            entropy_f=entropy_f)
    g = find_generator(N)
    _LOGGER.debug("generated %d-bit group with g=%d", bits, g)
    return Params(SRPGroup(N, g), hash_name)
