import os
from sympy import isprime, primerange
from .const import _LOGGER, ATTEMPTS_PER_BIT_SQUARED, MIN_GENERATED_BITS
from .errors import GenerationTimeout
from .util import get_entropy, bytes_to_number, size_bytes

# Trial division by these weeds out most candidates before the (much more
# expensive) Baillie-PSW tests in sympy.isprime.
SMALL_PRIMES = tuple(primerange(3, 2048))

def sieve_rejects(q):
    """True if q or 2q+1 has a small prime factor. Only meaningful for q
    larger than every entry of SMALL_PRIMES."""
    for p in SMALL_PRIMES:
        r = q % p
        # r == (p-1)/2 means p divides 2q+1
        if r == 0 or r == p >> 1:
            return True
    return False

def default_max_attempts(bits):
    return ATTEMPTS_PER_BIT_SQUARED * bits * bits

def is_safe_prime(N):
    if N < 5 or N % 2 == 0:
        return False
    return isprime((N - 1) // 2) and isprime(N)

def generate_safe_prime(bits, max_attempts=None,
                        entropy_f=os.urandom):
    """Return a random safe prime N = 2q+1 that is exactly 'bits' long.

    Every attempt draws a fresh random q with its top bit set and q = 3
    (mod 4), which makes N = 7 (mod 8) and lets g=2 generate the order-q
    subgroup. Raises GenerationTimeout after max_attempts candidates, which
    defaults to default_max_attempts(bits).
    """
    if bits < MIN_GENERATED_BITS:
        raise ValueError("refusing to generate a %d-bit group (minimum %d)"
                         % (bits, MIN_GENERATED_BITS))
    if max_attempts is None:
        max_attempts = default_max_attempts(bits)
    qbits = bits - 1
    mask = (1 << qbits) - 1
    top = 1 << (qbits - 1)
    num_bytes = size_bytes(mask)
    _LOGGER.debug("searching for a %d-bit safe prime (%d attempts max)",
                  bits, max_attempts)
    for attempt in range(1, max_attempts + 1):
        candidate = bytes_to_number(get_entropy(entropy_f, num_bytes))
        q = (candidate & mask) | top | 3
        if sieve_rejects(q):
            continue
        if not isprime(q):
            continue
        N = 2 * q + 1
        if isprime(N):
            _LOGGER.debug("found %d-bit safe prime after %d candidates",
                          bits, attempt)
            return N
    raise GenerationTimeout("no %d-bit safe prime found in %d attempts"
                            % (bits, max_attempts))

def find_generator(N):
    """Smallest g whose powers cover the order-q subgroup of a safe-prime
    group (i.e. the smallest quadratic residue other than 1)."""
    q = (N - 1) // 2
    for g in range(2, N - 1):
        if pow(g, q, N) == 1:
            return g
    raise ValueError("%d is not a safe prime" % N)
