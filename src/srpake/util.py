import binascii, hmac, math
from .errors import RandomSourceFailure

def size_bits(maxval):
    return maxval.bit_length() or 1

def size_bytes(maxval):
    return int(math.ceil(size_bits(maxval) / 8))

def number_to_bytes(num, maxval):
    if num > maxval:
        raise ValueError
    num_bytes = size_bytes(maxval)
    fmt_str = "%0" + str(2*num_bytes) + "x"
    s_hex = fmt_str % num
    s = binascii.unhexlify(s_hex.encode("ascii"))
    assert len(s) == num_bytes
    assert isinstance(s, bytes)
    return s

def bytes_to_number(s):
    if not isinstance(s, (bytes, bytearray)):
        raise TypeError
    if not s:
        return 0
    return int(binascii.hexlify(s), 16)

def to_bytes(s):
    # identities and passphrases may arrive as text
    if isinstance(s, str):
        return s.encode("utf-8")
    if not isinstance(s, (bytes, bytearray)):
        raise TypeError("expected bytes or str, got %r" % type(s))
    return bytes(s)

def get_entropy(entropy_f, count):
    """Call entropy_f (which should behave like os.urandom) and make sure
    it actually delivered. Any failure becomes RandomSourceFailure."""
    try:
        data = entropy_f(count)
    except (OSError, NotImplementedError) as e:
        raise RandomSourceFailure("entropy source failed: %s" % (e,)) from e
    if not isinstance(data, bytes):
        raise RandomSourceFailure("entropy source returned %r, not bytes"
                                  % type(data))
    if len(data) != count:
        raise RandomSourceFailure("entropy source returned %d bytes, "
                                  "wanted %d" % (len(data), count))
    return data

def constant_time_equal(a, b):
    return hmac.compare_digest(bytes(a), bytes(b))

def wipe(buf):
    # only mutable buffers can really be cleared; ints and bytes are left
    # for the garbage collector
    if isinstance(buf, bytearray):
        for i in range(len(buf)):
            buf[i] = 0

def generate_mask(maxval):
    num_bytes = size_bytes(maxval)
    num_bits = size_bits(maxval)
    leftover_bits = num_bits % 8
    if leftover_bits:
        top_byte_mask_int = (0x1 << leftover_bits) - 1
    else:
        top_byte_mask_int = 0xff
    assert 0 <= top_byte_mask_int <= 0xff
    return (top_byte_mask_int, num_bytes)

def random_list_of_ints(count, entropy_f):
    # return a list of ints, each 0<=x<=255, for masking
    return list(get_entropy(entropy_f, count))
def mask_list_of_ints(top_byte_mask_int, list_of_ints):
    return [top_byte_mask_int & list_of_ints[0]] + list_of_ints[1:]
def list_of_ints_to_number(l):
    s = "".join(["%02x" % b for b in l])
    return int(s, 16)

def unbiased_randrange(start, stop, entropy_f):
    """Return a random integer k such that start <= k < stop, uniformly
    distributed across that range, like random.randrange but
    cryptographically bound and unbiased.

    r(1,N) provides a random exponent in [1, N-1], which is what both
    sides of an SRP session use for their ephemeral secrets.
    """

    # we generate a random binary string up to 7 bits larger than we really
    # need, mask that down to be the right number of bits, then compare
    # against the range and try again if it's wrong. This will take a random
    # number of tries, but on average less than two

    # first we get 0<=number<(stop-start)
    maxval = stop - start

    top_byte_mask_int, num_bytes = generate_mask(maxval)
    while True:
        enough_bytes = random_list_of_ints(num_bytes, entropy_f)
        assert len(enough_bytes) == num_bytes
        candidate_bytes = mask_list_of_ints(top_byte_mask_int, enough_bytes)
        candidate_int = list_of_ints_to_number(candidate_bytes)
        if candidate_int < maxval:
            return start + candidate_int
