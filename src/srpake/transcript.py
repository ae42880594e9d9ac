import functools, hashlib
from .util import number_to_bytes, bytes_to_number

"""Canonical encoding of protocol values, and the hash over them.

Every hash in the protocol (k, x, u, K, M, Z, and the identity and
password hashes) goes through transcript_hash(). Integers are written
big-endian and left-padded with zeros to the byte length of N, so g=2 is
hashed as 255 zero bytes and a 0x02 in a 2048-bit group. Byte strings
(salts, identity hashes, earlier digests) are hashed as they are. Two
peers that agree on N, g and the hash will therefore produce identical
digests for identical values, regardless of how they store their
integers.
"""

HASHES = {
    "blake2b-256": functools.partial(hashlib.blake2b, digest_size=32),
    "sha256": hashlib.sha256,
    "sha512": hashlib.sha512,
    "sha3-256": hashlib.sha3_256,
    }

def get_hash(name):
    try:
        return HASHES[name]
    except KeyError:
        raise ValueError("unknown hash %r, pick one of %s"
                         % (name, ", ".join(sorted(HASHES)))) from None

def encode_value(N, value):
    if isinstance(value, int):
        if not 0 <= value <= N:
            raise ValueError("integer outside [0, N]")
        return number_to_bytes(value, N)
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    raise TypeError("can only hash ints and bytes, not %r" % type(value))

def transcript_hash(params, *values):
    h = params.hash()
    for value in values:
        h.update(encode_value(params.N, value))
    return h.digest()

def transcript_number(params, *values):
    return bytes_to_number(transcript_hash(params, *values))
