import hashlib
from hkdf import Hkdf
from .util import to_bytes

# The raw key K = H(S) should not be used directly: derive one key per
# purpose (and per direction), e.g.
#
#   c2s = derive_key(K, b"client-to-server")
#   s2c = derive_key(K, b"server-to-client")

def derive_key(raw_key, label, counter=0, length=32):
    assert isinstance(raw_key, bytes), repr(raw_key)
    if counter < 0:
        raise ValueError("counter must not be negative")
    info = b"".join([b"srpake ", to_bytes(label), b":",
                     str(counter).encode("ascii")])
    h = Hkdf(salt=b"", input_key_material=raw_key, hash=hashlib.sha256)
    return h.expand(info, length)
