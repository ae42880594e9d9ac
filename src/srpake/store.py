import os, hashlib, threading
from binascii import hexlify
from hkdf import Hkdf
from .const import _LOGGER
from .errors import NotFound
from .params import DefaultParams
from .srp import SRPServer, split_credentials
from .util import bytes_to_number
from .verifier import VerifierRecord

class VerifierStore:
    """A minimal in-memory account database, keyed by identity hash.

    Records are kept in their encoded form, so everything that comes out
    of lookup() has been through the same decode path a real database
    would use."""

    def __init__(self):
        self._records = {}
        self._lock = threading.Lock()

    def add(self, record):
        assert isinstance(record, VerifierRecord), repr(record)
        with self._lock:
            self._records[record.identity_hash] = record.encode()

    def remove(self, identity_hash):
        with self._lock:
            if self._records.pop(identity_hash, None) is None:
                raise NotFound("no such identity")

    def lookup(self, identity_hash, params=None):
        with self._lock:
            encoded = self._records.get(identity_hash)
        if encoded is None:
            raise NotFound("no such identity")
        return VerifierRecord.decode(encoded, params=params)

    def __len__(self):
        with self._lock:
            return len(self._records)

    def __contains__(self, identity_hash):
        with self._lock:
            return identity_hash in self._records


def decoy_record(params, identity_hash, decoy_key):
    """A made-up record for an identity we do not know.

    salt and v are derived from a long-term server secret and the identity
    hash, so probing the same unknown identity twice gets the same salt,
    just as it would for a real account."""
    assert isinstance(decoy_key, bytes), repr(decoy_key)
    h = Hkdf(salt=identity_hash, input_key_material=decoy_key,
             hash=hashlib.sha256)
    salt = h.expand(b"srpake decoy salt", params.element_size_bytes)
    x = bytes_to_number(h.expand(b"srpake decoy verifier",
                                 params.digest_size))
    v = pow(params.g, x, params.N)
    return VerifierRecord(params, identity_hash, salt, v)

def open_server_session(store, credentials, decoy_key,
                        params=DefaultParams, entropy_f=os.urandom):
    """Handle a client's credentials message. Returns (server, challenge).

    Unknown identities get a session over a decoy record: the challenge
    has the same shape and the client's proof later fails with
    ClientAuthenticationFailed, exactly like a wrong password."""
    identity_hash, A_bytes = split_credentials(params, credentials)
    # built and encoded on every call, and a miss decodes it just as a hit
    # decodes the stored record, so hits and misses cost the same
    decoy = decoy_record(params, identity_hash, decoy_key).encode()
    try:
        record = store.lookup(identity_hash, params=params)
    except NotFound:
        _LOGGER.debug("no verifier for %s, answering with a decoy",
                      hexlify(identity_hash)[:16].decode("ascii"))
        record = VerifierRecord.decode(decoy, params=params)
    server = SRPServer(record, params=params, entropy_f=entropy_f)
    challenge = server.start(A_bytes)
    return server, challenge
