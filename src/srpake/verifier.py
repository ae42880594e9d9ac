import os, json
from binascii import hexlify, unhexlify
from .const import _LOGGER, RECORD_VERSION
from .errors import MalformedRecord, UnsupportedWidth
from .params import DefaultParams, lookup
from .transcript import transcript_hash, transcript_number
from .util import (get_entropy, to_bytes, number_to_bytes, bytes_to_number,
                   wipe)

# Ih = H(I)
# t  = H(Ih ":" H(p))
# x  = H(s, t)
# v  = g^x mod N
#
# Only Ih, s and v are kept. Hashing the identity means the server (and its
# database) never learns usernames, and hashing the passphrase first
# normalizes whatever alphabet and length the user picked.

def hash_identity(params, identity):
    return transcript_hash(params, to_bytes(identity))

def password_key(params, identity_hash, passphrase):
    ph = transcript_hash(params, to_bytes(passphrase))
    # returned as a bytearray so callers can wipe it when done
    return bytearray(transcript_hash(params, identity_hash, b":", ph))

def private_key(params, salt, t):
    return transcript_number(params, salt, t)

def _hex(b):
    return hexlify(b).decode("ascii")


class VerifierRecord:
    """What the server stores for one account: the identity hash, the salt
    and the verifier v. v is not password-equivalent but it allows an
    offline dictionary attack, so store it like any other password hash."""

    def __init__(self, params, identity_hash, salt, v):
        assert isinstance(identity_hash, bytes), repr(identity_hash)
        assert isinstance(salt, bytes), repr(salt)
        self.params = params
        self.identity_hash = identity_hash
        self.salt = salt
        self.v = v

    def encode(self):
        p = self.params
        d = {"version": RECORD_VERSION,
             "bits": p.bits,
             "hash": p.hash_name,
             "params": p.fingerprint(),
             "identity_hash": _hex(self.identity_hash),
             "salt": _hex(self.salt),
             "v": _hex(number_to_bytes(self.v, p.N)),
             }
        return json.dumps(d, sort_keys=True)

    @classmethod
    def decode(klass, data, params=None):
        """Parse the output of encode(). Records made with a generated
        group can only be decoded by passing that group's params=."""
        if isinstance(data, bytes):
            try:
                data = data.decode("ascii")
            except UnicodeDecodeError as e:
                raise MalformedRecord("record is not ASCII") from e
        try:
            d = json.loads(data)
        except ValueError as e:
            raise MalformedRecord("record is not valid JSON") from e
        if not isinstance(d, dict):
            raise MalformedRecord("record is not a JSON object")
        if d.get("version") != RECORD_VERSION:
            raise MalformedRecord("unknown record version %r"
                                  % (d.get("version"),))
        try:
            if params is None:
                params = lookup(d["bits"], d["hash"])
            if d["params"] != params.fingerprint():
                raise MalformedRecord("record was made with different "
                                      "group parameters or hash")
            identity_hash = unhexlify(d["identity_hash"].encode("ascii"))
            salt = unhexlify(d["salt"].encode("ascii"))
            v_bytes = unhexlify(d["v"].encode("ascii"))
        except (KeyError, TypeError, AttributeError, UnicodeEncodeError,
                ValueError, UnsupportedWidth) as e:
            # binascii.Error and unknown-hash errors are both ValueErrors
            raise MalformedRecord("cannot parse record: %s" % (e,)) from e

        if len(identity_hash) != params.digest_size:
            raise MalformedRecord("identity hash has the wrong length")
        if len(salt) != params.element_size_bytes:
            raise MalformedRecord("salt has the wrong length")
        if len(v_bytes) != params.element_size_bytes:
            raise MalformedRecord("verifier has the wrong length")
        v = bytes_to_number(v_bytes)
        if not 0 < v < params.N:
            raise MalformedRecord("verifier is not an element of the group")
        return klass(params, identity_hash, salt, v)

    def __eq__(self, other):
        if not isinstance(other, VerifierRecord):
            return NotImplemented
        return (self.params == other.params
                and self.identity_hash == other.identity_hash
                and self.salt == other.salt
                and self.v == other.v)

    def __hash__(self):
        return hash((self.params, self.identity_hash, self.salt, self.v))

    def __repr__(self):
        return "<VerifierRecord %s %r>" % (_hex(self.identity_hash)[:16],
                                          self.params)


def build_verifier(identity, passphrase, params=DefaultParams,
                   entropy_f=os.urandom):
    """Derive the record to store for a new account. Every call draws a
    fresh salt, so building twice gives two unrelated verifiers."""
    identity_hash = hash_identity(params, identity)
    salt = get_entropy(entropy_f, params.element_size_bytes)
    t = password_key(params, identity_hash, passphrase)
    try:
        x = private_key(params, salt, t)
        v = pow(params.g, x, params.N)
    finally:
        wipe(t)
        x = None
    _LOGGER.debug("built verifier for %s with %r",
                  _hex(identity_hash)[:16], params)
    return VerifierRecord(params, identity_hash, salt, v)
