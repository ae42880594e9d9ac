import os
from .const import _LOGGER
from .errors import (WrongState, MalformedMessage, DegeneratePeerValue,
                     ClientAuthenticationFailed, ServerAuthenticationFailed)
from .params import Params, DefaultParams
from .transcript import transcript_hash, transcript_number
from .util import (unbiased_randrange, number_to_bytes, bytes_to_number,
                   constant_time_equal, wipe)
from .verifier import (VerifierRecord, hash_identity, password_key,
                       private_key)

# Client                                     Server
#  Ih = H(I), a = random, A = g^a
#                  ----- Ih, A ----->
#                                             (s, v) = lookup(Ih)
#                                             abort if A%N == 0
#                                             b = random, B = kv + g^b
#                  <----- s, B ------
#  abort if B%N == 0
#  u = H(A, B), abort if u == 0
#  x = H(s, H(Ih ":" H(p)))
#  S = (B - kg^x)^(a + ux)
#  K = H(S)
#  M = H(K, A, B, Ih, s, N, g)
#                  ------- M ------->
#                                             u = H(A, B)
#                                             S = (Av^u)^b
#                                             K = H(S)
#                                             abort unless M == H(K,A,B,Ih,s,N,g)
#                                             Z = H(M, K)
#                  <------ Z --------
#  abort unless Z == H(M, K)
#
# Both sides end up with S = g^(b(a+ux)) and hence the same K. The server
# must check M before it computes Z, otherwise anyone could send garbage
# for M and collect a valid Z to test password guesses against offline.

INIT = "init"
CREDENTIALS_READY = "credentials-ready"
AWAITING_SERVER_REPLY = "awaiting-server-reply"
AWAITING_CLIENT_PROOF = "awaiting-client-proof"
PROOF_SENT = "proof-sent"
AUTHENTICATED = "authenticated"
ABORTED = "aborted"

def split_credentials(params, msg):
    """Client credentials message -> (identity_hash, A_bytes)."""
    n = params.digest_size
    if len(msg) != n + params.element_size_bytes:
        raise MalformedMessage("credentials message should be %d bytes, "
                               "got %d" % (n + params.element_size_bytes,
                                           len(msg)))
    return bytes(msg[:n]), bytes(msg[n:])

def split_challenge(params, msg):
    """Server credentials message -> (salt, B_bytes)."""
    n = params.element_size_bytes
    if len(msg) != 2 * n:
        raise MalformedMessage("challenge message should be %d bytes, "
                               "got %d" % (2 * n, len(msg)))
    return bytes(msg[:n]), bytes(msg[n:])

def _public_value(params, X_bytes, name):
    if len(X_bytes) != params.element_size_bytes:
        raise MalformedMessage("%s should be %d bytes"
                               % (name, params.element_size_bytes))
    X = bytes_to_number(X_bytes)
    if not params.group.is_valid_public(X):
        raise DegeneratePeerValue("%s is zero modulo N" % name)
    if X >= params.N:
        raise MalformedMessage("%s is not reduced modulo N" % name)
    return X


class _SRPSession:
    "This class manages one side of a single SRP authentication attempt."

    side = None # set by the subclass

    def __init__(self, params, entropy_f):
        assert isinstance(params, Params), repr(params)
        self.params = params
        self.entropy_f = entropy_f
        self.state = INIT
        self.failure = None
        self._key = None

    @property
    def authenticated(self):
        return self.state == AUTHENTICATED

    @property
    def key(self):
        """The raw shared secret K. Only available once the peer has been
        authenticated. Derive traffic keys from it (see finalize.py) rather
        than using it directly."""
        if self.state != AUTHENTICATED:
            raise WrongState("no key: %s session is %s"
                             % (self.side, self.state))
        return bytes(self._key)

    def _expect(self, state):
        if self.state != state:
            raise WrongState("%s session is %s, expected %s"
                             % (self.side, self.state, state))

    def _transition(self, state):
        _LOGGER.debug("%s session: %s -> %s", self.side, self.state, state)
        self.state = state

    def _fail(self, err):
        self._wipe()
        if self._key is not None:
            wipe(self._key)
            self._key = None
        self.failure = err
        _LOGGER.debug("%s session aborted: %s", self.side,
                      type(err).__name__)
        self._transition(ABORTED)

    def _random_exponent(self):
        return unbiased_randrange(1, self.params.N, self.entropy_f)

    def _scrambler(self, A, B):
        return transcript_number(self.params, A, B)

    def _session_key(self, S):
        return transcript_hash(self.params, S)

    def _client_proof(self, K, A, B, identity_hash, salt):
        p = self.params
        return transcript_hash(p, K, A, B, identity_hash, salt, p.N, p.g)

    def _server_proof(self, M, K):
        return transcript_hash(self.params, M, K)


class SRPClient(_SRPSession):
    side = "client"

    def __init__(self, identity, passphrase,
                 params=DefaultParams, entropy_f=os.urandom):
        _SRPSession.__init__(self, params, entropy_f)
        self.identity_hash = hash_identity(params, identity)
        # the passphrase itself is not kept, only t = H(Ih ":" H(p))
        self._t = password_key(params, self.identity_hash, passphrase)
        self._a = None
        self.A = None
        self._expected_Z = None

    def start(self):
        """Return the credentials message (Ih, A) for the server."""
        self._expect(INIT)
        p = self.params
        try:
            self._a = self._random_exponent()
            self.A = pow(p.g, self._a, p.N)
            self._transition(CREDENTIALS_READY)
            msg = self.identity_hash + number_to_bytes(self.A, p.N)
        except Exception as e:
            self._fail(e)
            raise
        self._transition(AWAITING_SERVER_REPLY)
        return msg

    def process_challenge(self, challenge):
        """Consume the server's (salt, B) and return our proof M."""
        self._expect(AWAITING_SERVER_REPLY)
        try:
            M = self._process_challenge(challenge)
        except Exception as e:
            self._fail(e)
            raise
        self._transition(PROOF_SENT)
        return M

    def _process_challenge(self, challenge):
        p = self.params
        salt, B_bytes = split_challenge(p, challenge)
        B = _public_value(p, B_bytes, "B")
        u = self._scrambler(self.A, B)
        if u == 0:
            raise DegeneratePeerValue("u is zero")

        x = private_key(p, salt, self._t)
        wipe(self._t)
        base = (B - p.k * pow(p.g, x, p.N)) % p.N
        S = pow(base, self._a + u * x, p.N)
        self._a = x = None
        K = self._session_key(S)
        S = None

        M = self._client_proof(K, self.A, B, self.identity_hash, salt)
        self._expected_Z = self._server_proof(M, K)
        self._key = bytearray(K)
        return M

    def verify_server(self, Z):
        """Check the server's proof Z. Returns the raw key on success,
        raises ServerAuthenticationFailed otherwise."""
        self._expect(PROOF_SENT)
        try:
            if not constant_time_equal(Z, self._expected_Z):
                raise ServerAuthenticationFailed("server proof does not match")
        except Exception as e:
            self._fail(e)
            raise
        self._expected_Z = None
        self._transition(AUTHENTICATED)
        return self.key

    def _wipe(self):
        wipe(self._t)
        self._a = None
        self._expected_Z = None


class SRPServer(_SRPSession):
    side = "server"

    def __init__(self, record, params=None, entropy_f=os.urandom):
        assert isinstance(record, VerifierRecord), repr(record)
        if params is None:
            params = record.params
        elif params != record.params:
            raise ValueError("record was made with %r, not %r"
                             % (record.params, params))
        _SRPSession.__init__(self, params, entropy_f)
        self.record = record
        self.identity_hash = record.identity_hash
        self._b = None
        self.A = None
        self.B = None

    def start(self, A_bytes):
        """Consume the client's A and return the challenge (salt, B)."""
        self._expect(INIT)
        p = self.params
        try:
            self.A = _public_value(p, A_bytes, "A")
            self._b = self._random_exponent()
            self.B = (p.k * self.record.v + pow(p.g, self._b, p.N)) % p.N
            self._transition(CREDENTIALS_READY)
            msg = self.record.salt + number_to_bytes(self.B, p.N)
        except Exception as e:
            self._fail(e)
            raise
        self._transition(AWAITING_CLIENT_PROOF)
        return msg

    def verify_client(self, M):
        """Check the client's proof M. Returns our proof Z on success. On
        failure raises ClientAuthenticationFailed and Z is never
        computed."""
        self._expect(AWAITING_CLIENT_PROOF)
        try:
            Z = self._verify_client(M)
        except Exception as e:
            self._fail(e)
            raise
        self._transition(AUTHENTICATED)
        return Z

    def _verify_client(self, M):
        p = self.params
        u = self._scrambler(self.A, self.B)
        if u == 0:
            raise DegeneratePeerValue("u is zero")
        S = pow(self.A * pow(self.record.v, u, p.N) % p.N, self._b, p.N)
        self._b = None
        K = self._session_key(S)
        S = None

        expected_M = self._client_proof(K, self.A, self.B,
                                        self.identity_hash, self.record.salt)
        if not constant_time_equal(M, expected_M):
            raise ClientAuthenticationFailed("client proof does not match")
        Z = self._server_proof(expected_M, K)
        self._key = bytearray(K)
        return Z

    def _wipe(self):
        self._b = None
