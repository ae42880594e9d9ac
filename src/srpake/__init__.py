from .srp import SRPClient, SRPServer, split_credentials, split_challenge
from .errors import (SRPError, SessionAborted, DegeneratePeerValue,
                     ClientAuthenticationFailed, ServerAuthenticationFailed,
                     UnsupportedWidth, GenerationTimeout, RandomSourceFailure,
                     MalformedRecord, MalformedMessage, WrongState, NotFound)
from .params import (Params, Params1536, Params2048, Params3072,
                     DefaultParams, lookup, generate)
from .verifier import VerifierRecord, build_verifier
from .store import VerifierStore, open_server_session
from .finalize import derive_key
_hush_pyflakes = [SRPClient, SRPServer, split_credentials, split_challenge,
                  SRPError, SessionAborted, DegeneratePeerValue,
                  ClientAuthenticationFailed, ServerAuthenticationFailed,
                  UnsupportedWidth, GenerationTimeout, RandomSourceFailure,
                  MalformedRecord, MalformedMessage, WrongState, NotFound,
                  Params, Params1536, Params2048, Params3072, DefaultParams,
                  lookup, generate, VerifierRecord, build_verifier,
                  VerifierStore, open_server_session, derive_key]
del _hush_pyflakes

__version__ = "0.1.0"
