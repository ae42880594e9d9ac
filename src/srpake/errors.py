class SRPError(Exception):
    pass

class UnsupportedWidth(SRPError):
    """There is no built-in group for the requested modulus size."""
class GenerationTimeout(SRPError):
    """No safe prime was found within the allowed number of candidates."""
class RandomSourceFailure(SRPError):
    """The entropy function failed, or returned something other than the
    requested number of random bytes."""
class MalformedRecord(SRPError):
    """An encoded verifier record could not be parsed, or was made with
    different parameters than the ones supplied."""
class WrongState(SRPError):
    """A session method was called out of order, or after the session
    finished. Sessions are single-use: start a new one to retry."""
class NotFound(SRPError):
    """The store holds no verifier for this identity hash."""

class SessionAborted(SRPError):
    """Base class for every failure a remote peer can cause. Report all of
    these to the peer the same way (or not at all)."""
class MalformedMessage(SessionAborted):
    """A protocol message had the wrong length for these parameters, or
    carried a public value that was not reduced modulo N."""
class DegeneratePeerValue(SessionAborted):
    """The peer's public value, or the scrambler derived from it, is zero
    modulo N."""
class ClientAuthenticationFailed(SessionAborted):
    """The client's proof did not match: it does not know the password."""
class ServerAuthenticationFailed(SessionAborted):
    """The server's proof did not match: it does not hold our verifier."""
