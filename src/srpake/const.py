import logging

_LOGGER = logging.getLogger(__package__)

DEFAULT_HASH = "blake2b-256"

# bumped whenever VerifierRecord.encode() changes shape
RECORD_VERSION = 1

# A random q yields a safe prime about once every bits**2 / 5.5 candidates,
# so the default search budget is ATTEMPTS_PER_BIT_SQUARED * bits**2. At 4
# that leaves roughly e^-22 odds of a GenerationTimeout at any width.
ATTEMPTS_PER_BIT_SQUARED = 4
MIN_GENERATED_BITS = 64
