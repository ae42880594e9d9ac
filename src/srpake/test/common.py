from hashlib import sha256
from itertools import count
from srpake.params import generate

class PRG:
    # this returns a callable which, when invoked with an integer N, will
    # return N pseudorandom bytes derived from the seed
    def __init__(self, seed):
        self.generator = self.block_generator(seed)

    def __call__(self, numbytes):
        return b"".join([next(self.generator) for i in range(numbytes)])

    def block_generator(self, seed):
        assert isinstance(seed, bytes)
        for counter in count():
            cseed = b"".join([b"prng-",
                              str(counter).encode("ascii"),
                              b"-",
                              seed])
            block = sha256(cseed).digest()
            for i in range(len(block)):
                yield block[i:i+1]

def zeros(numbytes):
    return b"\x00" * numbytes

_small_params = []

def small_params():
    # a freshly generated 256-bit group, shared by the tests that want
    # something quicker than the built-in ones
    if not _small_params:
        _small_params.append(generate(256, max_attempts=1000000,
                                      entropy_f=PRG(b"small group")))
    return _small_params[0]
