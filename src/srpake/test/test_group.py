import unittest
from srpake import groups, primes, params
from srpake.errors import UnsupportedWidth, GenerationTimeout
from .common import PRG, zeros, small_params

ALL_GROUPS = [groups.I1536, groups.I2048, groups.I3072]
ALL_PARAMS = [params.Params1536, params.Params2048, params.Params3072]

class Group(unittest.TestCase):
    def test_builtin_safe_primes(self):
        for g in ALL_GROUPS:
            self.assertTrue(g.check_safe_prime(), g)
            self.assertEqual(g.N, 2 * g.q + 1)

    def test_builtin_generators(self):
        for g in ALL_GROUPS:
            self.assertTrue(1 < g.g < g.N - 1)
            self.assertIn(pow(g.g, g.q, g.N), (1, g.N - 1))
            order = g.generator_order()
            self.assertEqual(pow(g.g, order, g.N), 1)

    def test_generator_orders(self):
        # N = 7 (mod 8) makes 2 a quadratic residue, N = 3 (mod 8) doesn't
        self.assertEqual(groups.I1536.generator_order(), groups.I1536.q)
        self.assertEqual(groups.I2048.generator_order(), 2 * groups.I2048.q)

    def test_sizes(self):
        self.assertEqual([g.bits for g in ALL_GROUPS], [1536, 2048, 3072])
        self.assertEqual([g.element_size_bytes for g in ALL_GROUPS],
                         [192, 256, 384])
        self.assertEqual(sorted(groups.BUILTIN_GROUPS), [1536, 2048, 3072])

    def test_table_is_read_only(self):
        def mutate():
            groups.BUILTIN_GROUPS[1024] = groups.I1536
        self.assertRaises(TypeError, mutate)

    def test_bad_groups(self):
        self.assertRaises(ValueError, groups.SRPGroup, 24, 5)
        self.assertRaises(ValueError, groups.SRPGroup, 23, 1)
        self.assertRaises(ValueError, groups.SRPGroup, 23, 22)
        # 15 = 2*7+1 but 15 is not prime, and 2^7 is neither 1 nor -1
        self.assertRaises(ValueError, groups.SRPGroup, 15, 2)

    def test_tiny(self):
        g = groups.SRPGroup(23, 2)
        self.assertEqual(g.q, 11)
        self.assertEqual(g.generator_order(), 11)
        self.assertEqual(groups.SRPGroup(23, 5).generator_order(), 22)
        self.assertTrue(g.check_safe_prime())
        self.assertTrue(g.is_valid_public(5))
        self.assertFalse(g.is_valid_public(0))
        self.assertFalse(g.is_valid_public(46))

    def test_equality(self):
        self.assertEqual(groups.SRPGroup(23, 2), groups.SRPGroup(23, 2))
        self.assertNotEqual(groups.SRPGroup(23, 2), groups.SRPGroup(23, 3))

class Primes(unittest.TestCase):
    def test_is_safe_prime(self):
        self.assertTrue(primes.is_safe_prime(7))
        self.assertTrue(primes.is_safe_prime(23))
        self.assertTrue(primes.is_safe_prime(2039))
        self.assertFalse(primes.is_safe_prime(13)) # 6 is not prime
        self.assertFalse(primes.is_safe_prime(21))
        self.assertFalse(primes.is_safe_prime(22))

    def test_generate(self):
        N = primes.generate_safe_prime(64, entropy_f=PRG(b"64"))
        self.assertEqual(N.bit_length(), 64)
        self.assertEqual(N % 8, 7)
        self.assertTrue(primes.is_safe_prime(N))

    def test_fresh_candidates(self):
        N1 = primes.generate_safe_prime(64, entropy_f=PRG(b"one"))
        N2 = primes.generate_safe_prime(64, entropy_f=PRG(b"two"))
        self.assertNotEqual(N1, N2)

    def test_timeout(self):
        # with no entropy every candidate is q = 2^62+3, and 3 divides 2q+1
        self.assertTrue(primes.sieve_rejects(2**62 + 3))
        self.assertRaises(GenerationTimeout, primes.generate_safe_prime, 64,
                          max_attempts=10, entropy_f=zeros)

    def test_default_budget(self):
        # a 2047-bit q gives a safe prime about once per 760,000 tries
        self.assertGreater(primes.default_max_attempts(2048), 10 * 760000)
        self.assertGreater(primes.default_max_attempts(3072),
                           10 * 760000 * (3072 / 2048) ** 2)
        self.assertLess(primes.default_max_attempts(64),
                        primes.default_max_attempts(2048))

    def test_too_small(self):
        self.assertRaises(ValueError, primes.generate_safe_prime, 32)

    def test_find_generator(self):
        self.assertEqual(primes.find_generator(23), 2)
        self.assertEqual(primes.find_generator(11), 3)
        self.assertRaises(ValueError, primes.find_generator, 3)

class Parameters(unittest.TestCase):
    def test_lookup(self):
        for p in ALL_PARAMS:
            self.assertIs(params.lookup(p.bits), p)
        self.assertIs(params.DefaultParams, params.Params2048)

    def test_lookup_other_hash(self):
        p = params.lookup(2048, "sha256")
        self.assertEqual(p.hash_name, "sha256")
        self.assertEqual(p.group, groups.I2048)
        self.assertNotEqual(p, params.Params2048)
        self.assertEqual(p, params.lookup(2048, "sha256"))

    def test_unsupported(self):
        self.assertRaises(UnsupportedWidth, params.lookup, 1024)
        self.assertRaises(UnsupportedWidth, params.lookup, 2047)

    def test_generate(self):
        p = small_params()
        self.assertEqual(p.bits, 256)
        self.assertEqual(p.element_size_bytes, 32)
        self.assertTrue(p.validate())
        self.assertEqual(p.group.generator_order(), p.group.q)
        self.assertTrue(0 <= p.k < p.N)

    def test_generate_default_budget(self):
        # no max_attempts: the default must be enough for real widths
        p = params.generate(1024)
        self.assertEqual(p.bits, 1024)
        self.assertEqual(p.N % 8, 7)
        self.assertTrue(p.validate())
        self.assertEqual(p.g, 2)

    def test_generate_timeout(self):
        self.assertRaises(GenerationTimeout, params.generate, 128,
                          max_attempts=5, entropy_f=zeros)

    def test_fingerprint(self):
        fps = set(p.fingerprint() for p in ALL_PARAMS)
        self.assertEqual(len(fps), 3)
        self.assertEqual(params.Params2048.fingerprint(),
                         params.Params(groups.I2048).fingerprint())

    def test_validate_rejects(self):
        # 2^11 = 1 (mod 2047) passes the cheap check, but 2047 = 23*89
        bad = params.Params(groups.SRPGroup(2047, 2))
        self.assertRaises(ValueError, bad.validate)

if __name__ == '__main__':
    unittest.main()
