import unittest
import hashlib
from srpake import transcript
from srpake.groups import I2048
from srpake.params import Params, Params2048, Params1536

class Encoding(unittest.TestCase):
    def test_padding(self):
        N = Params2048.N
        self.assertEqual(transcript.encode_value(N, 2), b"\x00"*255 + b"\x02")
        self.assertEqual(len(transcript.encode_value(N, N)), 256)
        self.assertEqual(transcript.encode_value(N, b"raw"), b"raw")
        self.assertEqual(transcript.encode_value(N, bytearray(b"ba")), b"ba")

    def test_rejects(self):
        N = Params2048.N
        self.assertRaises(ValueError, transcript.encode_value, N, N+1)
        self.assertRaises(ValueError, transcript.encode_value, N, -1)
        self.assertRaises(TypeError, transcript.encode_value, N, "text")

class Hashing(unittest.TestCase):
    def test_default_is_blake2b(self):
        p = Params2048
        expected = hashlib.blake2b(b"\x00"*255 + b"\x02" + b"abc",
                                   digest_size=32).digest()
        self.assertEqual(transcript.transcript_hash(p, 2, b"abc"), expected)
        self.assertEqual(len(expected), p.digest_size)

    def test_k(self):
        p = Params2048
        h = hashlib.blake2b(digest_size=32)
        h.update(p.N.to_bytes(256, "big"))
        h.update(p.g.to_bytes(256, "big"))
        self.assertEqual(p.k, int.from_bytes(h.digest(), "big"))

    def test_k_deterministic(self):
        for hash_name in transcript.HASHES:
            k1 = Params(I2048, hash_name).k
            k2 = Params(I2048, hash_name).k
            self.assertEqual(k1, k2)

    def test_hash_choice_matters(self):
        self.assertNotEqual(Params(I2048, "sha256").k,
                            Params(I2048, "sha3-256").k)
        p = Params(I2048, "sha512")
        self.assertEqual(p.digest_size, 64)
        self.assertEqual(len(transcript.transcript_hash(p, b"")), 64)

    def test_width_matters(self):
        # the same integer pads differently in different groups
        self.assertNotEqual(transcript.transcript_hash(Params2048, 5),
                            transcript.transcript_hash(Params1536, 5))

    def test_number(self):
        p = Params2048
        d = transcript.transcript_hash(p, b"x")
        self.assertEqual(transcript.transcript_number(p, b"x"),
                         int.from_bytes(d, "big"))

    def test_unknown_hash(self):
        self.assertRaises(ValueError, transcript.get_hash, "md5")
        self.assertRaises(ValueError, Params, I2048, "md5")

if __name__ == '__main__':
    unittest.main()
