#!/usr/bin/env python

import timeit
from setuptools import setup, Command

cmdclass = {}

class Speed(Command):
    description = "run speed benchmarks"
    user_options = []
    boolean_options = []
    def initialize_options(self):
        pass
    def finalize_options(self):
        pass
    def run(self):
        def do(setup_statements, statement):
            # extracted from timeit.py
            t = timeit.Timer(stmt=statement,
                             setup="\n".join(setup_statements))
            # determine number so that 0.2 <= total time < 2.0
            for i in range(0, 10):
                number = 10**i
                x = t.timeit(number)
                if x >= 0.2:
                    break
            return x / number

        def abbrev(t):
            if t > 1.0:
                return "%.3fs" % t
            if t > 1e-3:
                return "%.1fms" % (t*1e3)
            return "%.1fus" % (t*1e6)

        for params in ["Params1536", "Params2048", "Params3072"]:
            S1 = ("from srpake import SRPClient, SRPServer, build_verifier, "
                  "split_credentials, %s" % params)
            S2 = "r = build_verifier(b'alice', b'password', params=%s)" % params
            S3 = "c = SRPClient(b'alice', b'password', params=%s)" % params
            S4 = "s = SRPServer(r)"
            S5 = "A = split_credentials(c.params, c.start())[1]"
            S6 = "M = c.process_challenge(s.start(A))"
            S7 = "c.verify_server(s.verify_client(M))"

            full = do([S1, S2], ";".join([S3, S4, S5, S6, S7]))
            verifier = do([S1], S2)
            from srpake import params as all_params
            from srpake import SRPClient
            p = getattr(all_params, params)
            msglen = len(SRPClient(b"alice", b"pw", params=p).start())
            print("%-10s: msglen=%3d, full=%6s, verifier=%6s"
                  % (params, msglen, abbrev(full), abbrev(verifier)))
cmdclass["speed"] = Speed

setup(name="srpake",
      version="0.1.0",
      description="SRP-6a password-authenticated key exchange (pure python)",
      package_dir={"": "src"},
      packages=["srpake", "srpake.test"],
      license="MIT",
      cmdclass=cmdclass,
      classifiers=[
          "Intended Audience :: Developers",
          "License :: OSI Approved :: MIT License",
          "Programming Language :: Python",
          "Programming Language :: Python :: 3",
          "Topic :: Security :: Cryptography",
          ],
      python_requires=">=3.6",
      install_requires=["hkdf", "sympy"],
      extras_require={"test": ["pytest"]},
      )
