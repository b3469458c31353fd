"""
plonkit
=======

circom 회로의 영지식 증명 아티팩트를 다루는 명령행 도구.

  Groth16: setup → generate-verifier / export-keys
  Plonk:   generate-srs → export-verification-key → (dump-lagrange) → prove → verify
"""

__version__ = "0.1.0"
