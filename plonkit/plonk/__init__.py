"""
PLONK 엔진
==========

bn128 위의 PLONK (KZG 커밋먼트, 5-라운드 Prover, 페어링 기반 Verifier).

  field → polynomial → kzg / srs → circuit → preprocessor → prover / verifier
"""
