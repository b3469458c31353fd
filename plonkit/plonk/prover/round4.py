"""
PLONK Prover Round 4: 다항식 평가값 산출
==========================================

  ┌─────────────────────────────────────────────────┐
  │  Verifier → Prover: ζ  (Fiat-Shamir)           │
  │  Prover → Verifier: ā, b̄, c̄, s̄_σ1, s̄_σ2, z̄_ω │
  └─────────────────────────────────────────────────┘

z(ζ)는 Round 5의 선형화에서 커밋먼트로 처리되고,
순열 제약의 z(ω·x) 항 때문에 z(ζ·ω)만 스칼라로 공개한다.
"""

EVALUATED = ("a_eval", "b_eval", "c_eval", "s_sigma1_eval", "s_sigma2_eval", "z_omega_eval")


def execute(state):
    state.zeta = state.transcript.challenge_scalar(b"zeta")
    zeta = state.zeta
    pp = state.preprocessed
    proof = state.proof

    proof.a_eval = state.a_poly.evaluate(zeta)
    proof.b_eval = state.b_poly.evaluate(zeta)
    proof.c_eval = state.c_poly.evaluate(zeta)
    proof.s_sigma1_eval = pp.s_sigma1_poly.evaluate(zeta)
    proof.s_sigma2_eval = pp.s_sigma2_poly.evaluate(zeta)
    proof.z_omega_eval = state.z_poly.evaluate(zeta * state.omega)

    for name in EVALUATED:
        state.transcript.append_scalar(name.encode(), getattr(proof, name))
