"""
PLONK Prover Round 2: 순열 누적자 z(x) 커밋먼트
=================================================

  ┌─────────────────────────────────────────────────┐
  │  Verifier → Prover: β, γ  (Fiat-Shamir)       │
  │  Prover → Verifier: [z]₁                       │
  └─────────────────────────────────────────────────┘

  z(ω⁰) = 1
  z(ω^{i+1}) = z(ωⁱ) ·
      (aᵢ + β·ωⁱ + γ)(bᵢ + β·K1·ωⁱ + γ)(cᵢ + β·K2·ωⁱ + γ)
      ─────────────────────────────────────────────────────────
      (aᵢ + β·S_σ1(ωⁱ) + γ)(bᵢ + β·S_σ2(ωⁱ) + γ)(cᵢ + β·S_σ3(ωⁱ) + γ)

  순열 σ가 올바르면 분자와 분모의 전체 곱이 같아서 z가 다시 1로 돌아온다.

**블라인딩**:
  z'(x) = z(x) + (b₁ + b₂·x + b₃·x²)·Z_H(x)
  z는 ζ와 ζ·ω 두 점에서 열리므로 3개의 블라인딩 계수를 쓴다.
"""

from plonkit.plonk.polynomial import Polynomial
from plonkit.plonk.kzg import commit
from plonkit.plonk.permutation import compute_accumulator


def execute(state):
    # ── 1. β, γ 챌린지 ──
    state.beta = state.transcript.challenge_scalar(b"beta")
    state.gamma = state.transcript.challenge_scalar(b"gamma")

    # ── 2. z(ωⁱ) 평가값 ──
    n = state.n
    z_evals = compute_accumulator(
        state.a_vals, state.b_vals, state.c_vals,
        state.preprocessed.sigma, n, state.domain,
        state.beta, state.gamma
    )

    # ── 3. 보간 + 블라인딩 ──
    z_poly = Polynomial.from_evaluations(z_evals, state.omega)
    blind_poly = Polynomial([state.random_scalar() for _ in range(3)])
    state.z_poly = z_poly + blind_poly * Polynomial.vanishing(n)

    # ── 4. KZG 커밋 + 트랜스크립트 업데이트 ──
    state.proof.z_comm = commit(state.z_poly, state.srs)
    state.transcript.append_point(b"z_comm", state.proof.z_comm)
