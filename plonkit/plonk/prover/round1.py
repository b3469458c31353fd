"""
PLONK Prover Round 1: 배선(Witness) 다항식 커밋먼트
=====================================================

  ┌─────────────────────────────────────────────────┐
  │  Prover → Verifier: [a]₁, [b]₁, [c]₁          │
  │                                                 │
  │  입력:  배선 값 (a, b, c), 공개 입력, SRS       │
  │  출력:  3개의 KZG 커밋먼트                       │
  └─────────────────────────────────────────────────┘

**과정**:
  1. 공개 입력 다항식 PI(x) 구성 (행 i에서 -xᵢ) + 트랜스크립트에 공개 입력 추가
  2. witness 벡터(a, b, c)를 IFFT로 다항식으로 보간
  3. 블라인딩: a'(x) = a(x) + (b₁ + b₂·x)·Z_H(x)
     Z_H(ωⁱ) = 0 이므로 도메인 위의 값은 변하지 않는다.
  4. KZG 커밋: [a']₁ = [a]₁ + [(b₁ + b₂·x)·Z_H]₁
     - Lagrange SRS가 있으면 [a]₁ = Σ aᵢ·[Lᵢ(τ)]₁ 로 평가값에서 바로 계산
     - 없으면 단항식 SRS로 a'(x) 전체를 커밋
"""

from plonkit.plonk.field import ec_add
from plonkit.plonk.polynomial import Polynomial
from plonkit.plonk.kzg import commit, commit_lagrange
from plonkit.plonk.utils import public_input_polynomial


def execute(state):
    n = state.n
    omega = state.omega

    # ── 1. 공개 입력 ──
    state.pi_poly = public_input_polynomial(state.public_inputs, n, omega)
    for x in state.public_inputs:
        state.transcript.append_scalar(b"public_input", x)

    # ── 2~4. 배선 다항식 + 블라인딩 + 커밋 ──
    zh = Polynomial.vanishing(n)
    state.a_poly, state.proof.a_comm = _blind_and_commit(state, state.a_vals, zh)
    state.b_poly, state.proof.b_comm = _blind_and_commit(state, state.b_vals, zh)
    state.c_poly, state.proof.c_comm = _blind_and_commit(state, state.c_vals, zh)

    # ── 5. 트랜스크립트에 커밋먼트 추가 ──
    state.transcript.append_point(b"a_comm", state.proof.a_comm)
    state.transcript.append_point(b"b_comm", state.proof.b_comm)
    state.transcript.append_point(b"c_comm", state.proof.c_comm)


def _blind_and_commit(state, evals, zh):
    """평가값을 보간하고 블라인딩한 다항식과 그 커밋먼트를 반환한다."""
    poly = Polynomial.from_evaluations(evals, state.omega)
    blinding = Polynomial([state.random_scalar(), state.random_scalar()]) * zh

    if state.lagrange_srs is not None:
        comm = ec_add(commit_lagrange(evals, state.lagrange_srs), commit(blinding, state.srs))
    else:
        comm = commit(poly + blinding, state.srs)
    return poly + blinding, comm
