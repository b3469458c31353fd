"""
PLONK Prover Round 3: 몫 다항식 t(x) 커밋먼트
================================================

  ┌─────────────────────────────────────────────────┐
  │  Verifier → Prover: α  (Fiat-Shamir)           │
  │  Prover → Verifier: [t_lo]₁, [t_mid]₁, [t_hi]₁│
  └─────────────────────────────────────────────────┘

**세 가지 제약 항**:
  Term 1: 게이트 제약:
    q_L(x)·a(x) + q_R(x)·b(x) + q_O(x)·c(x) + q_M(x)·a(x)·b(x) + q_C(x) + PI(x)

  Term 2: 순열 제약 (α 배수):
    α · [
      (a(x) + β·x + γ)(b(x) + β·K1·x + γ)(c(x) + β·K2·x + γ) · z(x)
      - (a(x) + β·S_σ1(x) + γ)(b(x) + β·S_σ2(x) + γ)(c(x) + β·S_σ3(x) + γ) · z(ω·x)
    ]

  Term 3: 경계 제약 (α² 배수):
    α² · (z(x) - 1) · L₁(x)

  t(x) = (Term1 + Term2 + Term3) / Z_H(x)

**t(x) 3-분할**:
  t(x) = t_lo(x) + x^n · t_mid(x) + x^{2n} · t_hi(x)
  블라인딩 때문에 t_hi는 n보다 조금 긴 계수를 가진다.
"""

from plonkit.plonk.field import FR
from plonkit.plonk.polynomial import Polynomial, poly_div, lagrange_basis
from plonkit.plonk.kzg import commit
from plonkit.plonk.permutation import K1, K2


def execute(state):
    state.alpha = state.transcript.challenge_scalar(b"alpha")

    n = state.n
    alpha = state.alpha
    beta = state.beta
    gamma = state.gamma
    pp = state.preprocessed

    a = state.a_poly
    b = state.b_poly
    c = state.c_poly
    z = state.z_poly
    pi = state.pi_poly

    # z(ω·x)
    z_omega = z.shift(state.omega)
    x_poly = Polynomial([FR(0), FR(1)])
    gamma_poly = Polynomial([gamma])
    l1 = lagrange_basis(state.domain, 0)

    # Term 1: 게이트 제약
    term1 = pp.q_l_poly * a + pp.q_r_poly * b + pp.q_o_poly * c + pp.q_m_poly * (a * b) + pp.q_c_poly + pi

    # Term 2: 순열 제약
    perm_num = (
        (a + x_poly * beta + gamma_poly)
        * (b + x_poly * (beta * K1) + gamma_poly)
        * (c + x_poly * (beta * K2) + gamma_poly)
        * z
    )
    perm_den = (
        (a + pp.s_sigma1_poly * beta + gamma_poly)
        * (b + pp.s_sigma2_poly * beta + gamma_poly)
        * (c + pp.s_sigma3_poly * beta + gamma_poly)
        * z_omega
    )
    term2 = (perm_num - perm_den) * alpha

    # Term 3: 경계 제약
    term3 = (z - Polynomial([FR(1)])) * l1 * (alpha * alpha)

    constraint = term1 + term2 + term3

    # ── Z_H(x)로 나누기 ──
    t_poly, remainder = poly_div(constraint, Polynomial.vanishing(n))
    if not remainder.is_zero():
        raise ValueError(
            "constraint polynomial is not divisible by Z_H(x); "
            "the witness does not satisfy the circuit"
        )

    # ── t(x) 3-분할 ──
    t_coeffs = list(t_poly.coeffs)
    while len(t_coeffs) < 3 * n:
        t_coeffs.append(FR(0))

    state.t_lo_poly = Polynomial(t_coeffs[:n])
    state.t_mid_poly = Polynomial(t_coeffs[n:2 * n])
    state.t_hi_poly = Polynomial(t_coeffs[2 * n:])

    # ── KZG 커밋 + 트랜스크립트 업데이트 ──
    state.proof.t_lo_comm = commit(state.t_lo_poly, state.srs)
    state.proof.t_mid_comm = commit(state.t_mid_poly, state.srs)
    state.proof.t_hi_comm = commit(state.t_hi_poly, state.srs)

    state.transcript.append_point(b"t_lo_comm", state.proof.t_lo_comm)
    state.transcript.append_point(b"t_mid_comm", state.proof.t_mid_comm)
    state.transcript.append_point(b"t_hi_comm", state.proof.t_hi_comm)
