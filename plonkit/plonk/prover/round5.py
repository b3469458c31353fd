"""
PLONK Prover Round 5: 선형화 + KZG 열기 증명
===============================================

  ┌─────────────────────────────────────────────────┐
  │  Verifier → Prover: v  (Fiat-Shamir)           │
  │  Prover → Verifier: r̄, [W_ζ]₁, [W_ζω]₁        │
  └─────────────────────────────────────────────────┘

**선형화 트릭(Linearization Trick)**:
  Round 4에서 평가한 값으로 다항식의 곱을 "스칼라 × 다항식"으로 바꿔,
  Verifier가 커밋먼트만으로 r(x)의 커밋먼트를 계산할 수 있게 한다.
  r(ζ) = C(ζ) = t(ζ)·Z_H(ζ)

  게이트: q_M(x)·ā·b̄ + q_L(x)·ā + q_R(x)·b̄ + q_O(x)·c̄ + q_C(x) + PI(ζ)
  순열:   α·(ā+βζ+γ)(b̄+βK1ζ+γ)(c̄+βK2ζ+γ)·z(x)
        - α·(ā+βs̄1+γ)(b̄+βs̄2+γ)·β·z̄ω·S_σ3(x)
        - α·(ā+βs̄1+γ)(b̄+βs̄2+γ)·(c̄+γ)·z̄ω
  경계:   α²·L₁(ζ)·z(x) - α²·L₁(ζ)

**열기 증명**:
  W_ζ(x) = ([t_comb - t̄] + v[r - r̄] + v²[a - ā] + v³[b - b̄]
            + v⁴[c - c̄] + v⁵[S_σ1 - s̄_σ1] + v⁶[S_σ2 - s̄_σ2]) / (x - ζ)
  W_ζω(x) = (z(x) - z̄_ω) / (x - ζω)
"""

from plonkit.plonk.field import FR
from plonkit.plonk.polynomial import Polynomial, poly_div
from plonkit.plonk.kzg import commit
from plonkit.plonk.permutation import K1, K2
from plonkit.plonk.utils import lagrange_basis_eval


def execute(state):
    state.v = state.transcript.challenge_scalar(b"v")
    v = state.v

    n = state.n
    zeta = state.zeta
    alpha = state.alpha
    beta = state.beta
    gamma = state.gamma
    pp = state.preprocessed
    proof = state.proof

    a_eval = proof.a_eval
    b_eval = proof.b_eval
    c_eval = proof.c_eval
    z_omega_eval = proof.z_omega_eval

    pi_zeta = state.pi_poly.evaluate(zeta)
    l1_zeta = lagrange_basis_eval(0, n, state.omega, zeta)

    # ── 1. 선형화 다항식 r(x) ──
    r_poly = (
        pp.q_m_poly * (a_eval * b_eval)
        + pp.q_l_poly * a_eval
        + pp.q_r_poly * b_eval
        + pp.q_o_poly * c_eval
        + pp.q_c_poly
        + Polynomial([pi_zeta])
    )

    perm_z_scalar = (
        alpha
        * (a_eval + beta * zeta + gamma)
        * (b_eval + beta * K1 * zeta + gamma)
        * (c_eval + beta * K2 * zeta + gamma)
    )
    ab_factor = (
        (a_eval + beta * proof.s_sigma1_eval + gamma)
        * (b_eval + beta * proof.s_sigma2_eval + gamma)
    )
    perm_s3_scalar = alpha * ab_factor * beta * z_omega_eval
    perm_const = FR(0) - alpha * ab_factor * z_omega_eval * (c_eval + gamma)

    r_poly = r_poly + state.z_poly * perm_z_scalar
    r_poly = r_poly - pp.s_sigma3_poly * perm_s3_scalar
    r_poly = r_poly + Polynomial([perm_const])
    r_poly = r_poly + state.z_poly * (alpha * alpha * l1_zeta)
    r_poly = r_poly + Polynomial([FR(0) - alpha * alpha * l1_zeta])

    proof.r_eval = r_poly.evaluate(zeta)

    # ── 2. t(x) 결합: t_lo + ζⁿ·t_mid + ζ²ⁿ·t_hi ──
    zeta_n = zeta ** n
    zeta_2n = zeta_n * zeta_n
    t_combined = (
        state.t_lo_poly
        + state.t_mid_poly * zeta_n
        + state.t_hi_poly * zeta_2n
    )
    t_eval = t_combined.evaluate(zeta)

    # ── 3. W_ζ(x) ──
    opened = [
        (t_combined, t_eval),
        (r_poly, proof.r_eval),
        (state.a_poly, a_eval),
        (state.b_poly, b_eval),
        (state.c_poly, c_eval),
        (pp.s_sigma1_poly, proof.s_sigma1_eval),
        (pp.s_sigma2_poly, proof.s_sigma2_eval),
    ]
    numerator = Polynomial.zero()
    v_power = FR(1)
    for poly, value in opened:
        numerator = numerator + (poly - Polynomial([value])) * v_power
        v_power = v_power * v

    W_zeta_poly, _ = poly_div(numerator, Polynomial([FR(0) - zeta, FR(1)]))

    # ── 4. W_ζω(x) ──
    W_zeta_omega_poly, _ = poly_div(
        state.z_poly - Polynomial([z_omega_eval]),
        Polynomial([FR(0) - zeta * state.omega, FR(1)]),
    )

    proof.W_zeta_comm = commit(W_zeta_poly, state.srs)
    proof.W_zeta_omega_comm = commit(W_zeta_omega_poly, state.srs)
