"""
PLONK Verifier
================

**검증 과정**:
  0. 구조 검사: 공개 입력 수, 모든 G1 점이 곡선 위에 있는지
  1. Fiat-Shamir 트랜스크립트 재생 → β, γ, α, ζ, v, u 챌린지 복원
  2. Z_H(ζ), L₁(ζ), PI(ζ) 계산
  3. 선형화 커밋먼트 [D]₁ 구성
  4. r₀ 계산 (선형화 다항식의 상수 기여분)
  5. 결합 커밋먼트 [F]₁, [E]₁ 구성
  6. 페어링 검사

**핵심 방정식**:
  commit(r(x)) = [D]₁ + r₀·G₁
  [F]₁ = [t_comb]₁ + v·([D]₁ + r₀·G₁) + v²·[a]₁ + ... + v⁶·[S_σ2]₁
  E = t̄ + v·r̄ + v²·ā + ... + v⁶·s̄_σ2 + u·z̄_ω,   t̄ = r̄ / Z_H(ζ)

  e(W_ζ + u·W_ζω, [τ]₂) == e(ζ·W_ζ + uζω·W_ζω + F + u·[z] - E, G₂)

구조 검사에 실패한 증명(변조된 파일 등)은 예외 없이 False로 판정한다.
"""

import logging

from plonkit.plonk.field import FR, G1, ec_mul, ec_add, ec_neg, ec_pairing, is_on_curve_g1
from plonkit.plonk.transcript import Transcript
from plonkit.plonk.permutation import K1, K2
from plonkit.plonk.prover.round4 import EVALUATED
from plonkit.plonk.utils import vanishing_poly_eval, lagrange_basis_eval, public_input_poly_eval

logger = logging.getLogger(__name__)


def _well_formed(vk, proof):
    if len(proof.public_inputs) != vk.num_public_inputs:
        logger.warning(
            "Proof carries %d public inputs, verification key expects %d",
            len(proof.public_inputs), vk.num_public_inputs,
        )
        return False
    for name in proof.COMMITMENTS:
        if not is_on_curve_g1(getattr(proof, name)):
            logger.warning("Proof point %s is not on the curve", name)
            return False
    return True


def verify(vk, proof):
    """PLONK 증명을 검증한다.

    Args:
        vk: VerificationKey
        proof: Proof (공개 입력 포함)

    Returns:
        bool: 검증 성공 여부
    """
    if not _well_formed(vk, proof):
        return False

    n = vk.n
    omega = vk.omega

    # ── Step 1: Fiat-Shamir 트랜스크립트 재생 ──
    transcript = Transcript()
    for x in proof.public_inputs:
        transcript.append_scalar(b"public_input", x)
    transcript.append_point(b"a_comm", proof.a_comm)
    transcript.append_point(b"b_comm", proof.b_comm)
    transcript.append_point(b"c_comm", proof.c_comm)
    beta = transcript.challenge_scalar(b"beta")
    gamma = transcript.challenge_scalar(b"gamma")

    transcript.append_point(b"z_comm", proof.z_comm)
    alpha = transcript.challenge_scalar(b"alpha")

    transcript.append_point(b"t_lo_comm", proof.t_lo_comm)
    transcript.append_point(b"t_mid_comm", proof.t_mid_comm)
    transcript.append_point(b"t_hi_comm", proof.t_hi_comm)
    zeta = transcript.challenge_scalar(b"zeta")

    for name in EVALUATED:
        transcript.append_scalar(name.encode(), getattr(proof, name))
    v = transcript.challenge_scalar(b"v")

    transcript.append_scalar(b"r_eval", proof.r_eval)
    transcript.append_point(b"W_zeta_comm", proof.W_zeta_comm)
    transcript.append_point(b"W_zeta_omega_comm", proof.W_zeta_omega_comm)
    u = transcript.challenge_scalar(b"u")

    # ── Step 2: 공개 값 계산 ──
    a_eval = proof.a_eval
    b_eval = proof.b_eval
    c_eval = proof.c_eval
    s_sigma1_eval = proof.s_sigma1_eval
    s_sigma2_eval = proof.s_sigma2_eval
    z_omega_eval = proof.z_omega_eval

    zh_zeta = vanishing_poly_eval(n, zeta)
    if zh_zeta == FR(0):
        return False
    l1_zeta = lagrange_basis_eval(0, n, omega, zeta)
    pi_zeta = public_input_poly_eval(proof.public_inputs, n, omega, zeta)

    # ── Step 3: 선형화 커밋먼트 [D]₁ ──
    D = ec_mul(vk.q_m_comm, a_eval * b_eval)
    D = ec_add(D, ec_mul(vk.q_l_comm, a_eval))
    D = ec_add(D, ec_mul(vk.q_r_comm, b_eval))
    D = ec_add(D, ec_mul(vk.q_o_comm, c_eval))
    D = ec_add(D, vk.q_c_comm)

    perm_z_scalar = (
        alpha
        * (a_eval + beta * zeta + gamma)
        * (b_eval + beta * K1 * zeta + gamma)
        * (c_eval + beta * K2 * zeta + gamma)
    )
    D = ec_add(D, ec_mul(proof.z_comm, perm_z_scalar))

    ab_factor = (
        (a_eval + beta * s_sigma1_eval + gamma)
        * (b_eval + beta * s_sigma2_eval + gamma)
    )
    perm_s3_scalar = alpha * ab_factor * beta * z_omega_eval
    D = ec_add(D, ec_neg(ec_mul(vk.s_sigma3_comm, perm_s3_scalar)))

    D = ec_add(D, ec_mul(proof.z_comm, alpha * alpha * l1_zeta))

    # ── Step 4: r₀ ──
    r_0 = (
        pi_zeta
        - alpha * ab_factor * z_omega_eval * (c_eval + gamma)
        - alpha * alpha * l1_zeta
    )

    # ── Step 5: [F]₁ 및 E ──
    zeta_n = zeta ** n
    zeta_2n = zeta_n * zeta_n
    t_comm = ec_add(
        proof.t_lo_comm,
        ec_add(
            ec_mul(proof.t_mid_comm, zeta_n),
            ec_mul(proof.t_hi_comm, zeta_2n)
        )
    )

    F = t_comm
    F = ec_add(F, ec_mul(D, v))
    F = ec_add(F, ec_mul(G1, v * r_0))
    v_pow = v
    for comm in (proof.a_comm, proof.b_comm, proof.c_comm, vk.s_sigma1_comm, vk.s_sigma2_comm):
        v_pow = v_pow * v
        F = ec_add(F, ec_mul(comm, v_pow))

    r_eval = proof.r_eval
    t_eval = r_eval / zh_zeta

    e_scalar = t_eval + v * r_eval
    v_pow = v
    for value in (a_eval, b_eval, c_eval, s_sigma1_eval, s_sigma2_eval):
        v_pow = v_pow * v
        e_scalar = e_scalar + v_pow * value
    e_scalar = e_scalar + u * z_omega_eval

    E = ec_mul(G1, e_scalar)

    # ── Step 6: 페어링 검사 ──
    A = ec_add(proof.W_zeta_comm, ec_mul(proof.W_zeta_omega_comm, u))

    B = ec_mul(proof.W_zeta_comm, zeta)
    B = ec_add(B, ec_mul(proof.W_zeta_omega_comm, u * zeta * omega))
    B = ec_add(B, F)
    B = ec_add(B, ec_mul(proof.z_comm, u))
    B = ec_add(B, ec_neg(E))

    lhs = ec_pairing(vk.g2_powers[1], A)
    rhs = ec_pairing(vk.g2_powers[0], B)
    return lhs == rhs
