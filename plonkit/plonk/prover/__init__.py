"""
PLONK Prover: 5-라운드 프로토콜 오케스트레이터
=================================================

  ┌─────────────────────────────────────────────────────┐
  │  Round 1: 배선(witness) 다항식 커밋                  │
  │  Prover → Verifier: [a]₁, [b]₁, [c]₁              │
  ├─────────────────────────────────────────────────────┤
  │  Round 2: 순열 누적자 z(x) 커밋                     │
  │  Verifier → Prover: β, γ  (Fiat-Shamir)           │
  │  Prover → Verifier: [z]₁                           │
  ├─────────────────────────────────────────────────────┤
  │  Round 3: 몫 다항식 t(x) 커밋                       │
  │  Verifier → Prover: α  (Fiat-Shamir)               │
  │  Prover → Verifier: [t_lo]₁, [t_mid]₁, [t_hi]₁    │
  ├─────────────────────────────────────────────────────┤
  │  Round 4: 다항식 평가값 산출                         │
  │  Verifier → Prover: ζ  (Fiat-Shamir)               │
  │  Prover → Verifier: ā, b̄, c̄, s̄_σ1, s̄_σ2, z̄_ω    │
  ├─────────────────────────────────────────────────────┤
  │  Round 5: 선형화 + KZG 열기 증명                     │
  │  Verifier → Prover: v  (Fiat-Shamir)               │
  │  Prover → Verifier: [W_ζ]₁, [W_ζω]₁               │
  └─────────────────────────────────────────────────────┘

블라인딩 계수는 호출자가 넘긴 rng(randrange 메서드를 가진 객체)에서 뽑는다.
Lagrange SRS가 주어지면 Round 1의 배선 커밋을 평가값에서 바로 계산한다.

사용 예시:
    >>> from plonkit.plonk.prover import prove
    >>> proof = prove(a, b, c, public_inputs, preprocessed, srs, rng=random.SystemRandom())
"""

import random

from plonkit.plonk.field import FR
from plonkit.plonk.transcript import Transcript
from plonkit.plonk.prover import round1, round2, round3, round4, round5


class Proof:
    """PLONK 증명 데이터 컨테이너.

    공개 입력:
        public_inputs: FR 리스트 (증명 파일에 함께 저장된다)

    Round 1~3 (커밋먼트, G1 점):
        a_comm, b_comm, c_comm, z_comm, t_lo_comm, t_mid_comm, t_hi_comm

    Round 4 (평가값, FR):
        a_eval, b_eval, c_eval, s_sigma1_eval, s_sigma2_eval, z_omega_eval

    Round 5:
        r_eval: FR
        W_zeta_comm, W_zeta_omega_comm: G1 점
    """

    COMMITMENTS = (
        "a_comm", "b_comm", "c_comm", "z_comm",
        "t_lo_comm", "t_mid_comm", "t_hi_comm",
        "W_zeta_comm", "W_zeta_omega_comm",
    )
    EVALUATIONS = (
        "a_eval", "b_eval", "c_eval",
        "s_sigma1_eval", "s_sigma2_eval", "z_omega_eval", "r_eval",
    )

    def __init__(self):
        self.public_inputs = []
        for name in self.COMMITMENTS + self.EVALUATIONS:
            setattr(self, name, None)

    def __eq__(self, other):
        if not isinstance(other, Proof):
            return NotImplemented
        return all(
            getattr(self, name) == getattr(other, name)
            for name in ("public_inputs",) + self.COMMITMENTS + self.EVALUATIONS
        )


class ProverState:
    """라운드 간 공유되는 Prover 상태.

    속성 (입력):
        a_vals, b_vals, c_vals: 배선 값 리스트 (길이 n)
        public_inputs: 공개 입력 값 리스트
        preprocessed: PreprocessedData
        srs: SRS, lagrange_srs: LagrangeSRS 또는 None
        rng: 블라인딩 난수원

    속성 (라운드 간 생성):
        a_poly, b_poly, c_poly, pi_poly, z_poly, t_lo_poly, t_mid_poly, t_hi_poly
        beta, gamma, alpha, zeta, v
    """

    def __init__(self, a_vals, b_vals, c_vals, public_inputs, preprocessed, srs,
                 lagrange_srs, rng):
        self.a_vals = a_vals
        self.b_vals = b_vals
        self.c_vals = c_vals
        self.public_inputs = [FR(int(x)) for x in public_inputs]
        self.preprocessed = preprocessed
        self.srs = srs
        self.lagrange_srs = lagrange_srs
        self.rng = rng

        self.transcript = Transcript()

        self.n = preprocessed.n
        self.omega = preprocessed.omega
        self.domain = preprocessed.domain

        self.a_poly = None
        self.b_poly = None
        self.c_poly = None
        self.pi_poly = None
        self.z_poly = None
        self.t_lo_poly = None
        self.t_mid_poly = None
        self.t_hi_poly = None

        self.beta = None
        self.gamma = None
        self.alpha = None
        self.zeta = None
        self.v = None

        self.proof = Proof()
        self.proof.public_inputs = list(self.public_inputs)

    def random_scalar(self):
        return FR(self.rng.randrange(FR.field_modulus))

    def build_proof(self):
        return self.proof


def prove(a_vals, b_vals, c_vals, public_inputs, preprocessed, srs,
          lagrange_srs=None, rng=None):
    """PLONK 5-라운드 프로토콜을 실행하여 증명을 생성한다.

    Args:
        a_vals, b_vals, c_vals: 배선 값 리스트 (길이 n)
        public_inputs: 공개 입력 값 리스트 (앞쪽 공개 입력 게이트 순서)
        preprocessed: PreprocessedData
        srs: 단항식 SRS
        lagrange_srs: 같은 도메인 크기의 LagrangeSRS (선택)
        rng: 블라인딩 난수원 (기본값: random.SystemRandom())

    Returns:
        Proof
    """
    if rng is None:
        rng = random.SystemRandom()
    if lagrange_srs is not None and lagrange_srs.size != preprocessed.n:
        raise ValueError(
            f"lagrange SRS size {lagrange_srs.size} does not match domain size {preprocessed.n}"
        )

    state = ProverState(a_vals, b_vals, c_vals, public_inputs, preprocessed, srs,
                        lagrange_srs, rng)

    round1.execute(state)
    round2.execute(state)
    round3.execute(state)
    round4.execute(state)
    round5.execute(state)

    return state.build_proof()
