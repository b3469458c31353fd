"""
PLONK 전처리기 (Preprocessor)
===============================

회로 구조가 정해지면 셀렉터 다항식과 순열 다항식을 한 번만 계산하고 커밋한다.

**전처리 출력물**:
  - 셀렉터 커밋먼트: [q_L]₁, [q_R]₁, [q_O]₁, [q_M]₁, [q_C]₁
  - 순열 커밋먼트: [S_σ1]₁, [S_σ2]₁, [S_σ3]₁
  - 도메인 정보: n, ω (단위근)
  - 셀렉터/순열 다항식 자체 (Prover용)

**Prover vs Verifier 사용**:
  - Prover: PreprocessedData (다항식 원본 포함)
  - Verifier: VerificationKey (커밋먼트 + G2 SRS 원소만, vk.bin으로 저장)

**SRS 크기 요구사항**:
  블라인딩 때문에 t_hi(x)의 차수는 n + 5까지 올라간다.
  따라서 SRS는 최소 n + 6개의 G1 거듭제곱을 가져야 한다.
"""

from plonkit.plonk.field import get_root_of_unity, get_roots_of_unity
from plonkit.plonk.polynomial import Polynomial
from plonkit.plonk.kzg import commit
from plonkit.plonk.permutation import build_permutation_polynomials

SRS_MARGIN = 6


def required_srs_size(n):
    """도메인 크기 n의 회로를 증명하는 데 필요한 G1 거듭제곱 수."""
    return n + SRS_MARGIN


class VerificationKey:
    """PLONK 검증 키.

    속성:
        n: 도메인 크기
        num_public_inputs: 공개 입력 수
        q_l_comm .. q_c_comm: 셀렉터 커밋먼트
        s_sigma1_comm .. s_sigma3_comm: 순열 커밋먼트
        g2_powers: [G2, τ·G2]
    """

    COMMITMENTS = (
        "q_l_comm", "q_r_comm", "q_o_comm", "q_m_comm", "q_c_comm",
        "s_sigma1_comm", "s_sigma2_comm", "s_sigma3_comm",
    )

    def __init__(self, n, num_public_inputs, commitments, g2_powers):
        self.n = n
        self.num_public_inputs = num_public_inputs
        for name in self.COMMITMENTS:
            setattr(self, name, commitments[name])
        self.g2_powers = list(g2_powers)

    @property
    def omega(self):
        return get_root_of_unity(self.n)

    def commitments(self):
        return {name: getattr(self, name) for name in self.COMMITMENTS}

    def __eq__(self, other):
        if not isinstance(other, VerificationKey):
            return NotImplemented
        return (
            self.n == other.n
            and self.num_public_inputs == other.num_public_inputs
            and self.commitments() == other.commitments()
            and self.g2_powers == other.g2_powers
        )


class PreprocessedData:
    """전처리된 회로 데이터.

    속성 (도메인):
        n, omega, domain

    속성 (셀렉터 다항식 + 커밋먼트):
        q_l_poly .. q_c_poly, q_l_comm .. q_c_comm

    속성 (순열 다항식 + 커밋먼트):
        s_sigma1_poly .. s_sigma3_poly, s_sigma1_comm .. s_sigma3_comm

    속성 (회로 정보):
        sigma: 순열 배열 (길이 3n)
        num_public_inputs: 공개 입력 수
    """

    def verification_key(self, srs):
        commitments = {name: getattr(self, name) for name in VerificationKey.COMMITMENTS}
        return VerificationKey(self.n, self.num_public_inputs, commitments, srs.g2_powers[:2])


def setup_circuit(circuit, srs):
    """회로를 전처리하여 공개 파라미터를 생성한다.

    단계:
    1. 도메인 설정: 게이트 수 → 2의 거듭제곱 n (패딩), 단위근 ω
    2. 셀렉터 다항식: 각 셀렉터 벡터를 IFFT로 다항식화 + KZG 커밋
    3. 순열 다항식: 배선 순환에서 순열 생성 → 다항식화 + KZG 커밋

    Raises:
        ValueError: SRS가 required_srs_size(n)보다 작을 때
    """
    result = PreprocessedData()

    # ── 1단계: 도메인 설정 ──
    n = circuit.pad_to_power_of_2()
    if srs.size < required_srs_size(n):
        raise ValueError(
            f"SRS has {srs.size} points, domain size {n} needs {required_srs_size(n)}"
        )

    result.n = n
    result.omega = get_root_of_unity(n)
    result.domain = get_roots_of_unity(n)

    # ── 2단계: 셀렉터 다항식 ──
    q_l_evals, q_r_evals, q_o_evals, q_m_evals, q_c_evals = (
        circuit.get_selector_polynomials()
    )

    result.q_l_poly = Polynomial.from_evaluations(q_l_evals, result.omega)
    result.q_r_poly = Polynomial.from_evaluations(q_r_evals, result.omega)
    result.q_o_poly = Polynomial.from_evaluations(q_o_evals, result.omega)
    result.q_m_poly = Polynomial.from_evaluations(q_m_evals, result.omega)
    result.q_c_poly = Polynomial.from_evaluations(q_c_evals, result.omega)

    result.q_l_comm = commit(result.q_l_poly, srs)
    result.q_r_comm = commit(result.q_r_poly, srs)
    result.q_o_comm = commit(result.q_o_poly, srs)
    result.q_m_comm = commit(result.q_m_poly, srs)
    result.q_c_comm = commit(result.q_c_poly, srs)

    # ── 3단계: 순열 다항식 ──
    result.sigma = circuit.build_permutation()
    s1_evals, s2_evals, s3_evals = build_permutation_polynomials(
        result.sigma, n, result.domain
    )

    result.s_sigma1_poly = Polynomial.from_evaluations(s1_evals, result.omega)
    result.s_sigma2_poly = Polynomial.from_evaluations(s2_evals, result.omega)
    result.s_sigma3_poly = Polynomial.from_evaluations(s3_evals, result.omega)

    result.s_sigma1_comm = commit(result.s_sigma1_poly, srs)
    result.s_sigma2_comm = commit(result.s_sigma2_poly, srs)
    result.s_sigma3_comm = commit(result.s_sigma3_poly, srs)

    result.num_public_inputs = circuit.num_public_inputs

    return result
