"""
PLONK Structured Reference String (SRS)
=======================================

**범용(universal) SRS, 단항식 형태**:
    G1 powers: [G1, τ·G1, τ²·G1, ..., τ^d·G1]
    G2 powers: [G2, τ·G2]
  회로에 독립적이며 d 이하 차수의 모든 회로에 재사용된다.

**Lagrange 형태**:
    [L₀(τ)·G1, L₁(τ)·G1, ..., L_{n-1}(τ)·G1]
  도메인 크기 n에 종속된 파생 데이터. 단항식 SRS와 회로 크기로부터 언제든
  다시 만들 수 있으며, 회로의 게이트 수가 2의 거듭제곱 경계를 넘으면
  다시 생성해야 한다.

  Lᵢ(x) = (1/n) Σⱼ ω^{-ij} xʲ 이므로, 단항식 G1 powers 앞쪽 n개에
  군(group) 위의 IFFT를 적용하면 된다.

보안 주의:
  generate()는 로컬에서 τ를 샘플링하는 테스트용 설정이다. τ를 아는 사람은
  거짓 증명을 만들 수 있으므로 실제 배포에는 MPC 세리머니 결과를 사용해야 한다.
"""

import random

from plonkit.plonk.field import FR, G1, G2, CURVE_ORDER, ec_mul, ec_add, ec_neg, get_root_of_unity


class SRS:
    """단항식 형태의 범용 SRS.

    속성:
        g1_powers: [G1, τ·G1, ..., τ^d·G1]
        g2_powers: [G2, τ·G2]
    """

    def __init__(self, g1_powers, g2_powers):
        self.g1_powers = g1_powers
        self.g2_powers = g2_powers

    @property
    def size(self):
        return len(self.g1_powers)

    @property
    def max_degree(self):
        return len(self.g1_powers) - 1

    @classmethod
    def generate(cls, size, rng=None):
        """G1 powers를 size개 가지는 SRS를 생성한다.

        Args:
            size: G1 powers 개수 (최대 차수 + 1)
            rng: random.Random 호환 난수원. None이면 SystemRandom.
        """
        if rng is None:
            rng = random.SystemRandom()
        tau = FR(rng.randrange(1, CURVE_ORDER))

        g1_powers = []
        tau_power = FR(1)
        for _ in range(size):
            g1_powers.append(ec_mul(G1, tau_power))
            tau_power = tau_power * tau

        return cls(g1_powers, [G2, ec_mul(G2, tau)])


class LagrangeSRS:
    """도메인 크기 n에 대한 Lagrange 형태 SRS."""

    def __init__(self, g1_lagrange, g2_powers):
        self.g1_lagrange = g1_lagrange
        self.g2_powers = g2_powers

    @property
    def size(self):
        return len(self.g1_lagrange)

    @classmethod
    def from_monomial(cls, srs, n):
        """단항식 SRS로부터 도메인 크기 n의 Lagrange SRS를 유도한다.

        Raises:
            ValueError: SRS의 G1 powers가 n개보다 적을 때
        """
        if srs.size < n:
            raise ValueError(f"SRS of size {srs.size} cannot cover a domain of size {n}")
        omega = get_root_of_unity(n)
        points = _group_fft(srs.g1_powers[:n], FR(1) / omega)
        n_inv = FR(1) / FR(n)
        return cls([ec_mul(p, n_inv) for p in points], list(srs.g2_powers))


def _group_fft(points, omega):
    """G1 점 위의 radix-2 FFT. 스칼라 FFT와 같은 버터플라이 구조."""
    n = len(points)
    if n == 1:
        return list(points)

    omega_sq = omega * omega
    even_vals = _group_fft(points[0::2], omega_sq)
    odd_vals = _group_fft(points[1::2], omega_sq)

    result = [None] * n
    omega_k = FR(1)
    half = n // 2
    for k in range(half):
        t = ec_mul(odd_vals[k], omega_k)
        result[k] = ec_add(even_vals[k], t)
        result[k + half] = ec_add(even_vals[k], ec_neg(t))
        omega_k = omega_k * omega
    return result
