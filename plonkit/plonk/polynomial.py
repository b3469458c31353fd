"""
다항식(Polynomial) 클래스 및 FFT
================================

계수 표현 기반 다항식 p(x) = c₀ + c₁·x + c₂·x² + ... 과
유한체 위의 radix-2 FFT/IFFT, 긴 나눗셈, Lagrange 기저를 제공한다.

사용 예시:
    >>> p = Polynomial([FR(1), FR(2), FR(3)])  # 1 + 2x + 3x²
    >>> p.evaluate(FR(2))  # FR(17)
"""

from plonkit.plonk.field import FR


class Polynomial:
    """유한체 FR 위의 다항식. coeffs = [c₀, c₁, ...]."""

    def __init__(self, coeffs=None):
        if coeffs is None:
            self.coeffs = [FR(0)]
        else:
            self.coeffs = [c if isinstance(c, FR) else FR(c) for c in coeffs]
            if not self.coeffs:
                self.coeffs = [FR(0)]
        self._trim()

    def _trim(self):
        # 최고차 계수가 0인 항 제거: [1, 2, 0, 0] → [1, 2]
        while len(self.coeffs) > 1 and self.coeffs[-1] == FR(0):
            self.coeffs.pop()

    @property
    def degree(self):
        """영 다항식의 차수는 0으로 정의한다."""
        return len(self.coeffs) - 1

    def is_zero(self):
        return len(self.coeffs) == 1 and self.coeffs[0] == FR(0)

    def evaluate(self, point):
        """Horner's method로 p(point)를 계산한다."""
        if not isinstance(point, FR):
            point = FR(point)
        result = FR(0)
        for coeff in reversed(self.coeffs):
            result = result * point + coeff
        return result

    def __add__(self, other):
        if isinstance(other, (int, FR)):
            other = Polynomial([other])
        size = max(len(self.coeffs), len(other.coeffs))
        a = self.coeffs + [FR(0)] * (size - len(self.coeffs))
        b = other.coeffs + [FR(0)] * (size - len(other.coeffs))
        return Polynomial([x + y for x, y in zip(a, b)])

    def __radd__(self, other):
        return self.__add__(other)

    def __sub__(self, other):
        if isinstance(other, (int, FR)):
            other = Polynomial([other])
        return self + (-other)

    def __rsub__(self, other):
        return (-self) + other

    def __neg__(self):
        return Polynomial([FR(0) - c for c in self.coeffs])

    def __mul__(self, other):
        """다항식 × 다항식 (O(n²) 나이브 곱셈) 또는 다항식 × 스칼라."""
        if isinstance(other, (int, FR)):
            other = other if isinstance(other, FR) else FR(other)
            return Polynomial([c * other for c in self.coeffs])
        result = [FR(0)] * (len(self.coeffs) + len(other.coeffs) - 1)
        for i, a in enumerate(self.coeffs):
            if a == FR(0):
                continue
            for j, b in enumerate(other.coeffs):
                result[i + j] = result[i + j] + a * b
        return Polynomial(result)

    def __rmul__(self, other):
        return self.__mul__(other)

    def __eq__(self, other):
        if isinstance(other, (int, FR)):
            other = Polynomial([other])
        if not isinstance(other, Polynomial):
            return False
        return self.coeffs == other.coeffs

    def __len__(self):
        return len(self.coeffs)

    def __repr__(self):
        terms = []
        for i, c in enumerate(self.coeffs):
            if c == FR(0):
                continue
            if i == 0:
                terms.append(str(int(c)))
            elif i == 1:
                terms.append(f"{int(c)}*x")
            else:
                terms.append(f"{int(c)}*x^{i}")
        return "Poly(" + " + ".join(terms) + ")" if terms else "Poly(0)"

    def shift(self, factor):
        """p(factor·x)의 계수: cᵢ → factorⁱ · cᵢ."""
        shifted = []
        power = FR(1)
        for coeff in self.coeffs:
            shifted.append(coeff * power)
            power = power * factor
        return Polynomial(shifted)

    @classmethod
    def zero(cls):
        return cls([FR(0)])

    @classmethod
    def vanishing(cls, n):
        """소거 다항식 Z_H(x) = x^n - 1."""
        coeffs = [FR(0)] * (n + 1)
        coeffs[0] = FR(-1)
        coeffs[n] = FR(1)
        return cls(coeffs)

    @classmethod
    def from_evaluations(cls, evals, omega):
        """도메인 {1, ω, ..., ω^(n-1)}에서의 평가값을 IFFT로 보간한다."""
        return cls(ifft(evals, omega))


def fft(coeffs, omega):
    """재귀 Cooley-Tukey radix-2 FFT: 계수 → [p(1), p(ω), ..., p(ω^{n-1})]."""
    n = len(coeffs)
    if n == 1:
        return [coeffs[0] if isinstance(coeffs[0], FR) else FR(coeffs[0])]

    omega_sq = omega * omega
    even_vals = fft(coeffs[0::2], omega_sq)
    odd_vals = fft(coeffs[1::2], omega_sq)

    result = [FR(0)] * n
    omega_k = FR(1)
    half = n // 2
    for k in range(half):
        t = omega_k * odd_vals[k]
        result[k] = even_vals[k] + t
        result[k + half] = even_vals[k] - t
        omega_k = omega_k * omega
    return result


def ifft(evals, omega):
    """역 FFT: ω^{-1}로 FFT 후 n으로 나눈다."""
    n = len(evals)
    coeffs = fft(evals, FR(1) / omega)
    n_inv = FR(1) / FR(n)
    return [c * n_inv for c in coeffs]


def poly_div(a, b):
    """다항식 긴 나눗셈: a(x) = b(x)·q(x) + r(x). (q, r)를 반환한다.

    Raises:
        ValueError: 제수가 영 다항식인 경우
    """
    if b.is_zero():
        raise ValueError("division by the zero polynomial")

    remainder = list(a.coeffs)
    divisor = b.coeffs
    deg_b = len(divisor) - 1
    deg_a = len(remainder) - 1
    if deg_a < deg_b:
        return Polynomial.zero(), Polynomial(remainder)

    quotient = [FR(0)] * (deg_a - deg_b + 1)
    lead_inv = FR(1) / divisor[-1]
    for i in range(deg_a - deg_b, -1, -1):
        coeff = remainder[i + deg_b] * lead_inv
        quotient[i] = coeff
        if coeff == FR(0):
            continue
        for j in range(deg_b + 1):
            remainder[i + j] = remainder[i + j] - coeff * divisor[j]

    return Polynomial(quotient), Polynomial(remainder[:deg_b] or [FR(0)])


def lagrange_basis(domain, i):
    """i번째 Lagrange 기저 다항식 L_i(x). L_i(d_j) = δ_ij."""
    result = Polynomial([FR(1)])
    denominator = FR(1)
    for j, d in enumerate(domain):
        if j == i:
            continue
        result = result * Polynomial([FR(0) - d, FR(1)])
        denominator = denominator * (domain[i] - d)
    return result * (FR(1) / denominator)
