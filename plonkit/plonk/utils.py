"""
PLONK 공유 유틸리티: Z_H(ζ), L_i(ζ), 공개 입력 다항식 PI(x), 도메인 크기.

공개 입력은 회로 앞쪽 행의 공개 입력 게이트(q_L = 1)로 묶인다.
행 i에서 PI(ωⁱ) = -xᵢ 이므로 게이트 제약 a - xᵢ = 0 이 된다.
"""

from plonkit.plonk.field import FR
from plonkit.plonk.polynomial import Polynomial


def vanishing_poly_eval(n, zeta):
    """Z_H(ζ) = ζ^n - 1."""
    return zeta ** n - FR(1)


def lagrange_basis_eval(i, n, omega, zeta):
    """L_i(ζ) = (ω^i / n) · (ζ^n - 1) / (ζ - ω^i)."""
    if not isinstance(zeta, FR):
        zeta = FR(zeta)
    omega_i = omega ** i
    denominator = zeta - omega_i
    if denominator == FR(0):
        return FR(1)
    return vanishing_poly_eval(n, zeta) * omega_i / (FR(n) * denominator)


def public_input_polynomial(pub_inputs, n, omega):
    """PI(x): 행 i에서 -xᵢ, 나머지 행에서 0을 보간한 다항식."""
    if not pub_inputs:
        return Polynomial.zero()
    evals = [FR(0)] * n
    for i, val in enumerate(pub_inputs):
        evals[i] = FR(0) - FR(int(val))
    return Polynomial.from_evaluations(evals, omega)


def public_input_poly_eval(pub_inputs, n, omega, zeta):
    """PI(ζ) = Σᵢ -xᵢ · Lᵢ(ζ). 다항식을 만들지 않고 평가한다."""
    result = FR(0)
    for i, val in enumerate(pub_inputs):
        result = result - FR(int(val)) * lagrange_basis_eval(i, n, omega, zeta)
    return result


def next_power_of_2(n):
    """n 이상의 가장 작은 2의 거듭제곱. next_power_of_2(5) == 8."""
    p = 1
    while p < n:
        p <<= 1
    return p
