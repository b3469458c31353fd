"""
R1CS → QAP 변환
================

평가 도메인은 단위근 집합 H = {1, ω, ω², ..., ω^(n-1)}이다.
제약 j (j = 0..m-1)는 평가점 ωʲ에 대응한다. 그 뒤 행 m + i에는
입력 변수 i마다 xᵢ · 0 = 0 형태의 입력 제약이 붙는다 (A 쪽 계수 1).
입력 제약이 있어야 IC 원소들이 서로 독립이 된다.

  n = next_power_of_2(m + num_inputs)
  Z(x) = xⁿ - 1

남는 행 (m + num_inputs .. n-1)은 모든 계수가 0인 빈 제약이다.

witness w가 R1CS를 만족하면
  Σ wᵢAᵢ(x) · Σ wᵢBᵢ(x) - Σ wᵢCᵢ(x) 는 Z(x)로 나누어 떨어진다.

setup에는 다항식 전체가 아니라 τ에서의 값만 필요하므로
evaluate_qap()는 Lagrange 기저 값 Lⱼ(τ)만 계산해 희소 계수와 곱한다.
"""

from plonkit.plonk.field import FR, get_root_of_unity
from plonkit.plonk.polynomial import ifft
from plonkit.plonk.utils import lagrange_basis_eval, next_power_of_2


def multiply_polys(a, b):
    o = [FR(0)] * (len(a) + len(b) - 1)
    for i in range(len(a)):
        for j in range(len(b)):
            o[i + j] += a[i] * b[j]
    return o


def add_polys(a, b, subtract=False):
    o = [FR(0)] * max(len(a), len(b))
    for i in range(len(a)):
        o[i] += a[i]
    for i in range(len(b)):
        o[i] += b[i] * (FR(-1) if subtract else FR(1))
    return o


def subtract_polys(a, b):
    return add_polys(a, b, subtract=True)


def div_polys(a, b):
    o = [FR(0)] * (len(a) - len(b) + 1)
    remainder = a
    while len(remainder) >= len(b):
        leading_fac = remainder[-1] / b[-1]
        pos = len(remainder) - len(b)
        o[pos] = leading_fac
        remainder = subtract_polys(remainder, multiply_polys(b, [FR(0)] * pos + [leading_fac]))[:-1]
    return o, remainder


def eval_poly(poly, x):
    result = FR(0)
    for coeff in reversed(poly):
        result = result * x + coeff
    return result


def constraint_rows(r1cs):
    """(A, B, C) 선형결합 행 목록: 회로 제약 m개 뒤에 입력 제약 num_inputs개."""
    rows = list(r1cs.constraints)
    for i in range(r1cs.num_inputs):
        rows.append(({i: FR(1)}, {}, {}))
    return rows


def domain_size(r1cs):
    return next_power_of_2(r1cs.num_constraints + r1cs.num_inputs)


def lagrange_interp(vec):
    """평가값 [p(1), p(ω), ..., p(ω^(n-1))]을 보간한 계수 리스트."""
    if all(v == FR(0) for v in vec):
        return [FR(0)]
    return ifft(vec, get_root_of_unity(len(vec)))


def vanishing_poly(n):
    """Z(x) = xⁿ - 1"""
    return [FR(-1)] + [FR(0)] * (n - 1) + [FR(1)]


def _columns(r1cs):
    """변수별 계수 열: A[i][j] = 행 j의 A 선형결합에서 배선 i의 계수."""
    n = domain_size(r1cs)
    rows = constraint_rows(r1cs)
    columns = []
    for k in range(3):
        matrix = [[FR(0)] * n for _ in range(r1cs.num_variables)]
        for j, row in enumerate(rows):
            for wire, coeff in row[k].items():
                matrix[wire][j] = coeff
        columns.append(matrix)
    return columns


def r1cs_to_qap(r1cs):
    """(A, B, C, Z): A, B, C는 변수별 다항식 리스트, Z는 소거 다항식."""
    A, B, C = _columns(r1cs)
    new_A = [lagrange_interp(row) for row in A]
    new_B = [lagrange_interp(row) for row in B]
    new_C = [lagrange_interp(row) for row in C]
    return new_A, new_B, new_C, vanishing_poly(domain_size(r1cs))


def lagrange_values(n, x):
    """[L₀(x), ..., L_(n-1)(x)] (평가점 ωʲ)."""
    omega = get_root_of_unity(n)
    return [lagrange_basis_eval(j, n, omega, x) for j in range(n)]


def evaluate_qap(r1cs, x):
    """(Aᵢ(x) 리스트, Bᵢ(x) 리스트, Cᵢ(x) 리스트, Z(x))."""
    n = domain_size(r1cs)
    basis = lagrange_values(n, x)

    values = [[FR(0)] * r1cs.num_variables for _ in range(3)]
    for j, row in enumerate(constraint_rows(r1cs)):
        for k in range(3):
            for wire, coeff in row[k].items():
                values[k][wire] += coeff * basis[j]

    return values[0], values[1], values[2], x ** n - FR(1)


def solution_polynomial(qap, witness):
    """Σ wᵢAᵢ · Σ wᵢBᵢ - Σ wᵢCᵢ"""
    new_A, new_B, new_C, _ = qap
    Apoly, Bpoly, Cpoly = [], [], []
    for w, a, b, c in zip(witness, new_A, new_B, new_C):
        Apoly = add_polys(Apoly, multiply_polys([w], a))
        Bpoly = add_polys(Bpoly, multiply_polys([w], b))
        Cpoly = add_polys(Cpoly, multiply_polys([w], c))
    return subtract_polys(multiply_polys(Apoly, Bpoly), Cpoly)
