"""
KZG 다항식 커밋먼트
===================

C = Σᵢ cᵢ · [τⁱ]₁ = p(τ) · G1

단항식(monomial) SRS로는 계수에서, Lagrange SRS로는 도메인 위의 평가값에서
직접 커밋한다. 두 방법은 같은 점을 만든다:
    Σᵢ p(ωⁱ) · [Lᵢ(τ)]₁ = p(τ) · G1   (deg p < n 일 때)
"""

from plonkit.plonk.field import FR, ec_mul, ec_add


def commit(poly, srs):
    """다항식을 KZG 커밋한다.

    Raises:
        ValueError: 다항식 차수가 SRS 최대 차수를 초과할 때
    """
    if poly.degree > srs.max_degree:
        raise ValueError(
            f"polynomial degree {poly.degree} exceeds SRS degree {srs.max_degree}"
        )
    return _msm(srs.g1_powers, poly.coeffs)


def commit_lagrange(evals, lagrange_srs):
    """도메인 평가값 [p(ω⁰), ..., p(ω^{n-1})]을 Lagrange SRS로 커밋한다."""
    if len(evals) != lagrange_srs.size:
        raise ValueError(
            f"{len(evals)} evaluations for a lagrange SRS of size {lagrange_srs.size}"
        )
    return _msm(lagrange_srs.g1_lagrange, evals)


def _msm(points, scalars):
    result = None
    for point, scalar in zip(points, scalars):
        if scalar == FR(0):
            continue
        result = ec_add(result, ec_mul(point, scalar))
    return result
