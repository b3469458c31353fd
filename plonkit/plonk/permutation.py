"""
순열 인자 (Permutation Argument)
================================

3n개의 배선 위치(a₀..a_{n-1}, b₀..b_{n-1}, c₀..c_{n-1})를 세 코셋으로 식별한다:
  a: H,  b: K1·H,  c: K2·H

**순열 누적자 z(x)**:
  z(ω⁰) = 1
  z(ω^{i+1}) = z(ωⁱ) · ∏ (wᵢ + β·idᵢ + γ) / ∏ (wᵢ + β·σᵢ + γ)
"""

from plonkit.plonk.field import FR


# H, K1·H, K2·H가 서로 겹치지 않는 코셋이 되도록 선택한 상수
K1 = FR(2)
K2 = FR(3)


def position_value(pos, n, domain):
    """배선 위치를 해당 코셋·도메인 원소로 변환한다."""
    if pos < n:
        return domain[pos]
    elif pos < 2 * n:
        return K1 * domain[pos - n]
    return K2 * domain[pos - 2 * n]


def build_permutation_polynomials(sigma, n, domain):
    """순열 σ를 S_σ1, S_σ2, S_σ3의 평가값으로 인코딩한다."""
    s_sigma1_evals = [position_value(sigma[i], n, domain) for i in range(n)]
    s_sigma2_evals = [position_value(sigma[n + i], n, domain) for i in range(n)]
    s_sigma3_evals = [position_value(sigma[2 * n + i], n, domain) for i in range(n)]
    return s_sigma1_evals, s_sigma2_evals, s_sigma3_evals


def compute_accumulator(a_vals, b_vals, c_vals, sigma, n, domain, beta, gamma):
    """순열 누적자 z의 평가값 [z(ω⁰)=1, z(ω¹), ..., z(ω^{n-1})]."""
    s1, s2, s3 = build_permutation_polynomials(sigma, n, domain)

    z_evals = [FR(1)]
    for i in range(n - 1):
        num = (
            (a_vals[i] + beta * domain[i] + gamma)
            * (b_vals[i] + beta * K1 * domain[i] + gamma)
            * (c_vals[i] + beta * K2 * domain[i] + gamma)
        )
        den = (
            (a_vals[i] + beta * s1[i] + gamma)
            * (b_vals[i] + beta * s2[i] + gamma)
            * (c_vals[i] + beta * s3[i] + gamma)
        )
        z_evals.append(z_evals[-1] * num / den)

    return z_evals
