"""
유한체(Finite Field) 및 bn128 타원곡선 연산
============================================

PLONK/Groth16 엔진 전체에서 공유하는 기본 대수 도구.

**FR**: bn128 스칼라 필드. p - 1 = 2^28 × m 이므로 최대 2^28차 단위근을 지원한다.

**타원곡선**: G1, G2 생성자와 스칼라곱/덧셈/역원/페어링. 무한원점은 None.
"""

from py_ecc.fields import bn128_FQ as FQ
from py_ecc import bn128


class FR(FQ):
    """bn128 스칼라 필드 위의 원소."""
    field_modulus = bn128.curve_order


CURVE_ORDER = bn128.curve_order

# 좌표 필드 위수 (G1/G2 점 직렬화에 사용)
FIELD_MODULUS = bn128.field_modulus

G1 = bn128.G1
G2 = bn128.G2


def ec_mul(point, scalar):
    """타원곡선 스칼라 곱셈: scalar · point."""
    if isinstance(scalar, FR):
        scalar = int(scalar)
    return bn128.multiply(point, scalar % CURVE_ORDER)


def ec_add(p1, p2):
    return bn128.add(p1, p2)


def ec_neg(point):
    return bn128.neg(point)


def ec_pairing(g2_point, g1_point):
    """페어링 e(G1, G2). py_ecc 인자 순서는 (G2, G1)이다."""
    return bn128.pairing(g2_point, g1_point)


def is_on_curve_g1(point):
    """G1 점이 곡선 위에 있는지 확인한다. 무한원점은 True."""
    return bn128.is_on_curve(point, bn128.b)


def get_root_of_unity(n):
    """n차 원시 단위근 ω를 반환한다.

    생성자 g = 5에서 ω = g^((p-1)/n)으로 계산한다.

    Raises:
        ValueError: n이 2의 거듭제곱이 아니거나 2^28을 초과할 때
    """
    if n < 1 or (n & (n - 1)) != 0:
        raise ValueError(f"domain size must be a power of two: {n}")
    if n > (1 << 28):
        raise ValueError(f"domain size exceeds 2^28: {n}")
    if n == 1:
        return FR(1)
    return FR(5) ** ((CURVE_ORDER - 1) // n)


def get_roots_of_unity(n):
    """평가 도메인 H = [1, ω, ω², ..., ω^(n-1)]."""
    omega = get_root_of_unity(n)
    roots = []
    current = FR(1)
    for _ in range(n):
        roots.append(current)
        current = current * omega
    return roots
