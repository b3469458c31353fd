"""
Groth16 신뢰 설정 (Trusted Setup)
==================================

독성 폐기물(toxic waste) α, β, γ, δ, τ를 샘플링해 회로에 묶인 파라미터를 만든다.

  | 필드           | 값                                       | 개수          |
  |----------------|------------------------------------------|---------------|
  | alpha_g1       | α·G1                                     | 1             |
  | beta_g1/g2     | β·G1, β·G2                               | 1             |
  | gamma_g2       | γ·G2                                     | 1             |
  | delta_g1/g2    | δ·G1, δ·G2                               | 1             |
  | ic             | (β·Aᵢ(τ) + α·Bᵢ(τ) + Cᵢ(τ)) / γ · G1       | 입력 변수 수  |
  | l              | (β·Aᵢ(τ) + α·Bᵢ(τ) + Cᵢ(τ)) / δ · G1       | 보조 변수 수  |
  | h              | τⁱ·Z(τ) / δ · G1                          | n - 1         |
  | a, b_g1, b_g2  | Aᵢ(τ)·G1, Bᵢ(τ)·G1, Bᵢ(τ)·G2              | 전체 변수 수  |

n은 QAP 도메인 크기 (qap.domain_size). Z(x) = xⁿ - 1이다.

l의 인덱스는 회로 기술자의 변수 규칙(aux_offset)을 따른다.
Groth16의 aux_offset은 0이므로 보조 배선 w는 l[w - num_inputs]에 놓인다.
"""

import logging
import random

from plonkit.plonk.field import FR, G1, G2, CURVE_ORDER, ec_mul
from plonkit.groth16.qap import domain_size, evaluate_qap
from plonkit.r1cs import INPUT

logger = logging.getLogger(__name__)


class Parameters:
    """Groth16 설정 파라미터. params.bin에 그대로 저장된다."""

    G1_FIELDS = ("alpha_g1", "beta_g1", "delta_g1")
    G2_FIELDS = ("beta_g2", "gamma_g2", "delta_g2")
    G1_VECTORS = ("ic", "l", "h", "a", "b_g1")
    G2_VECTORS = ("b_g2",)

    def __init__(self, num_inputs, num_aux, num_constraints, **points):
        self.num_inputs = num_inputs
        self.num_aux = num_aux
        self.num_constraints = num_constraints
        for name in self.G1_FIELDS + self.G2_FIELDS + self.G1_VECTORS + self.G2_VECTORS:
            setattr(self, name, points[name])

    def __eq__(self, other):
        if not isinstance(other, Parameters):
            return NotImplemented
        return vars(self) == vars(other)


def _nonzero_scalar(rng):
    return FR(rng.randrange(1, CURVE_ORDER))


def generate_random_parameters(circuit, rng=None, aux_offset=0):
    """회로 기술자에 묶인 Groth16 파라미터를 생성한다.

    Args:
        circuit: CircuitDescriptor (witness 불필요)
        rng: 난수원 (기본값: random.SystemRandom())
        aux_offset: 보조 변수 인덱스 오프셋
    """
    if rng is None:
        rng = random.SystemRandom()
    r1cs = circuit.r1cs

    alpha = _nonzero_scalar(rng)
    beta = _nonzero_scalar(rng)
    gamma = _nonzero_scalar(rng)
    delta = _nonzero_scalar(rng)
    tau = _nonzero_scalar(rng)

    Ax_val, Bx_val, Cx_val, Zx_val = evaluate_qap(r1cs, tau)
    # τ가 n차 단위근이면 Z(τ) = 0
    while Zx_val == FR(0):
        tau = _nonzero_scalar(rng)
        Ax_val, Bx_val, Cx_val, Zx_val = evaluate_qap(r1cs, tau)

    ic = [None] * r1cs.num_inputs
    l = [None] * (r1cs.num_aux + aux_offset)
    for wire in range(r1cs.num_variables):
        val = beta * Ax_val[wire] + alpha * Bx_val[wire] + Cx_val[wire]
        kind, index = circuit.variable(wire, aux_offset)
        if kind == INPUT:
            ic[index] = ec_mul(G1, val / gamma)
        else:
            l[index] = ec_mul(G1, val / delta)

    h = []
    x_power = FR(1)
    for _ in range(domain_size(r1cs) - 1):
        h.append(ec_mul(G1, x_power * Zx_val / delta))
        x_power = x_power * tau

    logger.debug(
        "Sampled parameters for %d inputs, %d aux, %d constraints",
        r1cs.num_inputs, r1cs.num_aux, r1cs.num_constraints,
    )

    return Parameters(
        r1cs.num_inputs, r1cs.num_aux, r1cs.num_constraints,
        alpha_g1=ec_mul(G1, alpha),
        beta_g1=ec_mul(G1, beta),
        delta_g1=ec_mul(G1, delta),
        beta_g2=ec_mul(G2, beta),
        gamma_g2=ec_mul(G2, gamma),
        delta_g2=ec_mul(G2, delta),
        ic=ic,
        l=l,
        h=h,
        a=[ec_mul(G1, v) for v in Ax_val],
        b_g1=[ec_mul(G1, v) for v in Bx_val],
        b_g2=[ec_mul(G2, v) for v in Bx_val],
    )
