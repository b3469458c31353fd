"""
snarkjs 호환 키 내보내기
========================

verification_key.json:
  protocol, curve, nPublic, vk_alpha_1, vk_beta_2, vk_gamma_2, vk_delta_2, IC

proving_key.json:
  protocol, curve, nVars, nPublic, domainSize,
  polsA / polsB / polsC  (변수별 {제약 인덱스: 계수}),
  A, B1, B2, C, hExps, vk_alpha_1, vk_beta_1, vk_delta_1, vk_beta_2, vk_delta_2

C는 변수 인덱스 순서를 따르며 공개 입력 자리는 null이다.
polsA에는 입력 제약 행 (m + i)도 들어간다. domainSize는 QAP 도메인 크기 n,
hExps는 τⁱ·Z(τ)/δ · G1 (i = 0..n-2)이다.
"""

from plonkit.codec import fr_to_json, g1_to_json, g2_to_json, write_json
from plonkit.groth16.qap import constraint_rows, domain_size


def params_mismatch(params, r1cs):
    """파라미터가 회로와 맞지 않으면 이유 문자열, 맞으면 None."""
    expected = (r1cs.num_inputs, r1cs.num_aux, r1cs.num_constraints)
    actual = (params.num_inputs, params.num_aux, params.num_constraints)
    if expected != actual:
        return (
            "parameters were generated for (inputs, aux, constraints) = %s, circuit has %s"
            % (actual, expected)
        )
    if len(params.h) != domain_size(r1cs) - 1:
        return "parameters hold %d h points, circuit domain needs %d" % (
            len(params.h), domain_size(r1cs) - 1)
    return None


def verification_key_json(params):
    return {
        "protocol": "groth16",
        "curve": "bn128",
        "nPublic": params.num_inputs - 1,
        "vk_alpha_1": g1_to_json(params.alpha_g1),
        "vk_beta_2": g2_to_json(params.beta_g2),
        "vk_gamma_2": g2_to_json(params.gamma_g2),
        "vk_delta_2": g2_to_json(params.delta_g2),
        "IC": [g1_to_json(p) for p in params.ic],
    }


def _polys(r1cs, k):
    pols = [{} for _ in range(r1cs.num_variables)]
    for j, row in enumerate(constraint_rows(r1cs)):
        for wire, coeff in row[k].items():
            pols[wire][str(j)] = fr_to_json(coeff)
    return pols


def proving_key_json(params, circuit, aux_offset=0):
    r1cs = circuit.r1cs
    c_query = [None] * r1cs.num_inputs + list(params.l[aux_offset:])
    return {
        "protocol": "groth16",
        "curve": "bn128",
        "nVars": r1cs.num_variables,
        "nPublic": r1cs.num_inputs - 1,
        "domainSize": domain_size(r1cs),
        "polsA": _polys(r1cs, 0),
        "polsB": _polys(r1cs, 1),
        "polsC": _polys(r1cs, 2),
        "A": [g1_to_json(p) for p in params.a],
        "B1": [g1_to_json(p) for p in params.b_g1],
        "B2": [g2_to_json(p) for p in params.b_g2],
        "C": [None if i < r1cs.num_inputs else g1_to_json(p) for i, p in enumerate(c_query)],
        "hExps": [g1_to_json(p) for p in params.h],
        "vk_alpha_1": g1_to_json(params.alpha_g1),
        "vk_beta_1": g1_to_json(params.beta_g1),
        "vk_delta_1": g1_to_json(params.delta_g1),
        "vk_beta_2": g2_to_json(params.beta_g2),
        "vk_delta_2": g2_to_json(params.delta_g2),
    }


def proving_key_json_file(params, circuit, path, aux_offset=0):
    write_json(path, proving_key_json(params, circuit, aux_offset))


def verification_key_json_file(params, path):
    write_json(path, verification_key_json(params))
