"""
워크플로우 (WorkflowOrchestrator)
=================================

서브커맨드 하나당 프로시저 하나. 모든 프로시저는 같은 순서를 따른다:

  1. policy.check()          지원하지 않는 조합이면 파일을 건드리기 전에 중단
  2. 범위 검사                size_pow2 (해당하는 경우)
  3. 회로 경로 결정 + 읽기     CircuitLocator, r1cs.load_circuit
  4. 엔진 호출                 plonkit.plonk / plonkit.groth16
  5. 결과 저장                 codec

실패하면 남은 단계는 실행되지 않는다. 여러 파일을 쓰는 프로시저(export_keys 등)는
앞서 쓴 파일을 되돌리지 않는다.

setup/prove/generate_srs는 호출마다 새 random.SystemRandom()을 만든다.
테스트는 rng 인자로 시드를 고정한 난수원을 넘길 수 있다.
"""

import logging
import random

from plonkit import codec
from plonkit import config
from plonkit.errors import FormatError, RangeViolation
from plonkit.groth16 import contract, keys, setup as groth16_setup
from plonkit.locator import resolve_circuit_file
from plonkit.plonk import circuit as plonk_circuit, preprocessor, prover, verifier
from plonkit.plonk.srs import SRS, LagrangeSRS
from plonkit.policy import Operation, check
from plonkit.r1cs import load_circuit

logger = logging.getLogger(__name__)


def check_setup_power(size_pow2):
    """SRS 크기 지수가 [SETUP_MIN_POW2, SETUP_MAX_POW2] 안에 있는지 확인한다."""
    if not config.SETUP_MIN_POW2 <= size_pow2 <= config.SETUP_MAX_POW2:
        raise RangeViolation("size_pow2", size_pow2, config.SETUP_MIN_POW2, config.SETUP_MAX_POW2)
    return size_pow2


def _fresh_rng(rng):
    return random.SystemRandom() if rng is None else rng


def _load(circuit_path, witness_path=None):
    path = resolve_circuit_file(circuit_path)
    return load_circuit(path, witness_path)


def _plonk_setup(descriptor, srs, srs_path, aux_offset):
    """회로를 PLONK 게이트로 합성하고 전처리한다. (circuit, preprocessed)."""
    circuit = plonk_circuit.synthesize(descriptor, aux_offset)
    n = circuit.pad_to_power_of_2()
    needed = preprocessor.required_srs_size(n)
    if srs.size < needed:
        raise FormatError(
            srs_path,
            f"SRS has {srs.size} points but the circuit (domain size {n}) needs at least {needed}",
        )
    return circuit, preprocessor.setup_circuit(circuit, srs)


def _check_witness(descriptor, circuit_path):
    failing = descriptor.unsatisfied_constraints()
    if failing:
        raise ValueError(
            f"witness does not satisfy constraint {failing[0]} of {circuit_path}"
            f" ({len(failing)} unsatisfied)"
        )


# ─────────────────────────────────────────────────────────────────────
# Groth16
# ─────────────────────────────────────────────────────────────────────

def setup(params_path, circuit_path, proof_system, rng=None):
    cap = check(proof_system, Operation.SETUP)
    rng = _fresh_rng(rng)

    descriptor = _load(circuit_path)

    logger.info("Generating trusted setup parameters...")
    params = groth16_setup.generate_random_parameters(descriptor, rng, cap.aux_offset)

    logger.info("Writing to file...")
    codec.write_params(params_path, params)
    logger.info("Saved parameters to %s", params_path)
    return params


def generate_verifier(params_path, verifier_path, proof_system):
    check(proof_system, Operation.GENERATE_VERIFIER)
    params = codec.load_params(params_path)
    contract.create_verifier_sol_file(params, verifier_path)
    logger.info("Created %s", verifier_path)


def export_keys(params_path, circuit_path, pk_path, vk_path, proof_system):
    cap = check(proof_system, Operation.EXPORT_KEYS)
    logger.info("Exporting %s...", params_path)
    params = codec.load_params(params_path)
    descriptor = _load(circuit_path)

    mismatch = keys.params_mismatch(params, descriptor.r1cs)
    if mismatch:
        raise FormatError(params_path, mismatch)

    keys.proving_key_json_file(params, descriptor, pk_path, cap.aux_offset)
    keys.verification_key_json_file(params, vk_path)
    logger.info("Created %s and %s.", pk_path, vk_path)


# ─────────────────────────────────────────────────────────────────────
# Plonk
# ─────────────────────────────────────────────────────────────────────

def prove(srs_monomial_path, srs_lagrange_path, circuit_path, witness_path, proof_path,
          proof_system, size_pow2=None, public_path=None, rng=None):
    cap = check(proof_system, Operation.PROVE)
    if size_pow2 is not None:
        check_setup_power(size_pow2)
    rng = _fresh_rng(rng)

    path = resolve_circuit_file(circuit_path)
    descriptor = load_circuit(path, witness_path)
    _check_witness(descriptor, path)

    srs = codec.load_srs_monomial(srs_monomial_path)
    if size_pow2 is not None and srs.size != 2 ** size_pow2:
        raise FormatError(
            srs_monomial_path, f"SRS has {srs.size} points, expected 2^{size_pow2}"
        )

    circuit, pp = _plonk_setup(descriptor, srs, srs_monomial_path, cap.aux_offset)

    lagrange_srs = codec.maybe_load_srs_lagrange(srs_lagrange_path)
    if lagrange_srs is None:
        lagrange_srs = LagrangeSRS.from_monomial(srs, pp.n)
    elif lagrange_srs.size != pp.n:
        raise FormatError(
            srs_lagrange_path,
            f"lagrange SRS has size {lagrange_srs.size} but the circuit domain is {pp.n};"
            " regenerate it with dump-lagrange",
        )
    elif lagrange_srs.g2_powers != srs.g2_powers:
        raise FormatError(
            srs_lagrange_path,
            f"lagrange SRS was not derived from {srs_monomial_path};"
            " regenerate it with dump-lagrange",
        )

    a_vals, b_vals, c_vals = circuit.wire_values()
    public_inputs = circuit.public_input_values()

    logger.info("Proving...")
    proof = prover.prove(a_vals, b_vals, c_vals, public_inputs, pp, srs, lagrange_srs, rng)

    codec.write_proof(proof_path, proof)
    if public_path is not None:
        codec.write_public_inputs(public_path, proof.public_inputs)
        logger.info("Saved %s and %s", proof_path, public_path)
    else:
        logger.info("Saved %s", proof_path)
    return proof


def verify(proof_path, vk_path, proof_system, public_path=None):
    """증명이 유효하면 True. 유효하지 않은 증명은 예외가 아니라 False다."""
    check(proof_system, Operation.VERIFY)
    vk = codec.load_verification_key(vk_path)
    try:
        proof = codec.load_proof(proof_path)
    except FormatError as e:
        logger.warning("Cannot decode proof: %s", e)
        return False

    if public_path is not None:
        expected = codec.load_public_inputs(public_path)
        if expected != proof.public_inputs:
            logger.warning("Public inputs in %s do not match the proof", public_path)
            return False

    return verifier.verify(vk, proof)


def dump_lagrange(srs_monomial_path, srs_lagrange_path, circuit_path, witness_path,
                  proof_system):
    cap = check(proof_system, Operation.DUMP_LAGRANGE)

    descriptor = _load(circuit_path, witness_path)
    srs = codec.load_srs_monomial(srs_monomial_path)

    circuit = plonk_circuit.synthesize(descriptor, cap.aux_offset)
    n = circuit.pad_to_power_of_2()
    if srs.size < n:
        raise FormatError(srs_monomial_path, f"SRS has {srs.size} points, domain size is {n}")

    lagrange_srs = LagrangeSRS.from_monomial(srs, n)
    codec.write_srs(srs_lagrange_path, lagrange_srs)
    logger.info("Saved lagrange SRS (domain size %d) to %s", n, srs_lagrange_path)
    return lagrange_srs


def export_verification_key(srs_monomial_path, circuit_path, vk_path, proof_system):
    cap = check(proof_system, Operation.EXPORT_VERIFICATION_KEY)

    descriptor = _load(circuit_path)
    srs = codec.load_srs_monomial(srs_monomial_path)

    _, pp = _plonk_setup(descriptor, srs, srs_monomial_path, cap.aux_offset)
    vk = pp.verification_key(srs)
    codec.write_verification_key(vk_path, vk)
    logger.info("Saved verification key (domain size %d) to %s", vk.n, vk_path)
    return vk


def generate_srs(srs_monomial_path, size_pow2, proof_system, rng=None):
    """테스트용 SRS. τ를 로컬에서 샘플링하므로 실제 배포에는 쓰면 안 된다."""
    check(proof_system, Operation.GENERATE_SRS)
    check_setup_power(size_pow2)
    rng = _fresh_rng(rng)

    logger.warning("Generating an insecure local SRS of 2^%d points", size_pow2)
    srs = SRS.generate(2 ** size_pow2, rng)
    codec.write_srs(srs_monomial_path, srs)
    logger.info("Saved SRS to %s", srs_monomial_path)
    return srs
