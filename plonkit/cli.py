"""
plonkit 명령행 인터페이스
=========================

  plonkit setup              [-p params] [-c circuit] [-s groth16]
  plonkit prove              -m srs_monomial [-l srs_lagrange] [-o size_pow2] [-c circuit]
                             [-w witness] [-p|-r proof] [-i public] [-s plonk]
  plonkit verify             [-p proof] [-v vk] [-i public] [-s plonk]
  plonkit generate-verifier  [-p params] [-v verifier] [-s groth16]
  plonkit export-keys        [-p params] [-c circuit] [-r pk] [-v vk] [-s groth16]
  plonkit dump-lagrange      -m srs_monomial -l srs_lagrange [-c circuit] [-w witness] [-s plonk]
  plonkit export-verification-key  -m srs_monomial [-c circuit] [-v vk] [-s plonk]
  plonkit generate-srs       -m srs_monomial -o size_pow2 [-s plonk]

종료 코드: 0 성공, 400 유효하지 않은 증명, 1 그 밖의 오류.
"""

import argparse
import logging
import sys

from plonkit import workflow
from plonkit.config import DEFAULTS, LOG_LEVELS, load_settings
from plonkit.errors import PlonkitError
from plonkit.policy import ProofSystem
from plonkit.utils import setup_logging

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_INVALID_PROOF = 400

# 증명 시스템별 기본 증명/검증 키 파일
PROOF_DEFAULTS = {
    ProofSystem.PLONK: (DEFAULTS.proof_bin, DEFAULTS.vk_bin),
    ProofSystem.GROTH16: (DEFAULTS.proof_json, DEFAULTS.params),
}


def _proof_system(value):
    try:
        return ProofSystem.parse(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e))


def _add_proof_system(parser, default):
    parser.add_argument("-s", "--proof-system", type=_proof_system, default=default,
                        help=f"proof system: groth16 or plonk (default: {default})")


def build_parser():
    parser = argparse.ArgumentParser(
        prog="plonkit",
        description="A tool to work with SNARK circuits generated by circom")
    parser.add_argument("--log-level", type=str.upper, choices=LOG_LEVELS, default=None,
                        help="logging level (default: $PLONKIT_LOG_LEVEL or INFO)")
    sub = parser.add_subparsers(dest="command", metavar="COMMAND")
    sub.required = True

    p = sub.add_parser("setup", help="Generate trusted setup parameters")
    p.add_argument("-p", "--params", default=DEFAULTS.params,
                   help="Snark trusted setup parameters file")
    p.add_argument("-c", "--circuit", default=None, help="Circuit R1CS or JSON file")
    _add_proof_system(p, ProofSystem.GROTH16)

    p = sub.add_parser("prove", help="Generate a SNARK proof")
    p.add_argument("-m", "--srs-monomial", required=True, help="Universal SRS in monomial form")
    p.add_argument("-l", "--srs-lagrange", default=None, help="Universal SRS in lagrange form")
    p.add_argument("-o", "--size-pow2", type=int, default=None,
                   help="Expected SRS size as a power of two")
    p.add_argument("-c", "--circuit", default=None, help="Circuit R1CS or JSON file")
    p.add_argument("-w", "--witness", default=DEFAULTS.witness, help="Witness JSON file")
    p.add_argument("-p", "-r", "--proof", default=None, help="Output file for proof")
    p.add_argument("-i", "--public", nargs="?", const=DEFAULTS.public, default=None,
                   help=f"Output file for public inputs JSON (bare -i: {DEFAULTS.public})")
    _add_proof_system(p, ProofSystem.PLONK)

    p = sub.add_parser("verify", help="Verify a SNARK proof")
    p.add_argument("-p", "--proof", default=None, help="Proof file")
    p.add_argument("-v", "--vk", default=None, help="Verification key (or parameters) file")
    p.add_argument("-i", "--public", nargs="?", const=DEFAULTS.public, default=None,
                   help=f"Public inputs JSON file (bare -i: {DEFAULTS.public})")
    _add_proof_system(p, ProofSystem.PLONK)

    p = sub.add_parser("generate-verifier", help="Generate verifier smart contract")
    p.add_argument("-p", "--params", default=DEFAULTS.params,
                   help="Snark trusted setup parameters file")
    p.add_argument("-v", "--verifier", default=DEFAULTS.verifier,
                   help="Output smart contract name")
    _add_proof_system(p, ProofSystem.GROTH16)

    p = sub.add_parser("export-keys",
                       help="Export proving and verifying keys compatible with snarkjs/websnark")
    p.add_argument("-p", "--params", default=DEFAULTS.params,
                   help="Snark trusted setup parameters file")
    p.add_argument("-c", "--circuit", default=None, help="Circuit R1CS or JSON file")
    p.add_argument("-r", "--pk", default=DEFAULTS.proving_key, help="Output proving key file")
    p.add_argument("-v", "--vk", default=DEFAULTS.verification_key,
                   help="Output verifying key file")
    _add_proof_system(p, ProofSystem.GROTH16)

    p = sub.add_parser("dump-lagrange", help="Dump the SRS in lagrange form for a circuit")
    p.add_argument("-m", "--srs-monomial", required=True, help="Universal SRS in monomial form")
    p.add_argument("-l", "--srs-lagrange", required=True, help="Output SRS in lagrange form")
    p.add_argument("-c", "--circuit", default=None, help="Circuit R1CS or JSON file")
    p.add_argument("-w", "--witness", default=DEFAULTS.witness, help="Witness JSON file")
    _add_proof_system(p, ProofSystem.PLONK)

    p = sub.add_parser("export-verification-key", help="Export the PLONK verification key")
    p.add_argument("-m", "--srs-monomial", required=True, help="Universal SRS in monomial form")
    p.add_argument("-c", "--circuit", default=None, help="Circuit R1CS or JSON file")
    p.add_argument("-v", "--vk", default=DEFAULTS.vk_bin, help="Output verification key file")
    _add_proof_system(p, ProofSystem.PLONK)

    p = sub.add_parser("generate-srs", help="Generate an insecure universal SRS for testing")
    p.add_argument("-m", "--srs-monomial", required=True, help="Output SRS in monomial form")
    p.add_argument("-o", "--size-pow2", type=int, required=True, help="SRS size as a power of two")
    _add_proof_system(p, ProofSystem.PLONK)

    return parser


def run(args):
    """서브커맨드를 실행하고 종료 코드를 반환한다."""
    proof_system = args.proof_system
    proof_default, vk_default = PROOF_DEFAULTS[proof_system]

    if args.command == "setup":
        workflow.setup(args.params, args.circuit, proof_system)
    elif args.command == "prove":
        workflow.prove(args.srs_monomial, args.srs_lagrange, args.circuit, args.witness,
                       args.proof or proof_default, proof_system,
                       size_pow2=args.size_pow2, public_path=args.public)
    elif args.command == "verify":
        correct = workflow.verify(args.proof or proof_default, args.vk or vk_default,
                                  proof_system, public_path=args.public)
        if not correct:
            print("Proof is invalid!")
            return EXIT_INVALID_PROOF
        print("Proof is correct")
    elif args.command == "generate-verifier":
        workflow.generate_verifier(args.params, args.verifier, proof_system)
    elif args.command == "export-keys":
        workflow.export_keys(args.params, args.circuit, args.pk, args.vk, proof_system)
    elif args.command == "dump-lagrange":
        workflow.dump_lagrange(args.srs_monomial, args.srs_lagrange, args.circuit,
                               args.witness, proof_system)
    elif args.command == "export-verification-key":
        workflow.export_verification_key(args.srs_monomial, args.circuit, args.vk,
                                         proof_system)
    elif args.command == "generate-srs":
        workflow.generate_srs(args.srs_monomial, args.size_pow2, proof_system)
    return EXIT_OK


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        settings = load_settings()
    except ValueError as e:
        parser.error(str(e))
    setup_logging(args.log_level or settings.log_level, settings.log_file)

    try:
        code = run(args)
    except PlonkitError as e:
        logger.error("%s", e)
        code = EXIT_ERROR
    sys.exit(code)


if __name__ == "__main__":
    main()
