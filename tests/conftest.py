import json
import os
import random
import struct
import sys

import pytest

# 프로젝트 루트를 sys.path에 추가
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from plonkit import workflow
from plonkit.plonk.field import CURVE_ORDER
from plonkit.policy import ProofSystem


# ── 테스트 회로: x³ + x + 5 = out (x = 3, out = 35) ──
#
# 배선: 0 = 1, 1 = out (공개 출력), 2 = x, 3 = x², 4 = x³
X3_CIRCUIT = {
    "nPubInputs": 0,
    "nOutputs": 1,
    "nVars": 5,
    "constraints": [
        [{"2": "1"}, {"2": "1"}, {"3": "1"}],
        [{"3": "1"}, {"2": "1"}, {"4": "1"}],
        [{"4": "1", "2": "1", "0": "5"}, {"0": "1"}, {"1": "1"}],
    ],
}
X3_WITNESS = ["1", "35", "3", "9", "27"]

# 공개 입력 2개: out = a · b (a, b 공개, out 공개 출력)
MUL_CIRCUIT = {
    "nPubInputs": 2,
    "nOutputs": 1,
    "nVars": 4,
    "constraints": [
        [{"2": "1"}, {"3": "1"}, {"1": "1"}],
    ],
}
MUL_WITNESS = ["1", "42", "6", "7"]

SRS_POW2 = 4


def write_json(path, data):
    with open(path, "w") as f:
        json.dump(data, f)
    return str(path)


def _lc_bytes(lc):
    out = struct.pack("<I", len(lc))
    for wire, coeff in sorted(lc.items()):
        out += struct.pack("<I", int(wire)) + (int(coeff) % CURVE_ORDER).to_bytes(32, "little")
    return out


def build_r1cs_bin(circuit, n_pub_out, n_pub_in, n_prv_in, prime=CURVE_ORDER, with_labels=True):
    """circom .r1cs v1 파일 내용을 만든다."""
    n_wires = circuit["nVars"]
    header = struct.pack("<I", 32) + prime.to_bytes(32, "little")
    header += struct.pack("<IIIIQI", n_wires, n_pub_out, n_pub_in, n_prv_in,
                          n_wires, len(circuit["constraints"]))
    body = b"".join(
        b"".join(_lc_bytes(lc) for lc in constraint) for constraint in circuit["constraints"]
    )
    labels = b"".join(struct.pack("<Q", i) for i in range(n_wires))

    sections = [(1, header), (2, body)]
    if with_labels:
        sections.append((3, labels))
    out = b"r1cs" + struct.pack("<II", 1, len(sections))
    for section_type, data in sections:
        out += struct.pack("<IQ", section_type, len(data)) + data
    return out


@pytest.fixture
def x3_files(tmp_path):
    """(circuit.json 경로, witness.json 경로)"""
    return (
        write_json(tmp_path / "circuit.json", X3_CIRCUIT),
        write_json(tmp_path / "witness.json", X3_WITNESS),
    )


@pytest.fixture(scope="session")
def plonk_dir(tmp_path_factory):
    """x³ 회로, SRS, 검증 키, 증명을 한 번만 만들어 둔 디렉터리."""
    d = tmp_path_factory.mktemp("plonk")
    paths = {
        "circuit": write_json(d / "circuit.json", X3_CIRCUIT),
        "witness": write_json(d / "witness.json", X3_WITNESS),
        "srs": str(d / "srs.bin"),
        "vk": str(d / "vk.bin"),
        "proof": str(d / "proof.bin"),
        "public": str(d / "public.json"),
    }
    workflow.generate_srs(paths["srs"], SRS_POW2, ProofSystem.PLONK, rng=random.Random(1234))
    workflow.export_verification_key(paths["srs"], paths["circuit"], paths["vk"], ProofSystem.PLONK)
    workflow.prove(paths["srs"], None, paths["circuit"], paths["witness"], paths["proof"],
                   ProofSystem.PLONK, public_path=paths["public"], rng=random.Random(5678))
    return paths
