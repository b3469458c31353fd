"""
R1CS 회로 기술자 (CircuitDescriptor)
====================================

circom이 컴파일한 Rank-1 제약 시스템과 선택적 witness를 담는다.

**배선(wire) 규칙**:
  | 배선 인덱스            | 의미                    |
  |------------------------|-------------------------|
  | 0                      | 상수 1                  |
  | 1 .. num_inputs-1      | 공개 입력 (출력 + 입력) |
  | num_inputs .. nVars-1  | 보조(aux) 배선          |

**제약**: (Σ aᵢ·wᵢ) · (Σ bᵢ·wᵢ) = Σ cᵢ·wᵢ
  각 선형결합은 {배선 인덱스: FR 계수} 딕셔너리로 표현한다.

**aux_offset**: 증명 시스템이 보조 변수 앞쪽에 예약하는 슬롯 수.
  보조 배선 w는 변수 ("aux", w - num_inputs + aux_offset)가 된다.

**입력 형식**:
  - JSON (circom 구버전 circuit.json): nPubInputs, nOutputs, nVars, constraints
  - 바이너리 (circom .r1cs v1): 헤더/제약/배선→라벨 섹션.
    배선→라벨 매핑은 읽기만 하고 어떤 워크플로우도 사용하지 않는다.
"""

import json
import logging
import os
import struct
from collections import namedtuple

from plonkit.errors import FormatError, ResourceNotFound
from plonkit.locator import CircuitFormat
from plonkit.plonk.field import FR

logger = logging.getLogger(__name__)

INPUT = "input"
AUX = "aux"

R1CS_MAGIC = b"r1cs"
SECTION_HEADER = 1
SECTION_CONSTRAINTS = 2
SECTION_WIRE_TO_LABEL = 3


class R1CS(namedtuple("R1CS", "num_inputs num_aux constraints")):
    """num_inputs는 상수 배선 0을 포함한다."""

    __slots__ = ()

    @property
    def num_variables(self):
        return self.num_inputs + self.num_aux

    @property
    def num_constraints(self):
        return len(self.constraints)


class CircuitDescriptor(namedtuple("CircuitDescriptor", "r1cs witness fmt wire_mapping")):
    """한 번의 명령 실행 동안만 사용하는 불변 회로 데이터."""

    __slots__ = ()

    def variable(self, wire, aux_offset):
        """배선 인덱스를 증명 시스템의 변수 인덱스로 변환한다."""
        if wire < self.r1cs.num_inputs:
            return (INPUT, wire)
        return (AUX, wire - self.r1cs.num_inputs + aux_offset)

    @property
    def has_witness(self):
        return self.witness is not None

    def public_inputs(self):
        """공개 입력 값 (상수 배선 0 제외)."""
        self._require_witness()
        return self.witness[1:self.r1cs.num_inputs]

    def evaluate(self, lc):
        self._require_witness()
        total = FR(0)
        for wire, coeff in lc.items():
            total = total + coeff * self.witness[wire]
        return total

    def unsatisfied_constraints(self):
        """witness가 만족하지 못하는 제약의 인덱스 목록."""
        return [
            i for i, (a, b, c) in enumerate(self.r1cs.constraints)
            if self.evaluate(a) * self.evaluate(b) != self.evaluate(c)
        ]

    def is_satisfied(self):
        return not self.unsatisfied_constraints()

    def _require_witness(self):
        if self.witness is None:
            raise ValueError("circuit was loaded without a witness")


# ─────────────────────────────────────────────────────────────────────
# JSON 형식
# ─────────────────────────────────────────────────────────────────────

def _read_json(path, what):
    if not os.path.exists(path):
        raise ResourceNotFound(path, what)
    with open(path) as f:
        try:
            return json.load(f)
        except ValueError as e:
            raise FormatError(path, f"invalid JSON: {e}") from e


def _lc_from_json(path, data, num_variables):
    if not isinstance(data, dict):
        raise FormatError(path, f"linear combination must be a JSON object, got {data!r}")
    lc = {}
    for wire, coeff in data.items():
        wire = int(wire)
        if not 0 <= wire < num_variables:
            raise FormatError(path, f"wire {wire} out of range")
        lc[wire] = FR(int(coeff))
    return lc


def r1cs_from_json_file(path):
    """circom 구버전 JSON 회로를 읽는다."""
    data = _read_json(path, "circuit")
    try:
        num_inputs = 1 + int(data["nPubInputs"]) + int(data["nOutputs"])
        num_variables = int(data["nVars"])
        constraints = [
            tuple(_lc_from_json(path, lc, num_variables) for lc in constraint)
            for constraint in data["constraints"]
        ]
    except (KeyError, TypeError, ValueError) as e:
        raise FormatError(path, f"malformed R1CS JSON: {e!r}") from e

    if num_variables < num_inputs:
        raise FormatError(path, "nVars is smaller than the number of inputs")
    if any(len(c) != 3 for c in constraints):
        raise FormatError(path, "every constraint must have exactly three linear combinations")
    return R1CS(num_inputs, num_variables - num_inputs, constraints)


def witness_from_json_file(path):
    """10진수 문자열 배열 형식의 witness를 읽는다."""
    data = _read_json(path, "witness")
    if not isinstance(data, list):
        raise FormatError(path, "witness must be a JSON array")
    try:
        return [FR(int(v)) for v in data]
    except (TypeError, ValueError) as e:
        raise FormatError(path, f"invalid witness value: {e}") from e


# ─────────────────────────────────────────────────────────────────────
# 바이너리 형식 (circom .r1cs)
# ─────────────────────────────────────────────────────────────────────

class _BinReader:

    def __init__(self, path, data):
        self.path = path
        self.data = data
        self.pos = 0

    def read(self, size):
        if self.pos + size > len(self.data):
            raise FormatError(self.path, "unexpected end of file")
        chunk = self.data[self.pos:self.pos + size]
        self.pos += size
        return chunk

    def u32(self):
        return struct.unpack("<I", self.read(4))[0]

    def u64(self):
        return struct.unpack("<Q", self.read(8))[0]

    def field(self, size):
        return int.from_bytes(self.read(size), "little")


def _read_header(reader):
    field_size = reader.u32()
    prime = reader.field(field_size)
    if prime != FR.field_modulus:
        raise FormatError(reader.path, "circuit is not defined over the bn128 scalar field")
    header = {
        "field_size": field_size,
        "n_wires": reader.u32(),
        "n_pub_out": reader.u32(),
        "n_pub_in": reader.u32(),
        "n_prv_in": reader.u32(),
        "n_labels": reader.u64(),
        "n_constraints": reader.u32(),
    }
    return header


def _read_lc(reader, field_size, n_wires):
    lc = {}
    for _ in range(reader.u32()):
        wire = reader.u32()
        if wire >= n_wires:
            raise FormatError(reader.path, f"wire {wire} out of range")
        lc[wire] = FR(reader.field(field_size))
    return lc


def r1cs_from_bin_file(path):
    """circom .r1cs 파일을 읽는다. (R1CS, wire_mapping)을 반환한다."""
    if not os.path.exists(path):
        raise ResourceNotFound(path, "circuit")
    with open(path, "rb") as f:
        reader = _BinReader(path, f.read())

    if reader.read(4) != R1CS_MAGIC:
        raise FormatError(path, "not a binary R1CS file")
    version = reader.u32()
    if version != 1:
        raise FormatError(path, f"unsupported R1CS version {version}")

    sections = {}
    for _ in range(reader.u32()):
        section_type = reader.u32()
        size = reader.u64()
        sections[section_type] = (reader.pos, size)
        reader.read(size)

    for required in (SECTION_HEADER, SECTION_CONSTRAINTS):
        if required not in sections:
            raise FormatError(path, f"missing section {required}")

    reader.pos = sections[SECTION_HEADER][0]
    header = _read_header(reader)

    reader.pos = sections[SECTION_CONSTRAINTS][0]
    constraints = []
    for _ in range(header["n_constraints"]):
        constraints.append(tuple(
            _read_lc(reader, header["field_size"], header["n_wires"]) for _ in range(3)
        ))

    wire_mapping = None
    if SECTION_WIRE_TO_LABEL in sections:
        reader.pos = sections[SECTION_WIRE_TO_LABEL][0]
        wire_mapping = [reader.u64() for _ in range(header["n_wires"])]

    num_inputs = 1 + header["n_pub_out"] + header["n_pub_in"]
    if header["n_wires"] < num_inputs:
        raise FormatError(path, "fewer wires than public inputs")
    r1cs = R1CS(num_inputs, header["n_wires"] - num_inputs, constraints)
    return r1cs, wire_mapping


# ─────────────────────────────────────────────────────────────────────
# 로딩
# ─────────────────────────────────────────────────────────────────────

def load_circuit(path, witness_path=None):
    """회로 파일을 형식에 맞게 읽고, witness_path가 있으면 witness도 읽는다."""
    fmt = CircuitFormat.of(path)
    logger.info("Loading circuit from %s...", path)
    if fmt is CircuitFormat.JSON:
        r1cs, wire_mapping = r1cs_from_json_file(path), None
    else:
        r1cs, wire_mapping = r1cs_from_bin_file(path)

    witness = None
    if witness_path is not None:
        logger.info("Loading witness from %s...", witness_path)
        witness = witness_from_json_file(witness_path)
        if len(witness) != r1cs.num_variables:
            raise FormatError(
                witness_path,
                f"witness has {len(witness)} values, circuit has {r1cs.num_variables} wires",
            )

    return CircuitDescriptor(r1cs, witness, fmt, wire_mapping)
