"""
아티팩트 코덱 (ArtifactCodec)
=============================

디스크에 저장되는 모든 아티팩트의 읽기/쓰기.

**바이너리 기본 단위** (모두 big-endian):
  | 단위 | 크기      | 인코딩                                   |
  |------|-----------|------------------------------------------|
  | u32  | 4바이트   | 길이, 개수                               |
  | FR   | 32바이트  | 스칼라 필드 원소                         |
  | G1   | 64바이트  | x, y. 무한원점은 64바이트의 0             |
  | G2   | 128바이트 | x.c0, x.c1, y.c0, y.c1. 무한원점은 모두 0 |

**파일 형식**:
  | 아티팩트            | 매직  | 본문                                           |
  |---------------------|-------|------------------------------------------------|
  | Groth16 파라미터    | G16P  | 개수 3개 + G1/G2 필드 + 벡터들                 |
  | 단항식 SRS          | SRSM  | G1 벡터 + G2 벡터                              |
  | Lagrange SRS        | SRSL  | G1 벡터 + G2 벡터                              |
  | PLONK 검증 키       | PVK1  | n, 공개 입력 수, 커밋먼트 8개, G2 벡터         |
  | PLONK 증명          | 없음  | 공개 입력 벡터 + G1 9개 + FR 7개               |

**JSON 기본 단위** (snarkjs 호환):
  FR → 10진수 문자열
  G1 → [x, y, "1"]               (무한원점: ["0", "1", "0"])
  G2 → [[x0, x1], [y0, y1], ["1", "0"]]

읽기 함수는 파일이 없으면 ResourceNotFound, 매직/길이가 맞지 않으면 FormatError를 던진다.
증명의 G1 점은 곡선 검사 없이 읽는다. 곡선 밖의 점은 Verifier가 거부한다.
"""

import json
import logging
import os
import struct

from py_ecc import bn128

from plonkit.errors import FormatError, ResourceNotFound
from plonkit.groth16.setup import Parameters
from plonkit.plonk.field import FR, FIELD_MODULUS
from plonkit.plonk.preprocessor import VerificationKey
from plonkit.plonk.prover import Proof
from plonkit.plonk.srs import SRS, LagrangeSRS

logger = logging.getLogger(__name__)

PARAMS_MAGIC = b"G16P"
SRS_MONOMIAL_MAGIC = b"SRSM"
SRS_LAGRANGE_MAGIC = b"SRSL"
VK_MAGIC = b"PVK1"

FR_SIZE = 32
G1_SIZE = 2 * FR_SIZE
G2_SIZE = 4 * FR_SIZE


# ─────────────────────────────────────────────────────────────────────
# 바이너리 기본 단위
# ─────────────────────────────────────────────────────────────────────

def _int_bytes(value):
    return (int(value) % FIELD_MODULUS).to_bytes(FR_SIZE, "big")


def fr_to_bytes(x):
    return (int(x) % FR.field_modulus).to_bytes(FR_SIZE, "big")


def g1_to_bytes(point):
    if point is None:
        return b"\x00" * G1_SIZE
    x, y = point
    return _int_bytes(x) + _int_bytes(y)


def g2_to_bytes(point):
    if point is None:
        return b"\x00" * G2_SIZE
    x, y = point
    return b"".join(_int_bytes(c) for c in (*x.coeffs, *y.coeffs))


class _ByteWriter:

    def __init__(self, magic=b""):
        self.chunks = [magic]

    def u32(self, value):
        self.chunks.append(struct.pack(">I", value))

    def fr(self, x):
        self.chunks.append(fr_to_bytes(x))

    def g1(self, point):
        self.chunks.append(g1_to_bytes(point))

    def g2(self, point):
        self.chunks.append(g2_to_bytes(point))

    def g1_vector(self, points):
        self.u32(len(points))
        for point in points:
            self.g1(point)

    def g2_vector(self, points):
        self.u32(len(points))
        for point in points:
            self.g2(point)

    def save(self, path):
        with open(path, "wb") as f:
            f.write(b"".join(self.chunks))


class _ByteReader:

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

    def _int(self):
        return int.from_bytes(self.read(FR_SIZE), "big")

    def u32(self):
        return struct.unpack(">I", self.read(4))[0]

    def fr(self):
        return FR(self._int())

    def g1(self):
        raw = self.read(G1_SIZE)
        if raw == b"\x00" * G1_SIZE:
            return None
        return (
            bn128.FQ(int.from_bytes(raw[:FR_SIZE], "big")),
            bn128.FQ(int.from_bytes(raw[FR_SIZE:], "big")),
        )

    def g2(self):
        raw = self.read(G2_SIZE)
        if raw == b"\x00" * G2_SIZE:
            return None
        c = [int.from_bytes(raw[i:i + FR_SIZE], "big") for i in range(0, G2_SIZE, FR_SIZE)]
        return (bn128.FQ2([c[0], c[1]]), bn128.FQ2([c[2], c[3]]))

    def _count(self, item_size):
        count = self.u32()
        if count * item_size > len(self.data) - self.pos:
            raise FormatError(self.path, "vector length exceeds file size")
        return count

    def g1_vector(self):
        return [self.g1() for _ in range(self._count(G1_SIZE))]

    def g2_vector(self):
        return [self.g2() for _ in range(self._count(G2_SIZE))]

    def finish(self):
        if self.pos != len(self.data):
            raise FormatError(self.path, f"{len(self.data) - self.pos} trailing bytes")


def _open(path, magic=None, what="file"):
    if not os.path.exists(path):
        raise ResourceNotFound(path, what)
    with open(path, "rb") as f:
        reader = _ByteReader(path, f.read())
    if magic is not None and reader.read(len(magic)) != magic:
        raise FormatError(path, f"bad magic, expected {magic.decode()}")
    return reader


def _check_on_curve(path, points, curve_b):
    for point in points:
        if not bn128.is_on_curve(point, curve_b):
            raise FormatError(path, "point is not on the curve")


# ─────────────────────────────────────────────────────────────────────
# Groth16 파라미터
# ─────────────────────────────────────────────────────────────────────

def write_params(path, params):
    w = _ByteWriter(PARAMS_MAGIC)
    w.u32(params.num_inputs)
    w.u32(params.num_aux)
    w.u32(params.num_constraints)
    for name in Parameters.G1_FIELDS:
        w.g1(getattr(params, name))
    for name in Parameters.G2_FIELDS:
        w.g2(getattr(params, name))
    for name in Parameters.G1_VECTORS:
        w.g1_vector(getattr(params, name))
    for name in Parameters.G2_VECTORS:
        w.g2_vector(getattr(params, name))
    w.save(path)


def load_params(path):
    r = _open(path, PARAMS_MAGIC, "parameters")
    counts = (r.u32(), r.u32(), r.u32())
    points = {}
    for name in Parameters.G1_FIELDS:
        points[name] = r.g1()
    for name in Parameters.G2_FIELDS:
        points[name] = r.g2()
    for name in Parameters.G1_VECTORS:
        points[name] = r.g1_vector()
    for name in Parameters.G2_VECTORS:
        points[name] = r.g2_vector()
    r.finish()

    _check_on_curve(path, [points[n] for n in Parameters.G1_FIELDS], bn128.b)
    _check_on_curve(path, [points[n] for n in Parameters.G2_FIELDS], bn128.b2)
    return Parameters(*counts, **points)


# ─────────────────────────────────────────────────────────────────────
# SRS
# ─────────────────────────────────────────────────────────────────────

def write_srs(path, srs):
    """SRS 또는 LagrangeSRS를 저장한다. 형식은 객체 종류로 정한다."""
    if isinstance(srs, LagrangeSRS):
        w = _ByteWriter(SRS_LAGRANGE_MAGIC)
        w.g1_vector(srs.g1_lagrange)
    else:
        w = _ByteWriter(SRS_MONOMIAL_MAGIC)
        w.g1_vector(srs.g1_powers)
    w.g2_vector(srs.g2_powers)
    w.save(path)


def _load_srs_points(path, magic):
    r = _open(path, magic, "SRS")
    g1_points = r.g1_vector()
    g2_points = r.g2_vector()
    r.finish()
    if len(g2_points) < 2:
        raise FormatError(path, "SRS needs at least two G2 points")
    _check_on_curve(path, g2_points, bn128.b2)
    return g1_points, g2_points


def load_srs_monomial(path):
    return SRS(*_load_srs_points(path, SRS_MONOMIAL_MAGIC))


def load_srs_lagrange(path):
    return LagrangeSRS(*_load_srs_points(path, SRS_LAGRANGE_MAGIC))


def maybe_load_srs_lagrange(path):
    """경로가 없거나 파일이 없으면 None을 반환한다."""
    if path is None:
        return None
    if not os.path.exists(path):
        logger.info("Lagrange SRS %s not found, it will be derived from the monomial SRS", path)
        return None
    return load_srs_lagrange(path)


# ─────────────────────────────────────────────────────────────────────
# PLONK 검증 키 / 증명
# ─────────────────────────────────────────────────────────────────────

def write_verification_key(path, vk):
    w = _ByteWriter(VK_MAGIC)
    w.u32(vk.n)
    w.u32(vk.num_public_inputs)
    for name in VerificationKey.COMMITMENTS:
        w.g1(getattr(vk, name))
    w.g2_vector(vk.g2_powers)
    w.save(path)


def load_verification_key(path):
    r = _open(path, VK_MAGIC, "verification key")
    n = r.u32()
    num_public_inputs = r.u32()
    commitments = {name: r.g1() for name in VerificationKey.COMMITMENTS}
    g2_powers = r.g2_vector()
    r.finish()

    if n < 1 or n & (n - 1):
        raise FormatError(path, f"domain size {n} is not a power of two")
    if len(g2_powers) != 2:
        raise FormatError(path, "verification key needs exactly two G2 points")
    _check_on_curve(path, commitments.values(), bn128.b)
    _check_on_curve(path, g2_powers, bn128.b2)
    return VerificationKey(n, num_public_inputs, commitments, g2_powers)


def proof_to_bytes(proof):
    w = _ByteWriter()
    w.u32(len(proof.public_inputs))
    for x in proof.public_inputs:
        w.fr(x)
    for name in Proof.COMMITMENTS:
        w.g1(getattr(proof, name))
    for name in Proof.EVALUATIONS:
        w.fr(getattr(proof, name))
    return b"".join(w.chunks)


def write_proof(path, proof):
    with open(path, "wb") as f:
        f.write(proof_to_bytes(proof))


def load_proof(path):
    r = _open(path, what="proof")
    proof = Proof()
    count = r.u32()
    if count * FR_SIZE > len(r.data) - r.pos:
        raise FormatError(path, "public input count exceeds file size")
    proof.public_inputs = [r.fr() for _ in range(count)]
    for name in Proof.COMMITMENTS:
        setattr(proof, name, r.g1())
    for name in Proof.EVALUATIONS:
        setattr(proof, name, r.fr())
    r.finish()
    return proof


# ─────────────────────────────────────────────────────────────────────
# JSON
# ─────────────────────────────────────────────────────────────────────

def fr_to_json(x):
    return str(int(x))


def g1_to_json(point):
    if point is None:
        return ["0", "1", "0"]
    x, y = point
    return [str(int(x)), str(int(y)), "1"]


def g2_to_json(point):
    if point is None:
        return [["0", "0"], ["1", "0"], ["0", "0"]]
    x, y = point
    return [
        [str(int(c)) for c in x.coeffs],
        [str(int(c)) for c in y.coeffs],
        ["1", "0"],
    ]


def write_json(path, data):
    with open(path, "w") as f:
        json.dump(data, f, indent=1)
        f.write("\n")


def write_public_inputs(path, inputs):
    write_json(path, [fr_to_json(x) for x in inputs])


def load_public_inputs(path):
    if not os.path.exists(path):
        raise ResourceNotFound(path, "public inputs")
    with open(path) as f:
        try:
            data = json.load(f)
        except ValueError as e:
            raise FormatError(path, f"invalid JSON: {e}") from e
    if not isinstance(data, list):
        raise FormatError(path, "public inputs must be a JSON array")
    try:
        return [FR(int(x)) for x in data]
    except (TypeError, ValueError) as e:
        raise FormatError(path, f"invalid public input: {e}") from e
