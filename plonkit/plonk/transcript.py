"""
Fiat-Shamir 트랜스크립트
========================

SHA-256 해시 체인으로 Verifier의 랜덤 챌린지를 시뮬레이션한다.
Prover와 Verifier가 같은 순서로 같은 데이터를 추가하면 같은 챌린지를 얻는다.

챌린지 순서: β, γ (Round 2) → α (Round 3) → ζ (Round 4) → v (Round 5) → u (검증)
"""

import hashlib

from plonkit.plonk.field import FR, CURVE_ORDER


class Transcript:

    def __init__(self, label=b"plonkit"):
        self.state = bytearray(label)

    def append_scalar(self, label, scalar):
        self.state.extend(label)
        self.state.extend((int(scalar) % CURVE_ORDER).to_bytes(32, "big"))

    def append_point(self, label, point):
        """G1 점을 추가한다. 무한원점은 64바이트의 0."""
        self.state.extend(label)
        if point is None:
            self.state.extend(b"\x00" * 64)
        else:
            x, y = point
            self.state.extend(int(x).to_bytes(32, "big"))
            self.state.extend(int(y).to_bytes(32, "big"))

    def challenge_scalar(self, label):
        """현재 상태의 해시로 챌린지를 만들고, 해시를 다시 상태에 체이닝한다."""
        self.state.extend(label)
        digest = hashlib.sha256(bytes(self.state)).digest()
        self.state.extend(digest)
        return FR(int.from_bytes(digest, "big") % CURVE_ORDER)
