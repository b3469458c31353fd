"""
Groth16 Solidity 검증 컨트랙트 생성
===================================

EIP-196/197 프리컴파일(0x06 덧셈, 0x07 스칼라곱, 0x08 페어링)을 쓰는 검증 컨트랙트.
검증 키 상수를 템플릿에 채워 넣는다.

EVM은 G2 좌표를 (허수부, 실수부) 순서로 받는다.
"""


TEMPLATE = """// SPDX-License-Identifier: MIT
// Generated by plonkit
pragma solidity ^0.8.0;

library Pairing {
    struct G1Point {
        uint256 X;
        uint256 Y;
    }

    struct G2Point {
        uint256[2] X;
        uint256[2] Y;
    }

    uint256 constant PRIME_Q = 21888242871839275222246405745257275088696311157297823662689037894645226208583;

    function negate(G1Point memory p) internal pure returns (G1Point memory) {
        if (p.X == 0 && p.Y == 0) {
            return G1Point(0, 0);
        }
        return G1Point(p.X, PRIME_Q - (p.Y % PRIME_Q));
    }

    function addition(G1Point memory p1, G1Point memory p2) internal view returns (G1Point memory r) {
        uint256[4] memory input = [p1.X, p1.Y, p2.X, p2.Y];
        bool success;
        assembly {
            success := staticcall(sub(gas(), 2000), 6, input, 0x80, r, 0x40)
        }
        require(success, "pairing-add-failed");
    }

    function scalar_mul(G1Point memory p, uint256 s) internal view returns (G1Point memory r) {
        uint256[3] memory input = [p.X, p.Y, s];
        bool success;
        assembly {
            success := staticcall(sub(gas(), 2000), 7, input, 0x60, r, 0x40)
        }
        require(success, "pairing-mul-failed");
    }

    function pairing(G1Point[4] memory p1, G2Point[4] memory p2) internal view returns (bool) {
        uint256[24] memory input;
        for (uint256 i = 0; i < 4; i++) {
            input[i * 6 + 0] = p1[i].X;
            input[i * 6 + 1] = p1[i].Y;
            input[i * 6 + 2] = p2[i].X[0];
            input[i * 6 + 3] = p2[i].X[1];
            input[i * 6 + 4] = p2[i].Y[0];
            input[i * 6 + 5] = p2[i].Y[1];
        }
        uint256[1] memory out;
        bool success;
        assembly {
            success := staticcall(sub(gas(), 2000), 8, input, 0x300, out, 0x20)
        }
        require(success, "pairing-opcode-failed");
        return out[0] != 0;
    }
}

contract Verifier {
    using Pairing for *;

    uint256 constant SNARK_SCALAR_FIELD = 21888242871839275222246405745257275088548364400416034343698204186575808495617;

    struct VerifyingKey {
        Pairing.G1Point alpha1;
        Pairing.G2Point beta2;
        Pairing.G2Point gamma2;
        Pairing.G2Point delta2;
        Pairing.G1Point[] IC;
    }

    function verifyingKey() internal pure returns (VerifyingKey memory vk) {
        vk.alpha1 = Pairing.G1Point(<%vk_alpha1%>);
        vk.beta2 = Pairing.G2Point(<%vk_beta2%>);
        vk.gamma2 = Pairing.G2Point(<%vk_gamma2%>);
        vk.delta2 = Pairing.G2Point(<%vk_delta2%>);
        vk.IC = new Pairing.G1Point[](<%vk_ic_length%>);
<%vk_ic_pts%>
    }

    function verifyProof(
        uint256[2] memory a,
        uint256[2][2] memory b,
        uint256[2] memory c,
        uint256[<%vk_input_length%>] memory input
    ) public view returns (bool) {
        VerifyingKey memory vk = verifyingKey();
        Pairing.G1Point memory vk_x = Pairing.G1Point(0, 0);
        vk_x = Pairing.addition(vk_x, vk.IC[0]);
        for (uint256 i = 0; i < input.length; i++) {
            require(input[i] < SNARK_SCALAR_FIELD, "verifier-gte-snark-scalar-field");
            vk_x = Pairing.addition(vk_x, Pairing.scalar_mul(vk.IC[i + 1], input[i]));
        }
        return Pairing.pairing(
            [Pairing.negate(Pairing.G1Point(a[0], a[1])), vk.alpha1, vk_x, Pairing.G1Point(c[0], c[1])],
            [Pairing.G2Point(b[0], b[1]), vk.beta2, vk.gamma2, vk.delta2]
        );
    }
}
"""


def _g1(point):
    if point is None:
        return "0, 0"
    x, y = point
    return f"uint256({int(x)}), uint256({int(y)})"


def _g2(point):
    if point is None:
        return "[uint256(0), uint256(0)], [uint256(0), uint256(0)]"
    x, y = point
    x0, x1 = (int(c) for c in x.coeffs)
    y0, y1 = (int(c) for c in y.coeffs)
    return f"[uint256({x1}), uint256({x0})], [uint256({y1}), uint256({y0})]"


def render_verifier(params):
    ic_lines = "\n".join(
        f"        vk.IC[{i}] = Pairing.G1Point({_g1(p)});" for i, p in enumerate(params.ic)
    )
    replacements = {
        "<%vk_alpha1%>": _g1(params.alpha_g1),
        "<%vk_beta2%>": _g2(params.beta_g2),
        "<%vk_gamma2%>": _g2(params.gamma_g2),
        "<%vk_delta2%>": _g2(params.delta_g2),
        "<%vk_ic_length%>": str(len(params.ic)),
        "<%vk_ic_pts%>": ic_lines,
        "<%vk_input_length%>": str(len(params.ic) - 1),
    }
    source = TEMPLATE
    for key, value in replacements.items():
        source = source.replace(key, value)
    return source


def create_verifier_sol_file(params, path):
    with open(path, "w") as f:
        f.write(render_verifier(params))
