"""
PLONK 회로 표현 (Circuit Representation)
==========================================

R1CS 제약을 PLONK 게이트와 배선으로 옮긴다.

**PLONK 게이트 구조**:
  각 게이트는 3개의 배선(wire) a, b, c와 5개의 셀렉터(selector)로 구성:

    q_L·a + q_R·b + q_O·c + q_M·(a·b) + q_C + PI = 0

**R1CS → PLONK 변환**:
  | 행                     | 게이트                      | 의미             |
  |------------------------|-----------------------------|------------------|
  | 0 .. l-1               | q_L = 1, PI(ωⁱ) = -xᵢ       | a = 공개 입력 xᵢ |
  | l                      | q_L = 1, q_C = -1           | 상수 배선 = 1    |
  | 선형결합 (항 2개 이상) | q_L = k₁, q_R = k₂, q_O = -1 | 누적 덧셈        |
  | R1CS 제약              | q_M = kₐ·k_b, q_O = -k_c    | A·B = C          |
  | 패딩                   | 모두 0                      | 항상 만족        |

**변수**:
  ("input", i) / ("aux", j) 튜플. Plonk의 aux_offset = 1 이므로 보조 변수 0은
  배선에서 오지 않는다. 이 변수를 ZERO 변수로 예약해 비어 있는 슬롯과 패딩 행에
  배치한다. 선형결합 누적용 중간 변수는 ("aux", num_aux + aux_offset)부터 새로 만든다.

**배선(Copy) 제약**:
  같은 변수가 놓인 모든 슬롯 위치를 하나의 순환(cycle)으로 연결한다.
  위치 규칙: a의 i번째 = i, b의 i번째 = n+i, c의 i번째 = 2n+i

사용 예시:
    >>> circuit = synthesize(descriptor, aux_offset=1)
    >>> circuit.pad_to_power_of_2()
    >>> a, b, c = circuit.wire_values()
"""

from plonkit.plonk.field import FR
from plonkit.plonk.utils import next_power_of_2
from plonkit.r1cs import AUX, INPUT

ZERO_VARIABLE = (AUX, 0)


class Gate:
    """PLONK 산술 게이트: q_L·a + q_R·b + q_O·c + q_M·(a·b) + q_C = 0"""

    def __init__(self, q_l=0, q_r=0, q_o=0, q_m=0, q_c=0):
        self.q_l = q_l if isinstance(q_l, FR) else FR(q_l)
        self.q_r = q_r if isinstance(q_r, FR) else FR(q_r)
        self.q_o = q_o if isinstance(q_o, FR) else FR(q_o)
        self.q_m = q_m if isinstance(q_m, FR) else FR(q_m)
        self.q_c = q_c if isinstance(q_c, FR) else FR(q_c)

    def check(self, a, b, c, pi=FR(0)):
        """게이트 제약이 만족되는지 확인한다."""
        result = (
            self.q_l * a
            + self.q_r * b
            + self.q_o * c
            + self.q_m * (a * b)
            + self.q_c
            + pi
        )
        return result == FR(0)


class Circuit:
    """PLONK 산술 회로.

    속성:
        gates: Gate 리스트
        wires: 게이트마다 (a 변수, b 변수, c 변수) 튜플
        num_public_inputs: 공개 입력 게이트 수 (회로 앞쪽 행)
        assignment: 변수 → FR 값. witness 없이 만든 회로에서는 None.
    """

    def __init__(self, num_public_inputs=0, assignment=None):
        self.gates = []
        self.wires = []
        self.num_public_inputs = num_public_inputs
        self.assignment = assignment

    @property
    def n(self):
        return len(self.gates)

    def add_gate(self, gate, a=ZERO_VARIABLE, b=ZERO_VARIABLE, c=ZERO_VARIABLE):
        self.gates.append(gate)
        self.wires.append((a, b, c))
        return len(self.gates) - 1

    def pad_to_power_of_2(self):
        """게이트 수를 2의 거듭제곱으로 맞춘다. 패딩 행은 ZERO 변수만 사용한다."""
        n = next_power_of_2(self.n)
        while self.n < n:
            self.add_gate(Gate())
        return n

    def get_selector_polynomials(self):
        """셀렉터 벡터 (q_L, q_R, q_O, q_M, q_C)를 반환한다."""
        q_l = [g.q_l for g in self.gates]
        q_r = [g.q_r for g in self.gates]
        q_o = [g.q_o for g in self.gates]
        q_m = [g.q_m for g in self.gates]
        q_c = [g.q_c for g in self.gates]
        return q_l, q_r, q_o, q_m, q_c

    def build_permutation(self):
        """배선 순열 σ (길이 3n).

        같은 변수가 놓인 위치 p₀, p₁, ..., p_k를
        p₀ → p₁ → ... → p_k → p₀ 순환으로 연결한다.
        """
        n = self.n
        positions = {}
        for column in range(3):
            for row, wires in enumerate(self.wires):
                positions.setdefault(wires[column], []).append(column * n + row)

        sigma = list(range(3 * n))
        for cycle in positions.values():
            for i, pos in enumerate(cycle):
                sigma[pos] = cycle[(i + 1) % len(cycle)]
        return sigma

    def value(self, variable):
        if self.assignment is None:
            raise ValueError("circuit has no witness assignment")
        return self.assignment[variable]

    def wire_values(self):
        """배선 값 (a_vals, b_vals, c_vals)."""
        a_vals = [self.value(a) for a, _, _ in self.wires]
        b_vals = [self.value(b) for _, b, _ in self.wires]
        c_vals = [self.value(c) for _, _, c in self.wires]
        return a_vals, b_vals, c_vals

    def public_input_values(self):
        return [self.value((INPUT, i + 1)) for i in range(self.num_public_inputs)]

    def first_failing_gate(self):
        """만족하지 않는 첫 게이트의 인덱스. 모두 만족하면 None."""
        public_inputs = self.public_input_values()
        for i, (gate, (a, b, c)) in enumerate(zip(self.gates, self.wires)):
            pi = FR(0) - public_inputs[i] if i < len(public_inputs) else FR(0)
            if not gate.check(self.value(a), self.value(b), self.value(c), pi):
                return i
        return None


class _Synthesizer:

    def __init__(self, descriptor, aux_offset):
        if aux_offset < 1:
            raise ValueError("PLONK synthesis reserves aux variable 0 and needs aux_offset >= 1")
        self.descriptor = descriptor
        self.aux_offset = aux_offset
        r1cs = descriptor.r1cs

        assignment = None
        if descriptor.has_witness:
            assignment = {ZERO_VARIABLE: FR(0)}
            for wire, val in enumerate(descriptor.witness):
                assignment[descriptor.variable(wire, aux_offset)] = val

        self.circuit = Circuit(r1cs.num_inputs - 1, assignment)
        self.next_aux = r1cs.num_aux + aux_offset

    def fresh_variable(self, val):
        var = (AUX, self.next_aux)
        self.next_aux += 1
        if self.circuit.assignment is not None:
            self.circuit.assignment[var] = val
        return var

    def reduce(self, lc):
        """선형결합을 (변수, 계수) 하나로 줄인다."""
        terms = [
            (self.descriptor.variable(wire, self.aux_offset), coeff)
            for wire, coeff in sorted(lc.items())
            if coeff != FR(0)
        ]
        if not terms:
            return ZERO_VARIABLE, FR(1)

        acc, acc_coeff = terms[0]
        for var, coeff in terms[1:]:
            val = None
            if self.circuit.assignment is not None:
                val = acc_coeff * self.circuit.value(acc) + coeff * self.circuit.value(var)
            out = self.fresh_variable(val)
            self.circuit.add_gate(Gate(q_l=acc_coeff, q_r=coeff, q_o=FR(-1)), acc, var, out)
            acc, acc_coeff = out, FR(1)
        return acc, acc_coeff

    def run(self):
        circuit = self.circuit
        for i in range(circuit.num_public_inputs):
            circuit.add_gate(Gate(q_l=1), a=(INPUT, i + 1))
        circuit.add_gate(Gate(q_l=1, q_c=FR(-1)), a=(INPUT, 0))

        for a_lc, b_lc, c_lc in self.descriptor.r1cs.constraints:
            a_var, ka = self.reduce(a_lc)
            b_var, kb = self.reduce(b_lc)
            c_var, kc = self.reduce(c_lc)
            circuit.add_gate(Gate(q_m=ka * kb, q_o=FR(0) - kc), a_var, b_var, c_var)
        return circuit


def synthesize(descriptor, aux_offset):
    """R1CS 회로 기술자에서 PLONK 회로를 만든다.

    witness가 있으면 모든 변수(중간 변수 포함)의 값이 circuit.assignment에 채워진다.
    """
    return _Synthesizer(descriptor, aux_offset).run()
