"""
Pedersen 커밋먼트 생성자
=========================

R1CS 백엔드에 들어가는 고수준 변수(high-level variable)는
Pedersen 커밋먼트로 트랜스크립트에 묶인다:

    V = v·B + r·B̃

  - B  = G1 생성자
  - B̃ = hash_to_curve(PEDERSEN_BLINDING_LABEL), B에 대한 이산로그를 아무도 모름
  - v: 커밋되는 값, r: 블라인딩 계수

바인딩(binding): B̃의 이산로그를 모르면 V를 두 가지 방법으로 열 수 없다.
하이딩(hiding): r이 균등 무작위이면 V는 v에 대해 아무 정보도 주지 않는다.
"""

from cloak.r1cs.field import G1, ec_add, ec_mul, hash_to_curve


PEDERSEN_BLINDING_LABEL = b"cloak.pedersen.blinding"


class PedersenGens:
    """Pedersen 커밋먼트용 생성자 쌍 (B, B̃).

    속성:
        B: 값 생성자
        B_blinding: 블라인딩 생성자
    """

    def __init__(self, B=None, B_blinding=None):
        self.B = G1 if B is None else B
        self.B_blinding = hash_to_curve(PEDERSEN_BLINDING_LABEL) if B_blinding is None else B_blinding

    def commit(self, value, blinding):
        """V = value·B + blinding·B̃ 를 계산한다.

        Args:
            value: FR 원소 또는 정수
            blinding: FR 원소 또는 정수

        Returns:
            G1 점
        """
        return ec_add(ec_mul(self.B, value), ec_mul(self.B_blinding, blinding))
