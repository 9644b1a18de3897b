"""
R1CS 증명 데이터 컨테이너
==========================

Prover.prove()가 만들고 Verifier.verify()가 소비한다.

이 백엔드의 증명은 투명(transparent)하다: 커밋 열기와 곱셈기 할당을
그대로 담는다. 건전성(soundness)은 Pedersen 바인딩과 Fiat-Shamir 챌린지에서
나오지만, 영지식성(zero-knowledge)은 없다. 압축/은닉은 외부 bulletproof
백엔드의 몫이다.
"""


class R1CSProof:
    """R1CS 증명.

    속성:
        v, v_blinding: 커밋된 값들의 열기 (FR 리스트, 커밋 순서)
        a_L, a_R, a_O: 곱셈기 할당 (FR 리스트, 곱셈기 순서)
        phase_one_multipliers: 1단계 곱셈기 수 (챌린지 이전에 고정된 개수)
    """

    def __init__(self, v, v_blinding, a_L, a_R, a_O, phase_one_multipliers):
        self.v = v
        self.v_blinding = v_blinding
        self.a_L = a_L
        self.a_R = a_R
        self.a_O = a_O
        self.phase_one_multipliers = phase_one_multipliers

    @property
    def multipliers(self):
        return len(self.a_L)

    def has_shape(self, committed, phase_one_multipliers):
        """증명 모양이 Verifier가 기대하는 모양과 일치하는지 확인한다.

        Args:
            committed: Verifier가 받은 커밋먼트 수
            phase_one_multipliers: Verifier의 1단계 곱셈기 수
        """
        return (
            len(self.v) == committed
            and len(self.v_blinding) == committed
            and len(self.a_R) == len(self.a_L)
            and len(self.a_O) == len(self.a_L)
            and self.phase_one_multipliers == phase_one_multipliers
            and phase_one_multipliers <= len(self.a_L)
        )
