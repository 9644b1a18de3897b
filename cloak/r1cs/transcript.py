"""
R1CS Fiat-Shamir Transcript
=============================

비대화식(non-interactive) 변환을 위한 Fiat-Shamir 해싱 구현.

**Fiat-Shamir 변환이란?**
  셔플 논증은 원래 대화식(interactive) 프로토콜이다:
  - Prover가 값들을 커밋하면
  - Verifier가 랜덤 챌린지 z를 보내고
  - Prover가 (xᵢ - z)의 곱을 계산하여 응답한다

  Fiat-Shamir 변환은 이 대화를 해시 함수로 시뮬레이션한다.
  Prover와 Verifier가 같은 순서로 같은 데이터를 추가해야만
  같은 챌린지가 나온다. 추가 순서가 하나라도 다르면 모든 증명이 실패한다.

**R1CS에서의 챌린지 흐름**:
  커밋 V₀, V₁, ... → 1단계 곱셈기 할당 → "r1cs-2phase" 구분자
  → w (k-value shuffle challenge) → z (shuffle challenge) → ...

사용 예시:
    >>> t = Transcript(b"PaddedShuffleTest")
    >>> t.append_point(b"V", commitment)
    >>> z = t.challenge_scalar(b"shuffle challenge")
"""

import hashlib

from cloak.r1cs.field import FR, CURVE_ORDER


# 기본 프로토콜 도메인 분리 레이블
DEFAULT_TRANSCRIPT_LABEL = b"cloak"


class Transcript:
    """SHA-256 기반 Fiat-Shamir 트랜스크립트.

    해시 상태를 누적하여 결정론적이면서 예측 불가능한 챌린지를 생성한다.

    속성:
        state: 현재까지 누적된 해시 입력 바이트열

    보안 주의:
        - 모든 데이터는 레이블(label)과 함께 추가하여 도메인 분리(domain separation) 보장
        - 트랜스크립트 순서가 다르면 다른 챌린지가 생성됨
    """

    def __init__(self, label=DEFAULT_TRANSCRIPT_LABEL):
        self.state = bytearray()
        self.state.extend(label)

    def append_message(self, label, message):
        """임의의 바이트열 메시지를 추가한다.

        메시지 길이를 먼저 기록하여 서로 다른 분할이 같은 상태가 되지 않게 한다.
        """
        self.state.extend(label)
        self.state.extend(len(message).to_bytes(4, "big"))
        self.state.extend(message)

    def append_u64(self, label, value):
        """64비트 부호 없는 정수를 추가한다 (8바이트 빅엔디안)."""
        self.state.extend(label)
        self.state.extend(value.to_bytes(8, "big"))

    def append_scalar(self, label, scalar):
        """FR 스칼라 값을 트랜스크립트에 추가한다.

        Args:
            label: 바이트열 레이블 (예: b"a_L")
            scalar: FR 원소 또는 정수
        """
        self.state.extend(label)
        # FR 원소를 32바이트 빅엔디안으로 직렬화
        val = int(scalar) % CURVE_ORDER
        self.state.extend(val.to_bytes(32, "big"))

    def append_point(self, label, point):
        """타원곡선 점(G1)을 트랜스크립트에 추가한다.

        Args:
            label: 바이트열 레이블 (예: b"V")
            point: G1 점 (FQ 튜플) 또는 None (무한원점)
        """
        self.state.extend(label)
        if point is None:
            # 무한원점: 64바이트의 0
            self.state.extend(b"\x00" * 64)
        else:
            x, y = point
            self.state.extend(int(x).to_bytes(32, "big"))
            self.state.extend(int(y).to_bytes(32, "big"))

    def r1cs_domain_sep(self):
        """R1CS 증명 시작을 표시한다."""
        self.append_message(b"dom-sep", b"r1cs v1")

    def r1cs_1phase_domain_sep(self):
        """무작위 제약이 없는 (1단계만 있는) 증명을 표시한다."""
        self.append_message(b"dom-sep", b"r1cs-1phase")

    def r1cs_2phase_domain_sep(self):
        """1단계 할당이 끝나고 무작위 제약(2단계)이 시작됨을 표시한다."""
        self.append_message(b"dom-sep", b"r1cs-2phase")

    def challenge_scalar(self, label):
        """트랜스크립트로부터 챌린지 스칼라를 생성한다.

        현재 상태를 SHA-256으로 해싱하여 FR 원소를 도출한다.
        생성된 해시는 상태에 다시 추가된다 (체이닝).

        Args:
            label: 바이트열 레이블 (예: b"shuffle challenge")

        Returns:
            FR: 챌린지 스칼라
        """
        self.state.extend(label)
        h = hashlib.sha256(bytes(self.state)).digest()
        challenge = FR(int.from_bytes(h, "big") % CURVE_ORDER)

        # 챌린지를 상태에 추가 (체이닝: 다음 챌린지에 영향)
        self.state.extend(h)

        return challenge
