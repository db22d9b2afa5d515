"""
BLS 서명 / 소유 증명(PoK) 레지스트리와 rogue-key 공격
======================================================

BLS12-381 쌍선형 페어링 위에서 동작하는 서명 도구 모음이다.

  field          → 스칼라 필드 FR, G1/G2 연산, 다중 페어링 검사
  generators     → 인덱스별 PoK 생성자 (의도적으로 공선적(collinear))
  hash_to_curve  → 메시지 → G2 점 인코딩
  pok            → 소유 증명(Proof of Knowledge) 생성/검증
  bls            → BLS 서명/검증
  aggregate      → 키/증명/서명 합산 및 rogue-key 위조
  registry       → (공개키, PoK) 레지스트리와 바이너리 코덱
  puzzle         → 전체 공격 흐름 실행
"""
