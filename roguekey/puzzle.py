"""
퍼즐 실행: 레지스트리 로드 → PoK 검증 → 위조 → 집계 서명 검증
================================================================

  1. public_keys.bin에서 (pk, proof) 레지스트리를 읽는다.
  2. 각 항목의 PoK를 자신의 인덱스로 검증한다. 하나라도 실패하면 중단.
  3. 공격자 비밀 하나만으로 새 항목(new_key, new_proof)과 집계 서명을 만든다.
  4. 새 항목의 PoK를 검증한다. 실패하면 중단.
  5. 집계 키로 집계 서명을 검증한다. 이 단계만 실패해도 중단하지 않고
     결과를 출력한다.

실행:
    python -m roguekey.puzzle [public_keys.bin]
"""

import sys

from roguekey.config import config
from roguekey.errors import (
    ConfigError, DeserializationError, PoKVerificationFailure, SignatureVerificationFailure,
)
from roguekey.aggregate import aggregate_public_keys, forge_registry_entry
from roguekey.bls import require_valid_signature
from roguekey.pok import require_valid_pok
from roguekey.registry import Registry


WELCOME = """
    ______                          __ __
   / ____/___  _________ ____     / //_/__  __  __
  / /_  / __ \\/ ___/ __ `/ _ \\   / ,< / _ \\/ / / /
 / __/ / /_/ / /  / /_/ /  __/  / /| /  __/ /_/ /
/_/    \\____/_/   \\__, /\\___/  /_/ |_\\___/\\__, /
                 /____/                  /____/

Bob은 공개키를 등록하려는 사람에게 인덱스에 묶인 소유 증명(PoK)을 요구한다.
PoK 생성자는 인덱스마다 (i+1)·G2_0로 정해진다.
레지스트리의 키를 모두 더한 집계 키로, 메시지에 대한 집계 서명을 만들어라.
"""


def check_aggregate_signature(aggregate_key, aggregate_signature, message):
    """집계 서명 체크포인트. 실패를 예외 대신 결과로 돌려준다.

    Returns:
        (bool, str): 성공 여부와 출력할 문장
    """
    try:
        require_valid_signature(aggregate_key, aggregate_signature, message)
    except SignatureVerificationFailure as e:
        return False, f"BLS verification failed: {e}"
    return True, "BLS verification successful!"


def run(path=None, secret=None, message=None, seed=None):
    """퍼즐 전체 흐름을 실행한다.

    인자를 생략하면 config의 값 (환경 변수 반영)을 쓴다.

    Returns:
        bool: 집계 서명 검증 성공 여부

    Raises:
        DeserializationError: 레지스트리 파일이 손상되었거나 곡선 밖의 점이 있을 때
        PoKVerificationFailure: 기존 항목 또는 위조 항목의 PoK가 틀렸을 때
    """
    path = config.registry_path if path is None else path
    secret = config.attacker_secret if secret is None else secret
    message = config.message if message is None else message
    seed = config.pok_seed if seed is None else seed

    print(WELCOME)

    registry = Registry.load(path, seed=seed)
    registry.verify_all()

    forgery = forge_registry_entry(registry, secret, message, seed)

    require_valid_pok(forgery.public_key, forgery.index, forgery.proof, seed)
    print("PoK verified")

    aggregate_key = aggregate_public_keys(registry.public_keys + [forgery.public_key])
    print("aggregate key created")

    ok, text = check_aggregate_signature(aggregate_key, forgery.aggregate_signature, message)
    print(text)

    print("puzzle completed")
    return ok


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    path = argv[0] if argv else None
    try:
        ok = run(path)
    except ConfigError as e:
        print(f"설정 오류: {e}")
        return 1
    except DeserializationError as e:
        print(f"레지스트리 로드 실패: {e}")
        return 1
    except PoKVerificationFailure as e:
        print(f"PoK 검증 실패 (인덱스 {e.index}): {e}")
        return 1
    return 0 if ok else 2


if __name__ == "__main__":
    sys.exit(main())
