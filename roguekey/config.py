"""
설정
====

프로토콜 상수와 기본값. 환경 변수는 import 시점이 아니라
config의 속성을 읽을 때 해석한다.
"""

import os

from roguekey.errors import ConfigError

# PoK 생성자 기준점 G2_0의 시드
POK_SEED = 20399

# hash-to-curve 도메인 분리 태그
HASH_DST = bytes([1, 3, 3, 7])

# 초기 레지스트리 파일
REGISTRY_PATH = 'public_keys.bin'

# 공격자 비밀키와 서명할 메시지
ATTACKER_SECRET = 100
MESSAGE = b'intldds'

# 웹 데모 상태 저장소 (":memory:"이면 MemoryStorage)
DB_PATH = 'db.json'
SECRET_KEY = 'key'


def _env_int(name, default):
    value = os.getenv(name)
    if value is None or value.strip() == '':
        return default
    try:
        return int(value)
    except ValueError:
        raise ConfigError(f"{name}은 정수여야 합니다: {value!r}") from None


class Config:
    """환경 변수를 반영한 설정.

      ROGUEKEY_POK_SEED, ROGUEKEY_REGISTRY, ROGUEKEY_SECRET,
      ROGUEKEY_MESSAGE, ROGUEKEY_DB, ROGUEKEY_SECRET_KEY
    """

    @property
    def pok_seed(self):
        return _env_int('ROGUEKEY_POK_SEED', POK_SEED)

    @property
    def registry_path(self):
        return os.getenv('ROGUEKEY_REGISTRY', REGISTRY_PATH)

    @property
    def attacker_secret(self):
        return _env_int('ROGUEKEY_SECRET', ATTACKER_SECRET)

    @property
    def message(self):
        value = os.getenv('ROGUEKEY_MESSAGE')
        return MESSAGE if value is None else value.encode()

    @property
    def db_path(self):
        return os.getenv('ROGUEKEY_DB', DB_PATH)

    @property
    def secret_key(self):
        return os.getenv('ROGUEKEY_SECRET_KEY', SECRET_KEY)


config = Config()
