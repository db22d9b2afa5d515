"""
레지스트리: (공개키, PoK) 목록과 바이너리 코덱
===============================================

레지스트리는 (pk, proof) 쌍의 순서 있는 목록이며, 각 항목의 인덱스는
목록 내 위치이다. 초기 로드 후에는 읽기 전용이고, 새 항목은 append로만
덧붙는다 (append는 해당 인덱스에서 PoK가 검증될 때만 받아들인다).

**바이너리 포맷** (arkworks canonical, uncompressed, unchecked):

  ┌──────────────┬──────────────────────────────────────────────┐
  │ 8 bytes      │ 항목 수 (u64, little-endian)                  │
  ├──────────────┼──────────────────────────────────────────────┤
  │ 96 bytes     │ G1: x ‖ y            (각 48바이트 big-endian)  │
  │ 192 bytes    │ G2: x.c1 ‖ x.c0 ‖ y.c1 ‖ y.c0                  │
  │ ...          │ 항목 수만큼 반복                               │
  └──────────────┴──────────────────────────────────────────────┘

  각 점의 첫 바이트 상위 3비트는 플래그이다.
    0x80  압축 (uncompressed 포맷에서는 0이어야 함)
    0x40  무한원점
    0x20  정렬 (uncompressed 포맷에서는 0이어야 함)

  좌표가 기저 필드 위수 이상이면 거부한다. 곡선 위 여부와 부분군 소속은
  기본적으로 확인하지 않는다 (check=True이면 곡선 위 여부만 확인).
  선언된 항목 뒤에 남는 바이트는 무시한다.

사용 예시:
    >>> registry = Registry.build([2, 3, 5])
    >>> blob = registry.to_bytes()
    >>> Registry.from_bytes(blob).verify_all()
"""

import struct

from py_ecc import optimized_bls12_381 as bls12_381
from py_ecc.fields import optimized_bls12_381_FQ as FQ
from py_ecc.fields import optimized_bls12_381_FQ2 as FQ2

from roguekey.config import POK_SEED
from roguekey.errors import DeserializationError, InvalidPointError
from roguekey.field import Z1, Z2, is_identity
from roguekey.aggregate import aggregate_public_keys
from roguekey.bls import secret_to_public_key
from roguekey.pok import pok_prove, require_valid_pok


FIELD_MODULUS = FQ.field_modulus

FQ_SIZE = 48
G1_SIZE = 2 * FQ_SIZE
G2_SIZE = 4 * FQ_SIZE
ENTRY_SIZE = G1_SIZE + G2_SIZE
LENGTH_SIZE = 8

FLAG_COMPRESSED = 0x80
FLAG_INFINITY = 0x40
FLAG_SORT = 0x20
FLAG_MASK = FLAG_COMPRESSED | FLAG_INFINITY | FLAG_SORT


# ─── 필드 원소 ───

def _encode_fq(value):
    return int(value).to_bytes(FQ_SIZE, "big")


def _decode_fq(data):
    value = int.from_bytes(data, "big")
    if value >= FIELD_MODULUS:
        raise DeserializationError("좌표가 기저 필드 위수 이상입니다")
    return value


def _split_flags(data):
    """첫 바이트의 플래그를 떼어내고 (flags, 좌표 바이트)를 반환한다."""
    flags = data[0] & FLAG_MASK
    if flags & FLAG_COMPRESSED:
        raise DeserializationError("압축된 점은 uncompressed 포맷에 올 수 없습니다")
    if flags & FLAG_SORT:
        raise DeserializationError("uncompressed 점에 정렬 플래그가 설정되어 있습니다")
    return flags, bytes([data[0] & 0x1F]) + bytes(data[1:])


# ─── G1 point ───

def serialize_g1(point):
    """G1 point → 96 bytes"""
    if is_identity(point):
        return bytes([FLAG_INFINITY]) + b"\x00" * (G1_SIZE - 1)
    x, y = bls12_381.normalize(point)
    return _encode_fq(x.n) + _encode_fq(y.n)


def deserialize_g1(data, check=False):
    """96 bytes → G1 point"""
    if len(data) != G1_SIZE:
        raise DeserializationError(f"G1 점은 {G1_SIZE}바이트여야 합니다: {len(data)}")
    flags, raw = _split_flags(data)
    if flags & FLAG_INFINITY:
        if any(raw):
            raise DeserializationError("무한원점의 좌표가 0이 아닙니다")
        return Z1
    x = _decode_fq(raw[:FQ_SIZE])
    y = _decode_fq(raw[FQ_SIZE:])
    point = (FQ(x), FQ(y), FQ.one())
    if check and not bls12_381.is_on_curve(point, bls12_381.b):
        raise InvalidPointError("G1 점이 곡선 위에 있지 않습니다")
    return point


# ─── G2 point ───

def serialize_g2(point):
    """G2 point → 192 bytes (x.c1, x.c0, y.c1, y.c0)"""
    if is_identity(point):
        return bytes([FLAG_INFINITY]) + b"\x00" * (G2_SIZE - 1)
    x, y = bls12_381.normalize(point)
    return (
        _encode_fq(x.coeffs[1]) + _encode_fq(x.coeffs[0])
        + _encode_fq(y.coeffs[1]) + _encode_fq(y.coeffs[0])
    )


def deserialize_g2(data, check=False):
    """192 bytes → G2 point"""
    if len(data) != G2_SIZE:
        raise DeserializationError(f"G2 점은 {G2_SIZE}바이트여야 합니다: {len(data)}")
    flags, raw = _split_flags(data)
    if flags & FLAG_INFINITY:
        if any(raw):
            raise DeserializationError("무한원점의 좌표가 0이 아닙니다")
        return Z2
    x1, x0, y1, y0 = [
        _decode_fq(raw[i * FQ_SIZE:(i + 1) * FQ_SIZE]) for i in range(4)
    ]
    point = (FQ2([x0, x1]), FQ2([y0, y1]), FQ2.one())
    if check and not bls12_381.is_on_curve(point, bls12_381.b2):
        raise InvalidPointError("G2 점이 곡선 위에 있지 않습니다")
    return point


# ─────────────────────────────────────────────────────────────────────
# Registry
# ─────────────────────────────────────────────────────────────────────

class Registry:
    """(공개키, PoK) 쌍의 순서 있는 목록.

    속성:
        entries: [(G1 점, G2 점), ...]
        seed: PoK 생성자 시드
    """

    def __init__(self, entries=None, seed=POK_SEED):
        self.entries = list(entries) if entries is not None else []
        self.seed = seed

    def __len__(self):
        return len(self.entries)

    def __iter__(self):
        return iter(self.entries)

    def __getitem__(self, index):
        return self.entries[index]

    @property
    def public_keys(self):
        return [pk for pk, _ in self.entries]

    @property
    def proofs(self):
        return [proof for _, proof in self.entries]

    @classmethod
    def build(cls, secrets, seed=POK_SEED):
        """정직한 참여자들의 비밀로 레지스트리를 만든다 (데모/테스트용).

        Args:
            secrets: 비밀 스칼라 목록. secrets[i]는 인덱스 i에 등록된다.
        """
        entries = [
            (secret_to_public_key(secret), pok_prove(secret, i, seed))
            for i, secret in enumerate(secrets)
        ]
        return cls(entries, seed)

    # ─── 검증 / 변경 ───

    def verify_all(self):
        """모든 항목의 PoK를 인덱스 순서대로 검증한다.

        Raises:
            PoKVerificationFailure: 처음 실패한 인덱스에서 즉시
        """
        for i, (pk, proof) in enumerate(self.entries):
            require_valid_pok(pk, i, proof, self.seed)

    def append(self, public_key, proof):
        """새 항목을 인덱스 len(self)에 추가한다.

        Raises:
            PoKVerificationFailure: 새 인덱스에서 PoK가 검증되지 않을 때
        """
        index = len(self.entries)
        require_valid_pok(public_key, index, proof, self.seed)
        self.entries.append((public_key, proof))
        return index

    def aggregate_key(self):
        """Σ pk_k."""
        return aggregate_public_keys(self.public_keys)

    # ─── 직렬화 ───

    def to_bytes(self):
        out = bytearray(struct.pack("<Q", len(self.entries)))
        for pk, proof in self.entries:
            out.extend(serialize_g1(pk))
            out.extend(serialize_g2(proof))
        return bytes(out)

    @classmethod
    def from_bytes(cls, data, check=False, seed=POK_SEED):
        """바이너리에서 레지스트리를 복원한다.

        Raises:
            DeserializationError: 길이가 모자라거나 점 인코딩이 잘못되었을 때.
                                  어떤 항목도 부분적으로 받아들이지 않는다.
        """
        data = bytes(data)
        if len(data) < LENGTH_SIZE:
            raise DeserializationError(
                f"항목 수를 읽을 수 없습니다: {len(data)}바이트"
            )
        (count,) = struct.unpack("<Q", data[:LENGTH_SIZE])
        expected = LENGTH_SIZE + count * ENTRY_SIZE
        if len(data) < expected:
            raise DeserializationError(
                f"레지스트리가 잘렸습니다: 항목 {count}개에 {expected}바이트가 필요하지만 "
                f"{len(data)}바이트뿐입니다"
            )

        entries = []
        offset = LENGTH_SIZE
        for _ in range(count):
            pk = deserialize_g1(data[offset:offset + G1_SIZE], check)
            offset += G1_SIZE
            proof = deserialize_g2(data[offset:offset + G2_SIZE], check)
            offset += G2_SIZE
            entries.append((pk, proof))
        return cls(entries, seed)

    @classmethod
    def load(cls, path, check=False, seed=POK_SEED):
        with open(path, "rb") as f:
            return cls.from_bytes(f.read(), check, seed)

    def save(self, path):
        with open(path, "wb") as f:
            f.write(self.to_bytes())
