"""
JSON 파일 기반 키-값 메모리 저장소

파일 형식:
    {"<key>": {"value": ..., "created_at": "<ISO-8601>", "updated_at": "<ISO-8601>"}}

저장소 경로는 MemoryStore 인스턴스가 보유하며 모듈 전역 상태를 두지 않습니다.
"""

import json
from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from ....lib.errors import ErrorCode, MemoryStoreError
from ....lib.logger import get_logger

logger = get_logger(__name__)


def utc_timestamp() -> str:
    """현재 UTC 시각 (ISO-8601, 밀리초, Z 접미사)"""
    return datetime.now(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass(frozen=True)
class MemoryEntry:
    """
    메모리 항목

    Attributes:
        value: 저장된 값
        created_at: 최초 저장 시각
        updated_at: 마지막 갱신 시각
    """

    value: Any
    created_at: str
    updated_at: str

    def to_dict(self) -> dict[str, Any]:
        """파일 저장 형식으로 변환"""
        return {"value": self.value, "created_at": self.created_at, "updated_at": self.updated_at}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "MemoryEntry":
        """파일 저장 형식에서 생성 (camelCase 키도 허용)"""
        return cls(
            value=data.get("value"),
            created_at=data.get("created_at") or data.get("createdAt") or "",
            updated_at=data.get("updated_at") or data.get("updatedAt") or "",
        )


class MemoryStore:
    """
    JSON 파일 메모리 저장소

    사용 예시:
        store = MemoryStore(Path("data/memory.json"))
        entries = store.load()
        entries["k"] = MemoryEntry("v", ts, ts)
        store.save(entries)
    """

    def __init__(self, file_path: str | Path):
        """
        Args:
            file_path: JSON 저장 파일 경로 (없으면 첫 load 시 생성)
        """
        self.file_path = Path(file_path)

    def load(self) -> dict[str, MemoryEntry]:
        """
        저장소 로드 (파일이 없으면 빈 저장소 파일 생성)

        Raises:
            MemoryStoreError: 파일을 읽을 수 없거나 JSON 형식이 아닌 경우
        """
        try:
            if not self.file_path.exists():
                self.file_path.parent.mkdir(parents=True, exist_ok=True)
                self.file_path.write_text(json.dumps({}, indent=2), encoding="utf-8")
                logger.info("메모리 파일 생성", path=str(self.file_path))
                return {}

            raw = json.loads(self.file_path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise MemoryStoreError(ErrorCode.MEMORY_004, reason=str(e)) from e

        if not isinstance(raw, dict):
            raise MemoryStoreError(
                ErrorCode.MEMORY_004, reason="memory file must contain a JSON object"
            )

        return {
            key: MemoryEntry.from_dict(data if isinstance(data, dict) else {"value": data})
            for key, data in raw.items()
        }

    def save(self, entries: dict[str, MemoryEntry]) -> None:
        """저장소 전체 저장"""
        self.file_path.parent.mkdir(parents=True, exist_ok=True)
        payload = {key: entry.to_dict() for key, entry in entries.items()}
        self.file_path.write_text(
            json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8"
        )
        logger.debug("메모리 파일 저장", path=str(self.file_path), entries=len(entries))
