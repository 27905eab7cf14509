"""
memory-manager 스킬

JSON 파일 기반 키-값 메모리: store, retrieve, search, list, delete.

저장소는 context.memory_store(MemoryStore)를 사용합니다.
입력 오류는 SkillHubException으로 발생하며 SkillRunner가 실패 envelope로 변환합니다.
"""

from typing import Annotated, Any, Literal

from pydantic import BaseModel, Field, TypeAdapter

from .....lib.errors import ErrorCode, MemoryStoreError, SkillError
from .....lib.logger import get_logger
from ...memory import MAX_RESULTS, MemoryEntry, MemoryStore, rank_entries, to_text, utc_timestamp
from ..interfaces import SkillContext, SkillResponse

logger = get_logger(__name__)

SUPPORTED_ACTIONS = ("store", "retrieve", "search", "list", "delete")
DEFAULT_MEMORY_FILE_PATH = "data/memory.json"
PREVIEW_LENGTH = 80


class StoreParams(BaseModel):
    action: Literal["store"]
    key: str
    value: Any


class RetrieveParams(BaseModel):
    action: Literal["retrieve"]
    key: str


class SearchParams(BaseModel):
    action: Literal["search"]
    query: str


class ListParams(BaseModel):
    action: Literal["list"]


class DeleteParams(BaseModel):
    action: Literal["delete"]
    key: str


MemoryParams = Annotated[
    StoreParams | RetrieveParams | SearchParams | ListParams | DeleteParams,
    Field(discriminator="action"),
]

_params_adapter: TypeAdapter[Any] = TypeAdapter(MemoryParams)


def _is_blank(value: Any) -> bool:
    return not isinstance(value, str) or not value.strip()


def parse_params(params: dict[str, Any]) -> BaseModel:
    """
    액션별 파라미터 검증

    Raises:
        SkillError: 지원하지 않는 액션 (SKILL-004)
        MemoryStoreError: key (MEMORY-001), value (MEMORY-002), query (MEMORY-003) 누락
    """
    action = params.get("action")
    if action not in SUPPORTED_ACTIONS:
        raise SkillError(ErrorCode.SKILL_004, action=action, supported=", ".join(SUPPORTED_ACTIONS))

    if action in ("store", "retrieve", "delete") and _is_blank(params.get("key")):
        raise MemoryStoreError(ErrorCode.MEMORY_001, action=action)
    if action == "store" and params.get("value") is None:
        raise MemoryStoreError(ErrorCode.MEMORY_002)
    if action == "search" and _is_blank(params.get("query")):
        raise MemoryStoreError(ErrorCode.MEMORY_003)

    return _params_adapter.validate_python(params)


def store_entry(store: MemoryStore, request: StoreParams) -> SkillResponse:
    """항목 저장 (갱신 시 created_at 유지)"""
    entries = store.load()
    key = request.key
    existing = entries.get(key)
    timestamp = utc_timestamp()

    entries[key] = MemoryEntry(
        value=request.value,
        created_at=existing.created_at if existing else timestamp,
        updated_at=timestamp,
    )
    store.save(entries)

    is_update = existing is not None
    logger.info("메모리 저장", is_update=is_update, total_entries=len(entries))

    result = (
        f'Updated memory entry "{key}" successfully.'
        if is_update
        else f'Stored new memory entry "{key}" successfully.'
    )
    return SkillResponse.ok(
        result,
        key=key,
        is_update=is_update,
        timestamp=timestamp,
        total_entries=len(entries),
    )


def retrieve_entry(store: MemoryStore, request: RetrieveParams) -> SkillResponse:
    """정확한 키로 조회"""
    key = request.key
    entry = store.load().get(key)

    if entry is None:
        return SkillResponse.ok(f'No memory entry found for key "{key}".', key=key, found=False)

    lines = [
        f'Memory entry for "{key}":',
        f"  Value: {to_text(entry.value)}",
        f"  Created: {entry.created_at}",
        f"  Updated: {entry.updated_at}",
    ]
    return SkillResponse.ok(
        "\n".join(lines),
        key=key,
        found=True,
        value=entry.value,
        created_at=entry.created_at,
        updated_at=entry.updated_at,
    )


def search_entries(store: MemoryStore, request: SearchParams) -> SkillResponse:
    """키/값 퍼지 검색 (상위 10개)"""
    query = request.query
    matches = rank_entries(store.load(), query)

    if not matches:
        return SkillResponse.ok(
            f'No memory entries match the query "{query}".', query=query, match_count=0
        )

    top_matches = matches[:MAX_RESULTS]
    formatted = [
        f"{i}. [{m.key}] (score: {m.score}): {to_text(m.entry.value)}"
        for i, m in enumerate(top_matches, start=1)
    ]
    return SkillResponse.ok(
        f'Found {len(matches)} match(es) for "{query}":\n\n' + "\n".join(formatted),
        query=query,
        match_count=len(matches),
        top_matches=[m.to_dict() for m in top_matches],
    )


def list_entries(store: MemoryStore) -> SkillResponse:
    """전체 항목 목록 (80자 초과 값은 미리보기)"""
    entries = store.load()

    if not entries:
        return SkillResponse.ok("Memory is empty. No entries stored.", total_entries=0)

    formatted = []
    for key, entry in entries.items():
        text = to_text(entry.value)
        preview = text[:PREVIEW_LENGTH] + "..." if len(text) > PREVIEW_LENGTH else text
        formatted.append(f"  - {key}: {preview} (updated: {entry.updated_at})")

    return SkillResponse.ok(
        f"Memory contains {len(entries)} entry/entries:\n\n" + "\n".join(formatted),
        total_entries=len(entries),
        keys=list(entries),
    )


def delete_entry(store: MemoryStore, request: DeleteParams) -> SkillResponse:
    """키로 삭제"""
    key = request.key
    entries = store.load()

    if key not in entries:
        return SkillResponse.ok(
            f'No memory entry found for key "{key}". Nothing to delete.', key=key, deleted=False
        )

    deleted = entries.pop(key)
    store.save(entries)
    logger.info("메모리 삭제", remaining_entries=len(entries))

    return SkillResponse.ok(
        f'Deleted memory entry "{key}" successfully.',
        key=key,
        deleted=True,
        deleted_value=deleted.value,
        remaining_entries=len(entries),
    )


async def execute(params: dict[str, Any], context: SkillContext | None = None) -> SkillResponse:
    """memory-manager 진입점"""
    request = parse_params(params)

    store = context.memory_store if context and context.memory_store else None
    if store is None:
        store = MemoryStore(DEFAULT_MEMORY_FILE_PATH)

    if isinstance(request, StoreParams):
        return store_entry(store, request)
    if isinstance(request, RetrieveParams):
        return retrieve_entry(store, request)
    if isinstance(request, SearchParams):
        return search_entries(store, request)
    if isinstance(request, DeleteParams):
        return delete_entry(store, request)
    return list_entries(store)
