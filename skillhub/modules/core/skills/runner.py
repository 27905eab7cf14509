"""
SkillRunner - 스킬 실행기

SkillFactory가 생성하며, 활성화된 스킬 핸들러를 지연 로딩하고
타임아웃, 예외 변환, 실행 통계를 일관되게 적용합니다.

사용 예시:
    runner = SkillFactory.create(config)
    await runner.initialize()

    response = await runner.execute_skill(
        "memory-manager", {"action": "store", "key": "k", "value": "v"}
    )
    response.to_dict()
"""

import asyncio
import dataclasses
import importlib
import time
from typing import Any

from ....lib.errors import ErrorCode, SkillError, SkillHubException
from ....lib.logger import get_logger
from ....lib.secret_redactor import redact_sensitive
from ..memory import MemoryStore
from .interfaces import SkillConfig, SkillContext, SkillFunction, SkillResponse, SkillRunnerConfig
from .transport import HttpProviderClient

logger = get_logger(__name__)

DEFAULT_MEMORY_FILE_PATH = "data/memory.json"


class SkillRunner:
    """
    스킬 실행기

    주요 기능:
    - 설정 기반 스킬 활성화/비활성화
    - 핸들러 모듈 지연 로딩 (importlib)
    - asyncio.wait_for 기반 실행 타임아웃
    - 예외 → 실패 envelope 변환
    - 실행 통계 추적
    """

    def __init__(self, config: SkillRunnerConfig, global_config: dict[str, Any] | None = None):
        """
        Args:
            config: 러너 설정 (활성화된 스킬 목록 포함)
            global_config: 전체 앱 설정 (memory, providers 섹션 접근용)
        """
        self._config = config
        self._global_config = global_config or {}
        self._skill_functions: dict[str, SkillFunction] = {}
        self._provider_clients: dict[str, HttpProviderClient] = {}
        self._memory_store: MemoryStore | None = None
        self._initialized = False

        self._stats: dict[str, Any] = {
            "total_calls": 0,
            "successful_calls": 0,
            "failed_calls": 0,
            "calls_by_skill": {},
        }

        logger.info(f"SkillRunner 생성: {len(config.skills)}개 스킬")

    @property
    def is_enabled(self) -> bool:
        """러너 활성화 여부"""
        return self._config.enabled

    def get_enabled_skills(self) -> list[str]:
        """활성화된 스킬 이름 목록"""
        return [name for name, config in self._config.skills.items() if config.enabled]

    def get_skill_config(self, skill_name: str) -> SkillConfig | None:
        """특정 스킬 설정 조회"""
        return self._config.skills.get(skill_name)

    async def initialize(self) -> None:
        """핸들러 함수 로딩 (중복 호출 시 무시)"""
        if self._initialized:
            return

        self._load_skill_functions()
        self._initialized = True
        logger.info(f"✅ SkillRunner 초기화 완료: {len(self._skill_functions)}개 스킬")

    def _load_skill_functions(self) -> None:
        """핸들러 함수 동적 로딩"""
        from .factory import SUPPORTED_SKILLS

        for skill_name in self.get_enabled_skills():
            skill_info = SUPPORTED_SKILLS.get(skill_name)
            if not skill_info:
                continue

            module_path = skill_info["module"]
            try:
                module = importlib.import_module(module_path)
            except ModuleNotFoundError:
                logger.warning(f"스킬 모듈 없음 (스킵): {module_path}")
                continue
            except Exception as e:
                # 핸들러 하나의 import 오류가 다른 스킬 실행을 막지 않음 (해당 스킬은 SKILL-005)
                logger.error(f"스킬 모듈 로딩 실패 (스킵): {module_path} - {type(e).__name__}: {e}")
                continue

            func = getattr(module, skill_info.get("function", "execute"), None)
            if func is None:
                logger.warning(f"스킬 함수 없음 (스킵): {module_path}.{skill_info.get('function')}")
                continue

            self._skill_functions[skill_name] = func
            logger.debug(f"스킬 함수 로딩: {skill_name}")

    def _get_memory_store(self) -> MemoryStore:
        if self._memory_store is None:
            memory_config = self._global_config.get("memory") or {}
            self._memory_store = MemoryStore(
                memory_config.get("file_path") or DEFAULT_MEMORY_FILE_PATH
            )
        return self._memory_store

    def _get_provider_client(self, skill_name: str) -> HttpProviderClient | None:
        """providers.<스킬명> 설정이 있으면 HTTP 클라이언트 생성 (캐시)"""
        if skill_name in self._provider_clients:
            return self._provider_clients[skill_name]

        provider_config = (self._global_config.get("providers") or {}).get(skill_name)
        if not provider_config:
            return None

        client = HttpProviderClient.from_config(provider_config)
        self._provider_clients[skill_name] = client
        logger.debug(f"제공자 클라이언트 생성: {skill_name}")
        return client

    def build_context(self, skill_name: str, context: SkillContext | None = None) -> SkillContext:
        """
        실행 컨텍스트 생성

        스킬 parameters 설정을 context.config의 기본값으로 병합합니다.
        context가 없으면 설정 기반 메모리 저장소와 제공자 클라이언트를 사용합니다.
        """
        skill_config = self.get_skill_config(skill_name)
        parameters = dict(skill_config.parameters) if skill_config else {}

        if context is None:
            return SkillContext(
                provider_client=self._get_provider_client(skill_name),
                config=parameters,
                memory_store=self._get_memory_store(),
            )

        return dataclasses.replace(
            context,
            config={**parameters, **context.config},
            memory_store=context.memory_store or self._get_memory_store(),
        )

    def _failure(self, skill_name: str, exc: SkillHubException) -> SkillResponse:
        self._stats["failed_calls"] += 1
        return SkillResponse.failure(
            f"Error: {exc.message}",
            exc.envelope_code,
            error_code=exc.error_code,
            message=exc.message,
            skill=skill_name,
        )

    async def execute_skill(
        self,
        skill_name: str,
        params: dict[str, Any] | None,
        context: SkillContext | None = None,
    ) -> SkillResponse:
        """
        스킬 실행

        Args:
            skill_name: 스킬 이름 (예: "excel-handler")
            params: 액션 파라미터
            context: 실행 컨텍스트 (없으면 설정 기반 기본값)

        Returns:
            SkillResponse (예외를 발생시키지 않음)
        """
        if not self._initialized:
            await self.initialize()

        start_time = time.time()
        self._stats["total_calls"] += 1
        self._stats["calls_by_skill"][skill_name] = (
            self._stats["calls_by_skill"].get(skill_name, 0) + 1
        )

        from .factory import SUPPORTED_SKILLS

        skill_config = self.get_skill_config(skill_name)
        if skill_config is None or not skill_config.enabled:
            # 레지스트리에 있지만 설정에서 빠진 스킬은 비활성화로 간주
            code = ErrorCode.SKILL_002 if skill_name in SUPPORTED_SKILLS else ErrorCode.SKILL_001
            return self._failure(skill_name, SkillError(code, skill_name=skill_name))

        func = self._skill_functions.get(skill_name)
        if func is None:
            return self._failure(skill_name, SkillError(ErrorCode.SKILL_005, skill_name=skill_name))

        try:
            skill_context = self.build_context(skill_name, context)
            response = await asyncio.wait_for(
                func(params or {}, skill_context),
                timeout=skill_config.timeout,
            )
        except TimeoutError:
            logger.warning(f"⏱️ 스킬 실행 타임아웃: {skill_name} ({skill_config.timeout}s)")
            return self._failure(
                skill_name,
                SkillError(ErrorCode.SKILL_006, skill_name=skill_name, timeout=skill_config.timeout),
            )
        except SkillHubException as e:
            logger.info(f"스킬 실행 거부: {skill_name} ({e.error_code})")
            return self._failure(skill_name, e)
        except Exception as e:
            self._stats["failed_calls"] += 1
            detail = redact_sensitive(str(e))
            logger.error(f"❌ 스킬 실행 실패: {skill_name} - {type(e).__name__}: {detail}")
            return SkillResponse.failure(
                f"Error: {detail}",
                "OPERATION_FAILED",
                detail=detail,
                skill=skill_name,
            )

        execution_time = time.time() - start_time
        if response.success:
            self._stats["successful_calls"] += 1
            logger.info(f"✅ 스킬 실행 성공: {skill_name} ({execution_time:.2f}s)")
        else:
            self._stats["failed_calls"] += 1
            logger.info(f"스킬 실패 응답: {skill_name} ({response.error}, {execution_time:.2f}s)")

        return response

    def get_stats(self) -> dict[str, Any]:
        """러너 통계 반환"""
        return {
            **self._stats,
            "calls_by_skill": dict(self._stats["calls_by_skill"]),
            "enabled_skills": self.get_enabled_skills(),
            "initialized": self._initialized,
        }

    async def shutdown(self) -> None:
        """러너 종료 (제공자 클라이언트 정리)"""
        for client in self._provider_clients.values():
            await client.close()
        self._provider_clients.clear()
        self._skill_functions.clear()
        self._initialized = False
        logger.info("SkillRunner 종료")
