"""
스킬 핸들러 모음

각 모듈은 async def execute(params, context) -> SkillResponse 를 제공하며
SkillRunner가 SUPPORTED_SKILLS 레지스트리를 통해 지연 로딩합니다.
"""
