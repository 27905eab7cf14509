"""
핵심 모듈

- tabular: CSV 엔진
- privacy: PII 엔진
- memory: 키-값 메모리 저장소
- skills: 스킬 핸들러와 실행기
"""
