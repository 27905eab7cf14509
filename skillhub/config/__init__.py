"""
설정 패키지

base.yaml + environments/<env>.yaml 과 Pydantic 스키마(schemas/)를 포함합니다.
"""
