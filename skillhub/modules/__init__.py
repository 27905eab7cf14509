"""skillhub 기능 모듈"""
