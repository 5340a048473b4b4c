"""
목적: 서비스 코어 패키지를 정의한다.
설명: CRUD 오케스트레이션 계층을 묶는다.
디자인 패턴: 패키지 구조화
참조: src/arango_service/core/service/__init__.py
"""
