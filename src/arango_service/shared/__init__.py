"""
목적: 공통 모듈 패키지를 정의한다.
설명: 상수/예외/로깅/설정 모듈을 묶는다.
디자인 패턴: 패키지
참조: src/arango_service/shared/exceptions, src/arango_service/shared/logging
"""
