"""
목적: HTTP API 패키지를 정의한다.
설명: FastAPI 앱 팩토리와 문서 라우터를 묶는다.
디자인 패턴: 패키지 구조화
참조: src/arango_service/api/main.py
"""
