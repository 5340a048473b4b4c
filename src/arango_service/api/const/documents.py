"""
목적: 문서 API 라우팅 상수를 정의한다.
설명: 기본 경로 접두사, 태그, 단건 경로를 제공한다.
디자인 패턴: 상수 모듈
참조: src/arango_service/api/documents/routers/router.py
"""

DOCUMENTS_API_PREFIX = "/documents"
DOCUMENTS_API_TAG = "documents"
DOCUMENTS_COLLECTION_PATH = ""
DOCUMENTS_ITEM_PATH = "/{id}"
HEALTH_PATH = "/health"
