"""
목적: API 상수 공개 API를 제공한다.
설명: 문서 API 라우팅 상수를 외부에 노출한다.
디자인 패턴: 퍼사드
참조: src/arango_service/api/const/documents.py
"""

from arango_service.api.const.documents import (
    DOCUMENTS_API_PREFIX,
    DOCUMENTS_API_TAG,
    DOCUMENTS_COLLECTION_PATH,
    DOCUMENTS_ITEM_PATH,
    HEALTH_PATH,
)

__all__ = [
    "DOCUMENTS_API_PREFIX",
    "DOCUMENTS_API_TAG",
    "DOCUMENTS_COLLECTION_PATH",
    "DOCUMENTS_ITEM_PATH",
    "HEALTH_PATH",
]
