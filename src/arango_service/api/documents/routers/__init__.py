"""
목적: 문서 라우터 공개 API를 제공한다.
설명: 라우터 팩토리와 예외 변환 헬퍼를 외부에 노출한다.
디자인 패턴: 퍼사드
참조: src/arango_service/api/documents/routers/router.py
"""

from arango_service.api.documents.routers.common import to_http_exception
from arango_service.api.documents.routers.router import create_document_router

__all__ = ["create_document_router", "to_http_exception"]
