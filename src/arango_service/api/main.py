"""
목적: 문서 서비스를 FastAPI 앱으로 노출하는 엔트리 포인트를 제공한다.
설명: 앱 수명 주기에 서비스 setup/close를 연결하고 헬스체크와 문서 라우터를 등록한다.
디자인 패턴: 팩토리 함수
참조: src/arango_service/api/documents/routers/router.py
"""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI

from arango_service.api.const import DOCUMENTS_API_PREFIX, DOCUMENTS_API_TAG, HEALTH_PATH
from arango_service.api.documents.routers import create_document_router
from arango_service.core.service import DocumentService


def create_app(
    service: DocumentService,
    prefix: str = DOCUMENTS_API_PREFIX,
    tag: str = DOCUMENTS_API_TAG,
) -> FastAPI:
    """서비스 하나를 노출하는 FastAPI 앱을 생성한다."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """앱 시작 시 연결을 수립하고 종료 시 정리한다."""
        await service.setup()
        try:
            yield
        finally:
            await service.close()

    app = FastAPI(lifespan=lifespan)
    app.include_router(create_document_router(service, prefix=prefix, tag=tag))

    @app.get(HEALTH_PATH, include_in_schema=False)
    def health() -> dict:
        """연결 상태를 반환한다."""
        return {"status": "ok", "connection": service.state.value}

    return app
