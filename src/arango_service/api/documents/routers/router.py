"""
목적: 문서 CRUD 라우터를 제공한다.
설명: DocumentService 인스턴스를 받아 find/get/create/update/patch/remove를 REST 엔드포인트로 노출한다.
디자인 패턴: 팩토리 함수, 라우터 패턴
참조: src/arango_service/core/service/document_service.py, src/arango_service/api/documents/utils/query_params.py
"""

from __future__ import annotations

from typing import Any, Dict, List, Union

from fastapi import APIRouter, Body, Depends, Request, status

from arango_service.api.const import (
    DOCUMENTS_API_PREFIX,
    DOCUMENTS_API_TAG,
    DOCUMENTS_COLLECTION_PATH,
    DOCUMENTS_ITEM_PATH,
)
from arango_service.api.documents.routers.common import to_http_exception
from arango_service.api.documents.utils import parse_query_params
from arango_service.core.service import DocumentService, ServiceParams
from arango_service.shared.exceptions import BaseAppException


def _params(request: Request) -> ServiceParams:
    return ServiceParams(query=parse_query_params(request.query_params.multi_items()))


def create_document_router(
    document_service: DocumentService,
    prefix: str = DOCUMENTS_API_PREFIX,
    tag: str = DOCUMENTS_API_TAG,
) -> APIRouter:
    """서비스 하나를 REST 엔드포인트로 노출하는 라우터를 생성한다."""

    router = APIRouter(prefix=prefix, tags=[tag])

    def get_document_service() -> DocumentService:
        return document_service

    @router.get(DOCUMENTS_COLLECTION_PATH, summary="문서 목록을 조회합니다.")
    async def find_documents(
        request: Request,
        service: DocumentService = Depends(get_document_service),
    ) -> Any:
        try:
            return await service.find(_params(request))
        except BaseAppException as error:
            raise to_http_exception(error) from error

    @router.get(DOCUMENTS_ITEM_PATH, summary="문서 하나를 조회합니다.")
    async def get_document(
        id: str,
        request: Request,
        service: DocumentService = Depends(get_document_service),
    ) -> Any:
        try:
            return await service.get(id, _params(request))
        except BaseAppException as error:
            raise to_http_exception(error) from error

    @router.post(
        DOCUMENTS_COLLECTION_PATH,
        status_code=status.HTTP_201_CREATED,
        summary="문서를 생성합니다.",
    )
    async def create_documents(
        request: Request,
        data: Union[Dict[str, Any], List[Dict[str, Any]]] = Body(...),
        service: DocumentService = Depends(get_document_service),
    ) -> Any:
        try:
            return await service.create(data, _params(request))
        except BaseAppException as error:
            raise to_http_exception(error) from error

    @router.put(DOCUMENTS_ITEM_PATH, summary="문서를 교체합니다.")
    async def update_document(
        id: str,
        request: Request,
        data: Dict[str, Any] = Body(...),
        service: DocumentService = Depends(get_document_service),
    ) -> Any:
        try:
            return await service.update(id, data, _params(request))
        except BaseAppException as error:
            raise to_http_exception(error) from error

    @router.patch(DOCUMENTS_ITEM_PATH, summary="문서를 부분 수정합니다.")
    async def patch_document(
        id: str,
        request: Request,
        data: Dict[str, Any] = Body(...),
        service: DocumentService = Depends(get_document_service),
    ) -> Any:
        try:
            return await service.patch(id, data, _params(request))
        except BaseAppException as error:
            raise to_http_exception(error) from error

    @router.patch(DOCUMENTS_COLLECTION_PATH, summary="필터에 맞는 문서를 부분 수정합니다.")
    async def patch_documents(
        request: Request,
        data: Dict[str, Any] = Body(...),
        service: DocumentService = Depends(get_document_service),
    ) -> Any:
        try:
            return await service.patch(None, data, _params(request))
        except BaseAppException as error:
            raise to_http_exception(error) from error

    @router.delete(DOCUMENTS_ITEM_PATH, summary="문서를 삭제합니다.")
    async def remove_document(
        id: str,
        request: Request,
        service: DocumentService = Depends(get_document_service),
    ) -> Any:
        try:
            return await service.remove(id, _params(request))
        except BaseAppException as error:
            raise to_http_exception(error) from error

    @router.delete(DOCUMENTS_COLLECTION_PATH, summary="필터에 맞는 문서를 삭제합니다.")
    async def remove_documents(
        request: Request,
        service: DocumentService = Depends(get_document_service),
    ) -> Any:
        try:
            return await service.remove(None, _params(request))
        except BaseAppException as error:
            raise to_http_exception(error) from error

    return router
