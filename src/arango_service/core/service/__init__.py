"""
목적: 문서 서비스 공개 API를 제공한다.
설명: CRUD 서비스, 옵션 모델, 연결 상태 기계를 외부에 노출한다.
디자인 패턴: 퍼사드
참조: src/arango_service/core/service/document_service.py
"""

from arango_service.core.service.connection import (
    ConnectionState,
    ConnectResult,
    ServiceConnection,
    create_auto_database,
)
from arango_service.core.service.document_service import DocumentService, create_document_service
from arango_service.core.service.options import (
    RESERVED_ID_FIELDS,
    PaginationPolicy,
    ServiceOptions,
    ServiceParams,
    load_service_options,
)
from arango_service.core.service.sources import (
    ResourceSource,
    SourceKind,
    resolve_collection_source,
    resolve_database_source,
    resolve_graph_source,
)

__all__ = [
    "ConnectionState",
    "ConnectResult",
    "ServiceConnection",
    "create_auto_database",
    "DocumentService",
    "create_document_service",
    "RESERVED_ID_FIELDS",
    "PaginationPolicy",
    "ServiceOptions",
    "ServiceParams",
    "load_service_options",
    "ResourceSource",
    "SourceKind",
    "resolve_collection_source",
    "resolve_database_source",
    "resolve_graph_source",
]
