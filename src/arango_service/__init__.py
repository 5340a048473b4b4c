"""
목적: arango_service 패키지 공개 API를 제공한다.
설명: 문서 서비스, 옵션 모델, 쿼리 빌더, 도메인 예외를 최상위에서 노출한다.
디자인 패턴: 퍼사드
참조: src/arango_service/core/service/__init__.py, src/arango_service/integrations/db/__init__.py
"""

from arango_service.core.service import (
    DocumentService,
    PaginationPolicy,
    ServiceOptions,
    ServiceParams,
    create_document_service,
    load_service_options,
)
from arango_service.integrations.db import (
    AqlQueryBuilder,
    ArangoConnectionConfig,
    ArangoDatabase,
    AuthType,
    AutoDatabase,
    GraphOptions,
    Page,
)
from arango_service.shared.exceptions import (
    BaseAppException,
    ConfigurationError,
    InvalidQueryError,
    NotFoundError,
    ProvisioningError,
)

__all__ = [
    "DocumentService",
    "PaginationPolicy",
    "ServiceOptions",
    "ServiceParams",
    "create_document_service",
    "load_service_options",
    "AqlQueryBuilder",
    "ArangoConnectionConfig",
    "ArangoDatabase",
    "AuthType",
    "AutoDatabase",
    "GraphOptions",
    "Page",
    "BaseAppException",
    "ConfigurationError",
    "InvalidQueryError",
    "NotFoundError",
    "ProvisioningError",
]
