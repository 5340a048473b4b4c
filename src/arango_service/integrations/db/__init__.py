"""
목적: DB 통합 모듈 공개 API를 제공한다.
설명: 쿼리 모델, AQL 빌더, ArangoDB 핸들과 매퍼를 노출한다.
디자인 패턴: 퍼사드
참조: src/arango_service/integrations/db/query_builder, src/arango_service/integrations/db/engines
"""

from arango_service.integrations.db.base import (
    AqlQuery,
    BaseAutoDatabase,
    BaseDocumentDatabase,
    Page,
    Query,
    QueryCursor,
)
from arango_service.integrations.db.engines.arangodb import (
    ArangoConnectionConfig,
    ArangoDatabase,
    AuthType,
    AutoDatabase,
    DocumentKeyMapper,
    GraphOptions,
    ResultMapper,
)
from arango_service.integrations.db.query_builder import AqlQueryBuilder, QuerySpecParser

__all__ = [
    "AqlQuery",
    "AqlQueryBuilder",
    "QuerySpecParser",
    "BaseDocumentDatabase",
    "BaseAutoDatabase",
    "Page",
    "Query",
    "QueryCursor",
    "ArangoConnectionConfig",
    "ArangoDatabase",
    "AuthType",
    "AutoDatabase",
    "DocumentKeyMapper",
    "GraphOptions",
    "ResultMapper",
]
