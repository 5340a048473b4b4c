"""
목적: ArangoDB 엔진 공개 API를 제공한다.
설명: DB 핸들, 키 매퍼, 결과 정규화기, 설정 모델을 외부에 노출한다.
디자인 패턴: 퍼사드
참조: src/arango_service/integrations/db/engines/arangodb/database.py
"""

from arango_service.integrations.db.engines.arangodb.database import ArangoDatabase, AutoDatabase
from arango_service.integrations.db.engines.arangodb.document_mapper import DocumentKeyMapper
from arango_service.integrations.db.engines.arangodb.error_codes import (
    ArangoErrorCode,
    is_not_found_error,
)
from arango_service.integrations.db.engines.arangodb.models import (
    ArangoConnectionConfig,
    AuthType,
    GraphOptions,
)
from arango_service.integrations.db.engines.arangodb.result_mapper import ResultMapper

__all__ = [
    "ArangoDatabase",
    "AutoDatabase",
    "DocumentKeyMapper",
    "ResultMapper",
    "ArangoErrorCode",
    "is_not_found_error",
    "ArangoConnectionConfig",
    "AuthType",
    "GraphOptions",
]
