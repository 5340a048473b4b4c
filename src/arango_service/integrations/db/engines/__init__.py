"""
목적: DB 엔진 구현체 모듈을 제공한다.
설명: ArangoDB 엔진 클래스를 외부에 노출한다.
디자인 패턴: 퍼사드
참조: src/arango_service/integrations/db/engines/arangodb/*.py
"""

from arango_service.integrations.db.engines.arangodb import ArangoDatabase, AutoDatabase

__all__ = ["ArangoDatabase", "AutoDatabase"]
