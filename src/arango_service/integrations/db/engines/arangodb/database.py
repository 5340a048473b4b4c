"""
목적: python-arango 기반 DB 핸들을 제공한다.
설명: 동기 드라이버 호출을 스레드로 넘겨 비동기 쿼리 실행 계약을 구현하고, 인증과 데이터베이스/컬렉션/그래프 자동 생성을 지원한다.
디자인 패턴: 어댑터 패턴
참조: src/arango_service/integrations/db/base/engine.py, src/arango_service/integrations/db/engines/arangodb/models.py
"""

from __future__ import annotations

import asyncio
from typing import Any, Dict, Optional

from arango import ArangoClient
from arango.database import StandardDatabase

from arango_service.integrations.db.base.engine import BaseAutoDatabase, BaseDocumentDatabase
from arango_service.integrations.db.base.models import QueryCursor
from arango_service.integrations.db.engines.arangodb.models import (
    ArangoConnectionConfig,
    AuthType,
    GraphOptions,
)
from arango_service.shared.logging import Logger, create_default_logger

SYSTEM_DATABASE = "_system"


class ArangoDatabase(BaseDocumentDatabase):
    """이미 연결된 python-arango 데이터베이스를 감싸는 핸들."""

    def __init__(
        self,
        database: Optional[StandardDatabase] = None,
        logger: Optional[Logger] = None,
    ) -> None:
        self._database = database
        self._logger = logger or create_default_logger("ArangoDatabase")

    @property
    def name(self) -> str:
        return self._require_database().name

    @property
    def native(self) -> StandardDatabase:
        """python-arango 데이터베이스 객체를 반환한다."""

        return self._require_database()

    async def query(
        self,
        query: str,
        bind_vars: Dict[str, Any],
        count: bool = False,
        full_count: bool = False,
    ) -> QueryCursor:
        database = self._require_database()

        def _execute() -> QueryCursor:
            cursor = database.aql.execute(
                query,
                bind_vars=bind_vars,
                count=count,
                full_count=full_count,
            )
            rows = list(cursor)
            stats = cursor.statistics() or {}
            return QueryCursor(
                rows=rows,
                count=cursor.count() if count else None,
                full_count=stats.get("full_count", stats.get("fullCount")),
            )

        return await asyncio.to_thread(_execute)

    def _require_database(self) -> StandardDatabase:
        if self._database is None:
            raise RuntimeError("ArangoDB 데이터베이스가 선택되지 않았습니다.")
        return self._database


class AutoDatabase(ArangoDatabase, BaseAutoDatabase):
    """데이터베이스/컬렉션/그래프를 필요 시 생성하는 핸들.

    Args:
        config: 접속 주소와 인증 설정.
        client: 주입할 ArangoClient. 없으면 `config.hosts`로 생성한다.
        logger: 주입 가능한 로거.
    """

    def __init__(
        self,
        config: Optional[ArangoConnectionConfig] = None,
        client: Optional[Any] = None,
        logger: Optional[Logger] = None,
    ) -> None:
        super().__init__(None, logger or create_default_logger("AutoDatabase"))
        self._config = config or ArangoConnectionConfig()
        self._client = client if client is not None else ArangoClient(hosts=self._config.hosts)
        self._credentials: Dict[str, Any] = {}

    @property
    def credentials(self) -> Dict[str, Any]:
        return dict(self._credentials)

    def use_basic_auth(self, username: Optional[str], password: Optional[str]) -> None:
        """기본 인증 정보를 설정한다."""

        self._credentials = {
            "username": username or "root",
            "password": password or "",
            "auth_method": "basic",
        }

    def use_bearer_auth(self, token: str) -> None:
        """발급된 JWT 토큰을 사용하도록 설정한다."""

        self._credentials = {"user_token": token}

    def login(self, username: Optional[str], password: Optional[str]) -> None:
        """username/password로 JWT 로그인을 수행하도록 설정한다."""

        self._credentials = {
            "username": username or "root",
            "password": password or "",
            "auth_method": "jwt",
        }

    def apply_auth(self) -> None:
        """설정의 인증 방식을 적용한다."""

        config = self._config
        if config.auth_type == AuthType.BASIC_AUTH:
            self.use_basic_auth(config.username, config.password)
        elif config.auth_type == AuthType.BEARER_AUTH:
            if config.token:
                self.use_bearer_auth(config.token)
            else:
                self.login(config.username, config.password)
        elif config.username:
            self.use_basic_auth(config.username, config.password)

    async def auto_use_database(self, name: str) -> None:
        def _use() -> StandardDatabase:
            system = self._client.db(SYSTEM_DATABASE, **self._credentials)
            if not system.has_database(name):
                system.create_database(name)
                self._logger.info(f"ArangoDB 데이터베이스 생성 완료: {name}")
            return self._client.db(name, **self._credentials)

        self._database = await asyncio.to_thread(_use)
        self._logger.info(f"ArangoDB 데이터베이스 선택 완료: {name}")

    async def auto_collection(self, name: str, graph: Optional[Any] = None) -> Any:
        database = self._require_database()

        def _collection() -> Any:
            if graph is not None:
                if not graph.has_vertex_collection(name):
                    graph.create_vertex_collection(name)
                    self._logger.info(f"ArangoDB 정점 컬렉션 생성 완료: {name}")
                return graph.vertex_collection(name)
            if not database.has_collection(name):
                database.create_collection(name)
                self._logger.info(f"ArangoDB 컬렉션 생성 완료: {name}")
            return database.collection(name)

        return await asyncio.to_thread(_collection)

    async def auto_graph(self, options: GraphOptions) -> Any:
        database = self._require_database()

        def _graph() -> Any:
            if not database.has_graph(options.name):
                database.create_graph(
                    options.name,
                    edge_definitions=options.edge_definitions or None,
                    orphan_collections=options.orphan_collections or None,
                )
                self._logger.info(f"ArangoDB 그래프 생성 완료: {options.name}")
            return database.graph(options.name)

        return await asyncio.to_thread(_graph)

    async def close(self) -> None:
        self._client.close()
        self._database = None
        self._logger.info("ArangoDB 연결이 종료되었습니다.")
