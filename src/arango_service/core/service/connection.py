"""
목적: 서비스 인스턴스별 DB 연결 상태를 관리한다.
설명: UNCONNECTED → CONNECTING → CONNECTED 상태 기계를 메모이즈된 태스크로 구현해 동시 호출자가 하나의 연결 시도를 공유한다.
디자인 패턴: 상태 패턴, 매니저 패턴
참조: src/arango_service/core/service/sources.py, src/arango_service/integrations/db/engines/arangodb/database.py
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional

from arango.database import StandardDatabase

from arango_service.core.service.sources import ResourceSource, SourceKind
from arango_service.integrations.db.base.engine import BaseAutoDatabase, BaseDocumentDatabase
from arango_service.integrations.db.engines.arangodb.database import ArangoDatabase, AutoDatabase
from arango_service.integrations.db.engines.arangodb.models import ArangoConnectionConfig
from arango_service.shared.exceptions import ConfigurationError, ProvisioningError
from arango_service.shared.logging import Logger, create_default_logger

DatabaseFactory = Callable[[ArangoConnectionConfig], BaseAutoDatabase]


class ConnectionState(str, Enum):
    """연결 상태."""

    UNCONNECTED = "UNCONNECTED"
    CONNECTING = "CONNECTING"
    CONNECTED = "CONNECTED"


@dataclass(frozen=True)
class ConnectResult:
    """연결이 끝난 DB/컬렉션/그래프 핸들."""

    database: BaseDocumentDatabase
    collection: Any
    graph: Optional[Any] = None


def create_auto_database(config: ArangoConnectionConfig) -> BaseAutoDatabase:
    """접속 설정으로 AutoDatabase를 만들고 인증 방식을 적용한다."""

    database = AutoDatabase(config=config)
    database.apply_auth()
    return database


class ServiceConnection:
    """서비스 연결 관리자.

    연결 결과는 한 번 확정되면 인스턴스 수명 동안 바뀌지 않는다. 실패한 시도는
    상태를 UNCONNECTED로 되돌려 다음 호출이 다시 연결하도록 한다.
    """

    def __init__(
        self,
        database_source: ResourceSource,
        collection_source: ResourceSource,
        graph_source: Optional[ResourceSource] = None,
        connection_config: Optional[ArangoConnectionConfig] = None,
        database_factory: Optional[DatabaseFactory] = None,
        logger: Optional[Logger] = None,
    ) -> None:
        self._database_source = database_source
        self._collection_source = collection_source
        self._graph_source = graph_source
        self._connection_config = connection_config or ArangoConnectionConfig()
        self._database_factory = database_factory or create_auto_database
        self._logger = logger or create_default_logger("ServiceConnection")
        self._state = ConnectionState.UNCONNECTED
        self._task: Optional[asyncio.Task] = None
        self._result: Optional[ConnectResult] = None

    @property
    def state(self) -> ConnectionState:
        return self._state

    @property
    def result(self) -> Optional[ConnectResult]:
        return self._result

    async def ensure_connected(self) -> ConnectResult:
        """연결을 보장하고 결과를 반환한다. 진행 중인 시도가 있으면 그 시도를 기다린다."""

        if self._result is not None:
            return self._result
        if self._task is None:
            self._state = ConnectionState.CONNECTING
            self._task = asyncio.get_running_loop().create_task(self._connect())
        return await asyncio.shield(self._task)

    async def _connect(self) -> ConnectResult:
        owned: Optional[BaseAutoDatabase] = None
        try:
            if self._database_source.kind == SourceKind.NAME:
                owned = self._database_factory(self._connection_config)
                await owned.auto_use_database(self._database_source.value)
                database: BaseDocumentDatabase = owned
            else:
                database = await self._resolve_database()
            graph = await self._resolve_graph(database)
            collection = await self._resolve_collection(database, graph)
        except BaseException:
            # 이름으로 만든 핸들은 실패한 시도와 함께 닫는다.
            if owned is not None:
                await owned.close()
            if self._task is asyncio.current_task():
                self._state = ConnectionState.UNCONNECTED
                self._task = None
            raise
        self._result = ConnectResult(database=database, collection=collection, graph=graph)
        self._state = ConnectionState.CONNECTED
        self._logger.info(f"DB 연결 완료: database={database.name}, collection={collection.name}")
        return self._result

    async def _resolve_database(self) -> BaseDocumentDatabase:
        source = self._database_source
        value = await source.value if source.kind == SourceKind.PENDING else source.value
        if isinstance(value, StandardDatabase):
            return ArangoDatabase(value)
        if not isinstance(value, BaseDocumentDatabase):
            raise ConfigurationError(
                "database 참조가 DB 핸들이 아닙니다.",
                cause=f"type={type(value).__name__}",
            )
        return value

    async def _resolve_graph(self, database: BaseDocumentDatabase) -> Optional[Any]:
        source = self._graph_source
        if source is None:
            return None
        if source.kind == SourceKind.PENDING:
            return await source.value
        if source.kind == SourceKind.REFERENCE:
            return source.value
        if not isinstance(database, BaseAutoDatabase):
            raise ProvisioningError(
                "그래프 자동 생성은 AutoDatabase 인스턴스가 필요합니다.",
                resource="graph",
            )
        return await database.auto_graph(source.value)

    async def _resolve_collection(
        self, database: BaseDocumentDatabase, graph: Optional[Any]
    ) -> Any:
        source = self._collection_source
        if source.kind == SourceKind.NAME:
            if not isinstance(database, BaseAutoDatabase):
                raise ProvisioningError(
                    "컬렉션 자동 생성은 AutoDatabase 인스턴스가 필요합니다.",
                    resource="collection",
                )
            return await database.auto_collection(source.value, graph)
        collection = await source.value if source.kind == SourceKind.PENDING else source.value
        if not isinstance(getattr(collection, "name", None), str):
            raise ConfigurationError(
                "collection 참조에 name 속성이 없습니다.",
                cause=f"type={type(collection).__name__}",
            )
        return collection

    async def close(self) -> None:
        """이름으로 생성한 DB 핸들을 닫고 상태를 초기화한다. 주입된 핸들은 닫지 않는다.

        진행 중인 연결 시도는 취소되고, 그 시도를 기다리던 호출자는 CancelledError를 받는다.
        """

        task = self._task
        if task is not None and not task.done():
            task.cancel()
            await asyncio.wait([task])
        result = self._result
        self._result = None
        self._task = None
        self._state = ConnectionState.UNCONNECTED
        if result is not None and self._database_source.kind == SourceKind.NAME:
            await result.database.close()
            self._logger.info("서비스 DB 연결을 종료했습니다.")
