"""
목적: ArangoDB 컬렉션에 대한 CRUD 서비스를 제공한다.
설명: find/get/create/update/patch/remove 호출을 파라미터화된 AQL로 변환해 실행하고 결과를 호출자 문서 형태로 돌려준다.
디자인 패턴: 서비스 레이어, 퍼사드
참조: src/arango_service/integrations/db/query_builder/aql_builder.py, src/arango_service/integrations/db/engines/arangodb/result_mapper.py, src/arango_service/core/service/connection.py
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from pydantic import ValidationError

from arango_service.core.service.connection import (
    ConnectionState,
    ConnectResult,
    DatabaseFactory,
    ServiceConnection,
)
from arango_service.core.service.options import (
    RESERVED_ID_FIELDS,
    PaginationPolicy,
    ServiceOptions,
    ServiceParams,
)
from arango_service.core.service.sources import (
    resolve_collection_source,
    resolve_database_source,
    resolve_graph_source,
)
from arango_service.integrations.db.base.engine import BaseDocumentDatabase
from arango_service.integrations.db.base.models import AqlQuery, Page, Pagination, Query
from arango_service.integrations.db.engines.arangodb.document_mapper import DocumentKeyMapper
from arango_service.integrations.db.engines.arangodb.result_mapper import ResultMapper
from arango_service.integrations.db.query_builder import AqlQueryBuilder, QuerySpecParser
from arango_service.shared.exceptions import ConfigurationError
from arango_service.shared.logging import LogContext, Logger, create_default_logger

Id = Union[str, int]
Params = Union[ServiceParams, Mapping[str, Any], None]
Document = Dict[str, Any]


def _compose(*fragments: str) -> str:
    """비어 있지 않은 AQL 조각을 줄 단위로 연결한다."""

    return "\n".join(fragment for fragment in fragments if fragment)


def _normalize_ids(id: Union[Id, Sequence[Id], None]) -> List[str]:
    """id 또는 id 목록을 키 목록으로 바꾼다. None과 빈 목록은 빈 목록이다."""

    if id is None:
        return []
    if isinstance(id, (list, tuple)):
        return [str(item) for item in id if item is not None]
    return [str(id)]


class DocumentService:
    """ArangoDB 문서 서비스.

    Args:
        options: 서비스 옵션 또는 동일한 구조의 매핑.
        logger: 주입 가능한 로거.
        database_factory: database가 이름일 때 DB 핸들을 만드는 함수.

    Raises:
        ConfigurationError: collection/database가 없거나 id 필드가 예약 필드일 때.
    """

    def __init__(
        self,
        options: Union[ServiceOptions, Mapping[str, Any]],
        logger: Optional[Logger] = None,
        database_factory: Optional[DatabaseFactory] = None,
    ) -> None:
        self._options = self._coerce_options(options)
        self._logger = logger or create_default_logger("DocumentService")
        if self._options.id_field in RESERVED_ID_FIELDS:
            raise ConfigurationError(
                f"id 필드로 예약 필드를 사용할 수 없습니다: {self._options.id_field}",
                hint="id_field에 `_rev` 이외의 이름을 지정하세요.",
                metadata={"reserved": sorted(RESERVED_ID_FIELDS)},
            )
        collection_source = resolve_collection_source(self._options.collection)
        database_source = resolve_database_source(self._options.database)
        graph_source = resolve_graph_source(self._options.graph)
        self._paginate = self._options.paginate
        self._key_mapper = DocumentKeyMapper(
            id_field=self._options.id_field,
            expand_data=self._options.expand_data,
        )
        self._parser = QuerySpecParser()
        self._result_mapper = ResultMapper(self._key_mapper, self._logger)
        self._connection = ServiceConnection(
            database_source=database_source,
            collection_source=collection_source,
            graph_source=graph_source,
            connection_config=self._options.connection,
            database_factory=database_factory,
            logger=self._logger,
        )

    @property
    def id(self) -> str:
        """외부에 노출되는 식별자 필드 이름."""

        return self._options.id_field

    @property
    def options(self) -> ServiceOptions:
        return self._options

    @property
    def events(self) -> List[str]:
        return list(self._options.events)

    @property
    def state(self) -> ConnectionState:
        return self._connection.state

    @property
    def database(self) -> Optional[BaseDocumentDatabase]:
        result = self._connection.result
        return result.database if result else None

    @property
    def collection(self) -> Optional[Any]:
        result = self._connection.result
        return result.collection if result else None

    @property
    def graph(self) -> Optional[Any]:
        result = self._connection.result
        return result.graph if result else None

    @property
    def paginate(self) -> PaginationPolicy:
        return self._paginate

    @paginate.setter
    def paginate(self, value: Union[PaginationPolicy, Mapping[str, Any], None]) -> None:
        if value is None:
            self._paginate = PaginationPolicy()
        elif isinstance(value, PaginationPolicy):
            self._paginate = value
        else:
            self._paginate = PaginationPolicy.model_validate(dict(value))

    async def connect(self) -> ConnectResult:
        """DB/컬렉션/그래프 연결을 보장한다."""

        return await self._connection.ensure_connected()

    async def setup(self) -> None:
        """호스트 프레임워크 시작 훅. 연결을 미리 수립한다."""

        await self.connect()

    async def close(self) -> None:
        """서비스가 생성한 DB 연결을 정리한다."""

        await self._connection.close()

    async def find(self, params: Params = None) -> Union[List[Document], Page]:
        """쿼리 명세에 맞는 문서를 조회한다.

        페이지네이션 정책이 활성화된 호출이면 `Page`를, 아니면 목록을 반환한다.
        """

        params = ServiceParams.coerce(params)
        policy = self._resolve_pagination(params)
        query = self._inject_pagination(self._parser.parse(params.query), policy)
        database, collection = await self._handles()
        builder = AqlQueryBuilder(query)
        collection_ref = builder.add_bind_var(collection.name, collection=True)
        aql = AqlQuery(
            query=_compose(
                f"FOR doc IN {collection_ref}",
                builder.filter,
                builder.sort,
                builder.limit,
                builder.return_filter,
            ),
            bind_vars=builder.bind_vars,
        )
        self._log_operation("find", collection, aql)
        result = await self._result_mapper.execute(
            database,
            aql,
            remove_array=False,
            paging=policy is not None,
        )
        if policy is None:
            return result
        pagination = builder.query.pagination
        return result.model_copy(update={"limit": pagination.limit or 0, "skip": pagination.skip})

    async def get(self, id: Id, params: Params = None) -> Document:
        """id로 문서 하나를 조회한다. 추가 필터가 있으면 함께 적용한다.

        Raises:
            NotFoundError: 일치하는 문서가 없을 때.
        """

        params = ServiceParams.coerce(params)
        query = self._parser.parse(params.query)
        database, collection = await self._handles()
        builder = AqlQueryBuilder(
            Query(filter_expression=query.filter_expression, select=query.select)
        )
        collection_ref = builder.add_bind_var(collection.name, collection=True)
        key_ref = builder.add_bind_var(str(id))
        aql = AqlQuery(
            query=_compose(
                f"FOR doc IN {collection_ref}",
                f"FILTER doc._key == {key_ref}",
                builder.filter,
                builder.return_filter,
            ),
            bind_vars=builder.bind_vars,
        )
        self._log_operation("get", collection, aql)
        return await self._result_mapper.execute(
            database,
            aql,
            error_message=self._not_found_message(id),
        )

    async def create(
        self,
        data: Union[Mapping[str, Any], Sequence[Mapping[str, Any]]],
        params: Params = None,
    ) -> Union[Document, List[Document]]:
        """문서 하나 또는 여러 개를 생성한다. id가 없으면 UUID 키를 부여한다."""

        if isinstance(data, (list, tuple)) and not data:
            return []
        documents = self._key_mapper.to_write(data)
        params = ServiceParams.coerce(params)
        query = self._parser.parse(params.query)
        database, collection = await self._handles()
        builder = AqlQueryBuilder(Query(select=query.select))
        items_ref = builder.add_bind_var(documents)
        collection_ref = builder.add_bind_var(collection.name, collection=True)
        aql = AqlQuery(
            query=_compose(
                f"FOR item IN {items_ref}",
                f"INSERT item IN {collection_ref}",
                "LET doc = NEW",
                builder.return_filter,
            ),
            bind_vars=builder.bind_vars,
        )
        self._log_operation("create", collection, aql)
        return await self._result_mapper.execute(database, aql)

    async def update(
        self,
        id: Union[Id, Sequence[Id], None],
        data: Mapping[str, Any],
        params: Params = None,
    ) -> Union[Document, List[Document]]:
        """문서를 전체 교체한다. id가 없으면 필터에 맞는 모든 문서를 교체한다."""

        return await self._replace_or_patch("REPLACE", id, data, params)

    async def patch(
        self,
        id: Union[Id, Sequence[Id], None],
        data: Mapping[str, Any],
        params: Params = None,
    ) -> Union[Document, List[Document]]:
        """문서를 부분 병합한다. id가 없으면 필터에 맞는 모든 문서를 수정한다."""

        return await self._replace_or_patch("UPDATE", id, data, params)

    async def remove(
        self,
        id: Union[Id, Sequence[Id], None],
        params: Params = None,
    ) -> Union[Document, List[Document], None]:
        """문서를 삭제한다. id가 없으면 필터에 맞는 모든 문서를 삭제한다.

        존재하지 않는 id는 에러 없이 건너뛴다.
        """

        ids = _normalize_ids(id)
        params = ServiceParams.coerce(params)
        query = self._parser.parse(params.query)
        database, collection = await self._handles()
        if ids:
            builder = AqlQueryBuilder(Query(select=query.select), "doc", "removed")
            ids_ref = builder.add_bind_var(ids)
            collection_ref = builder.add_bind_var(collection.name, collection=True)
            head = (
                f"FOR doc IN {ids_ref}",
                f"REMOVE doc IN {collection_ref} OPTIONS {{ ignoreErrors: true }}",
            )
        else:
            builder = AqlQueryBuilder(
                Query(filter_expression=query.filter_expression, select=query.select),
                "doc",
                "removed",
            )
            collection_ref = builder.add_bind_var(collection.name, collection=True)
            head = (
                f"FOR doc IN {collection_ref}",
                builder.filter,
                f"REMOVE doc IN {collection_ref}",
            )
        aql = AqlQuery(
            query=_compose(*head, "LET removed = OLD", builder.return_filter),
            bind_vars=builder.bind_vars,
        )
        self._log_operation("remove", collection, aql)
        return await self._result_mapper.execute(database, aql)

    async def _replace_or_patch(
        self,
        mode: str,
        id: Union[Id, Sequence[Id], None],
        data: Mapping[str, Any],
        params: Params,
    ) -> Union[Document, List[Document]]:
        ids = _normalize_ids(id)
        body = self._key_mapper.strip_internal(data)
        params = ServiceParams.coerce(params)
        query = self._parser.parse(params.query)
        database, collection = await self._handles()
        if ids:
            builder = AqlQueryBuilder(Query(select=query.select), "doc", "changed")
            source_ref = builder.add_bind_var(ids)
            collection_ref = builder.add_bind_var(collection.name, collection=True)
            filter_clause = ""
        else:
            builder = AqlQueryBuilder(
                Query(filter_expression=query.filter_expression, select=query.select),
                "doc",
                "changed",
            )
            collection_ref = builder.add_bind_var(collection.name, collection=True)
            source_ref = collection_ref
            filter_clause = builder.filter
        body_ref = builder.add_bind_var(body)
        aql = AqlQuery(
            query=_compose(
                f"FOR doc IN {source_ref}",
                filter_clause,
                f"{mode} doc WITH {body_ref} IN {collection_ref}",
                "LET changed = NEW",
                builder.return_filter,
            ),
            bind_vars=builder.bind_vars,
        )
        self._log_operation(mode.lower(), collection, aql)
        return await self._result_mapper.execute(
            database,
            aql,
            error_message=self._not_found_message(id),
        )

    def _resolve_pagination(self, params: ServiceParams) -> Optional[PaginationPolicy]:
        """이번 호출에 적용할 페이지네이션 정책을 고른다. 비활성이면 None이다."""

        if params.paginate is False:
            return None
        policy = params.paginate if isinstance(params.paginate, PaginationPolicy) else self._paginate
        return None if policy.is_empty() else policy

    def _inject_pagination(self, query: Query, policy: Optional[PaginationPolicy]) -> Query:
        if policy is None:
            return query
        pagination = Pagination(
            limit=policy.effective_limit(query.pagination.limit),
            skip=query.pagination.skip,
        )
        return query.model_copy(update={"pagination": pagination})

    async def _handles(self) -> Tuple[BaseDocumentDatabase, Any]:
        result = await self.connect()
        return result.database, result.collection

    def _not_found_message(self, id: Any) -> str:
        return f"id '{id}'에 해당하는 문서가 없습니다."

    def _log_operation(self, operation: str, collection: Any, aql: AqlQuery) -> None:
        context = LogContext(operation=operation, collection=collection.name)
        self._logger.debug(f"AQL 실행: {aql.query!r} (bind_vars={sorted(aql.bind_vars)})", context)

    @staticmethod
    def _coerce_options(options: Union[ServiceOptions, Mapping[str, Any]]) -> ServiceOptions:
        if isinstance(options, ServiceOptions):
            return options
        if not isinstance(options, Mapping):
            raise ConfigurationError(
                "서비스 옵션은 ServiceOptions 또는 매핑이어야 합니다.",
                cause=f"type={type(options).__name__}",
            )
        try:
            return ServiceOptions.model_validate(dict(options))
        except ValidationError as error:
            raise ConfigurationError(
                "서비스 옵션 검증에 실패했습니다.",
                cause=str(error),
                original=error,
            ) from error


def create_document_service(
    options: Union[ServiceOptions, Mapping[str, Any]],
    logger: Optional[Logger] = None,
) -> DocumentService:
    """문서 서비스 인스턴스를 생성한다."""

    return DocumentService(options, logger=logger)
