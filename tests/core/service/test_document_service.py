"""
목적: 문서 서비스 CRUD 동작을 검증한다.
설명: 가짜 DB로 각 연산이 만드는 AQL/바인드 변수, 페이지네이션 봉투, 미존재 처리, 생성 시점 검증을 확인한다.
디자인 패턴: 테스트 더블
참조: src/arango_service/core/service/document_service.py
"""

from __future__ import annotations

import pytest

from arango_service.core.service import (
    ConnectionState,
    DocumentService,
    PaginationPolicy,
    ServiceOptions,
    create_document_service,
)
from arango_service.integrations.db.base import Page, QueryCursor
from arango_service.shared.exceptions import ConfigurationError, InvalidQueryError, NotFoundError
from arango_service.shared.logging import InMemoryLogger, LogLevel


@pytest.fixture
def logger() -> InMemoryLogger:
    return InMemoryLogger("service-test")


@pytest.fixture
def service(fake_database, fake_collection, logger) -> DocumentService:
    return DocumentService(
        {"collection": fake_collection, "database": fake_database, "id_field": "id"},
        logger=logger,
    )


@pytest.fixture
def paginated_service(fake_database, fake_collection) -> DocumentService:
    return DocumentService(
        ServiceOptions(
            collection=fake_collection,
            database=fake_database,
            id_field="id",
            paginate=PaginationPolicy(default=10, max=50),
        )
    )


@pytest.mark.parametrize(
    "options",
    [
        {"database": "app"},
        {"collection": "people"},
        {"collection": "people", "database": "app", "id_field": "_rev"},
    ],
)
def test_construction_rejects_invalid_options(options) -> None:
    """컬렉션/데이터베이스 누락과 예약 id 필드가 생성 시점에 거부되는지 확인한다."""

    with pytest.raises(ConfigurationError):
        DocumentService(options)


def test_factory_and_properties(fake_database, fake_collection) -> None:
    """팩토리 함수와 연결 전 속성 값을 확인한다."""

    service = create_document_service(
        {"collection": fake_collection, "database": fake_database, "events": ["created"]}
    )

    assert service.id == "_id"
    assert service.events == ["created"]
    assert service.state == ConnectionState.UNCONNECTED
    assert service.database is None
    assert service.collection is None


@pytest.mark.asyncio
async def test_setup_connects_and_close_keeps_injected_database(service, fake_database) -> None:
    """setup이 연결을 수립하고, 주입된 DB는 close에서 닫지 않는지 확인한다."""

    await service.setup()

    assert service.state == ConnectionState.CONNECTED
    assert service.database is fake_database
    assert service.collection.name == "people"

    await service.close()

    assert fake_database.closed is False


@pytest.mark.asyncio
async def test_named_database_is_closed_by_service(fake_auto_database) -> None:
    """이름으로 만든 DB는 close에서 닫히는지 확인한다."""

    service = DocumentService(
        {"collection": "people", "database": "app"},
        database_factory=lambda config: fake_auto_database,
    )

    await service.find()
    await service.close()

    assert fake_auto_database.used_databases == ["app"]
    assert fake_auto_database.closed is True


@pytest.mark.asyncio
async def test_find_builds_filtered_query(service, fake_database, logger) -> None:
    """find가 필터 조건과 컬렉션 바인드 변수로 쿼리를 만들고 목록을 반환하는지 확인한다."""

    fake_database.push([{"_key": "a", "name": "alice"}])

    result = await service.find({"query": {"name": "alice"}})

    assert result == [{"id": "a", "name": "alice"}]
    call = fake_database.last_call
    assert call["query"] == "FOR doc IN @@value_2\nFILTER doc.@value_0 == @value_1\nRETURN doc"
    assert call["bind_vars"] == {"value_0": "name", "value_1": "alice", "@value_2": "people"}
    assert call["full_count"] is False
    record = logger.repository.list()[-1]
    assert record.level == LogLevel.DEBUG
    assert record.context.operation == "find"
    assert record.context.collection == "people"


@pytest.mark.asyncio
async def test_find_rejects_unknown_operator(service, fake_database) -> None:
    """지원하지 않는 연산자가 쿼리 실행 전에 거부되는지 확인한다."""

    with pytest.raises(InvalidQueryError):
        await service.find({"query": {"age": {"$regex": "1"}}})

    assert fake_database.calls == []


@pytest.mark.asyncio
async def test_find_with_pagination_clamps_limit(paginated_service, fake_database) -> None:
    """요청 개수가 최대값으로 제한되고 페이지 봉투를 반환하는지 확인한다."""

    fake_database.push(QueryCursor(rows=[{"_key": "a"}], full_count=120))

    page = await paginated_service.find({"query": {"$limit": 999}})

    assert isinstance(page, Page)
    assert (page.total, page.limit, page.skip) == (120, 50, 0)
    assert page.data == [{"id": "a"}]
    call = fake_database.last_call
    assert "LIMIT @value_0, @value_1" in call["query"]
    assert call["bind_vars"]["value_1"] == 50
    assert call["full_count"] is True


@pytest.mark.asyncio
async def test_find_with_pagination_uses_default(paginated_service, fake_database) -> None:
    """요청 개수가 없으면 기본값을 쓰고, 전체 개수는 limit/skip과 무관한지 확인한다."""

    fake_database.push(QueryCursor(rows=[], full_count=120))

    page = await paginated_service.find({"query": {"$skip": 20}})

    assert (page.total, page.limit, page.skip) == (120, 10, 20)
    assert fake_database.last_call["bind_vars"]["value_0"] == 20
    assert fake_database.last_call["bind_vars"]["value_1"] == 10


@pytest.mark.asyncio
async def test_find_paginate_false_disables_envelope(paginated_service, fake_database) -> None:
    """호출 파라미터 paginate=False이면 목록을 반환하는지 확인한다."""

    fake_database.push([{"_key": "a"}])

    result = await paginated_service.find({"paginate": False})

    assert result == [{"id": "a"}]
    assert "LIMIT" not in fake_database.last_call["query"]


@pytest.mark.asyncio
async def test_find_param_policy_overrides_service_policy(service, fake_database) -> None:
    """호출 파라미터 정책이 서비스 정책 대신 적용되는지 확인한다."""

    fake_database.push(QueryCursor(rows=[], full_count=0))

    page = await service.find({"paginate": {"default": 3, "max": 5}})

    assert (page.total, page.limit) == (0, 3)


@pytest.mark.asyncio
async def test_paginate_setter(service, fake_database) -> None:
    """서비스 정책을 나중에 설정할 수 있는지 확인한다."""

    service.paginate = {"max": 7}
    fake_database.push(QueryCursor(rows=[], full_count=0))

    page = await service.find()

    assert service.paginate == PaginationPolicy(max=7)
    assert page.limit == 7


@pytest.mark.asyncio
async def test_get_filters_by_key(service, fake_database) -> None:
    """get이 `_key` 조건과 추가 필터로 조회하는지 확인한다."""

    fake_database.push([{"_key": "a-1", "name": "alice"}])

    result = await service.get("a-1", {"query": {"status": "ACTIVE", "$limit": 5}})

    assert result == {"id": "a-1", "name": "alice"}
    call = fake_database.last_call
    assert call["query"] == (
        "FOR doc IN @@value_2\n"
        "FILTER doc._key == @value_3\n"
        "FILTER doc.@value_0 == @value_1\n"
        "RETURN doc"
    )
    assert call["bind_vars"]["value_3"] == "a-1"


@pytest.mark.asyncio
async def test_get_missing_raises_not_found_with_id(service, fake_database) -> None:
    """없는 id 조회가 id를 포함한 NotFoundError인지 확인한다."""

    fake_database.push([])

    with pytest.raises(NotFoundError) as exc_info:
        await service.get("missing-7")

    assert "missing-7" in exc_info.value.message


@pytest.mark.asyncio
async def test_get_translates_collection_not_found(service, fake_database, arango_error) -> None:
    """컬렉션 미존재 에러가 NotFoundError로 변환되는지 확인한다."""

    fake_database.push(arango_error(1203))

    with pytest.raises(NotFoundError):
        await service.get("a-1")


@pytest.mark.asyncio
async def test_get_accepts_zero_id(service, fake_database) -> None:
    """0도 유효한 id로 다뤄지는지 확인한다."""

    fake_database.push([{"_key": "0"}])

    assert await service.get(0) == {"id": "0"}
    assert fake_database.last_call["bind_vars"]["value_1"] == "0"


@pytest.mark.asyncio
async def test_create_single_document(service, fake_database) -> None:
    """create가 id를 `_key`로 옮겨 INSERT하고 생성 문서를 반환하는지 확인한다."""

    fake_database.push([{"_key": "a-1", "_id": "people/a-1", "_rev": "r", "name": "alice"}])

    result = await service.create({"id": "a-1", "name": "alice"})

    assert result == {"id": "a-1", "name": "alice"}
    call = fake_database.last_call
    assert call["query"] == (
        "FOR item IN @value_0\nINSERT item IN @@value_1\nLET doc = NEW\nRETURN doc"
    )
    assert call["bind_vars"]["value_0"] == [{"_key": "a-1", "name": "alice"}]


@pytest.mark.asyncio
async def test_create_generates_ids_and_selects_fields(service, fake_database) -> None:
    """id 없는 문서에 서로 다른 키를 부여하고 `$select`를 반영하는지 확인한다."""

    await service.create([{"name": "a"}, {"name": "b"}], {"query": {"$select": ["name"]}})

    call = fake_database.last_call
    assert "RETURN KEEP(doc, @value_0)" in call["query"]
    assert call["bind_vars"]["value_0"] == ["_key", "name"]
    keys = [item["_key"] for item in call["bind_vars"]["value_1"]]
    assert len(set(keys)) == 2


@pytest.mark.asyncio
async def test_create_empty_list_skips_round_trip(service, fake_database) -> None:
    """빈 목록 생성은 쿼리 없이 빈 목록을 반환하는지 확인한다."""

    assert await service.create([]) == []
    assert fake_database.calls == []
    assert service.state == ConnectionState.UNCONNECTED


@pytest.mark.asyncio
async def test_create_numeric_id_matches_get_key(service, fake_database) -> None:
    """숫자 id로 만든 문서의 `_key`가 get(5)이 바인딩하는 키와 같은 문자열인지 확인한다."""

    fake_database.push([{"_key": "5", "name": "a"}])
    fake_database.push([{"_key": "5", "name": "a"}])

    await service.create({"id": 5, "name": "a"})
    written_key = fake_database.last_call["bind_vars"]["value_0"][0]["_key"]
    found = await service.get(5)

    assert written_key == "5"
    assert fake_database.last_call["bind_vars"]["value_1"] == written_key
    assert found == {"id": "5", "name": "a"}


@pytest.mark.asyncio
async def test_update_replaces_by_id(service, fake_database) -> None:
    """update가 id 목록을 순회하며 REPLACE하고 식별자 필드를 본문에서 제거하는지 확인한다."""

    fake_database.push([{"_key": "a-1", "name": "bob"}])

    result = await service.update("a-1", {"id": "zzz", "_key": "zzz", "_rev": "r", "name": "bob"})

    assert result == {"id": "a-1", "name": "bob"}
    call = fake_database.last_call
    assert call["query"] == (
        "FOR doc IN @value_0\n"
        "REPLACE doc WITH @value_2 IN @@value_1\n"
        "LET changed = NEW\n"
        "RETURN changed"
    )
    assert call["bind_vars"] == {"value_0": ["a-1"], "@value_1": "people", "value_2": {"name": "bob"}}


@pytest.mark.asyncio
async def test_patch_without_id_uses_filter(service, fake_database) -> None:
    """id 없는 patch가 필터에 맞는 문서를 UPDATE하는지 확인한다."""

    fake_database.push([{"_key": "a"}, {"_key": "b"}])

    result = await service.patch(None, {"status": "DONE"}, {"query": {"status": "OPEN"}})

    assert result == [{"id": "a"}, {"id": "b"}]
    assert fake_database.last_call["query"] == (
        "FOR doc IN @@value_2\n"
        "FILTER doc.@value_0 == @value_1\n"
        "UPDATE doc WITH @value_3 IN @@value_2\n"
        "LET changed = NEW\n"
        "RETURN changed"
    )


@pytest.mark.asyncio
async def test_update_missing_raises_not_found(service, fake_database, arango_error) -> None:
    """없는 문서 수정이 id를 포함한 NotFoundError인지 확인한다."""

    fake_database.push(arango_error(1202))

    with pytest.raises(NotFoundError) as exc_info:
        await service.patch("gone", {"name": "x"})

    assert "gone" in exc_info.value.message


@pytest.mark.asyncio
async def test_update_rejects_non_mapping_payload(service) -> None:
    """매핑이 아닌 수정 페이로드가 거부되는지 확인한다."""

    with pytest.raises(InvalidQueryError):
        await service.update("a-1", ["name"])


@pytest.mark.asyncio
async def test_remove_by_ids_ignores_missing(service, fake_database) -> None:
    """id 삭제가 ignoreErrors 옵션을 쓰고, 결과가 없어도 에러가 아닌지 확인한다."""

    fake_database.push([])

    result = await service.remove([0, "", "a-1"])

    assert result is None
    call = fake_database.last_call
    assert call["query"] == (
        "FOR doc IN @value_0\n"
        "REMOVE doc IN @@value_1 OPTIONS { ignoreErrors: true }\n"
        "LET removed = OLD\n"
        "RETURN removed"
    )
    assert call["bind_vars"]["value_0"] == ["0", "", "a-1"]


@pytest.mark.asyncio
async def test_remove_all_with_empty_filter(service, fake_database) -> None:
    """id와 필터가 없으면 컬렉션 전체를 삭제하는지 확인한다."""

    fake_database.push([{"_key": "a"}, {"_key": "b"}])

    result = await service.remove(None)

    assert result == [{"id": "a"}, {"id": "b"}]
    assert fake_database.last_call["query"] == (
        "FOR doc IN @@value_0\nREMOVE doc IN @@value_0\nLET removed = OLD\nRETURN removed"
    )


@pytest.mark.asyncio
async def test_remove_empty_id_list_uses_filter(service, fake_database) -> None:
    """빈 id 목록은 필터 삭제로 처리되는지 확인한다."""

    await service.remove([], {"query": {"status": "OLD"}})

    assert fake_database.last_call["query"].startswith("FOR doc IN @@value_2\nFILTER ")
