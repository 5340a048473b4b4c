"""
목적: 결과 정규화기 동작을 검증한다.
설명: 단건/목록 반환 규칙, 페이지 봉투, 미존재 에러 번호 변환과 그 외 에러 전파를 확인한다.
디자인 패턴: 테스트 케이스
참조: src/arango_service/integrations/db/engines/arangodb/result_mapper.py
"""

from __future__ import annotations

import pytest

from arango_service.integrations.db.base import AqlQuery, Page, QueryCursor
from arango_service.integrations.db.engines.arangodb import DocumentKeyMapper, ResultMapper
from arango_service.shared.exceptions import NotFoundError
from arango_service.shared.logging import InMemoryLogger, LogLevel

_QUERY = AqlQuery(query="FOR doc IN @@value_0 RETURN doc", bind_vars={"@value_0": "people"})


def _mapper(logger=None) -> ResultMapper:
    return ResultMapper(DocumentKeyMapper(id_field="id"), logger or InMemoryLogger("test"))


@pytest.mark.asyncio
async def test_single_row_is_unwrapped(fake_database) -> None:
    """결과가 1건이면 문서 자체를 반환하는지 확인한다."""

    fake_database.push([{"_key": "a", "name": "alice"}])

    result = await _mapper().execute(fake_database, _QUERY)

    assert result == {"id": "a", "name": "alice"}


@pytest.mark.asyncio
async def test_multiple_rows_return_list(fake_database) -> None:
    """결과가 여러 건이면 목록을 반환하는지 확인한다."""

    fake_database.push([{"_key": "a"}, {"_key": "b"}])

    result = await _mapper().execute(fake_database, _QUERY)

    assert result == [{"id": "a"}, {"id": "b"}]


@pytest.mark.asyncio
async def test_remove_array_false_keeps_list(fake_database) -> None:
    """remove_array=False이면 1건도 목록으로 반환하는지 확인한다."""

    fake_database.push([{"_key": "a"}])

    result = await _mapper().execute(fake_database, _QUERY, remove_array=False)

    assert result == [{"id": "a"}]


@pytest.mark.asyncio
async def test_empty_result_without_message(fake_database) -> None:
    """메시지가 없으면 빈 결과가 None(또는 빈 목록)인지 확인한다."""

    fake_database.push([])
    fake_database.push([])

    assert await _mapper().execute(fake_database, _QUERY) is None
    assert await _mapper().execute(fake_database, _QUERY, remove_array=False) == []


@pytest.mark.asyncio
async def test_empty_result_with_message_raises_not_found(fake_database) -> None:
    """메시지가 있으면 빈 결과가 NotFoundError인지 확인한다."""

    fake_database.push([])

    with pytest.raises(NotFoundError) as exc_info:
        await _mapper().execute(fake_database, _QUERY, error_message="id 'x' 없음")

    assert exc_info.value.message == "id 'x' 없음"


@pytest.mark.asyncio
@pytest.mark.parametrize("error_code", [1202, 1203])
async def test_not_found_error_codes_are_translated(fake_database, arango_error, error_code) -> None:
    """1202/1203 에러가 메시지와 함께 NotFoundError로 변환되는지 확인한다."""

    logger = InMemoryLogger("test")
    driver_error = arango_error(error_code)
    fake_database.push(driver_error)

    with pytest.raises(NotFoundError) as exc_info:
        await _mapper(logger).execute(fake_database, _QUERY, error_message="없음")

    assert exc_info.value.original is driver_error
    assert exc_info.value.__cause__ is driver_error
    assert logger.repository.list()[-1].level == LogLevel.WARNING


@pytest.mark.asyncio
async def test_not_found_error_without_message_propagates(fake_database, arango_error) -> None:
    """메시지가 없으면 미존재 에러도 그대로 전파되는지 확인한다."""

    driver_error = arango_error(1202)
    fake_database.push(driver_error)

    with pytest.raises(type(driver_error)) as exc_info:
        await _mapper().execute(fake_database, _QUERY)

    assert exc_info.value is driver_error


@pytest.mark.asyncio
async def test_other_errors_propagate_unchanged(fake_database, arango_error) -> None:
    """다른 에러 번호는 메시지가 있어도 그대로 전파되는지 확인한다."""

    driver_error = arango_error(1200)
    fake_database.push(driver_error)

    with pytest.raises(type(driver_error)) as exc_info:
        await _mapper().execute(fake_database, _QUERY, error_message="없음")

    assert exc_info.value is driver_error


@pytest.mark.asyncio
async def test_paging_returns_page_with_full_count(fake_database) -> None:
    """paging이면 전체 매칭 개수를 담은 Page를 반환하고 full_count를 요청하는지 확인한다."""

    fake_database.push(QueryCursor(rows=[{"_key": "a"}], full_count=42))

    result = await _mapper().execute(fake_database, _QUERY, paging=True)

    assert isinstance(result, Page)
    assert result.total == 42
    assert result.data == [{"id": "a"}]
    assert fake_database.last_call["full_count"] is True
