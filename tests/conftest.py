"""
목적: pytest 공통 로깅 훅과 가짜 DB 픽스처를 제공한다.
설명: 테스트 시작/종료와 결과를 로깅하고, 실행한 AQL과 바인드 변수를 기록하는 가짜 DB 핸들을 제공한다.
디자인 패턴: 테스트 훅, 테스트 더블
참조: pyproject.toml, src/arango_service/integrations/db/base/engine.py
"""

from __future__ import annotations

import logging
from collections import deque
from pathlib import Path
from typing import Any, Dict, List, Optional

import pytest
from dotenv import load_dotenv

from arango_service.integrations.db.base import BaseAutoDatabase, BaseDocumentDatabase, QueryCursor

_LOGGER = logging.getLogger("tests")


def _load_env_files() -> None:
    """프로젝트 루트에 .env가 있으면 로딩한다. 통합 테스트만 이 값을 사용한다."""

    env_path = Path(__file__).resolve().parents[1] / ".env"
    if env_path.exists():
        load_dotenv(env_path, override=False)


_load_env_files()


class FakeArangoError(Exception):
    """python-arango 서버 예외처럼 `error_code`를 가진 예외."""

    def __init__(self, error_code: int, message: str = "arango error") -> None:
        super().__init__(message)
        self.error_code = error_code


class FakeCollection:
    def __init__(self, name: str) -> None:
        self.name = name


class FakeGraph:
    def __init__(self, name: str) -> None:
        self.name = name


class FakeDatabase(BaseDocumentDatabase):
    """예약된 결과를 순서대로 돌려주고 호출을 기록하는 DB 핸들."""

    def __init__(self, name: str = "test_db", results: Optional[List[Any]] = None) -> None:
        self._name = name
        self._results = deque(results or [])
        self.calls: List[Dict[str, Any]] = []
        self.closed = False

    @property
    def name(self) -> str:
        return self._name

    def push(self, result: Any) -> None:
        """다음 쿼리 결과(행 목록, QueryCursor, 예외)를 예약한다."""

        self._results.append(result)

    @property
    def last_call(self) -> Dict[str, Any]:
        return self.calls[-1]

    async def query(
        self,
        query: str,
        bind_vars: Dict[str, Any],
        count: bool = False,
        full_count: bool = False,
    ) -> QueryCursor:
        self.calls.append(
            {"query": query, "bind_vars": dict(bind_vars), "count": count, "full_count": full_count}
        )
        if not self._results:
            return QueryCursor(rows=[])
        result = self._results.popleft()
        if isinstance(result, Exception):
            raise result
        if isinstance(result, QueryCursor):
            return result
        return QueryCursor(rows=list(result))

    async def close(self) -> None:
        self.closed = True


class FakeAutoDatabase(FakeDatabase, BaseAutoDatabase):
    """자동 생성 호출을 기록하는 DB 핸들."""

    def __init__(self, name: str = "", results: Optional[List[Any]] = None) -> None:
        super().__init__(name, results)
        self.used_databases: List[str] = []
        self.collections: List[Dict[str, Any]] = []
        self.graphs: List[Any] = []

    async def auto_use_database(self, name: str) -> None:
        self.used_databases.append(name)
        self._name = name

    async def auto_collection(self, name: str, graph: Optional[Any] = None) -> Any:
        self.collections.append({"name": name, "graph": graph})
        return FakeCollection(name)

    async def auto_graph(self, options: Any) -> Any:
        self.graphs.append(options)
        return FakeGraph(options.name)


@pytest.fixture
def fake_database() -> FakeDatabase:
    """빈 결과 큐를 가진 가짜 DB를 반환한다."""

    return FakeDatabase()


@pytest.fixture
def fake_auto_database() -> FakeAutoDatabase:
    """자동 생성을 지원하는 가짜 DB를 반환한다."""

    return FakeAutoDatabase()


@pytest.fixture
def fake_collection() -> FakeCollection:
    return FakeCollection("people")


@pytest.fixture
def arango_error():
    """`error_code`를 가진 드라이버 예외 생성 함수를 반환한다."""

    return FakeArangoError


def pytest_sessionstart(session) -> None:  # noqa: D401 - pytest 훅 시그니처 유지
    """테스트 세션 시작을 로깅한다."""

    _LOGGER.info("테스트 세션 시작")


def pytest_sessionfinish(session, exitstatus: int) -> None:  # noqa: D401 - pytest 훅 시그니처 유지
    """테스트 세션 종료를 로깅한다."""

    _LOGGER.info("테스트 세션 종료 (exitstatus=%s)", exitstatus)


def pytest_runtest_logstart(nodeid: str, location) -> None:  # noqa: D401 - pytest 훅 시그니처 유지
    """각 테스트 시작을 로깅한다."""

    _LOGGER.info("테스트 시작: %s", nodeid)


def pytest_runtest_logreport(report) -> None:  # noqa: D401 - pytest 훅 시그니처 유지
    """테스트 결과를 로깅한다."""

    if report.when != "call":
        return
    if report.passed:
        _LOGGER.info("테스트 완료: %s", report.nodeid)
        return
    if report.skipped:
        _LOGGER.warning("테스트 스킵: %s", report.nodeid)
        return
    _LOGGER.error("테스트 실패: %s", report.nodeid)
