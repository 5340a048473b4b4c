"""
목적: 서비스 옵션/페이지네이션 정책/설정 로딩을 검증한다.
설명: 개수 제한 규칙, 호출 파라미터 변환, dict/JSON/환경 변수 병합과 검증 실패 변환을 확인한다.
디자인 패턴: 테스트 케이스
참조: src/arango_service/core/service/options.py
"""

from __future__ import annotations

import json

import pytest

from arango_service.core.service import (
    PaginationPolicy,
    ServiceOptions,
    ServiceParams,
    load_service_options,
)
from arango_service.shared.exceptions import ConfigurationError


@pytest.mark.parametrize(
    ("policy", "requested", "expected"),
    [
        (PaginationPolicy(default=10, max=50), 999, 50),
        (PaginationPolicy(default=10, max=50), None, 10),
        (PaginationPolicy(default=10, max=50), 20, 20),
        (PaginationPolicy(default=10, max=50), 0, 0),
        (PaginationPolicy(default=10), 999, 10),
        (PaginationPolicy(max=50), None, 50),
        (PaginationPolicy(), 5, 5),
        (PaginationPolicy(), None, 0),
    ],
)
def test_effective_limit(policy: PaginationPolicy, requested, expected: int) -> None:
    """요청 개수에 기본값/최대값 규칙이 적용되는지 확인한다."""

    assert policy.effective_limit(requested) == expected


def test_policy_is_empty() -> None:
    """기본값/최대값이 모두 없을 때만 비어 있는지 확인한다."""

    assert PaginationPolicy().is_empty()
    assert not PaginationPolicy(max=0).is_empty()


def test_service_params_coerce() -> None:
    """None/매핑/모델 입력이 ServiceParams로 변환되는지 확인한다."""

    assert ServiceParams.coerce(None).query == {}
    params = ServiceParams.coerce({"query": {"name": "a"}, "paginate": {"default": 5}})
    assert params.query == {"name": "a"}
    assert params.paginate == PaginationPolicy(default=5)
    assert ServiceParams.coerce({"paginate": False}).paginate is False
    assert ServiceParams.coerce(params) is params


def test_service_options_defaults() -> None:
    """옵션 기본값을 확인한다."""

    options = ServiceOptions(collection="people", database="app")

    assert options.id_field == "_id"
    assert options.expand_data is False
    assert options.paginate.is_empty()
    assert options.connection.hosts == "http://127.0.0.1:8529"


def test_load_service_options_merges_sources(tmp_path, monkeypatch) -> None:
    """JSON 파일 값을 환경 변수가 키 단위로 덮어쓰는지 확인한다."""

    config_path = tmp_path / "service.json"
    config_path.write_text(
        json.dumps({"collection": "people", "database": "app", "paginate": {"default": 10}}),
        encoding="utf-8",
    )
    monkeypatch.setenv("ARANGO_SERVICE_PAGINATE__MAX", "50")
    monkeypatch.setenv("ARANGO_SERVICE_CONNECTION__AUTH_TYPE", "BEARER_AUTH")
    monkeypatch.setenv("ARANGO_SERVICE_CONNECTION__TOKEN", "12345")

    options = load_service_options({"id_field": "id"}, json_path=str(config_path))

    assert options.collection == "people"
    assert options.id_field == "id"
    assert options.paginate == PaginationPolicy(default=10, max=50)
    assert options.connection.auth_type.value == "BEARER_AUTH"
    assert options.connection.token == "12345"


def test_load_service_options_reads_env_file(tmp_path, monkeypatch) -> None:
    """.env 파일의 접두어 키가 반영되는지 확인한다."""

    env_path = tmp_path / ".env.service"
    env_path.write_text(
        "ARANGO_SERVICE_COLLECTION=people\nARANGO_SERVICE_EXPAND_DATA=true\nOTHER=1\n",
        encoding="utf-8",
    )
    monkeypatch.delenv("ARANGO_SERVICE_COLLECTION", raising=False)
    monkeypatch.delenv("ARANGO_SERVICE_EXPAND_DATA", raising=False)

    options = load_service_options({"database": "app"}, env_file=str(env_path))

    assert options.collection == "people"
    assert options.expand_data is True


@pytest.mark.parametrize(
    "data",
    [
        {"id_field": ""},
        {"paginate": {"max": -1}},
        {"connection": {"auth_type": "OAUTH"}},
    ],
)
def test_load_service_options_wraps_validation_error(data) -> None:
    """검증 실패가 ConfigurationError로 변환되는지 확인한다."""

    with pytest.raises(ConfigurationError) as exc_info:
        load_service_options(data, env_prefix="ARANGO_SERVICE_TEST_UNUSED_")

    assert exc_info.value.original is not None
