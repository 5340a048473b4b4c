"""
목적: 문서 서비스 설정 모델을 정의한다.
설명: 컬렉션/데이터베이스/그래프 참조, 외부 id 필드, 페이지네이션 정책, 호출 파라미터를 제공하고 설정 소스에서 옵션을 만든다.
디자인 패턴: 데이터 전송 객체(DTO)
참조: src/arango_service/core/service/document_service.py, src/arango_service/shared/config/loader.py
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from arango_service.integrations.db.engines.arangodb.models import ArangoConnectionConfig
from arango_service.shared.config import ConfigLoader
from arango_service.shared.const import SharedConst
from arango_service.shared.exceptions import ConfigurationError

RESERVED_ID_FIELDS = frozenset({"_rev"})


class PaginationPolicy(BaseModel):
    """페이지네이션 정책.

    Args:
        default: `$limit`이 없을 때 사용할 개수.
        max: 허용하는 최대 개수.
    """

    default: Optional[int] = Field(default=None, ge=0)
    max: Optional[int] = Field(default=None, ge=0)

    def is_empty(self) -> bool:
        return self.default is None and self.max is None

    def effective_limit(self, requested: Optional[int]) -> int:
        """요청 개수에 정책을 적용한 실제 개수를 반환한다.

        `default`/`max`가 모두 0 또는 미설정이면 요청값을 그대로 상한으로 쓴다.
        """

        limit = requested if requested is not None else (self.default or self.max or 0)
        ceiling = self.max or self.default or limit
        return max(0, min(limit, ceiling))


class ServiceOptions(BaseModel):
    """문서 서비스 옵션.

    `collection`/`database`/`graph`는 이름, 핸들 객체, 또는 핸들을 돌려주는
    awaitable 중 하나를 받는다.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, coerce_numbers_to_str=True)

    collection: Any = None
    database: Any = None
    graph: Any = None
    id_field: str = Field(default="_id", min_length=1)
    expand_data: bool = False
    paginate: PaginationPolicy = Field(default_factory=PaginationPolicy)
    connection: ArangoConnectionConfig = Field(default_factory=ArangoConnectionConfig)
    events: List[str] = Field(default_factory=list)


class ServiceParams(BaseModel):
    """CRUD 호출 파라미터.

    Args:
        query: 쿼리 명세.
        paginate: False이면 이번 호출의 페이지 봉투를 끈다. 정책을 주면 서비스 정책 대신 사용한다.
    """

    query: Dict[str, Any] = Field(default_factory=dict)
    paginate: Union[bool, PaginationPolicy, None] = None

    @classmethod
    def coerce(cls, params: Union["ServiceParams", Mapping[str, Any], None]) -> "ServiceParams":
        """매핑/None 입력을 파라미터 모델로 변환한다."""

        if params is None:
            return cls()
        if isinstance(params, cls):
            return params
        return cls.model_validate(dict(params))


def load_service_options(
    data: Optional[Mapping[str, Any]] = None,
    json_path: Optional[str] = None,
    env_file: Optional[str] = None,
    env_prefix: str = SharedConst.ENV_PREFIX,
    loader: Optional[ConfigLoader] = None,
) -> ServiceOptions:
    """dict → JSON 파일 → .env 파일 → 환경 변수 순서로 병합해 옵션을 만든다."""

    loader = loader or ConfigLoader(prefix=env_prefix)
    loader.add_dict(data)
    if json_path:
        loader.add_json_file(json_path)
    if env_file:
        loader.add_env_file(env_file)
    loader.add_env()
    config = loader.build()
    try:
        return ServiceOptions.model_validate(config)
    except ValidationError as error:
        raise ConfigurationError(
            "서비스 설정 검증에 실패했습니다.",
            cause=str(error),
            metadata={"keys": sorted(config)},
            original=error,
        ) from error
