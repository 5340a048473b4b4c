"""
목적: 서비스 설정 레이어 로더를 제공한다.
설명: dict, JSON 파일, .env 파일, 접두어 환경 변수를 레이어로 쌓고 추가 순서대로 깊은 병합한다.
디자인 패턴: 빌더 패턴
참조: src/arango_service/core/service/options.py, src/arango_service/shared/const/__init__.py
"""

from __future__ import annotations

import json
import os
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

from dotenv import dotenv_values

from arango_service.shared.const import SharedConst
from arango_service.shared.exceptions import ConfigurationError
from arango_service.shared.logging import Logger, create_default_logger


class ConfigLoader:
    """서비스 설정 레이어 로더.

    뒤에 추가한 레이어가 앞 레이어의 같은 키를 덮어쓰고, 양쪽이 모두 매핑인 키는
    하위 키 단위로 병합한다. 환경 변수 계열 레이어는 `prefix`로 시작하는 키만 읽으며
    `__`로 중첩 경로를 표현한다(`ARANGO_SERVICE_PAGINATE__MAX=50`).

    Args:
        prefix: 환경 변수/.env 키 접두어.
        logger: 주입 가능한 로거.
    """

    def __init__(self, prefix: str = SharedConst.ENV_PREFIX, logger: Optional[Logger] = None) -> None:
        self._prefix = prefix
        self._logger = logger or create_default_logger("ConfigLoader")
        self._layers: List[Tuple[str, Dict[str, Any]]] = []

    def add_dict(self, data: Optional[Mapping[str, Any]]) -> "ConfigLoader":
        if data:
            self._layers.append(("dict", dict(data)))
        return self

    def add_json_file(self, path: str, required: bool = False) -> "ConfigLoader":
        """JSON 파일을 레이어로 추가한다. 최상위는 객체여야 한다."""

        payload = self._read(path, required, _load_json)
        if payload is None:
            return self
        if not isinstance(payload, dict):
            raise ConfigurationError(
                "JSON 설정 파일의 최상위는 객체여야 합니다.",
                cause=f"path={path}, type={type(payload).__name__}",
            )
        self._layers.append((f"json:{path}", payload))
        return self

    def add_env_file(self, path: str, required: bool = False) -> "ConfigLoader":
        """`.env` 파일의 접두어 키를 환경 변수와 같은 규칙으로 추가한다."""

        values = self._read(path, required, _load_dotenv)
        if values is not None:
            self._add_prefixed(f"env_file:{path}", values)
        return self

    def add_env(self) -> "ConfigLoader":
        self._add_prefixed("env", os.environ)
        return self

    def build(self) -> Dict[str, Any]:
        """레이어를 추가 순서대로 병합한 설정 사전을 반환한다."""

        merged: Dict[str, Any] = {}
        for label, layer in self._layers:
            _deep_merge(merged, layer)
            self._logger.debug(f"설정 레이어 적용: {label} keys={sorted(layer)}")
        return merged

    def _read(self, path: str, required: bool, reader: Callable[[str], Any]) -> Any:
        if not path:
            raise ConfigurationError("설정 파일 경로가 비어 있습니다.")
        if not os.path.exists(path):
            if required:
                raise ConfigurationError("필수 설정 파일이 없습니다.", cause=f"path={path}")
            self._logger.warning(f"설정 파일이 없어 건너뜁니다: {path}")
            return None
        try:
            return reader(path)
        except ValueError as error:
            raise ConfigurationError(
                "설정 파일을 해석하지 못했습니다.",
                cause=f"path={path}",
                original=error,
            ) from error

    def _add_prefixed(self, label: str, values: Mapping[str, Optional[str]]) -> None:
        layer: Dict[str, Any] = {}
        for key, raw in values.items():
            if raw is None or not key.startswith(self._prefix):
                continue
            trimmed = key[len(self._prefix) :]
            path = [part.lower() for part in trimmed.split(SharedConst.ENV_NESTED_DELIMITER) if part]
            if path:
                _deep_merge(layer, _nest(path, _parse_env_value(raw)))
        if layer:
            self._layers.append((label, layer))


def _load_json(path: str) -> Any:
    with open(path, "r", encoding=SharedConst.DEFAULT_ENCODING) as handle:
        return json.load(handle)


def _load_dotenv(path: str) -> Dict[str, Optional[str]]:
    return dict(dotenv_values(path, encoding=SharedConst.DEFAULT_ENCODING))


def _nest(path: List[str], value: Any) -> Dict[str, Any]:
    node: Any = value
    for part in reversed(path):
        node = {part: node}
    return node


def _deep_merge(target: Dict[str, Any], incoming: Mapping[str, Any]) -> None:
    for key, value in incoming.items():
        if not isinstance(value, Mapping):
            target[key] = value
            continue
        current = target.get(key)
        if not isinstance(current, dict):
            current = target[key] = {}
        _deep_merge(current, value)


def _parse_env_value(raw: str) -> Any:
    """환경 변수 문자열을 JSON 리터럴로 해석한다. 빈 값은 None, 해석 실패는 원문이다."""

    if not raw.strip():
        return None
    try:
        return json.loads(raw)
    except ValueError:
        return raw
