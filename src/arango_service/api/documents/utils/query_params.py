"""
목적: HTTP 쿼리 문자열을 쿼리 명세로 변환한다.
설명: `age[$gt]=3&$sort[name]=-1&$select[]=name` 형태의 대괄호 표기를 중첩 매핑/목록으로 풀고 연산자 위치의 스칼라 값을 숫자/불리언/null로 해석한다.
디자인 패턴: 파서
참조: src/arango_service/api/documents/routers/router.py, src/arango_service/shared/config/loader.py
"""

from __future__ import annotations

import re
from typing import Any, Dict, Iterable, List, Tuple

from arango_service.shared.exceptions import InvalidQueryError

_SEGMENT_RE = re.compile(r"\[([^\[\]]*)\]")
_INT_RE = re.compile(r"^-?(0|[1-9]\d*)$")
_FLOAT_RE = re.compile(r"^-?(0|[1-9]\d*)\.\d+$")
_LITERALS = {"true": True, "false": False, "null": None}
_NUMERIC_DIRECTIVES = {"$sort", "$limit", "$skip"}
_TEXT_DIRECTIVES = {"$select"}


def parse_query_params(pairs: Iterable[Tuple[str, str]]) -> Dict[str, Any]:
    """(키, 값) 쌍 목록을 쿼리 명세 사전으로 변환한다.

    `key[]`는 목록에 값을 추가하고, 같은 키가 반복되면 목록으로 모은다.
    모든 키가 숫자인 중첩 매핑(`$or[0][name]=a`)은 인덱스 순서의 목록이 된다.
    숫자 해석은 연산자 피연산자와 `$sort/$limit/$skip` 값에만 적용하고,
    필드 동등 비교 값(`zip=12345`)은 문자열로 둔다.
    """

    tree: Dict[str, Any] = {}
    for key, value in pairs:
        _assign(tree, _split_key(key), value)
    return {
        key: _finalize(value, numeric=_is_operator(key), pinned=key in _NUMERIC_DIRECTIVES)
        for key, value in tree.items()
    }


def _split_key(key: str) -> List[str]:
    head, bracket, rest = key.partition("[")
    if not bracket or not head:
        return [key]
    segments = _SEGMENT_RE.findall(bracket + rest)
    if "".join(f"[{segment}]" for segment in segments) != bracket + rest:
        return [key]
    return [head, *segments]


def _assign(node: Dict[str, Any], path: List[str], value: Any) -> None:
    key, rest = path[0], path[1:]
    if not rest or rest == [""]:
        if key not in node:
            node[key] = [value] if rest else value
            return
        existing = node[key]
        if isinstance(existing, dict):
            raise InvalidQueryError(
                "쿼리 파라미터 키가 값과 매핑으로 함께 사용되었습니다.",
                cause=f"key={key}",
            )
        if isinstance(existing, list):
            existing.append(value)
        else:
            node[key] = [existing, value]
        return
    child = node.setdefault(key, {})
    if not isinstance(child, dict):
        raise InvalidQueryError(
            "쿼리 파라미터 키가 값과 매핑으로 함께 사용되었습니다.",
            cause=f"key={key}",
        )
    _assign(child, rest, value)


def _finalize(node: Any, numeric: bool, pinned: bool) -> Any:
    if isinstance(node, dict):
        items = {
            key: _finalize(
                value,
                numeric=pinned or (numeric if key.isdigit() else _is_operator(key)),
                pinned=pinned,
            )
            for key, value in node.items()
        }
        if items and all(key.isdigit() for key in items):
            return [items[key] for key in sorted(items, key=int)]
        return items
    if isinstance(node, list):
        return [_finalize(item, numeric=numeric, pinned=pinned) for item in node]
    return _parse_scalar(node, numeric)


def _is_operator(key: str) -> bool:
    return key.startswith("$") and key not in _TEXT_DIRECTIVES


def _parse_scalar(value: str, numeric: bool) -> Any:
    if value in _LITERALS:
        return _LITERALS[value]
    if not numeric:
        return value
    if _INT_RE.match(value):
        return int(value)
    if _FLOAT_RE.match(value):
        return float(value)
    return value
