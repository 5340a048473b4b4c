"""
목적: 예외 모듈 공개 API를 제공한다.
설명: 외부에서 사용할 예외 모델과 베이스/도메인 예외 클래스를 노출한다.
디자인 패턴: 퍼사드
참조: src/arango_service/shared/exceptions/models.py, src/arango_service/shared/exceptions/errors.py
"""

from arango_service.shared.exceptions.base import BaseAppException
from arango_service.shared.exceptions.errors import (
    ConfigurationError,
    ErrorCode,
    InvalidQueryError,
    NotFoundError,
    ProvisioningError,
)
from arango_service.shared.exceptions.models import ExceptionDetail

__all__ = [
    "BaseAppException",
    "ExceptionDetail",
    "ErrorCode",
    "ConfigurationError",
    "InvalidQueryError",
    "NotFoundError",
    "ProvisioningError",
]
