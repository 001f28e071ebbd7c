import logging
from typing import Optional

from app.core.exceptions import AuthenticationError, AuthorizationError
from app.domains.identity.entities import Caller, Role

logger = logging.getLogger(__name__)


def require_caller(caller: Optional[Caller]) -> Caller:
    """Проверка, что вызывающий аутентифицирован и не заблокирован"""
    if caller is None:
        raise AuthenticationError()
    if caller.blocked:
        logger.info("Rejected blocked user %s", caller.id)
        raise AuthenticationError("User is blocked")
    return caller


def require_role(caller: Optional[Caller], *roles: Role) -> Caller:
    """Проверка роли вызывающего до любого обращения к данным"""
    caller = require_caller(caller)
    if caller.role not in roles:
        raise AuthorizationError(
            f"Role {caller.role.value} is not allowed to perform this action"
        )
    return caller
