"""
Tratamento de erros comum aos endpoints da API.

Converte as exceções de domínio em HTTPException com o código adequado e
registra cada falha no log com o nome da operação.
"""

import logging
from functools import wraps
from typing import Callable
from fastapi import HTTPException

from .exceptions import ApplicationError, UnclassifiedError

logger = logging.getLogger(__name__)


def handle_api_errors(operation_name: str):
    """
    Decorator para rotas assíncronas.

    Args:
        operation_name: Nome legível da operação (ex.: "Exclusão de livro")

    Example:
        @router.delete("/{id}")
        @handle_api_errors("Exclusão de livro")
        async def delete_book(...):
            ...
    """
    def decorator(func: Callable):
        @wraps(func)
        async def wrapper(*args, **kwargs):
            try:
                return await func(*args, **kwargs)
            except ApplicationError as e:
                if e.status_code >= 500:
                    logger.error(f"{operation_name} - {type(e).__name__}: {e.message}", exc_info=True)
                else:
                    logger.warning(f"{operation_name} - {type(e).__name__}: {e.message}")
                raise HTTPException(status_code=e.status_code, detail=e.message)
            except HTTPException:
                raise
            except Exception as e:
                error = UnclassifiedError(f"{operation_name} falhou: {e}")
                logger.error(f"{operation_name} - Erro inesperado: {e}", exc_info=True)
                raise HTTPException(status_code=error.status_code, detail=error.message) from e

        return wrapper

    return decorator
