"""
Exceções de domínio da API.

Cada exceção carrega o código HTTP com que deve ser respondida; a conversão
para HTTPException fica em error_handlers.handle_api_errors.
"""


class ApplicationError(Exception):
    """Base de todos os erros da aplicação"""

    status_code = 500

    def __init__(self, message: str, details: dict | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(ApplicationError):
    """Campo ausente ou inválido, ou ID da URL diferente do ID do corpo"""

    status_code = 400

    def __init__(self, message: str, invalid_fields: dict | None = None):
        details = {"invalid_fields": invalid_fields} if invalid_fields else {}
        super().__init__(message, details)


class NotFoundError(ApplicationError):
    """Nenhum registro para o ID informado"""

    status_code = 404

    def __init__(self, entity: str, entity_id: int, message: str | None = None):
        details = {"entity": entity, "id": entity_id}
        super().__init__(message or f"{entity} com ID {entity_id} não encontrado.", details)


class ConflictError(ApplicationError):
    """Operação bloqueada por registros dependentes ou referência inexistente"""

    status_code = 400


class MissingReferenceError(ConflictError):
    """Um ID relacionado informado na escrita não existe no banco"""

    def __init__(self, entity: str, entity_id: int, message: str | None = None):
        details = {"entity": entity, "id": entity_id}
        super().__init__(message or f"{entity} com ID {entity_id} não existe no banco de dados.", details)
        self.entity = entity
        self.entity_id = entity_id


class ConcurrencyError(ApplicationError):
    """O registro foi alterado por outra requisição desde que foi lido"""

    status_code = 500

    def __init__(self, entity: str, entity_id: int):
        details = {"entity": entity, "id": entity_id}
        super().__init__(
            f"{entity} com ID {entity_id} foi modificado por outra operação. Tente novamente.",
            details,
        )


class UnclassifiedError(ApplicationError):
    """Qualquer outra falha, por exemplo banco indisponível"""

    status_code = 500
