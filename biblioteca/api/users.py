# biblioteca/api/users.py
from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List
from .. import crud, schemas, database
from ..error_handlers import handle_api_errors
from ..exceptions import NotFoundError, ValidationError

router = APIRouter(prefix="/usuarios", tags=["👤 Usuários"])


@router.get("", response_model=List[schemas.UserResponse], summary="Listar usuários")
@handle_api_errors("Listagem de usuários")
async def list_users(db: AsyncSession = Depends(database.get_db)):
    return await crud.list_users(db)


@router.get("/{user_id}", response_model=schemas.UserResponse, summary="Obter usuário pelo ID")
@handle_api_errors("Consulta de usuário")
async def get_user(user_id: schemas.EntityId, db: AsyncSession = Depends(database.get_db)):
    user = await crud.get_user(db, user_id)
    if user is None:
        raise NotFoundError("Usuário", user_id, "O usuário com o ID especificado não foi encontrado.")
    return user


@router.post(
    "",
    response_model=schemas.UserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Cadastrar usuário",
    description="""
    Cria um usuário.

    **Requisitos:**
    - `name`: 1–100 caracteres
    - `email`: endereço de e-mail válido
    - `phone` (opcional): formato `(99)99999-9999`
    """
)
@handle_api_errors("Cadastro de usuário")
async def create_user(
    user: schemas.UserIn,
    request: Request,
    response: Response,
    db: AsyncSession = Depends(database.get_db)
):
    db_user = await crud.create_user(db, user)
    response.headers["Location"] = str(request.url_for("get_user", user_id=db_user.id))
    return db_user


@router.put(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Atualizar usuário",
)
@handle_api_errors("Atualização de usuário")
async def update_user(
    user_id: schemas.EntityId,
    user: schemas.UserIn,
    db: AsyncSession = Depends(database.get_db)
):
    if user_id != user.id:
        raise ValidationError("O ID fornecido na URL não corresponde ao ID do usuário.")
    await crud.update_user(db, user_id, user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Excluir usuário",
    description="""
    Exclui um usuário. Retorna `400` se ele tiver empréstimos registrados.
    """
)
@handle_api_errors("Exclusão de usuário")
async def delete_user(user_id: schemas.EntityId, db: AsyncSession = Depends(database.get_db)):
    await crud.delete_user(db, user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
