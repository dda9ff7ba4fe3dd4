# biblioteca/api/authors.py
from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List
from .. import crud, schemas, database
from ..error_handlers import handle_api_errors
from ..exceptions import NotFoundError, ValidationError

router = APIRouter(prefix="/autores", tags=["✍️ Autores"])


@router.get("", response_model=List[schemas.AuthorResponse], summary="Listar autores")
@handle_api_errors("Listagem de autores")
async def list_authors(db: AsyncSession = Depends(database.get_db)):
    return await crud.list_authors(db)


@router.get("/{author_id}", response_model=schemas.AuthorResponse, summary="Obter autor pelo ID")
@handle_api_errors("Consulta de autor")
async def get_author(author_id: schemas.EntityId, db: AsyncSession = Depends(database.get_db)):
    author = await crud.get_author(db, author_id)
    if author is None:
        raise NotFoundError("Autor", author_id, "O autor com o ID especificado não foi encontrado.")
    return author


@router.post(
    "",
    response_model=schemas.AuthorResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Cadastrar autor",
    description="""
    Cria um autor.

    **Requisitos:**
    - `name`: 1–100 caracteres
    - `birthDate`: data no formato `AAAA-MM-DD`
    - `nationality` (opcional): até 50 caracteres
    """
)
@handle_api_errors("Cadastro de autor")
async def create_author(
    author: schemas.AuthorIn,
    request: Request,
    response: Response,
    db: AsyncSession = Depends(database.get_db)
):
    db_author = await crud.create_author(db, author)
    response.headers["Location"] = str(request.url_for("get_author", author_id=db_author.id))
    return db_author


@router.put(
    "/{author_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Atualizar autor",
)
@handle_api_errors("Atualização de autor")
async def update_author(
    author_id: schemas.EntityId,
    author: schemas.AuthorIn,
    db: AsyncSession = Depends(database.get_db)
):
    if author_id != author.id:
        raise ValidationError("O ID fornecido na URL não corresponde ao ID do autor.")
    await crud.update_author(db, author_id, author)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/{author_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Excluir autor",
    description="""
    Exclui um autor. Retorna `400` se ele estiver associado a algum livro.
    """
)
@handle_api_errors("Exclusão de autor")
async def delete_author(author_id: schemas.EntityId, db: AsyncSession = Depends(database.get_db)):
    await crud.delete_author(db, author_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
