# biblioteca/api/publishers.py
from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List
from .. import crud, schemas, database
from ..error_handlers import handle_api_errors
from ..exceptions import NotFoundError, ValidationError

router = APIRouter(prefix="/editoras", tags=["🏢 Editoras"])


@router.get(
    "",
    response_model=List[schemas.PublisherResponse],
    summary="Listar editoras",
)
@handle_api_errors("Listagem de editoras")
async def list_publishers(db: AsyncSession = Depends(database.get_db)):
    return await crud.list_publishers(db)


@router.get(
    "/{publisher_id}",
    response_model=schemas.PublisherResponse,
    summary="Obter editora pelo ID",
)
@handle_api_errors("Consulta de editora")
async def get_publisher(publisher_id: schemas.EntityId, db: AsyncSession = Depends(database.get_db)):
    publisher = await crud.get_publisher(db, publisher_id)
    if publisher is None:
        raise NotFoundError("Editora", publisher_id, "A editora com o ID especificado não foi encontrada.")
    return publisher


@router.post(
    "",
    response_model=schemas.PublisherResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Cadastrar editora",
    description="""
    Cria uma editora.

    **Requisitos:**
    - `name`: 1–100 caracteres
    - `city`: 1–100 caracteres
    """
)
@handle_api_errors("Cadastro de editora")
async def create_publisher(
    publisher: schemas.PublisherIn,
    request: Request,
    response: Response,
    db: AsyncSession = Depends(database.get_db)
):
    db_publisher = await crud.create_publisher(db, publisher)
    response.headers["Location"] = str(request.url_for("get_publisher", publisher_id=db_publisher.id))
    return db_publisher


@router.put(
    "/{publisher_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Atualizar editora",
)
@handle_api_errors("Atualização de editora")
async def update_publisher(
    publisher_id: schemas.EntityId,
    publisher: schemas.PublisherIn,
    db: AsyncSession = Depends(database.get_db)
):
    if publisher_id != publisher.id:
        raise ValidationError("O ID fornecido na URL não corresponde ao ID da editora.")
    await crud.update_publisher(db, publisher_id, publisher)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/{publisher_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Excluir editora",
    description="""
    Exclui uma editora que não possua livros.

    **Respostas:**
    - `404` se a editora não existir.
    - `400` se a editora estiver associada a um ou mais livros.
    """
)
@handle_api_errors("Exclusão de editora")
async def delete_publisher(publisher_id: schemas.EntityId, db: AsyncSession = Depends(database.get_db)):
    await crud.delete_publisher(db, publisher_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
