# biblioteca/api/categories.py
from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List
from .. import crud, schemas, database
from ..error_handlers import handle_api_errors
from ..exceptions import NotFoundError, ValidationError

router = APIRouter(prefix="/categorias", tags=["🏷️ Categorias"])


@router.get("", response_model=List[schemas.CategoryResponse], summary="Listar categorias")
@handle_api_errors("Listagem de categorias")
async def list_categories(db: AsyncSession = Depends(database.get_db)):
    return await crud.list_categories(db)


@router.get("/{category_id}", response_model=schemas.CategoryResponse, summary="Obter categoria pelo ID")
@handle_api_errors("Consulta de categoria")
async def get_category(category_id: schemas.EntityId, db: AsyncSession = Depends(database.get_db)):
    category = await crud.get_category(db, category_id)
    if category is None:
        raise NotFoundError("Categoria", category_id, "A categoria com o ID especificado não foi encontrada.")
    return category


@router.post(
    "",
    response_model=schemas.CategoryResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Cadastrar categoria",
)
@handle_api_errors("Cadastro de categoria")
async def create_category(
    category: schemas.CategoryIn,
    request: Request,
    response: Response,
    db: AsyncSession = Depends(database.get_db)
):
    db_category = await crud.create_category(db, category)
    response.headers["Location"] = str(request.url_for("get_category", category_id=db_category.id))
    return db_category


@router.put(
    "/{category_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Atualizar categoria",
)
@handle_api_errors("Atualização de categoria")
async def update_category(
    category_id: schemas.EntityId,
    category: schemas.CategoryIn,
    db: AsyncSession = Depends(database.get_db)
):
    if category_id != category.id:
        raise ValidationError("O ID fornecido na URL não corresponde ao ID da categoria.")
    await crud.update_category(db, category_id, category)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/{category_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Excluir categoria",
    description="""
    Exclui uma categoria. Retorna `400` se ela estiver associada a algum livro.
    """
)
@handle_api_errors("Exclusão de categoria")
async def delete_category(category_id: schemas.EntityId, db: AsyncSession = Depends(database.get_db)):
    await crud.delete_category(db, category_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
