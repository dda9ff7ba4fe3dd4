# biblioteca/api/books.py
from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List
from .. import crud, schemas, database
from ..error_handlers import handle_api_errors
from ..exceptions import NotFoundError, ValidationError

router = APIRouter(prefix="/livros", tags=["📚 Livros"])


@router.get(
    "",
    response_model=List[schemas.BookResponse],
    summary="Listar livros",
    description="""
    Retorna todos os livros cadastrados, com seus autores e categorias.
    """
)
@handle_api_errors("Listagem de livros")
async def list_books(db: AsyncSession = Depends(database.get_db)):
    return await crud.list_books(db)


@router.get(
    "/{book_id}",
    response_model=schemas.BookResponse,
    summary="Obter livro pelo ID",
    description="""
    Recupera um livro com seus autores e categorias.

    **Respostas:**
    - `404` se não existir livro com o ID informado.
    """
)
@handle_api_errors("Consulta de livro")
async def get_book(book_id: schemas.EntityId, db: AsyncSession = Depends(database.get_db)):
    book = await crud.get_book(db, book_id)
    if book is None:
        raise NotFoundError("Livro", book_id, "O livro com o ID especificado não foi encontrado.")
    return book


@router.post(
    "",
    response_model=schemas.BookResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Cadastrar livro",
    description="""
    Cria um livro com seus autores e categorias.

    **Regras:**
    - `publisherId` deve corresponder a uma editora existente.
    - Autores e categorias com `id` igual a 0 são criados junto com o livro.
    - Autores e categorias com `id` informado precisam existir, caso contrário a resposta é `400`.

    **Resposta:** `201` com o livro criado e o cabeçalho `Location`.
    """
)
@handle_api_errors("Cadastro de livro")
async def create_book(
    book: schemas.BookIn,
    request: Request,
    response: Response,
    db: AsyncSession = Depends(database.get_db)
):
    db_book = await crud.create_book(db, book)
    response.headers["Location"] = str(request.url_for("get_book", book_id=db_book.id))
    return db_book


@router.put(
    "/{book_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Atualizar livro",
    description="""
    Substitui os dados de um livro existente.

    **Regras:**
    - O ID da URL deve ser igual ao `id` do corpo (`400` caso contrário).
    - `authors` e `categories` omitidos ou vazios mantêm as associações atuais;
      listas com itens substituem as associações, com a mesma regra do cadastro.
    - Autor ou categoria inexistente resulta em `404`.
    """
)
@handle_api_errors("Atualização de livro")
async def update_book(
    book_id: schemas.EntityId,
    book: schemas.BookIn,
    db: AsyncSession = Depends(database.get_db)
):
    if book_id != book.id:
        raise ValidationError("O ID fornecido na URL não corresponde ao ID do livro.")
    await crud.update_book(db, book_id, book)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/{book_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Excluir livro",
    description="""
    Exclui um livro.

    **Respostas:**
    - `404` se o livro não existir.
    - `400` se o livro estiver associado a um ou mais empréstimos.
    """
)
@handle_api_errors("Exclusão de livro")
async def delete_book(book_id: schemas.EntityId, db: AsyncSession = Depends(database.get_db)):
    await crud.delete_book(db, book_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
