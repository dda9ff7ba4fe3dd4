# biblioteca/api/loans.py
from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List
from .. import crud, schemas, database
from ..error_handlers import handle_api_errors
from ..exceptions import NotFoundError, ValidationError

router = APIRouter(prefix="/emprestimos", tags=["🔄 Empréstimos"])


@router.get("", response_model=List[schemas.LoanResponse], summary="Listar empréstimos")
@handle_api_errors("Listagem de empréstimos")
async def list_loans(db: AsyncSession = Depends(database.get_db)):
    return await crud.list_loans(db)


@router.get("/{loan_id}", response_model=schemas.LoanResponse, summary="Obter empréstimo pelo ID")
@handle_api_errors("Consulta de empréstimo")
async def get_loan(loan_id: schemas.EntityId, db: AsyncSession = Depends(database.get_db)):
    loan = await crud.get_loan(db, loan_id)
    if loan is None:
        raise NotFoundError("Empréstimo", loan_id, "O empréstimo com o ID especificado não foi encontrado.")
    return loan


@router.post(
    "",
    response_model=schemas.LoanResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Registrar empréstimo",
    description="""
    Registra o empréstimo de um livro para um usuário.

    **Regras:**
    - `bookId` e `userId` devem existir (`400` caso contrário).
    - `returnDate`, se informada, não pode ser anterior a `loanDate`.
    """
)
@handle_api_errors("Registro de empréstimo")
async def create_loan(
    loan: schemas.LoanIn,
    request: Request,
    response: Response,
    db: AsyncSession = Depends(database.get_db)
):
    db_loan = await crud.create_loan(db, loan)
    response.headers["Location"] = str(request.url_for("get_loan", loan_id=db_loan.id))
    return db_loan


@router.put(
    "/{loan_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Atualizar empréstimo",
    description="""
    Substitui os dados de um empréstimo, por exemplo para registrar a devolução.
    As mesmas regras do registro se aplicam.
    """
)
@handle_api_errors("Atualização de empréstimo")
async def update_loan(
    loan_id: schemas.EntityId,
    loan: schemas.LoanIn,
    db: AsyncSession = Depends(database.get_db)
):
    if loan_id != loan.id:
        raise ValidationError("O ID fornecido na URL não corresponde ao ID do empréstimo.")
    await crud.update_loan(db, loan_id, loan)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/{loan_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Excluir empréstimo",
)
@handle_api_errors("Exclusão de empréstimo")
async def delete_loan(loan_id: schemas.EntityId, db: AsyncSession = Depends(database.get_db)):
    await crud.delete_loan(db, loan_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
