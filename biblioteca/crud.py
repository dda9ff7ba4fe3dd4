# biblioteca/crud.py
import logging
from typing import Optional, Sequence
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from sqlalchemy.orm.exc import StaleDataError
from . import models
from .exceptions import ConcurrencyError, ConflictError, MissingReferenceError, NotFoundError
from .schemas import (
    AuthorIn,
    BookIn,
    CategoryIn,
    LoanIn,
    PublisherIn,
    UserIn,
)

logger = logging.getLogger(__name__)


# --- Auxiliares ---

async def _exists(db: AsyncSession, model, entity_id: int) -> bool:
    result = await db.execute(select(model.id).where(model.id == entity_id).limit(1))
    return result.first() is not None


async def _has_rows(db: AsyncSession, query) -> bool:
    result = await db.execute(query.limit(1))
    return result.first() is not None


async def _get_or_404(db: AsyncSession, model, entity_id: int, label: str):
    obj = await db.get(model, entity_id)
    if obj is None:
        raise NotFoundError(label, entity_id)
    return obj


def _apply(obj, data, exclude=("id",)):
    for key, value in data.model_dump(exclude=set(exclude)).items():
        setattr(obj, key, value)


async def _stale_write_error(db: AsyncSession, model, entity_id: int, label: str):
    """Classifica uma escrita versionada que falhou: registro removido -> 404, alterado -> conflito."""
    if not await _exists(db, model, entity_id):
        return NotFoundError(label, entity_id)
    return ConcurrencyError(label, entity_id)


async def _save_changes(db: AsyncSession, model, entity_id: int, label: str):
    try:
        await db.commit()
    except StaleDataError:
        await db.rollback()
        error = await _stale_write_error(db, model, entity_id, label)
        logger.warning(f"Escrita concorrente em {label} {entity_id}: {type(error).__name__}")
        raise error


async def reconcile_related(
    db: AsyncSession, model, payloads: Sequence, label: str
) -> list:
    """
    Resolve os itens de uma relação muitos-para-muitos recebida na escrita.

    Itens com ``id == 0`` viram novos registros adicionados à sessão; itens com
    ID precisam existir. O primeiro ID inexistente levanta MissingReferenceError.
    """
    resolved = []
    for payload in payloads:
        if payload.id == 0:
            record = model(**payload.model_dump(exclude={"id"}))
            db.add(record)
            resolved.append(record)
            continue
        record = await db.get(model, payload.id)
        if record is None:
            raise MissingReferenceError(label, payload.id)
        if record not in resolved:
            resolved.append(record)
    return resolved


# --- Editoras ---

async def list_publishers(db: AsyncSession):
    result = await db.execute(select(models.Publisher).order_by(models.Publisher.id))
    return result.scalars().all()


async def get_publisher(db: AsyncSession, publisher_id: int) -> Optional[models.Publisher]:
    return await db.get(models.Publisher, publisher_id)


async def create_publisher(db: AsyncSession, publisher: PublisherIn):
    db_publisher = models.Publisher(name=publisher.name, city=publisher.city)
    db.add(db_publisher)
    await db.commit()
    await db.refresh(db_publisher)
    logger.info(f"Editora {db_publisher.id} criada")
    return db_publisher


async def update_publisher(db: AsyncSession, publisher_id: int, publisher: PublisherIn):
    db_publisher = await _get_or_404(db, models.Publisher, publisher_id, "Editora")
    _apply(db_publisher, publisher)
    await _save_changes(db, models.Publisher, publisher_id, "Editora")
    logger.info(f"Editora {publisher_id} atualizada")


async def delete_publisher(db: AsyncSession, publisher_id: int):
    db_publisher = await _get_or_404(db, models.Publisher, publisher_id, "Editora")
    if await _has_rows(db, select(models.Book.id).where(models.Book.publisher_id == publisher_id)):
        raise ConflictError("A editora não pode ser excluída, pois está associada a um ou mais livros.")
    await db.delete(db_publisher)
    await _save_changes(db, models.Publisher, publisher_id, "Editora")
    logger.info(f"Editora {publisher_id} excluída")


# --- Categorias ---

async def list_categories(db: AsyncSession):
    result = await db.execute(select(models.Category).order_by(models.Category.id))
    return result.scalars().all()


async def get_category(db: AsyncSession, category_id: int) -> Optional[models.Category]:
    return await db.get(models.Category, category_id)


async def create_category(db: AsyncSession, category: CategoryIn):
    db_category = models.Category(name=category.name)
    db.add(db_category)
    await db.commit()
    await db.refresh(db_category)
    logger.info(f"Categoria {db_category.id} criada")
    return db_category


async def update_category(db: AsyncSession, category_id: int, category: CategoryIn):
    db_category = await _get_or_404(db, models.Category, category_id, "Categoria")
    _apply(db_category, category)
    await _save_changes(db, models.Category, category_id, "Categoria")
    logger.info(f"Categoria {category_id} atualizada")


async def delete_category(db: AsyncSession, category_id: int):
    db_category = await _get_or_404(db, models.Category, category_id, "Categoria")
    linked = select(models.book_categories.c.book_id).where(
        models.book_categories.c.category_id == category_id
    )
    if await _has_rows(db, linked):
        raise ConflictError("A categoria não pode ser excluída, pois está associada a um ou mais livros.")
    await db.delete(db_category)
    await _save_changes(db, models.Category, category_id, "Categoria")
    logger.info(f"Categoria {category_id} excluída")


# --- Autores ---

async def list_authors(db: AsyncSession):
    result = await db.execute(select(models.Author).order_by(models.Author.id))
    return result.scalars().all()


async def get_author(db: AsyncSession, author_id: int) -> Optional[models.Author]:
    return await db.get(models.Author, author_id)


async def create_author(db: AsyncSession, author: AuthorIn):
    db_author = models.Author(
        name=author.name,
        birth_date=author.birth_date,
        nationality=author.nationality,
    )
    db.add(db_author)
    await db.commit()
    await db.refresh(db_author)
    logger.info(f"Autor {db_author.id} criado")
    return db_author


async def update_author(db: AsyncSession, author_id: int, author: AuthorIn):
    db_author = await _get_or_404(db, models.Author, author_id, "Autor")
    _apply(db_author, author)
    await _save_changes(db, models.Author, author_id, "Autor")
    logger.info(f"Autor {author_id} atualizado")


async def delete_author(db: AsyncSession, author_id: int):
    db_author = await _get_or_404(db, models.Author, author_id, "Autor")
    linked = select(models.book_authors.c.book_id).where(models.book_authors.c.author_id == author_id)
    if await _has_rows(db, linked):
        raise ConflictError("O autor não pode ser excluído, pois está associado a um ou mais livros.")
    await db.delete(db_author)
    await _save_changes(db, models.Author, author_id, "Autor")
    logger.info(f"Autor {author_id} excluído")


# --- Livros ---

def _book_query():
    return select(models.Book).options(
        selectinload(models.Book.authors),
        selectinload(models.Book.categories),
    )


async def list_books(db: AsyncSession):
    result = await db.execute(_book_query().order_by(models.Book.id))
    return result.scalars().all()


async def get_book(db: AsyncSession, book_id: int) -> Optional[models.Book]:
    result = await db.execute(_book_query().where(models.Book.id == book_id))
    return result.scalar_one_or_none()


async def _ensure_publisher(db: AsyncSession, publisher_id: int):
    if not await _exists(db, models.Publisher, publisher_id):
        raise ConflictError(
            "A editora informada não existe no banco de dados.",
            {"entity": "Editora", "id": publisher_id},
        )


async def create_book(db: AsyncSession, book: BookIn):
    await _ensure_publisher(db, book.publisher_id)
    authors = await reconcile_related(db, models.Author, book.authors or [], "Autor")
    categories = await reconcile_related(db, models.Category, book.categories or [], "Categoria")

    db_book = models.Book(
        title=book.title,
        publication_year=book.publication_year,
        isbn=book.isbn,
        publisher_id=book.publisher_id,
        authors=authors,
        categories=categories,
    )
    db.add(db_book)
    await db.commit()
    logger.info(f"Livro {db_book.id} criado com {len(authors)} autor(es) e {len(categories)} categoria(s)")
    return await get_book(db, db_book.id)


async def update_book(db: AsyncSession, book_id: int, book: BookIn):
    db_book = await get_book(db, book_id)
    if db_book is None:
        raise NotFoundError("Livro", book_id)
    await _ensure_publisher(db, book.publisher_id)

    # Lista ausente ou vazia mantém as associações atuais; ID inexistente na atualização é 404
    try:
        authors = None
        if book.authors:
            authors = await reconcile_related(db, models.Author, book.authors, "Autor")
        categories = None
        if book.categories:
            categories = await reconcile_related(db, models.Category, book.categories, "Categoria")
    except MissingReferenceError as e:
        raise NotFoundError(e.entity, e.entity_id) from e

    db_book.title = book.title
    db_book.publication_year = book.publication_year
    db_book.isbn = book.isbn
    db_book.publisher_id = book.publisher_id
    if authors is not None:
        db_book.authors = authors
    if categories is not None:
        db_book.categories = categories

    await _save_changes(db, models.Book, book_id, "Livro")
    logger.info(f"Livro {book_id} atualizado")


async def delete_book(db: AsyncSession, book_id: int):
    # Associações carregadas para que as linhas de junção sejam removidas junto
    db_book = await get_book(db, book_id)
    if db_book is None:
        raise NotFoundError("Livro", book_id)
    if await _has_rows(db, select(models.Loan.id).where(models.Loan.book_id == book_id)):
        raise ConflictError("O livro não pode ser excluído, pois está associado a um ou mais empréstimos.")
    await db.delete(db_book)
    await _save_changes(db, models.Book, book_id, "Livro")
    logger.info(f"Livro {book_id} excluído")


# --- Usuários ---

async def list_users(db: AsyncSession):
    result = await db.execute(select(models.User).order_by(models.User.id))
    return result.scalars().all()


async def get_user(db: AsyncSession, user_id: int) -> Optional[models.User]:
    return await db.get(models.User, user_id)


async def create_user(db: AsyncSession, user: UserIn):
    db_user = models.User(name=user.name, email=user.email, phone=user.phone)
    db.add(db_user)
    await db.commit()
    await db.refresh(db_user)
    logger.info(f"Usuário {db_user.id} criado")
    return db_user


async def update_user(db: AsyncSession, user_id: int, user: UserIn):
    db_user = await _get_or_404(db, models.User, user_id, "Usuário")
    db_user.name = user.name
    db_user.email = user.email
    db_user.phone = user.phone
    await _save_changes(db, models.User, user_id, "Usuário")
    logger.info(f"Usuário {user_id} atualizado")


async def delete_user(db: AsyncSession, user_id: int):
    db_user = await _get_or_404(db, models.User, user_id, "Usuário")
    if await _has_rows(db, select(models.Loan.id).where(models.Loan.user_id == user_id)):
        raise ConflictError("O usuário não pode ser excluído, pois está associado a um ou mais empréstimos.")
    await db.delete(db_user)
    await _save_changes(db, models.User, user_id, "Usuário")
    logger.info(f"Usuário {user_id} excluído")


# --- Empréstimos ---

async def list_loans(db: AsyncSession):
    result = await db.execute(select(models.Loan).order_by(models.Loan.id))
    return result.scalars().all()


async def get_loan(db: AsyncSession, loan_id: int) -> Optional[models.Loan]:
    return await db.get(models.Loan, loan_id)


async def _ensure_loan_references(db: AsyncSession, loan: LoanIn):
    if not await _exists(db, models.Book, loan.book_id):
        raise ConflictError(
            "O livro informado não existe no banco de dados.",
            {"entity": "Livro", "id": loan.book_id},
        )
    if not await _exists(db, models.User, loan.user_id):
        raise ConflictError(
            "O usuário informado não existe no banco de dados.",
            {"entity": "Usuário", "id": loan.user_id},
        )


async def create_loan(db: AsyncSession, loan: LoanIn):
    await _ensure_loan_references(db, loan)
    db_loan = models.Loan(
        book_id=loan.book_id,
        user_id=loan.user_id,
        loan_date=loan.loan_date,
        return_date=loan.return_date,
    )
    db.add(db_loan)
    await db.commit()
    await db.refresh(db_loan)
    logger.info(f"Empréstimo {db_loan.id} criado para o livro {loan.book_id}")
    return db_loan


async def update_loan(db: AsyncSession, loan_id: int, loan: LoanIn):
    db_loan = await _get_or_404(db, models.Loan, loan_id, "Empréstimo")
    await _ensure_loan_references(db, loan)
    _apply(db_loan, loan)
    await _save_changes(db, models.Loan, loan_id, "Empréstimo")
    logger.info(f"Empréstimo {loan_id} atualizado")


async def delete_loan(db: AsyncSession, loan_id: int):
    db_loan = await _get_or_404(db, models.Loan, loan_id, "Empréstimo")
    await db.delete(db_loan)
    await _save_changes(db, models.Loan, loan_id, "Empréstimo")
    logger.info(f"Empréstimo {loan_id} excluído")
