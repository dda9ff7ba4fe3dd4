# biblioteca/schemas.py
from datetime import date
from typing import Annotated, List, Optional
from email_validator import EmailNotValidError, validate_email
from fastapi import Path
from pydantic import AfterValidator, BaseModel, Field, model_validator
from pydantic.alias_generators import to_camel

PHONE_PATTERN = r"^\(\d{2}\)\d{5}-\d{4}$"

# Maior inteiro aceito por uma coluna INTEGER do SQLite
MAX_ID = 2**63 - 1


def _not_blank(value: str) -> str:
    if not value.strip():
        raise ValueError("O campo não pode ficar em branco.")
    return value


def _check_email(value: str) -> str:
    # Só valida o formato; o endereço é guardado exatamente como foi enviado
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError as e:
        raise ValueError(f"E-mail inválido: {e}") from e
    return value


NonBlankStr = Annotated[str, AfterValidator(_not_blank)]
Email = Annotated[str, AfterValidator(_check_email)]

# IDs informados na URL
EntityId = Annotated[int, Path(ge=1, le=MAX_ID)]


class CamelModel(BaseModel):
    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


# --- Editoras ---

class PublisherIn(CamelModel):
    id: int = Field(0, ge=0, le=MAX_ID)
    name: NonBlankStr = Field(..., min_length=1, max_length=100)
    city: NonBlankStr = Field(..., min_length=1, max_length=100)


class PublisherResponse(PublisherIn):
    id: int


# --- Categorias ---

class CategoryIn(CamelModel):
    id: int = Field(0, ge=0, le=MAX_ID)
    name: NonBlankStr = Field(..., min_length=1, max_length=100)


class CategoryResponse(CategoryIn):
    id: int


# --- Autores ---

class AuthorIn(CamelModel):
    id: int = Field(0, ge=0, le=MAX_ID)
    name: NonBlankStr = Field(..., min_length=1, max_length=100)
    birth_date: date
    nationality: Optional[str] = Field(None, max_length=50)


class AuthorResponse(AuthorIn):
    id: int


# Itens aninhados em um livro: id == 0 cria, id > 0 referencia um registro existente

class BookAuthorIn(CamelModel):
    id: int = Field(0, ge=0, le=MAX_ID)
    name: Optional[NonBlankStr] = Field(None, min_length=1, max_length=100)
    birth_date: Optional[date] = None
    nationality: Optional[str] = Field(None, max_length=50)

    @model_validator(mode="after")
    def require_fields_for_new_author(self):
        if self.id == 0 and (self.name is None or self.birth_date is None):
            raise ValueError("Um novo autor precisa de nome e data de nascimento.")
        return self


class BookCategoryIn(CamelModel):
    id: int = Field(0, ge=0, le=MAX_ID)
    name: Optional[NonBlankStr] = Field(None, min_length=1, max_length=100)

    @model_validator(mode="after")
    def require_name_for_new_category(self):
        if self.id == 0 and self.name is None:
            raise ValueError("Uma nova categoria precisa de nome.")
        return self


# --- Livros ---

class BookIn(CamelModel):
    id: int = Field(0, ge=0, le=MAX_ID)
    title: NonBlankStr = Field(..., min_length=1, max_length=200)
    publication_year: int = Field(..., ge=1500, le=2100)
    isbn: NonBlankStr = Field(..., min_length=10, max_length=13)
    publisher_id: int = Field(..., ge=0, le=MAX_ID)
    authors: Optional[List[BookAuthorIn]] = None
    categories: Optional[List[BookCategoryIn]] = None


class BookResponse(CamelModel):
    id: int
    title: str
    publication_year: int
    isbn: str
    publisher_id: int
    authors: List[AuthorResponse] = []
    categories: List[CategoryResponse] = []


# --- Usuários ---

class UserIn(CamelModel):
    id: int = Field(0, ge=0, le=MAX_ID)
    name: NonBlankStr = Field(..., min_length=1, max_length=100)
    email: Email
    phone: Optional[str] = Field(None, pattern=PHONE_PATTERN)


class UserResponse(UserIn):
    id: int


# --- Empréstimos ---

class LoanIn(CamelModel):
    id: int = Field(0, ge=0, le=MAX_ID)
    book_id: int = Field(..., ge=0, le=MAX_ID)
    user_id: int = Field(..., ge=0, le=MAX_ID)
    loan_date: date
    return_date: Optional[date] = None

    @model_validator(mode="after")
    def return_not_before_loan(self):
        if self.return_date is not None and self.return_date < self.loan_date:
            raise ValueError("A data de devolução não pode ser anterior à data de empréstimo.")
        return self


class LoanResponse(LoanIn):
    id: int
