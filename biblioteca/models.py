# biblioteca/models.py
from sqlalchemy import Column, Date, ForeignKey, Integer, String, Table
from sqlalchemy.orm import relationship
from .database import Base

book_authors = Table(
    "book_authors",
    Base.metadata,
    Column("book_id", Integer, ForeignKey("books.id", ondelete="CASCADE"), primary_key=True),
    Column("author_id", Integer, ForeignKey("authors.id", ondelete="CASCADE"), primary_key=True),
)

book_categories = Table(
    "book_categories",
    Base.metadata,
    Column("book_id", Integer, ForeignKey("books.id", ondelete="CASCADE"), primary_key=True),
    Column("category_id", Integer, ForeignKey("categories.id", ondelete="CASCADE"), primary_key=True),
)


class Publisher(Base):
    __tablename__ = "publishers"
    id = Column(Integer, primary_key=True)
    name = Column(String(100), nullable=False)
    city = Column(String(100), nullable=False)
    version = Column(Integer, nullable=False)

    books = relationship("Book", back_populates="publisher", passive_deletes=True)

    __mapper_args__ = {"version_id_col": version}


class Category(Base):
    __tablename__ = "categories"
    id = Column(Integer, primary_key=True)
    name = Column(String(100), nullable=False)
    version = Column(Integer, nullable=False)

    books = relationship(
        "Book", secondary=book_categories, back_populates="categories", passive_deletes=True
    )

    __mapper_args__ = {"version_id_col": version}


class Author(Base):
    __tablename__ = "authors"
    id = Column(Integer, primary_key=True)
    name = Column(String(100), nullable=False, index=True)
    birth_date = Column(Date, nullable=False)
    nationality = Column(String(50), nullable=True)
    version = Column(Integer, nullable=False)

    books = relationship(
        "Book", secondary=book_authors, back_populates="authors", passive_deletes=True
    )

    __mapper_args__ = {"version_id_col": version}


class Book(Base):
    __tablename__ = "books"
    id = Column(Integer, primary_key=True)
    title = Column(String(200), nullable=False, index=True)
    publication_year = Column(Integer, nullable=False)
    isbn = Column(String(13), nullable=False, index=True)
    publisher_id = Column(Integer, ForeignKey("publishers.id"), nullable=False)
    version = Column(Integer, nullable=False)

    publisher = relationship("Publisher", back_populates="books")
    authors = relationship("Author", secondary=book_authors, back_populates="books")
    categories = relationship("Category", secondary=book_categories, back_populates="books")
    loans = relationship("Loan", back_populates="book", passive_deletes=True)

    __mapper_args__ = {"version_id_col": version}


class User(Base):
    __tablename__ = "users"
    id = Column(Integer, primary_key=True)
    name = Column(String(100), nullable=False)
    email = Column(String(254), nullable=False, index=True)
    phone = Column(String(14), nullable=True)
    version = Column(Integer, nullable=False)

    loans = relationship("Loan", back_populates="user", passive_deletes=True)

    __mapper_args__ = {"version_id_col": version}


class Loan(Base):
    __tablename__ = "loans"
    id = Column(Integer, primary_key=True)
    book_id = Column(Integer, ForeignKey("books.id"), nullable=False)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    loan_date = Column(Date, nullable=False)
    return_date = Column(Date, nullable=True)
    version = Column(Integer, nullable=False)

    book = relationship("Book", back_populates="loans")
    user = relationship("User", back_populates="loans")

    __mapper_args__ = {"version_id_col": version}
