import logging
import sys
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from . import database
from .api import authors, books, categories, loans, publishers, users
from .config import settings

log_formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')

console_handler = logging.StreamHandler(sys.stdout)
console_handler.setFormatter(log_formatter)

root_logger = logging.getLogger()
root_logger.setLevel(settings.log_level)
root_logger.addHandler(console_handler)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    await database.init_models()
    logger.info("Tabelas verificadas, API pronta")
    yield


app = FastAPI(
    title=settings.app_name,
    description="Sistema de gerenciamento de empréstimo de livros: livros, autores, editoras, categorias, usuários e empréstimos.",
    version=settings.app_version,
    lifespan=lifespan,
)

app.include_router(books.router, prefix="/api")
app.include_router(authors.router, prefix="/api")
app.include_router(publishers.router, prefix="/api")
app.include_router(categories.router, prefix="/api")
app.include_router(users.router, prefix="/api")
app.include_router(loans.router, prefix="/api")


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = [{"loc": list(e["loc"]), "msg": e["msg"]} for e in exc.errors()]
    logger.warning(f"{request.method} {request.url.path} - dados inválidos: {errors}")
    return JSONResponse(
        status_code=400,
        content={"detail": "Os dados enviados são inválidos.", "errors": errors}
    )


@app.exception_handler(StarletteHTTPException)
async def custom_http_exception_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 404 and exc.detail == "Not Found" and request.url.path.startswith("/api"):
        return JSONResponse(
            status_code=404,
            content={"detail": "Endpoint da API não encontrado"}
        )
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.api_host, port=settings.api_port)
