import logging
import uuid
from contextlib import asynccontextmanager
from typing import Annotated, List

from fastapi import APIRouter, Depends, FastAPI, Path, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response

from .config import get_settings
from .db import get_session, init_db
from .entities import MAX_BOOK_ID, MIN_BOOK_ID
from .errors import CatalogError, Err, NotFoundError, ValidationError
from .models import Book, BookPatch, BookPayload
from .otel import configure_otel
from .service import BookService
from .store import SqlAlchemyBookStore

settings = get_settings()

BookId = Annotated[int, Path(ge=MIN_BOOK_ID, le=MAX_BOOK_ID)]

ERROR_STATUS = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    NotFoundError: status.HTTP_404_NOT_FOUND,
}


def get_book_service(session=Depends(get_session)) -> BookService:
    return BookService(SqlAlchemyBookStore(session))


def error_response(error: CatalogError) -> JSONResponse:
    content = {"detail": error.message}
    if isinstance(error, ValidationError):
        content["errors"] = [violation.to_dict() for violation in error.violations]
    return JSONResponse(status_code=ERROR_STATUS[type(error)], content=content)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    yield


app = FastAPI(
    title=settings.app_name,
    version=settings.version,
    description="A catalog of books with create, read, update and delete over a relational store.",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan,
)
configure_otel(app, settings)

if settings.allowed_origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type"],
    )


def _error_field(err: dict) -> str:
    loc = err.get("loc") or ()
    # json_invalid locates the parse error by character offset
    if err.get("type") == "json_invalid" or not loc or isinstance(loc[-1], int):
        return "body"
    return str(loc[-1])


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = [{"field": _error_field(err), "message": err.get("msg", "Invalid value")} for err in exc.errors()]
    detail = "; ".join(f"{item['field']}: {item['message']}" for item in errors) or "Invalid request"
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": detail, "errors": errors})


health_router = APIRouter(prefix="/api", tags=["health"])
books_router = APIRouter(prefix="/api/books", tags=["books"])


@health_router.get("/health")
def health() -> dict:
    return {"status": "ok"}


@books_router.get("", response_model=List[Book])
def list_books(service: BookService = Depends(get_book_service)) -> List[Book]:
    return service.list_all().value


@books_router.post("", response_model=Book, status_code=status.HTTP_201_CREATED)
def create_book(payload: BookPayload, service: BookService = Depends(get_book_service)) -> Book | JSONResponse:
    result = service.create(payload)
    if isinstance(result, Err):
        return error_response(result.error)
    return result.value


@books_router.get("/{book_id}", response_model=Book)
def get_book(book_id: BookId, service: BookService = Depends(get_book_service)) -> Book | JSONResponse:
    result = service.get_by_id(book_id)
    if isinstance(result, Err):
        return error_response(result.error)
    return result.value


@books_router.put("/{book_id}", response_model=Book)
def update_book(
    book_id: BookId, payload: BookPayload, service: BookService = Depends(get_book_service)
) -> Book | JSONResponse:
    result = service.update_full(book_id, payload)
    if isinstance(result, Err):
        return error_response(result.error)
    return result.value


@books_router.patch("/{book_id}", response_model=Book)
def patch_book(book_id: BookId, payload: BookPatch, service: BookService = Depends(get_book_service)) -> Book | JSONResponse:
    result = service.update_partial(book_id, payload)
    if isinstance(result, Err):
        return error_response(result.error)
    return result.value


@books_router.delete("/{book_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
def delete_book(book_id: BookId, service: BookService = Depends(get_book_service)) -> Response:
    result = service.delete(book_id)
    if isinstance(result, Err):
        return error_response(result.error)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


app.include_router(health_router)
app.include_router(books_router)


request_logger = logging.getLogger("book_catalog.requests")


@app.middleware("http")
async def request_logging_middleware(request, call_next):
    request_logger.info("request.start", extra={"path": request.url.path, "method": request.method})
    response = await call_next(request)
    request_logger.info(
        "request.end",
        extra={"path": request.url.path, "method": request.method, "status": response.status_code},
    )
    return response


@app.middleware("http")
async def request_id_middleware(request, call_next):
    request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
    response = await call_next(request)
    response.headers["X-Request-ID"] = request_id
    return response
