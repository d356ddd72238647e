from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from inventory_sales.api.routes import users, products, sales, businesses, business_sales
from inventory_sales.config import settings
from inventory_sales.database import Database
from inventory_sales.errors import AppError
import logging

logging.basicConfig(level=settings.log_level.upper())
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Inventory & Sales API",
    description="Products, direct sales and business-channel sales per user",
    version="1.0.0",
    debug=settings.debug,
)

# Include routers
app.include_router(users.router)
app.include_router(products.router)
app.include_router(sales.router)
app.include_router(businesses.router)
app.include_router(business_sales.router)


def error_response(message, status_code: int) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": {"message": message, "status": status_code}},
    )


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    return error_response(exc.message, exc.status_code)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        messages.append(f"{location}: {error.get('msg')}" if location else error.get("msg"))
    return error_response(messages, 400)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return error_response(exc.detail, exc.status_code)


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return error_response("Internal Server Error", 500)


@app.get("/")
async def root():
    return {"message": "Inventory & Sales API", "docs": "/docs"}


@app.on_event("startup")
async def startup():
    """Open the database context unless one was attached already (tests)."""
    if getattr(app.state, "db", None) is None:
        app.state.db = Database(settings.database_url, echo=False, pool_pre_ping=True)
    app.state.db.connect()


@app.on_event("shutdown")
async def shutdown():
    database = getattr(app.state, "db", None)
    if database is not None:
        await database.disconnect()
