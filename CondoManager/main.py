import logging

from CondoManager.config import AppSettings, load_env

# Load environment variables before importing app modules that read them
load_env()

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from contextlib import asynccontextmanager
from sqlalchemy.exc import SQLAlchemyError
from starlette.middleware.sessions import SessionMiddleware
from CondoManager.routes import users_router, dashboard_router, units_router, maintenance_router, expenses_router, board_router, calendar_router
from CondoManager.database import engine, Base
from CondoManager.sessions import session_store
from CondoManager.errors import InvalidInput, LoginRequired, StoreError
from CondoManager.templating import redirect, render
import uvicorn

settings = AppSettings.from_env()

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup logic
    logger.info("App startup event")
    yield
    # Shutdown logic
    logger.info("App shutdown event")


app = FastAPI(lifespan=lifespan)

# Server-side sessions expire together with the cookie that points at them
session_store.max_age = settings.session_max_age

# Create all the tables in the database (make sure models are imported)
Base.metadata.create_all(bind=engine)

# Login, logout and profile
app.include_router(users_router)

# Dashboard
app.include_router(dashboard_router)

# Units
app.include_router(units_router)

# Maintenance requests
app.include_router(maintenance_router)

# Expenses
app.include_router(expenses_router)

# Message board
app.include_router(board_router)

# Calendar
app.include_router(calendar_router)

app.add_middleware(
    SessionMiddleware,
    secret_key=settings.session_secret,
    session_cookie=settings.session_cookie,
    max_age=settings.session_max_age,
    same_site="lax",
    https_only=False,
)


@app.exception_handler(LoginRequired)
async def login_required_handler(request: Request, exc: LoginRequired):
    return redirect("/login")


@app.exception_handler(StoreError)
async def store_error_handler(request: Request, exc: StoreError):
    return render(request, "error", {"message": exc.message}, status_code=500)


@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError):
    logger.error("Unhandled database error on %s %s: %s", request.method, request.url.path, exc)
    return render(request, "error", {"message": "Database error"}, status_code=500)


@app.exception_handler(InvalidInput)
async def invalid_input_handler(request: Request, exc: InvalidInput):
    return render(request, "error", {"message": exc.message}, status_code=400)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    logger.info("Rejected invalid input on %s %s: %s", request.method, request.url.path, exc.errors())
    return render(request, "error", {"message": "Invalid input"}, status_code=400)


# Run the application (for development)
if __name__ == "__main__":
    uvicorn.run("CondoManager.main:app", host="0.0.0.0", port=settings.port, log_level=settings.log_level.lower())
