import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from app.core.config import CORS_ORIGINS, HOST, PORT
from app.core.exceptions import EventRegistrationError, InternalError
from app.core.logging_config import setup_logging
from app.database.db import Base, engine
from app.models import events, registrations, users  # noqa: F401  (register tables)
from app.routes import events as event_routes
from app.routes import registrations as registration_routes
from app.schemas.common import describe_validation_errors

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    # Create all tables (in production, use migrations such as Alembic)
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables ready")
    yield
    engine.dispose()


app = FastAPI(title="Event Registration API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(EventRegistrationError)
async def domain_error_handler(request: Request, exc: EventRegistrationError):
    logger.info("%s %s rejected: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    message = describe_validation_errors(list(exc.errors()))
    logger.info("%s %s invalid: %s", request.method, request.url.path, message)
    return JSONResponse(status_code=400, content={"error": message})


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    error = InternalError()
    return JSONResponse(status_code=error.status_code, content={"error": error.message})


@app.get("/", response_class=PlainTextResponse)
def root():
    return "event api running ........"


# Include the routers
app.include_router(event_routes.router)
app.include_router(registration_routes.router)


if __name__ == "__main__":
    uvicorn.run(app, host=HOST, port=PORT)
