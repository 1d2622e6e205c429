import logging

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
from cinema.db.init_db import create_database
from cinema.db.base import Base
from cinema.db.session import engine
from cinema.core.config import settings
from cinema.core.exceptions import (
    ReservationError,
    reservation_error_handler,
    request_validation_handler,
    unhandled_exception_handler,
)
from cinema.api.v1.router import api_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: Ensure DB exists and create tables
    if settings.uses_postgres:
        create_database()
    Base.metadata.create_all(bind=engine)
    logger.info("Database schema ready.")
    yield


app = FastAPI(title=settings.PROJECT_NAME, lifespan=lifespan)

# Set all CORS enabled origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_exception_handler(ReservationError, reservation_error_handler)
app.add_exception_handler(RequestValidationError, request_validation_handler)
app.add_exception_handler(Exception, unhandled_exception_handler)

app.include_router(api_router, prefix=settings.API_V1_STR)


@app.get("/")
def read_root():
    return {"Hello": "Cinema"}
