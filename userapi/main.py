#!/usr/bin/env python
"""
userapi/main.py

Sets up the FastAPI application for the User CRUD API.

Key Roles:
 - Loads environment variables & configures logging
 - Adds CORS middleware for browser clients
 - Registers the error translator (validation -> 400, not found -> 404)
 - Includes the 'users' router under /users
 - Creates the database tables at startup
"""

import os
import logging
from contextlib import asynccontextmanager
from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# Load environment variables from a .env file at the project root
load_dotenv()

# ---------------------------------------------------------
# Logging Setup
# ---------------------------------------------------------
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Default CORS origins if none specified (dev environment)
default_origins = (
    "http://127.0.0.1:3000,"
    "http://localhost:3000,"
    "http://127.0.0.1:8000,"
    "http://localhost:8000"
)
raw_origins = os.getenv("CORS_ALLOW_ORIGINS", default_origins)
ALLOWED_ORIGINS = [origin.strip() for origin in raw_origins.split(",")]

from userapi.database import create_tables
from userapi.exceptions import register_exception_handlers
from userapi.routers import user


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Ensures tables are created (if not already) when the app starts.
    This won't delete or overwrite existing data; it's idempotent.
    """
    await create_tables()
    yield


# ---------------------------------------------------------
# Initialize the FastAPI application
# ---------------------------------------------------------
app = FastAPI(
    title="User CRUD API",
    description="Async create/read/update/delete of User documents with field validation.",
    version="1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

app.include_router(user.router, prefix="/users", tags=["users"])


@app.get("/")
def read_root():
    """
    Basic root path to confirm the API is running.
    """
    return {"message": "User API is running"}


# ---------------------------------------------------------
# Local run
# ---------------------------------------------------------
if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "userapi.main:app",
        host=os.getenv("HOST", "127.0.0.1"),
        port=int(os.getenv("PORT", "8000")),
    )
