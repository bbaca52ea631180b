"""FastAPI application for the users API."""

import os
import logging
from typing import Optional

import uvicorn
from fastapi import FastAPI, Depends, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from users_api.email_validation import is_valid_email
from users_api.schemas import (
    ErrorResponse,
    MessageResponse,
    UpsertUser,
    User,
    UserError,
)
from users_api.users_repo import StorePoisonedError, UsersRepository
from users_api.users_service import UsersService

HOST = os.environ.get("HOST", "0.0.0.0")
PORT = int(os.environ.get("PORT", "80"))
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

# Configure logging
logging.basicConfig(
    level=LOG_LEVEL.upper(),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

INVALID_EMAIL = "Invalid input for field 'email'"
ALREADY_EXISTS = "User with associated email already exists!"
NOT_FOUND = "User not found"


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=message).model_dump()
    )


def not_found() -> JSONResponse:
    return error_response(404, NOT_FOUND)


def get_users_service(request: Request) -> UsersService:
    """Dependency returning the service owned by the running app."""
    return request.app.state.users_service


def create_app(service: Optional[UsersService] = None) -> FastAPI:
    """
    Build the application around a users service.

    A fresh repository and service are created unless ``service`` is given,
    so each app instance owns its own store.
    """
    app = FastAPI(
        title="Users API",
        description="In-memory user records keyed by email",
        version="1.0.0"
    )
    app.state.users_service = service or UsersService(UsersRepository())

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(StorePoisonedError)
    async def store_poisoned_handler(request: Request, exc: StorePoisonedError):
        """The store can no longer be trusted; refuse the request."""
        logger.critical(f"[{request.method} {request.url.path}] User store unavailable: {exc}")
        return error_response(500, "User store is unavailable")

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "ok"}

    @app.post(
        "/users",
        response_model=User,
        status_code=201,
        responses={208: {"model": ErrorResponse}, 422: {"model": ErrorResponse}}
    )
    async def create_user(
        body: UpsertUser,
        service: UsersService = Depends(get_users_service)
    ):
        """Create a user. Rejects malformed emails and emails already in use."""
        if not is_valid_email(body.email):
            logger.info(f"[create_user] Rejected invalid email: {body.email!r}")
            return error_response(422, INVALID_EMAIL)

        result = service.create_user(body)
        if result is UserError.CONFLICT:
            return error_response(208, ALREADY_EXISTS)
        return result

    @app.get("/users/{email}", response_model=User, responses={404: {"model": ErrorResponse}})
    async def get_user(email: str, service: UsersService = Depends(get_users_service)):
        result = service.get_user(email)
        if result is UserError.NOT_FOUND:
            return not_found()
        return result

    @app.put("/users/{email}", response_model=User, responses={404: {"model": ErrorResponse}})
    async def update_user(
        email: str,
        body: UpsertUser,
        service: UsersService = Depends(get_users_service)
    ):
        """Replace password, fullname and role of an existing user."""
        result = service.update_user(email, body)
        if result is UserError.NOT_FOUND:
            return not_found()
        return result

    @app.delete("/users/{email}", response_model=MessageResponse, responses={404: {"model": ErrorResponse}})
    async def delete_user(email: str, service: UsersService = Depends(get_users_service)):
        result = service.delete_user(email)
        if result is UserError.NOT_FOUND:
            return not_found()
        return MessageResponse(message="User has been deleted")

    return app


app = create_app()


def run():
    """Serve the module-level app with uvicorn."""
    logger.info(f"[run] Serving users API on {HOST}:{PORT}")
    uvicorn.run(app, host=HOST, port=PORT, log_level=LOG_LEVEL.lower())


if __name__ == "__main__":
    run()
