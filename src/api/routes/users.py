"""User API routes.

Endpoints:
- POST /users: Create a user
- GET /users?id=<uuid>: Get a single user
- GET /users/all: List all users

Each handler wraps the request in a FastAPIContext and hands it to the
transport-agnostic UserController. Domain errors raised by the controller
are mapped to HTTP responses by api.error_handlers.
"""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from adapter.controller.fastapi_context import FastAPIContext
from adapter.controller.user_controller import UserController
from api.dependencies import get_user_controller
from api.models import ErrorResponse, UserCreateBody, UserResponse, UsersResponse

router = APIRouter(prefix="/users", tags=["users"])

_ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Malformed request body"},
    404: {"model": ErrorResponse, "description": "User not found"},
    409: {"model": ErrorResponse, "description": "Duplicate user"},
    422: {"model": ErrorResponse, "description": "Validation failed"},
    500: {"model": ErrorResponse, "description": "Storage failure"},
}


@router.post(
    "",
    status_code=201,
    response_model=UserResponse,
    responses=_ERROR_RESPONSES,
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": UserCreateBody.model_json_schema()}},
        }
    },
)
async def create_user(
    request: Request,
    controller: UserController = Depends(get_user_controller),
) -> JSONResponse:
    """Create a user from a JSON body {lastname, firstname, email, password}."""
    ctx = await FastAPIContext.from_request(request)
    # Store access and password hashing block; keep them off the event loop
    await run_in_threadpool(controller.create_user, ctx)
    return ctx.response


@router.get("/all", response_model=UsersResponse, responses={500: _ERROR_RESPONSES[500]})
async def get_users(
    request: Request,
    controller: UserController = Depends(get_user_controller),
) -> JSONResponse:
    """List all users, oldest first."""
    ctx = FastAPIContext(request)
    await run_in_threadpool(controller.get_users, ctx)
    return ctx.response


@router.get("", response_model=UserResponse, responses=_ERROR_RESPONSES)
async def get_user(
    request: Request,
    controller: UserController = Depends(get_user_controller),
) -> JSONResponse:
    """Get a user by the `id` query parameter."""
    ctx = FastAPIContext(request)
    await run_in_threadpool(controller.get_user, ctx)
    return ctx.response
