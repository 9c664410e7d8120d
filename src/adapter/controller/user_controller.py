"""Transport-agnostic user controller.

Decodes input through a Context, calls the user service and encodes the
response shape. Domain errors are left to propagate; the transport decides
how they look on the wire.
"""

from port.controller import Context
from port.user_requests import GetUserRequest, UserCreateRequest
from port.user_responses import GetUserResponse, GetUsersResponse
from port.user_service import UserServicePort


class UserController:
    def __init__(self, service: UserServicePort):
        self.service = service

    def create_user(self, ctx: Context) -> None:
        req = UserCreateRequest()
        ctx.bind(req)

        user = self.service.create(req)
        ctx.json(GetUserResponse.from_entity(user).to_dict(), status_code=201)

    def get_user(self, ctx: Context) -> None:
        req = GetUserRequest(id=ctx.query('id'))

        user = self.service.get_user(req)
        ctx.json(GetUserResponse.from_entity(user).to_dict())

    def get_users(self, ctx: Context) -> None:
        users = self.service.get_users()
        ctx.json(GetUsersResponse.from_entities(users).to_dict())
