"""FastAPI/Starlette implementation of the Context port."""

import json
from dataclasses import fields, is_dataclass
from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse

from domain.model.errors import BindError


class FastAPIContext:
    """Context over one HTTP request.

    The body is read up front (Starlette reads it asynchronously) so that
    bind() stays synchronous. json() stores the response on self.response
    for the route handler to return.
    """

    def __init__(self, request: Request, body: bytes = b''):
        self.request = request
        self.body = body
        self.response: JSONResponse | None = None

    @classmethod
    async def from_request(cls, request: Request) -> 'FastAPIContext':
        return cls(request, await request.body())

    def json(self, payload: Any, status_code: int = 200) -> None:
        self.response = JSONResponse(content=payload, status_code=status_code)

    def bind(self, target: Any) -> None:
        if not is_dataclass(target) or isinstance(target, type):
            raise TypeError(f"bind() expects a dataclass instance, got {type(target).__name__}")
        if not self.body:
            raise BindError("Request body is empty")

        try:
            data = json.loads(self.body)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise BindError("Request body is not valid JSON") from e
        if not isinstance(data, dict):
            raise BindError("Request body must be a JSON object")

        for f in fields(target):
            if f.name not in data or data[f.name] is None:
                continue
            value = data[f.name]
            if f.type in (str, 'str') and not isinstance(value, str):
                raise BindError(f"Field '{f.name}' must be a string")
            setattr(target, f.name, value)

    def query(self, key: str, default: str = '') -> str:
        return self.request.query_params.get(key, default)
