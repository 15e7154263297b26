"""Base use case."""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from pydantic import BaseModel

RequestT = TypeVar("RequestT", bound=BaseModel)
ResponseT = TypeVar("ResponseT", bound=BaseModel)


class BaseUseCase(ABC, Generic[RequestT, ResponseT]):
    """Base for use cases that change backend state for the logged-in user.

    Read-only and page-driven use cases take the same request/response
    shape without subclassing.
    """

    @abstractmethod
    async def execute(self, request: RequestT) -> ResponseT:
        pass
