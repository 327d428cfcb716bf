# -*- coding: utf-8 -*-

from typing import Optional


class IpApiError(Exception):
    pass


class RequestError(IpApiError):
    """Base class for all failures of a lookup request
    """


class ClientError(RequestError):
    pass


class HttpError(RequestError):
    def __init__(self, *args: object, status: int) -> None:
        super().__init__(*args)
        self.status = status


class TooManyRequests(HttpError):
    def __init__(self, *args: object, status: int, ttl: Optional[int] = None) -> None:
        super().__init__(*args, status=status)
        self.ttl = ttl


class TooLargeBatchSize(HttpError):
    pass


class AuthError(HttpError):
    pass


class DeserializationError(RequestError):
    pass


class QueryError(RequestError):
    """The service has reported the failed status for a query
    """

    def __init__(self, *args: object, query: Optional[str] = None, message: Optional[str] = None) -> None:
        super().__init__(*args)
        self.query = query
        self.message = message


class InvalidQuery(QueryError):
    pass


class PrivateRange(QueryError):
    pass


class ReservedRange(QueryError):
    pass
