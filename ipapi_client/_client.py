# -*- coding: utf-8 -*-

import asyncio
from collections import abc
from ipaddress import IPv4Address, IPv6Address
from http import HTTPStatus
from typing import TYPE_CHECKING, Optional, List, Union, Type, Iterable, AsyncIterable, Tuple
from types import TracebackType

from pydantic import ValidationError
import aiohttp
import aiohttp.helpers
import yarl
import aioitertools

from ipapi_client._logging import logger
from ipapi_client._config import config
from ipapi_client._models import LocationData, location_list_adapter
from ipapi_client._exceptions import (
    ClientError,
    HttpError,
    TooManyRequests,
    TooLargeBatchSize,
    AuthError,
    DeserializationError,
    QueryError,
    InvalidQuery,
    PrivateRange,
    ReservedRange,
)

if TYPE_CHECKING:  # pragma: no cover
    from ipapi_client._lookup import LookupConfig


_IPType = Union[str, IPv4Address, IPv6Address]
_IPsType = Union[Iterable[_IPType], AsyncIterable[_IPType]]
_TimeoutType = Union[aiohttp.ClientTimeout, int, float, object]

_QUERY_ERRORS = {
    'invalid query': InvalidQuery,
    'private range': PrivateRange,
    'reserved range': ReservedRange,
}


class IpApiClient:
    """IP-API asynchronous http client to perform geo-location

    Asynchronous http client for https://ip-api.com/ geo-location web-service.
    The requested fields and the language are taken from :class:`LookupConfig`.

    :param key: The API key for pro unlimited access
    :param session: Existing aiohttp.ClientSession instance

    """

    def __init__(self,
                 *,
                 key: Optional[str] = None,
                 session: Optional[aiohttp.ClientSession] = None,
                 ) -> None:

        if key and not isinstance(key, str):
            raise TypeError("'key' argument must be a string")
        if session and not isinstance(session, aiohttp.ClientSession):
            raise TypeError(f"'session' argument must be an instance of {aiohttp.ClientSession}")

        if session:
            own_session = False
        else:
            session = aiohttp.ClientSession()
            own_session = True

        self._session: Optional[aiohttp.ClientSession] = session
        self._own_session = own_session

        if key:
            self._base_url = yarl.URL(str(config.pro_url))
        else:
            self._base_url = yarl.URL(str(config.base_url))

        self._key = key

    def __enter__(self) -> None:
        raise TypeError("Use 'async with' statement instead")

    def __exit__(self,
                 exc_type: Optional[Type[BaseException]],
                 exc_val: Optional[BaseException],
                 exc_tb: Optional[TracebackType]) -> None:
        pass  # pragma: no cover

    async def __aenter__(self) -> 'IpApiClient':
        return self

    async def __aexit__(self,
                        exc_type: Optional[Type[BaseException]],
                        exc_val: Optional[BaseException],
                        exc_tb: Optional[TracebackType]) -> None:
        await self.close()

    @property
    def closed(self) -> bool:
        """Returns True if the client is closed
        """
        return self._session is None

    async def close(self):
        """Close client and own session
        """

        if self._own_session and not self.closed:
            await self._session.close()
        self._session = None

    async def request(self,
                      lookup_config: 'LookupConfig',
                      target: Optional[_IPType] = '',
                      *,
                      timeout: _TimeoutType = aiohttp.helpers.sentinel
                      ) -> LocationData:
        """Locate IP/domain or the own IP

        :param lookup_config: The config with the requested fields and the language
        :param target: IP or domain or empty string/None to locate the own IP
        :param timeout: The timeout of the whole request to the service
        :return: The geo-location data
        """

        if self.closed:
            raise ValueError('The client session is already closed')

        if not target:
            endpoint = config.json_endpoint
        elif isinstance(target, (str, IPv4Address, IPv6Address)):
            endpoint = f'{config.json_endpoint}/{target}'
        else:
            raise TypeError(f"'target' argument has an invalid type: {type(target)}")

        url = self._make_url(endpoint, lookup_config)
        body = await self._fetch(self._session.get(url, timeout=timeout))

        try:
            data = LocationData.model_validate_json(body)
        except ValidationError as err:
            raise DeserializationError(f"Unexpected response body: {err}") from err

        self._check_query_status(data, str(target) if target else None)
        return data

    async def batch_request(self,
                            lookup_config: 'LookupConfig',
                            targets: _IPsType,
                            *,
                            timeout: _TimeoutType = aiohttp.helpers.sentinel
                            ) -> List[LocationData]:
        """Locate a batch of IPs in one request

        The method uses batch API: https://ip-api.com/docs/api:batch
        The whole batch fails if the service has failed any of IPs.

        :param lookup_config: The config with the requested fields and the language
        :param targets: The iterable or async iterable of IPs
        :param timeout: The timeout of the whole request to the service
        :return: The list of geo-location data in the order of the targets
        """

        if self.closed:
            raise ValueError('The client session is already closed')

        if isinstance(targets, (str, IPv4Address, IPv6Address)) or \
                not isinstance(targets, (abc.Iterable, abc.AsyncIterable)):
            raise TypeError("'targets' argument must be an iterable or async iterable of IPs")

        url = self._make_url(config.batch_endpoint, lookup_config)

        targets = [str(target) for target in await aioitertools.list(targets)]

        if not targets:
            logger.debug("Empty batch, nothing to request")
            return []

        logger.debug("Batch request of %d IPs", len(targets))

        body = await self._fetch(self._session.post(url, json=targets, timeout=timeout))

        try:
            results = location_list_adapter.validate_json(body)
        except ValidationError as err:
            raise DeserializationError(f"Unexpected batch response body: {err}") from err

        if len(results) != len(targets):
            raise DeserializationError(
                f"Batch response has {len(results)} results for {len(targets)} IPs")

        for data, target in zip(results, targets):
            self._check_query_status(data, target)

        return results

    def _make_url(self, endpoint: str, lookup_config: 'LookupConfig') -> yarl.URL:
        url = self._base_url / endpoint
        url %= lookup_config.query_params()

        if self._key:
            url %= {'key': self._key}

        logger.debug("Request URL: %s", url.with_query(None) if self._key else url)
        return url

    @staticmethod
    def _get_rl_ttl(headers) -> Tuple[Optional[int], Optional[int]]:
        rl = headers.get('X-Rl')
        ttl = headers.get('X-Ttl')

        try:
            rl = int(rl) if rl is not None else None
            ttl = int(ttl) if ttl is not None else None
        except ValueError:
            logger.warning("Invalid rate limit headers: X-Rl=%r, X-Ttl=%r", rl, ttl)
            return None, None

        return rl, ttl

    def _check_http_status(self, resp: aiohttp.ClientResponse) -> None:
        rl, ttl = self._get_rl_ttl(resp.headers)
        status = resp.status

        if rl is not None:
            logger.debug("API rate limit: rl=%d, ttl=%s", rl, ttl)

        if status == HTTPStatus.OK:
            return
        elif status == HTTPStatus.TOO_MANY_REQUESTS:
            message = f"(HTTP {status}) Too many requests"
            if ttl is not None:
                message += f", retry in {ttl} seconds"
            raise TooManyRequests(message, status=status, ttl=ttl)
        elif status == HTTPStatus.UNPROCESSABLE_ENTITY:
            raise TooLargeBatchSize(
                f"(HTTP {status}) Batch size is too large", status=status)
        elif status == HTTPStatus.FORBIDDEN:
            raise AuthError(
                f"(HTTP {status}) Forbidden. Please check your API key", status=status)
        else:
            raise HttpError(
                f"HTTP {status} error occurred", status=status)

    async def _fetch(self, request_ctx) -> str:
        try:
            async with request_ctx as resp:
                self._check_http_status(resp)
                return await resp.text()
        except aiohttp.ClientError as err:
            raise ClientError(f"Client error: {repr(err)}") from err
        except asyncio.TimeoutError as err:
            raise ClientError(f"Request timeout: {err!r}") from err
        except UnicodeDecodeError as err:
            raise DeserializationError(f"Cannot decode response body: {err}") from err

    @staticmethod
    def _check_query_status(data: LocationData, target: Optional[str] = None) -> None:
        if not data.failed:
            return

        query = data.query or target
        message = data.message
        error_cls = _QUERY_ERRORS.get(message, QueryError)

        logger.warning("Failed to locate '%s': %s", query, message)
        raise error_cls(f"Failed to locate '{query}': {message}", query=query, message=message)
