# -*- coding: utf-8 -*-

from importlib_metadata import version, PackageNotFoundError

from ipapi_client import _logging  # noqa
from ipapi_client._config import Config, config
from ipapi_client._constants import ResponseField, Language, FIELDS, SERVICE_FIELDS, MINIMUM_FIELDS, LANGS
from ipapi_client._models import LocationData
from ipapi_client._client import IpApiClient
from ipapi_client._lookup import (
    LookupConfig,
    generate_empty_config,
    generate_minimum_config,
    generate_maximum_config,
)
from ipapi_client._exceptions import (
    IpApiError,
    RequestError,
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


try:
    __version__ = version('ipapi-client')
except PackageNotFoundError:  # pragma: no cover
    __version__ = '0.0.0.dev'

__all__ = [
    '__version__',
    'Config',
    'config',
    'ResponseField',
    'Language',
    'FIELDS',
    'SERVICE_FIELDS',
    'MINIMUM_FIELDS',
    'LANGS',
    'LocationData',
    'IpApiClient',
    'LookupConfig',
    'generate_empty_config',
    'generate_minimum_config',
    'generate_maximum_config',
    'IpApiError',
    'RequestError',
    'ClientError',
    'HttpError',
    'TooManyRequests',
    'TooLargeBatchSize',
    'AuthError',
    'DeserializationError',
    'QueryError',
    'InvalidQuery',
    'PrivateRange',
    'ReservedRange',
]
