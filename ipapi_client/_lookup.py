# -*- coding: utf-8 -*-

from typing import TYPE_CHECKING, Optional, Union, Iterable, Dict, List, FrozenSet

import aiohttp
import aiohttp.helpers

from ipapi_client import _constants as constants
from ipapi_client._constants import ResponseField, Language
from ipapi_client._client import IpApiClient, _IPType, _IPsType, _TimeoutType
from ipapi_client._models import LocationData


_FieldType = Union[ResponseField, str]
_LangType = Union[Language, str]


def _to_field(field: _FieldType) -> ResponseField:
    if isinstance(field, ResponseField):
        return field
    if not isinstance(field, str):
        raise TypeError(f"field must be a {ResponseField} member or a string, not {type(field)}")
    try:
        return ResponseField(field)
    except ValueError:
        raise ValueError(
            f"'{field}' is not a supported field: {sorted(f.value for f in ResponseField)}") from None


def _to_language(language: _LangType) -> Language:
    if isinstance(language, Language):
        return language
    if not isinstance(language, str):
        raise TypeError(f"'language' must be a {Language} member or a string, not {type(language)}")
    try:
        return Language(language)
    except ValueError:
        raise ValueError(
            f"'{language}' is not a supported language: {sorted(constants.LANGS)}") from None


class LookupConfig:
    """The configuration of a geo-location lookup

    The config is a set of optional fields to request and the language of the result.
    It is built by chained calls::

        data = await (generate_empty_config()
                      .include_country()
                      .include_currency()
                      .set_language(Language.DE)
                      .make_request('1.1.1.1'))

    Every ``include_<field>``/``exclude_<field>`` method and ``set_language``
    mutates the config and returns it.

    :param fields: The iterable of fields to request
    :param language: The language of the result

    """

    def __init__(self,
                 fields: Iterable[_FieldType] = (),
                 language: _LangType = constants.DEFAULT_LANGUAGE) -> None:
        self._fields = {_to_field(field) for field in fields}
        self._language = _to_language(language)

    def __repr__(self) -> str:
        fields = ', '.join(sorted(field.value for field in self._fields))
        return f'{type(self).__name__}(fields={{{fields}}}, language={self._language.value!r})'

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LookupConfig):
            return NotImplemented
        return self._fields == other._fields and self._language == other._language

    @property
    def fields(self) -> FrozenSet[ResponseField]:
        """Returns the set of requested optional fields
        """
        return frozenset(self._fields)

    @property
    def language(self) -> Language:
        return self._language

    def copy(self) -> 'LookupConfig':
        return type(self)(self._fields, self._language)

    def include(self, *fields: _FieldType) -> 'LookupConfig':
        """Include the fields in the request
        """
        self._fields.update(_to_field(field) for field in fields)
        return self

    def exclude(self, *fields: _FieldType) -> 'LookupConfig':
        """Exclude the fields from the request
        """
        self._fields.difference_update(_to_field(field) for field in fields)
        return self

    def set_language(self, language: _LangType) -> 'LookupConfig':
        """Set the language of the result
        """
        self._language = _to_language(language)
        return self

    def query_params(self) -> Dict[str, str]:
        """Returns the query parameters of the request for the config
        """
        fields = {field.value for field in self._fields} | constants.SERVICE_FIELDS
        params = {'fields': ','.join(sorted(fields))}

        if self._language != constants.DEFAULT_LANGUAGE:
            params['lang'] = self._language.value

        return params

    if TYPE_CHECKING:  # pragma: no cover
        # Generated below for every ResponseField
        def include_continent(self) -> 'LookupConfig': ...
        def include_continent_code(self) -> 'LookupConfig': ...
        def include_country(self) -> 'LookupConfig': ...
        def include_country_code(self) -> 'LookupConfig': ...
        def include_region(self) -> 'LookupConfig': ...
        def include_region_name(self) -> 'LookupConfig': ...
        def include_city(self) -> 'LookupConfig': ...
        def include_district(self) -> 'LookupConfig': ...
        def include_zip(self) -> 'LookupConfig': ...
        def include_lat(self) -> 'LookupConfig': ...
        def include_lon(self) -> 'LookupConfig': ...
        def include_timezone(self) -> 'LookupConfig': ...
        def include_offset(self) -> 'LookupConfig': ...
        def include_currency(self) -> 'LookupConfig': ...
        def include_isp(self) -> 'LookupConfig': ...
        def include_org(self) -> 'LookupConfig': ...
        def include_as(self) -> 'LookupConfig': ...
        def include_asname(self) -> 'LookupConfig': ...
        def include_reverse(self) -> 'LookupConfig': ...
        def include_mobile(self) -> 'LookupConfig': ...
        def include_proxy(self) -> 'LookupConfig': ...
        def include_hosting(self) -> 'LookupConfig': ...
        def include_query(self) -> 'LookupConfig': ...
        def exclude_continent(self) -> 'LookupConfig': ...
        def exclude_continent_code(self) -> 'LookupConfig': ...
        def exclude_country(self) -> 'LookupConfig': ...
        def exclude_country_code(self) -> 'LookupConfig': ...
        def exclude_region(self) -> 'LookupConfig': ...
        def exclude_region_name(self) -> 'LookupConfig': ...
        def exclude_city(self) -> 'LookupConfig': ...
        def exclude_district(self) -> 'LookupConfig': ...
        def exclude_zip(self) -> 'LookupConfig': ...
        def exclude_lat(self) -> 'LookupConfig': ...
        def exclude_lon(self) -> 'LookupConfig': ...
        def exclude_timezone(self) -> 'LookupConfig': ...
        def exclude_offset(self) -> 'LookupConfig': ...
        def exclude_currency(self) -> 'LookupConfig': ...
        def exclude_isp(self) -> 'LookupConfig': ...
        def exclude_org(self) -> 'LookupConfig': ...
        def exclude_as(self) -> 'LookupConfig': ...
        def exclude_asname(self) -> 'LookupConfig': ...
        def exclude_reverse(self) -> 'LookupConfig': ...
        def exclude_mobile(self) -> 'LookupConfig': ...
        def exclude_proxy(self) -> 'LookupConfig': ...
        def exclude_hosting(self) -> 'LookupConfig': ...
        def exclude_query(self) -> 'LookupConfig': ...

    async def make_request(self,
                           target: Optional[_IPType] = '',
                           *,
                           key: Optional[str] = None,
                           session: Optional[aiohttp.ClientSession] = None,
                           timeout: _TimeoutType = aiohttp.helpers.sentinel
                           ) -> LocationData:
        """Locate IP/domain or the own IP with the config

        :param target: IP or domain or empty string to locate the own IP
        :param key: The API key for pro unlimited access
        :param session: Existing aiohttp.ClientSession instance
        :param timeout: The timeout of the whole request to the service
        :return: The geo-location data
        """

        async with IpApiClient(key=key, session=session) as client:
            return await client.request(self, target, timeout=timeout)

    async def make_batch_request(self,
                                 targets: _IPsType,
                                 *,
                                 key: Optional[str] = None,
                                 session: Optional[aiohttp.ClientSession] = None,
                                 timeout: _TimeoutType = aiohttp.helpers.sentinel
                                 ) -> List[LocationData]:
        """Locate a batch of IPs with the config in one request

        :param targets: The iterable or async iterable of IPs
        :param key: The API key for pro unlimited access
        :param session: Existing aiohttp.ClientSession instance
        :param timeout: The timeout of the whole request to the service
        :return: The list of geo-location data in the order of the targets
        """

        async with IpApiClient(key=key, session=session) as client:
            return await client.batch_request(self, targets, timeout=timeout)


def _make_toggle(field: ResponseField, include: bool):
    if include:
        def toggle(self: LookupConfig) -> LookupConfig:
            return self.include(field)
        action, preposition = 'include', 'in'
    else:
        def toggle(self: LookupConfig) -> LookupConfig:
            return self.exclude(field)
        action, preposition = 'exclude', 'from'

    toggle.__name__ = f'{action}_{field.name.lower()}'
    toggle.__qualname__ = f'{LookupConfig.__name__}.{toggle.__name__}'
    toggle.__doc__ = f"{action.capitalize()} '{field.value}' field {preposition} the request"
    return toggle


for _field in ResponseField:
    for _include in (True, False):
        _toggle = _make_toggle(_field, _include)
        setattr(LookupConfig, _toggle.__name__, _toggle)

del _field, _include, _toggle


def generate_empty_config() -> LookupConfig:
    """Create an empty config to build your own from scratch
    """
    return LookupConfig()


def generate_minimum_config() -> LookupConfig:
    """Create the config with only important fields
    """
    return LookupConfig(constants.MINIMUM_FIELDS)


def generate_maximum_config() -> LookupConfig:
    """Create the config with all fields
    """
    return LookupConfig(constants.FIELDS)
