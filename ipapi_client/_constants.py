# -*- coding: utf-8 -*-

import enum


class ResponseField(str, enum.Enum):
    """Optional fields of the ip-api.com response

    The value of each member is the field name on the wire.
    """

    CONTINENT = 'continent'
    CONTINENT_CODE = 'continentCode'
    COUNTRY = 'country'
    COUNTRY_CODE = 'countryCode'
    REGION = 'region'
    REGION_NAME = 'regionName'
    CITY = 'city'
    DISTRICT = 'district'
    ZIP = 'zip'
    LAT = 'lat'
    LON = 'lon'
    TIMEZONE = 'timezone'
    OFFSET = 'offset'
    CURRENCY = 'currency'
    ISP = 'isp'
    ORG = 'org'
    AS = 'as'
    ASNAME = 'asname'
    REVERSE = 'reverse'
    MOBILE = 'mobile'
    PROXY = 'proxy'
    HOSTING = 'hosting'
    QUERY = 'query'


class Language(str, enum.Enum):
    """Languages of the ip-api.com response
    """

    DE = 'de'
    EN = 'en'
    ES = 'es'
    FR = 'fr'
    JA = 'ja'
    PT_BR = 'pt-BR'
    RU = 'ru'
    ZH_CN = 'zh-CN'


DEFAULT_LANGUAGE = Language.EN

FIELDS = frozenset(ResponseField)

# Always requested, the response status depends on them
SERVICE_FIELDS = frozenset({
    'status',
    'message',
})

MINIMUM_FIELDS = frozenset({
    ResponseField.COUNTRY,
    ResponseField.REGION,
    ResponseField.CITY,
    ResponseField.LAT,
    ResponseField.LON,
    ResponseField.ISP,
})

LANGS = frozenset(lang.value for lang in Language)

FAIL_STATUS = 'fail'
