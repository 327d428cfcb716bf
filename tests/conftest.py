# -*- coding: utf-8 -*-

import asyncio
import socket

import pytest
import pytest_asyncio
from aiohttp.test_utils import TestServer
from aiohttp import web

from ipapi_client import config as ipapi_config


OWN_IP = '203.0.113.7'
API_KEY = 'test-key'

LOCATIONS = {
    '1.1.1.1': {
        'continent': 'Oceania',
        'continentCode': 'OC',
        'country': 'Australia',
        'countryCode': 'AU',
        'region': 'QLD',
        'regionName': 'Queensland',
        'city': 'South Brisbane',
        'district': '',
        'zip': '4101',
        'lat': -27.4766,
        'lon': 153.0166,
        'timezone': 'Australia/Brisbane',
        'offset': 36000,
        'currency': 'AUD',
        'isp': 'Cloudflare, Inc',
        'org': 'APNIC and Cloudflare DNS Resolver project',
        'as': 'AS13335 Cloudflare, Inc.',
        'asname': 'CLOUDFLARENET',
        'reverse': 'one.one.one.one',
        'mobile': False,
        'proxy': False,
        'hosting': True,
    },
    '8.8.8.8': {
        'continent': 'North America',
        'continentCode': 'NA',
        'country': 'United States',
        'countryCode': 'US',
        'region': 'VA',
        'regionName': 'Virginia',
        'city': 'Ashburn',
        'district': '',
        'zip': '20149',
        'lat': 39.03,
        'lon': -77.5,
        'timezone': 'America/New_York',
        'offset': -14400,
        'currency': 'USD',
        'isp': 'Google LLC',
        'org': 'Google Public DNS',
        'as': 'AS15169 Google LLC',
        'asname': 'GOOGLE',
        'reverse': 'dns.google',
        'mobile': False,
        'proxy': False,
        'hosting': True,
    },
}
LOCATIONS['example.com'] = LOCATIONS['8.8.8.8']
LOCATIONS[OWN_IP] = LOCATIONS['1.1.1.1']
LOCATIONS['slow.test'] = LOCATIONS['1.1.1.1']

LOCALIZED = {
    'de': {'Australia': 'Australien', 'United States': 'Vereinigte Staaten'},
    'ru': {'Australia': 'Австралия', 'United States': 'США'},
}

FAILED = {
    '127.0.0.1': 'reserved range',
    '10.0.0.1': 'private range',
    '1.1.1.one': 'invalid query',
    '198.51.100.1': 'SSL unavailable for this endpoint',
}

DEFAULT_FIELDS = ['status', 'country', 'countryCode', 'region', 'regionName', 'city', 'zip',
                  'lat', 'lon', 'timezone', 'isp', 'org', 'as', 'query']

RATE_LIMIT_HEADERS = {'X-Rl': '44', 'X-Ttl': '60'}


def locate(query, request_query):
    if query in FAILED:
        return {'status': 'fail', 'message': FAILED[query], 'query': query}

    data = dict(LOCATIONS[query], status='success', query=query)

    lang = request_query.get('lang')
    if lang in LOCALIZED:
        data['country'] = LOCALIZED[lang].get(data['country'], data['country'])

    if 'fields' in request_query:
        fields = request_query['fields'].split(',')
    else:
        fields = DEFAULT_FIELDS

    return {name: value for name, value in data.items() if name in fields}


def record_request(request, body=None):
    request.app['requests'].append({
        'method': request.method,
        'path': request.path,
        'query': dict(request.query),
        'body': body,
    })


def check_key(request):
    if 'key' in request.query and request.query['key'] != API_KEY:
        raise web.HTTPForbidden()


def special_response(query):
    if query == 'malformed.test':
        return web.Response(text='<html>Service unavailable</html>', content_type='text/html')
    if query == 'array.test':
        return web.json_response(data=[{'status': 'success'}])
    if query == 'wrongtype.test':
        return web.json_response(data={'status': 'success', 'lat': 'north'})
    if query == 'ratelimit.test':
        return web.json_response(data={}, status=429, headers={'X-Rl': '0', 'X-Ttl': '42'})
    if query == 'broken.test':
        return web.Response(text='Internal Server Error', status=500)
    if query == 'ratelimit-invalid.test':
        return web.json_response(data={}, status=429, headers={'X-Rl': '0', 'X-Ttl': 'soon'})
    if query == 'ratelimit-missing.test':
        return web.json_response(data={}, status=429)
    return None


async def get_json(request):
    record_request(request)
    check_key(request)
    return web.json_response(data=locate(OWN_IP, request.query), headers=RATE_LIMIT_HEADERS)


async def get_json_query(request):
    record_request(request)
    check_key(request)

    query = request.match_info['query']
    if query == 'slow.test':
        await asyncio.sleep(1)

    response = special_response(query)
    if response is not None:
        return response

    return web.json_response(data=locate(query, request.query), headers=RATE_LIMIT_HEADERS)


async def post_batch(request):
    json_data = await request.json()
    record_request(request, json_data)
    check_key(request)

    if len(json_data) > 100:
        return web.json_response(data={'message': 'too many items'}, status=422)

    if 'malformed.batch' in json_data:
        return web.Response(text='<html>Service unavailable</html>', content_type='text/html')
    if 'object.batch' in json_data:
        return web.json_response(data={'status': 'success', 'query': '1.1.1.1'})
    if 'ratelimit.batch' in json_data:
        return web.json_response(data={}, status=429, headers={'X-Rl': '0', 'X-Ttl': '30'})

    if 'short.batch' in json_data:
        return web.json_response(data=[locate('1.1.1.1', request.query)], headers=RATE_LIMIT_HEADERS)

    data = [locate(query, request.query) for query in json_data]
    return web.json_response(data=data, headers=RATE_LIMIT_HEADERS)


@pytest_asyncio.fixture
async def ipapi_server():
    app = web.Application()
    app['requests'] = []

    app.router.add_get('/json', get_json)
    app.router.add_get('/json/{query}', get_json_query)
    app.router.add_post('/batch', post_batch)

    server = TestServer(app)

    await server.start_server()
    yield server
    await server.close()


@pytest.fixture
def requests_log(ipapi_server):
    return ipapi_server.app['requests']


@pytest.fixture
def config_local(ipapi_server):
    base_url = ipapi_config.base_url
    pro_url = ipapi_config.pro_url
    ipapi_config.base_url = str(ipapi_server.make_url(''))
    ipapi_config.pro_url = str(ipapi_server.make_url(''))
    yield ipapi_config
    ipapi_config.base_url = base_url
    ipapi_config.pro_url = pro_url


@pytest.fixture
def config_unreachable():
    with socket.socket() as sock:
        sock.bind(('127.0.0.1', 0))
        port = sock.getsockname()[1]

    base_url = ipapi_config.base_url
    ipapi_config.base_url = f'http://127.0.0.1:{port}/'
    yield ipapi_config
    ipapi_config.base_url = base_url


def pytest_addoption(parser):
    parser.addoption(
        "--run-real-tests", action="store_true", default=False,
        help="run tests with requests to ip-api.com service"
    )


def pytest_configure(config):
    config.addinivalue_line("markers", "real_service: mark test as real")


def pytest_collection_modifyitems(config, items):
    if config.getoption("--run-real-tests"):
        return
    skip_real_tests = pytest.mark.skip(reason="need --run-real-tests option to run")
    for item in items:
        if "real_service" in item.keywords:
            item.add_marker(skip_real_tests)
