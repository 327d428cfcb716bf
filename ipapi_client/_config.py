# -*- coding: utf-8 -*-

from pydantic import BaseModel, HttpUrl


class Config(BaseModel):
    """The configuration of the ip-api.com service

    Some of these parameters can be changed in the future by the service.
    Therefore these parameters can be changed by a user if necessary.
    """

    base_url: HttpUrl = 'http://ip-api.com/'
    pro_url: HttpUrl = 'https://pro.ip-api.com/'
    json_endpoint: str = 'json'
    batch_endpoint: str = 'batch'


config = Config()
