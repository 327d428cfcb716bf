# -*- coding: utf-8 -*-

import logging


logger = logging.getLogger('ipapi_client')
logger.addHandler(logging.NullHandler())
