# Session-authenticated request helper for the MOLGENIS REST API
# Copyright (c) 2025, the molgenis_client authors
#
# molgenis_client is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# molgenis_client is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.

import logging
from dataclasses import replace

import config
from request_config import RequestConfig, with_header

logger = logging.getLogger(config.LOGGER_NAME)


def resolve_auth(request_config: RequestConfig, token=None) -> RequestConfig:
    """
    Choose how a call authenticates. With a token the call is treated as
    cross-origin: the token travels in the x-molgenis-token header and the
    session cookie is not sent. Without one the call relies on the session
    cookie (same-origin). Any credential mode already on the config is
    replaced.
    """
    if token:
        logger.debug("Using token authentication.")
        resolved = with_header(request_config, config.TOKEN_HEADER, token)
        return replace(resolved, credentials=config.CORS)
    if request_config.credentials not in (None, config.SAME_ORIGIN):
        logger.debug(
            f"No token given; sending {config.SAME_ORIGIN} instead of {request_config.credentials}."
        )
    return replace(request_config, credentials=config.SAME_ORIGIN)


def sends_cookies(request_config: RequestConfig) -> bool:
    return request_config.credentials == config.SAME_ORIGIN
