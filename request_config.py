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
# request_config.py
"""
Typed request options and the merge of caller options with client defaults.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field, fields, replace
from typing import Any, Optional

from requests.structures import CaseInsensitiveDict

import config
from errors import ConfigError

logger = logging.getLogger(config.LOGGER_NAME)


@dataclass
class RequestOptions:
    method: Optional[str] = None
    headers: Optional[Mapping] = None
    body: Any = None
    credentials: Optional[str] = None

    @classmethod
    def coerce(cls, options) -> "RequestOptions":
        if options is None:
            return cls()
        if isinstance(options, cls):
            return options
        if not isinstance(options, Mapping):
            raise ConfigError(
                f"Request options must be a mapping or RequestOptions, not {type(options).__name__}."
            )
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(options) - known)
        if unknown:
            raise ConfigError(f"Unknown request option(s): {', '.join(unknown)}.")
        return cls(**options)


@dataclass
class RequestConfig:
    method: str
    headers: CaseInsensitiveDict = field(default_factory=CaseInsensitiveDict)
    body: Any = None
    credentials: Optional[str] = None
    force_raw: bool = False


def check_method(method: str) -> str:
    verb = (method or "").upper()
    if verb not in config.METHODS:
        raise ConfigError(
            f"Unsupported HTTP method {method!r}; expected one of {', '.join(config.METHODS)}."
        )
    return verb


def merge_headers(base, overrides) -> CaseInsensitiveDict:
    """
    Case-insensitive union of two header maps. A name present in both keeps
    the position of the base entry and takes the override's value and spelling.
    """
    merged = CaseInsensitiveDict(base or {})
    for name, value in (overrides or {}).items():
        merged[name] = value
    return merged


def merge_options(method, options=None, force=False, defaults=config.DEFAULT_CONFIG):
    """
    Build the configuration for a single call.

    Without force the caller options are laid over the defaults field by field
    and header by header. With force the defaults are ignored and the options
    are used as given. In both modes the method is the verb of the call.

    The credentials carried here are provisional: resolve_auth sets the final
    credential mode from the token, same-origin without one and cors with one.
    """
    verb = check_method(method)
    opts = RequestOptions.coerce(options)
    if opts.method and opts.method.upper() != verb:
        logger.debug(f"Ignoring method {opts.method} in options; sending {verb}.")

    if force:
        return RequestConfig(
            method=verb,
            headers=CaseInsensitiveDict(opts.headers or {}),
            body=opts.body,
            credentials=opts.credentials,
            force_raw=True,
        )

    return RequestConfig(
        method=verb,
        headers=merge_headers(defaults.headers, opts.headers),
        body=opts.body,
        credentials=opts.credentials or defaults.credentials,
    )


def with_header(request_config: RequestConfig, name, value) -> RequestConfig:
    headers = merge_headers(request_config.headers, {name: value})
    return replace(request_config, headers=headers)
