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

import json
import logging
import os
from contextlib import contextmanager
from urllib.parse import urljoin

import requests
from requests.cookies import RequestsCookieJar

import config
from auth import resolve_auth, sends_cookies
from request_config import RequestConfig, merge_options
from response_utils import (
    Response,
    is_json_response,
    resolve_job_handle,
    resolve_result,
)

logger = logging.getLogger(config.LOGGER_NAME)


def encode_body(body):
    if isinstance(body, (dict, list)):
        return json.dumps(body)
    return body


def detach_cookies(prepared, cookie_header=None):
    prepared.headers.pop("Cookie", None)
    prepared.prepare_cookies(RequestsCookieJar())
    if cookie_header is not None:
        prepared.headers["Cookie"] = cookie_header


def send_without_cookies(session, prepared, settings, cookie_header=None):
    """
    Send with the session's cookie jar detached, following redirects hop by
    hop so that no hop picks the jar up again.
    """
    history = []
    while True:
        detach_cookies(prepared, cookie_header)
        response = session.send(prepared, allow_redirects=False, **settings)
        if not response.is_redirect:
            response.history = history
            return response
        if len(history) >= session.max_redirects:
            raise requests.exceptions.TooManyRedirects(
                f"Exceeded {session.max_redirects} redirects.", response=response
            )
        history.append(response)
        prepared = next(
            session.resolve_redirects(response, prepared, yield_requests=True, **settings)
        )
        logger.debug(f"Redirected to {prepared.method} {prepared.url}")


def send_request(session, request, with_cookies=True, explicit_cookie=False):
    """
    Prepare and send a requests.Request through the session. The session's
    cookie jar is only attached when with_cookies is set; a Cookie header the
    caller set explicitly is always kept, across redirects too.
    """
    prepared = session.prepare_request(request)
    settings = session.merge_environment_settings(prepared.url, {}, None, None, None)
    logger.debug(f"{prepared.method} {prepared.url}")
    if with_cookies:
        return Response(session.send(prepared, **settings))
    cookie_header = prepared.headers.get("Cookie") if explicit_cookie else None
    return Response(send_without_cookies(session, prepared, settings, cookie_header))


@contextmanager
def upload_payload(file):
    if isinstance(file, os.PathLike):
        with open(file, "rb") as fh:
            yield (os.path.basename(os.fspath(file)), fh)
    else:
        yield file


class MolgenisClient:
    """
    Calls a MOLGENIS REST backend. Each verb method merges its options with
    the client defaults, resolves authentication, sends the request and
    returns the parsed JSON body (or the Response for non-JSON bodies).
    Not-ok responses raise HttpStatusError carrying the full error envelope.
    Network failures propagate as requests exceptions.
    """

    def __init__(self, base_url=None, token=None, defaults=config.DEFAULT_CONFIG, session=None):
        self.base_url = base_url.rstrip("/") + "/" if base_url else None
        self.token = token
        self.defaults = defaults
        self._owns_session = session is None
        if session is None:
            session = requests.Session()
            session.headers["User-Agent"] = config.USER_AGENT
        self.session = session

    def close(self):
        if self._owns_session:
            self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def build_url(self, url: str) -> str:
        if self.base_url is None:
            return url
        return urljoin(self.base_url, url.lstrip("/"))

    def _send(self, url, request_config: RequestConfig) -> Response:
        request = requests.Request(
            request_config.method,
            self.build_url(url),
            headers=request_config.headers,
            data=encode_body(request_config.body),
        )
        return send_request(
            self.session,
            request,
            with_cookies=sends_cookies(request_config),
            explicit_cookie="Cookie" in request_config.headers,
        )

    def request(self, method, url, options=None, force_raw=False, token=None):
        request_config = merge_options(method, options, force=force_raw, defaults=self.defaults)
        request_config = resolve_auth(request_config, self.token if token is None else token)
        response = self._send(url, request_config)
        return resolve_result(response, is_json_response(response))

    def get(self, url, options=None, force_raw=False, token=None):
        return self.request("GET", url, options, force_raw, token)

    def post(self, url, options=None, force_raw=False, token=None):
        return self.request("POST", url, options, force_raw, token)

    def put(self, url, options=None, force_raw=False, token=None):
        return self.request("PUT", url, options, force_raw, token)

    def patch(self, url, options=None, force_raw=False, token=None):
        return self.request("PATCH", url, options, force_raw, token)

    def delete(self, url, options=None, force_raw=False, token=None):
        return self.request("DELETE", url, options, force_raw, token)

    def upload_file(self, url, file) -> str:
        """
        POST file as the single multipart field 'file' using the session
        cookie, and return the job URL the server answers with. An
        os.PathLike file is opened and sent under its base name; str, bytes,
        file objects and (filename, fileobj[, content_type]) tuples are sent
        as the file content itself.
        """
        with upload_payload(file) as payload:
            request = requests.Request(
                "POST", self.build_url(url), files={config.UPLOAD_FIELD: payload}
            )
            response = send_request(self.session, request, with_cookies=True)
        return resolve_job_handle(response, is_json_response(response))
