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
# response_utils.py
"""
Response handling: the single-read Response wrapper, content-type
classification and the mapping of (JSON?, ok?) onto a return value or an
exception.
"""

import logging
import re
from dataclasses import dataclass
from typing import Any, Optional, Tuple

import config
from errors import (
    BodyAlreadyReadError,
    EnvelopeShapeError,
    HttpStatusError,
    MalformedBodyError,
)

logger = logging.getLogger(config.LOGGER_NAME)


class Response:
    """
    Wraps a requests.Response. The body may be read once, through either
    read_json() or read_text().
    """

    def __init__(self, raw):
        self.raw = raw
        self._body_used = False

    @property
    def status(self) -> int:
        return self.raw.status_code

    @property
    def ok(self) -> bool:
        return 200 <= self.raw.status_code < 300

    @property
    def reason(self):
        return self.raw.reason

    @property
    def url(self):
        return self.raw.url

    @property
    def headers(self):
        return self.raw.headers

    @property
    def body_used(self) -> bool:
        return self._body_used

    def _consume(self):
        if self._body_used:
            raise BodyAlreadyReadError(f"Body of response from {self.url} already read.")
        self._body_used = True

    def read_json(self) -> Any:
        self._consume()
        return self.raw.json()

    def read_text(self) -> str:
        self._consume()
        return self.raw.text

    def __repr__(self):
        return f"<Response [{self.status}]>"


@dataclass(frozen=True)
class ErrorDetail:
    message: str
    code: Optional[str] = None


@dataclass(frozen=True)
class ErrorEnvelope:
    errors: Tuple[ErrorDetail, ...]

    @property
    def first_message(self) -> str:
        return self.errors[0].message

    @classmethod
    def from_json(cls, body, response=None) -> "ErrorEnvelope":
        """
        Parse {"errors": [{"message": ..., "code": ...}, ...]}. Raises
        EnvelopeShapeError rather than producing an empty message.
        """
        errors = body.get("errors") if isinstance(body, dict) else None
        if not isinstance(errors, list) or not errors:
            raise EnvelopeShapeError(
                "Error response does not contain an 'errors' list.",
                response=response,
                body=body,
            )
        details = []
        for entry in errors:
            message = entry.get("message") if isinstance(entry, dict) else None
            if not isinstance(message, str):
                raise EnvelopeShapeError(
                    f"Error entry without a message: {entry!r}",
                    response=response,
                    body=body,
                )
            code = entry.get("code")
            details.append(ErrorDetail(message=message, code=None if code is None else str(code)))
        return cls(errors=tuple(details))


def normalise_content_type(value: str) -> str:
    return re.sub(r"\s+", "", value).replace('"', "").lower()


def is_json_response(response) -> bool:
    content_type = response.headers.get("content-type")
    if not content_type:
        return False
    return normalise_content_type(content_type) in config.JSON_CONTENT_TYPES


def read_json_body(response) -> Any:
    try:
        return response.read_json()
    except ValueError as exc:
        logger.error("Response declared JSON but could not parse JSON.")
        raise MalformedBodyError(
            f"Invalid JSON response (status {response.status}) from {response.url}",
            response=response,
        ) from exc


def resolve_result(response, is_json: bool) -> Any:
    """
    Return parsed JSON for ok JSON responses and the Response itself for other
    ok responses. Not-ok responses raise HttpStatusError, carrying the full
    ErrorEnvelope when the body is JSON and only the Response otherwise.
    """
    logger.debug(f"Response {response.status} from {response.url} (json={is_json}).")
    if is_json:
        body = read_json_body(response)
        if response.ok:
            return body
        raise HttpStatusError(response, ErrorEnvelope.from_json(body, response=response))
    if response.ok:
        return response
    raise HttpStatusError(response)


def resolve_job_handle(response, is_json: bool) -> str:
    """
    Return the job URL from an upload response: the text body of a non-JSON
    response, or a JSON string or the JOB_HANDLE_FIELD of a JSON object.
    An empty or missing job URL raises EnvelopeShapeError.
    """
    if not response.ok:
        # raises
        resolve_result(response, is_json)
    body = None
    if not is_json:
        handle = response.read_text()
    else:
        body = read_json_body(response)
        if isinstance(body, str):
            handle = body
        elif isinstance(body, dict):
            handle = body.get(config.JOB_HANDLE_FIELD)
        else:
            handle = None
    if not isinstance(handle, str) or not handle.strip():
        raise EnvelopeShapeError(
            "Upload response does not contain a job reference.",
            response=response,
            body=body,
        )
    return handle.strip()
