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


class MolgenisClientError(Exception):
    """Base exception for molgenis_client library errors."""


class ConfigError(MolgenisClientError):
    """Errors due to bad request options, CLI args or configuration."""


class BodyAlreadyReadError(MolgenisClientError):
    """A response body was read a second time."""


class APIError(MolgenisClientError):
    """HTTP/API related errors."""


class HttpStatusError(APIError):
    """
    Response received but its status is not ok. For JSON error bodies the
    complete ErrorEnvelope is attached as .envelope and the message is the
    first error's message; otherwise .envelope is None and the caller reads
    the body from .response.
    """

    def __init__(self, response, envelope=None):
        self.response = response
        self.envelope = envelope
        if envelope is not None:
            message = envelope.first_message
        else:
            message = f"HTTP {response.status} {response.reason or ''}".rstrip()
        super().__init__(message)

    @property
    def status(self):
        return self.response.status


class MalformedBodyError(APIError):
    """Body declared as JSON could not be parsed."""

    def __init__(self, message, response=None):
        self.response = response
        super().__init__(message)


class EnvelopeShapeError(APIError):
    """JSON body does not have the shape the call expects."""

    def __init__(self, message, response=None, body=None):
        self.response = response
        self.body = body
        super().__init__(message)
