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

from dataclasses import dataclass, field
from typing import Tuple

from requests.structures import CaseInsensitiveDict

USER_AGENT = "molgenis_client"
LOGGER_NAME = "molgenis_client"

TOKEN_HEADER = "x-molgenis-token"
TOKEN_ENV_VAR = "MOLGENIS_TOKEN"

SAME_ORIGIN = "same-origin"
CORS = "cors"

METHODS = ("GET", "POST", "PUT", "PATCH", "DELETE")

# compared against the normalised header value (lowercase, no spaces or quotes)
JSON_CONTENT_TYPES = ("application/json", "application/json;charset=utf-8")

# field of a JSON upload response that carries the job URL
JOB_HANDLE_FIELD = "text"
UPLOAD_FIELD = "file"


@dataclass(frozen=True)
class DefaultConfig:
    """
    Request defaults shared by every call of a client. Immutable: header
    pairs are stored as a tuple and handed out as a fresh mapping on each read.
    """

    header_pairs: Tuple[Tuple[str, str], ...] = field(
        default=(
            ("Accept", "application/json"),
            ("Content-Type", "application/json"),
            ("X-Requested-With", "XMLHttpRequest"),
        )
    )
    credentials: str = SAME_ORIGIN

    @property
    def headers(self) -> CaseInsensitiveDict:
        return CaseInsensitiveDict(self.header_pairs)


DEFAULT_CONFIG = DefaultConfig()
