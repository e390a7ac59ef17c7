#!/usr/bin/env python3
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
import sys
import traceback
from pathlib import Path

import requests

from api_client import MolgenisClient
from errors import HttpStatusError, MolgenisClientError
from response_utils import Response
from utils import check_required_args, init_logger, parse_args, parse_header_args


def format_result(result):
    if isinstance(result, Response):
        text = result.read_text()
        return f"HTTP {result.status}\n{text}" if text else f"HTTP {result.status}"
    if isinstance(result, str):
        return result
    return json.dumps(result, indent=2)


def main(argv=None):
    logger = None
    try:
        args = parse_args(argv)
        logger = init_logger(args.log_level, args.log_file)
        check_required_args(args)
        headers = parse_header_args(args.header)
        with MolgenisClient(base_url=args.base_url, token=args.token) as client:
            if args.upload:
                result = client.upload_file(args.url, Path(args.upload))
            else:
                options = {}
                if headers:
                    options["headers"] = headers
                if args.body is not None:
                    options["body"] = args.body
                result = client.request(
                    args.method or "GET", args.url, options, force_raw=args.force_raw
                )
        print(format_result(result))
        return 0
    except HttpStatusError as e:
        # report the status and whatever detail the server sent
        if e.envelope is not None:
            detail = "; ".join(error.message for error in e.envelope.errors)
        else:
            detail = e.response.read_text() if not e.response.body_used else ""
        message = f"Request failed with status {e.status}: {detail or e}"
    except (MolgenisClientError, requests.exceptions.RequestException) as e:
        message = str(e)
    except Exception:
        # Unexpected / programming error - print traceback to help debugging.
        traceback.print_exc()
        return 2
    if logger is not None:
        logger.error(message)
    else:
        sys.stderr.write(f"ERROR: {message}\n")
    return 1


if __name__ == "__main__":
    sys.exit(main())
