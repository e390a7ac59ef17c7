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

import argparse
import logging
import os
import sys
from pathlib import Path

import config
from errors import ConfigError


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Call a MOLGENIS REST API endpoint and print the result."
    )
    parser.add_argument("url", help="Endpoint URL, absolute or relative to --base_url.")
    parser.add_argument(
        "--base_url",
        required=False,
        help="Base URL of the MOLGENIS server, e.g. https://molgenis.example.org.",
    )
    parser.add_argument(
        "--body", required=False, help="Request body, usually a JSON document."
    )
    parser.add_argument(
        "--force_raw",
        action="store_true",
        help="Send the given headers as they are, without the default headers.",
    )
    parser.add_argument(
        "--header",
        action="append",
        default=[],
        metavar="NAME:VALUE",
        help="Extra request header. May be given more than once.",
    )
    parser.add_argument(
        "--log_file",
        required=False,
        help="Write log messages to this file instead of stderr.",
    )
    parser.add_argument(
        "--log_level",
        required=False,
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level.",
    )
    parser.add_argument(
        "--method",
        required=False,
        type=str.upper,
        choices=config.METHODS,
        help="HTTP method (default: GET).",
    )
    parser.add_argument(
        "--token",
        required=False,
        default=os.environ.get(config.TOKEN_ENV_VAR),
        help=f"API token for cross-origin calls (default: ${config.TOKEN_ENV_VAR}).",
    )
    parser.add_argument(
        "--upload",
        required=False,
        metavar="FILE",
        help="Upload FILE with a multipart POST and print the job URL.",
    )
    return parser.parse_args(argv)


def parse_header_args(values):
    headers = {}
    for value in values or []:
        name, sep, header_value = value.partition(":")
        if not sep or not name.strip():
            raise ConfigError(f"Invalid header {value!r} - use NAME:VALUE.")
        headers[name.strip()] = header_value.strip()
    return headers


def check_required_args(args):
    if args.upload:
        if args.method not in (None, "POST"):
            raise ConfigError("--upload always uses POST; do not combine it with --method.")
        if args.body or args.header or args.force_raw:
            raise ConfigError("--upload sends only the file; --body, --header and --force_raw do not apply.")
        if not Path(args.upload).is_file():
            raise ConfigError(f"Upload file '{args.upload}' does not exist.")


def init_logger(log_level="INFO", log_file=None):
    logger = logging.getLogger(config.LOGGER_NAME)
    level = logging.getLevelName(log_level)
    logger.setLevel(level)
    logger.propagate = False
    formats = {
        "file_debug": "%(asctime)s - %(levelname)s: - %(module)s:%(lineno)d - %(message)s",
        "file": "%(asctime)s - %(levelname)s: - %(message)s",
        "interactive_debug": "%(levelname)s: - %(module)s:%(lineno)d - %(message)s",
        "interactive": "%(levelname)s: %(message)s",
    }

    if log_file:
        log_path = Path(log_file)
        if log_path.exists() and not os.access(log_path, os.W_OK):
            raise ConfigError(f"Log file {log_file} exists but is not writable.")
        handler = logging.FileHandler(log_file)
        fmt = formats["file_debug"] if log_level == "DEBUG" else formats["file"]
    else:
        handler = logging.StreamHandler(sys.stderr)
        fmt = (
            formats["interactive_debug"]
            if log_level == "DEBUG"
            else formats["interactive"]
        )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt))
    logger.handlers.clear()
    logger.addHandler(handler)
    return logger
