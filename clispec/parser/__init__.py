"""
Clispec CLI Framework

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

from .flag_parser import FlagDefinition, FlagParser
from .query import query_to_args, url_to_args

__all__ = [
    "FlagDefinition",
    "FlagParser",
    "query_to_args",
    "url_to_args",
]
