"""
Clispec CLI Framework

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

from .at_least_one import AtLeastOneOfCliOption, AtLeastOneOfOption
from .base import CliOption, CliOptionBuilder, Requirement
from .basic import BasicCliOption, BasicOption
from .group import GroupCliOption, GroupOption
from .radio import RadioCliOption, RadioOption

__all__ = [
    "AtLeastOneOfCliOption",
    "AtLeastOneOfOption",
    "BasicCliOption",
    "BasicOption",
    "CliOption",
    "CliOptionBuilder",
    "GroupCliOption",
    "GroupOption",
    "RadioCliOption",
    "RadioOption",
    "Requirement",
]
