"""
Pinion CLI Framework

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

import logging

from .application import Application, ParseResult
from .exceptions import DeclarationError, ParseError, PinionError

logger = logging.getLogger("pinion")


__all__ = [
    "Application",
    "ParseResult",
    "PinionError",
    "DeclarationError",
    "ParseError",
]
