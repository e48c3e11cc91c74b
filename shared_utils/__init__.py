"""
Shared Utilities Package - Common utilities for the integrity and poll engines.
"""

from .common import parse_timestamp, get_timestamp_string, setup_logging

__all__ = ['parse_timestamp', 'get_timestamp_string', 'setup_logging']
