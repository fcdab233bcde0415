"""Utility functions for the mock data service."""

from mockdata.utils.helpers import (
    to_boolean,
    int_prefix,
    parse_int,
    split_list,
    get_path,
    set_path,
    flatten_dict,
)

__all__ = [
    "to_boolean",
    "int_prefix",
    "parse_int",
    "split_list",
    "get_path",
    "set_path",
    "flatten_dict",
]
