"""Identifier case conversion shared by the registrar and the renderer."""

import re

_WORD_SPLIT = re.compile(r"[^0-9a-zA-Z]+")
_ACRONYM_BOUNDARY = re.compile(r"([A-Z]+)([A-Z][a-z])")
_CAMEL_BOUNDARY = re.compile(r"([a-z0-9])([A-Z])")


def to_pascal_case(text: str) -> str:
    """get_telescope_connected -> GetTelescopeConnected"""
    return "".join(part[:1].upper() + part[1:] for part in _WORD_SPLIT.split(text) if part)


def to_snake_case(text: str) -> str:
    """BayerOffsetX -> bayer_offset_x"""
    text = _ACRONYM_BOUNDARY.sub(r"\1_\2", text)
    text = _CAMEL_BOUNDARY.sub(r"\1_\2", text)
    return "_".join(part.lower() for part in _WORD_SPLIT.split(text) if part)
