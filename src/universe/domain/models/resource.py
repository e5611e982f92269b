import re

from dataclasses import dataclass
from pydantic import BaseModel
from typing import (
    Any,
    Literal,
    Mapping
)

SCHEME_RE = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.-]*://")


class HttpResource(BaseModel):
    url             : str
    query           : dict[str, Any] = {}
    with_credentials: bool           = True
    headers         : dict[str, str] = {}


class JsonpResource(BaseModel):
    url  : str
    jsonp: Literal[True] = True


Resource = HttpResource | JsonpResource


@dataclass(frozen=True)
class RelativePath:
    path: str


@dataclass(frozen=True)
class AbsoluteUrl:
    url: str


@dataclass(frozen=True)
class Scalar:
    value: Any


@dataclass(frozen=True)
class WrappedUrl:
    holder: Mapping[str, Any]
    inner : "PathLike"


PathLike = RelativePath | AbsoluteUrl | Scalar | WrappedUrl


def classify(value: Any) -> PathLike:
    """Tag a resource value with the variant that decides how it expands."""
    if isinstance(value, str):
        if value.startswith("//") or SCHEME_RE.match(value):
            return AbsoluteUrl(value)

        if value.startswith("/"):
            return RelativePath(value)

        return Scalar(value)

    if isinstance(value, Mapping) and "url" in value:
        return WrappedUrl(value, classify(value["url"]))

    return Scalar(value)
