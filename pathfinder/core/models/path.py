import os
import posixpath
import re
from functools import reduce
from typing import Any, Dict, Iterator, Tuple, Union
from urllib.parse import SplitResult, quote, unquote, urlsplit

from pydantic import BaseModel, ConfigDict, Field, field_validator

from pathfinder.core.errors import InvalidURLError

PathLike = Union[str, "os.PathLike[str]"]

SEPARATOR = "/"
_REPEATED_SEPARATORS = re.compile(r"/{2,}")


def _canonicalize(raw: str) -> str:
    raw = _REPEATED_SEPARATORS.sub(SEPARATOR, raw)
    if len(raw) > 1 and raw.endswith(SEPARATOR):
        raw = raw.rstrip(SEPARATOR)
    return raw


def _append_component(base: str, component: str) -> str:
    if not component:
        return base
    if not base:
        return component
    return f"{base}/{component}"


class Path(BaseModel):
    """Immutable description of a file-system location.

    Only the textual identifier takes part in equality and hashing. Nothing
    here touches the file system; see ``DirectoryWalker`` and ``PathActions``
    for the host-delegating operations.
    """

    model_config = ConfigDict(frozen=True)

    raw_value: str = Field(default="", description="Canonical location identifier")
    custom_attributes: Dict[str, Any] = Field(
        default_factory=dict,
        description="Caller-defined scratch values, never persisted",
    )

    def __init__(self, raw_value: Any = "", **data: Any):
        super().__init__(raw_value=raw_value, **data)

    @field_validator("raw_value", mode="before")
    @classmethod
    def canonicalize(cls, v: Any) -> str:
        if isinstance(v, os.PathLike):
            v = os.fspath(v)
        if not isinstance(v, str):
            raise ValueError(f"expected str or os.PathLike, not {type(v).__name__}")

        return _canonicalize(v)

    @classmethod
    def from_url(cls, url: Union[str, SplitResult]) -> "Path":
        """Build a path from a ``file:`` URL.

        Raises:
            InvalidURLError: The URL cannot be parsed or does not name a
                local file-system location.
        """
        if isinstance(url, SplitResult):
            parts = url
        else:
            if not isinstance(url, str) or not url.strip():
                raise InvalidURLError(url, "empty URL")
            try:
                parts = urlsplit(url.strip())
            except ValueError as e:
                raise InvalidURLError(url, str(e)) from e

        if not parts.scheme:
            raise InvalidURLError(url, "missing scheme")
        if parts.scheme.lower() != "file":
            raise InvalidURLError(url, f"unsupported scheme '{parts.scheme}'")
        if parts.netloc not in ("", "localhost"):
            raise InvalidURLError(url, f"non-local host '{parts.netloc}'")

        path = unquote(parts.path)
        if not path:
            raise InvalidURLError(url, "URL has no path")
        return cls(path)

    @classmethod
    def from_file_system_path(cls, path: PathLike) -> "Path":
        return cls(os.fspath(path))

    # Identity

    def __str__(self) -> str:
        return self.raw_value

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.raw_value!r})"

    def __fspath__(self) -> str:
        return self.raw_value

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Path):
            return self.raw_value == other.raw_value
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.raw_value)

    def __lt__(self, other: object) -> bool:
        if isinstance(other, Path):
            return self.raw_value < other.raw_value
        return NotImplemented

    def __iter__(self) -> Iterator[str]:  # type: ignore[override]
        """Iterate over ``components``, not the model fields"""
        return iter(self.components)

    # Composition

    def joinpath(self, *components: Union[PathLike, "Path"]) -> "Path":
        raw = reduce(
            lambda base, component: self._join_text(base, component),
            components,
            self.raw_value,
        )
        return type(self)(raw)

    def __truediv__(self, other: Union[PathLike, "Path"]) -> "Path":
        return self.joinpath(other)

    def __rtruediv__(self, other: PathLike) -> "Path":
        return type(self)(os.fspath(other)).joinpath(self)

    def __add__(self, other: Union[PathLike, "Path"]) -> "Path":
        return self.joinpath(other)

    def __getitem__(self, component: Union[PathLike, "Path"]) -> "Path":
        return self.joinpath(component)

    @classmethod
    def _join_text(cls, base: str, component: Union[PathLike, "Path"]) -> str:
        if isinstance(component, Path):
            text = component.raw_value
        else:
            text = os.fspath(component)
        return _canonicalize(_append_component(base, text))

    # Naming

    @property
    def name(self) -> str:
        """Last path component"""
        if self.raw_value == SEPARATOR:
            return SEPARATOR
        return posixpath.basename(self.raw_value)

    @property
    def file_extension(self) -> str:
        """Extension of the last component without the dot, or empty"""
        return posixpath.splitext(self.name)[1][1:]

    @property
    def stem(self) -> str:
        name = self.name
        extension = self.file_extension
        return name[: -(len(extension) + 1)] if extension else name

    @property
    def parent(self) -> "Path":
        if self.raw_value in ("", SEPARATOR):
            return type(self)(self.raw_value)
        return type(self)(posixpath.dirname(self.raw_value))

    @property
    def components(self) -> Tuple[str, ...]:
        parts = tuple(part for part in self.raw_value.split(SEPARATOR) if part)
        if self.is_absolute:
            return (SEPARATOR,) + parts
        return parts

    @property
    def is_absolute(self) -> bool:
        return self.raw_value.startswith(SEPARATOR)

    @property
    def url(self) -> str:
        """``file://`` URL of the absolute form of this path"""
        return "file://" + quote(os.path.abspath(self.raw_value or "."))

    def appending_extension(self, extension: str) -> "Path":
        extension = extension.lstrip(".")
        if not extension:
            return self
        if self.name in ("", SEPARATOR):
            raise ValueError(f"Cannot append an extension to {self.raw_value!r}")
        return type(self)(f"{self.raw_value}.{extension}")

    def deleting_extension(self) -> "Path":
        extension = self.file_extension
        if not extension:
            return self
        return type(self)(self.raw_value[: -(len(extension) + 1)])
