"""
Module 01 - Schemas
File: request.py

Purpose: The immutable request configuration handed to the core.
A RequestSpec is built once from parsed command-line options and is
never mutated afterwards; every downstream step reads from it.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from .errors import ConfigurationException, MissingBodyError


HttpMethod = Literal[
    "GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "CONNECT", "TRACE",
]

# Methods that cannot be sent without a body
BODY_REQUIRED_METHODS = frozenset({"POST", "PUT"})

HEAD = "HEAD"


class RequestSpec(BaseModel):
    """
    Everything needed to perform one visit.

    IMPORTANT:
    - url is the normalized absolute URL (see core.http.url.normalize_url)
    - headers keep their raw "Key: Value" form and their order
    - body is either literal content, "@path" for a file, or None
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    method: HttpMethod = Field(
        default="GET",
        description="Requested HTTP method (before the head-only override)",
    )
    url: str = Field(
        ...,
        description="Normalized absolute target URL",
        min_length=1,
    )
    body: str | None = Field(
        default=None,
        description="Literal request body, or '@path' to stream a file",
    )
    headers: tuple[str, ...] = Field(
        default=(),
        description="Raw header strings in command-line order",
    )
    follow_redirects: bool = Field(
        default=False,
        description="Manually re-issue the request at the Location of a 3xx",
    )
    head_only: bool = Field(
        default=False,
        description="Force HEAD and suppress body output",
    )

    @field_validator("method", mode="before")
    @classmethod
    def _upper_method(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().upper()
        return value

    @field_validator("headers", mode="before")
    @classmethod
    def _headers_tuple(cls, value: Any) -> Any:
        if value is None:
            return ()
        if isinstance(value, list):
            return tuple(value)
        return value

    @model_validator(mode="after")
    def _require_body(self) -> "RequestSpec":
        # Checked on the requested method, before the head-only override.
        # MissingBodyError is not a ValueError, so pydantic lets it through.
        if self.method in BODY_REQUIRED_METHODS and self.body is None:
            raise MissingBodyError(self.method)
        return self

    @property
    def effective_method(self) -> str:
        """The method actually sent: HEAD when head-only is set."""
        return HEAD if self.head_only else self.method

    @property
    def is_file_body(self) -> bool:
        return self.body is not None and self.body.startswith("@")

    @classmethod
    def from_options(cls, **options: Any) -> "RequestSpec":
        """
        Build a RequestSpec, converting schema failures to ConfigurationException.

        Raises:
            MissingBodyError: POST or PUT without a body
            ConfigurationException: any other invalid option (e.g. unknown method)
        """
        try:
            return cls(**options)
        except ValidationError as e:
            problems = "; ".join(
                f"{'.'.join(str(p) for p in err['loc']) or 'request'}: {err['msg']}"
                for err in e.errors()
            )
            raise ConfigurationException(
                f"invalid request options: {problems}",
                details={"errors": [err["msg"] for err in e.errors()]},
            ) from e
