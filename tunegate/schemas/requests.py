"""
Query parameter schemas using Pydantic.

Provides type-safe validation for gateway query strings. Values left
unset fall back to each endpoint's defaults.
"""

from typing import AbstractSet, Annotated, Any, Dict, Mapping, Optional

from pydantic import BaseModel, Field, field_validator

# Query-string names that differ from the schema field names
_ALIASES = {
    "forceRefresh": "force_refresh",
}


class GatewayQueryParams(BaseModel):
    """Secondary parameters shared by all gateway endpoints."""

    limit: Optional[Annotated[int, Field(ge=1)]] = None
    offset: Optional[Annotated[int, Field(ge=0)]] = None
    filter: Optional[str] = None
    country: Optional[str] = None
    language: Optional[str] = None
    force_refresh: bool = False
    multi: bool = False

    @field_validator("country")
    @classmethod
    def normalize_country(cls, v: Optional[str]) -> Optional[str]:
        """Region code, upper-cased. Unknown codes are left to the upstream."""
        if v is None:
            return v
        return v.strip().upper() or None

    @field_validator("filter", "language")
    @classmethod
    def strip_text(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        return v.strip() or None

    @field_validator("force_refresh", "multi", mode="before")
    @classmethod
    def parse_bool(cls, v: Any) -> bool:
        """Parse boolean from string query parameter."""
        if isinstance(v, bool):
            return v
        if isinstance(v, str):
            return v.lower() in ("true", "t", "yes", "y", "1")
        return bool(v)

    class Config:
        extra = "ignore"

    def to_params(self) -> Dict[str, Any]:
        """Set values only, ready to layer over endpoint defaults."""
        params = self.model_dump(exclude_none=True)
        for flag in ("force_refresh", "multi"):
            if not params.get(flag):
                params.pop(flag, None)
        return params


def parse_query_params(
    args: Mapping[str, str], accepted: Optional[AbstractSet[str]] = None
) -> GatewayQueryParams:
    """
    Parse and validate gateway query parameters.

    Empty strings are treated as absent so that ``?limit=`` falls back
    to the endpoint default. Parameters outside ``accepted`` are dropped
    before validation, so an endpoint never rejects a value it ignores.

    Args:
        args: Query-string mapping (typically ``request.args``).
        accepted: Field names the endpoint reads. None keeps them all.

    Returns:
        Validated GatewayQueryParams instance.

    Raises:
        pydantic.ValidationError: If a value is out of range or malformed.
    """
    data = {}
    for key, value in args.items():
        if value is None or value == "":
            continue
        name = _ALIASES.get(key, key)
        if accepted is not None and name not in accepted:
            continue
        data[name] = value
    return GatewayQueryParams(**data)
