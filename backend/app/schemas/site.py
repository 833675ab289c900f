"""Site Schemas — Pydantic models for site creation, partial update and responses.

Invariants:
    - SiteCreate: name non-empty, url is a well-formed http(s) URL, type in SiteType
    - SiteUpdate: every field optional; supplied fields validated individually
    - SiteUpdate rejects explicit null for name/url/type/status (null only clears wpConfig)
    - url is stored exactly as sent (after strip): no normalization, so uniqueness is literal
    - Responses never carry the WordPress password, only whether one is stored

Design Decisions:
    - URL checked with a TypeAdapter(AnyHttpUrl) but kept as str: HttpUrl would append a
      trailing slash and silently change the stored value
    - model_fields_set distinguishes "wpConfig omitted" from "wpConfig: null"
"""

from datetime import datetime
from uuid import UUID

from pydantic import (
    AnyHttpUrl, BaseModel, ConfigDict, Field, TypeAdapter, ValidationError,
    field_validator, model_validator,
)
from pydantic.alias_generators import to_camel

from app.core.domain_types import SiteStatus, SiteType
from app.core.platform_config import WordPressConfig

_URL_ADAPTER = TypeAdapter(AnyHttpUrl)


def _check_url(v: str) -> str:
    v = v.strip()
    try:
        _URL_ADAPTER.validate_python(v)
    except ValidationError:
        raise ValueError("Please enter a valid URL")
    return v


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True,
    )


class WordPressConfigIn(_CamelModel):
    """WordPress credentials bundle — all parts optional."""
    username: str | None = Field(None, max_length=200)
    password: str | None = Field(None, max_length=500)
    api_url: str | None = Field(None, max_length=2000)

    def to_domain(self) -> WordPressConfig:
        return WordPressConfig(
            username=self.username, password=self.password, api_url=self.api_url,
        )


class SiteCreate(_CamelModel):
    """Site creation body."""
    name: str = Field(min_length=1, max_length=200)
    url: str = Field(max_length=2000)
    type: SiteType
    wp_config: WordPressConfigIn | None = None

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        return _check_url(v)


class SiteUpdate(_CamelModel):
    """Partial site update — omitted fields stay unchanged."""
    name: str | None = Field(None, min_length=1, max_length=200)
    url: str | None = Field(None, max_length=2000)
    type: SiteType | None = None
    status: SiteStatus | None = None
    wp_config: WordPressConfigIn | None = None

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str | None) -> str | None:
        return _check_url(v) if v is not None else v

    @model_validator(mode="after")
    def reject_null_scalars(self):
        for name in ("name", "url", "type", "status"):
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self

    @property
    def wp_config_supplied(self) -> bool:
        return "wp_config" in self.model_fields_set


class SiteCounts(BaseModel):
    """Derived counts of a site's dependent records."""
    articles: int = 0
    automations: int = 0
    sources: int = 0


class SiteOut(_CamelModel):
    """Site as returned by create/update."""
    id: UUID
    name: str
    url: str
    type: SiteType
    status: SiteStatus
    created_at: datetime
    updated_at: datetime


class SiteSummary(SiteOut):
    """List item — site plus derived counts."""
    counts: SiteCounts = Field(default_factory=SiteCounts, alias="_count")


class WordPressConfigOut(_CamelModel):
    """WordPress config as shown to the owner; the password is never echoed."""
    username: str | None = None
    api_url: str | None = None
    has_password: bool = False

    @classmethod
    def from_record(cls, record: dict | None) -> "WordPressConfigOut | None":
        if not record:
            return None
        return cls(
            username=record.get("username"),
            api_url=record.get("apiUrl"),
            has_password=bool(record.get("password")),
        )


class SiteDetail(SiteSummary):
    """Single site — includes platform config (password masked)."""
    wp_config: WordPressConfigOut | None = None


class SiteListResponse(BaseModel):
    sites: list[SiteSummary]


class SiteResponse(BaseModel):
    site: SiteDetail


class SiteMutationResponse(BaseModel):
    message: str
    site: SiteOut


class DashboardSummary(_CamelModel):
    """Dashboard stat cards."""
    sites: int
    articles: int
    automations: int
    tokens_balance: int


def site_summary(site, counts: dict[str, int]) -> SiteSummary:
    """Build a list item from an ORM row and its counts."""
    out = SiteOut.model_validate(site)
    return SiteSummary(**out.model_dump(), counts=SiteCounts(**counts))


def site_detail(site, counts: dict[str, int]) -> SiteDetail:
    out = SiteOut.model_validate(site)
    return SiteDetail(
        **out.model_dump(), counts=SiteCounts(**counts),
        wp_config=WordPressConfigOut.from_record(site.wp_config),
    )
