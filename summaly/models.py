"""Core data models for summaly."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, NonNegativeFloat, PositiveInt

from summaly.plugins.base import SummalyPlugin


class ScrapingOptions(BaseModel, frozen=True):
    """Configuration handed to a plugin and on to the fetcher.

    ``None`` means "use the fetcher's configured default".
    """

    lang: str | None = None
    user_agent: str | None = None
    response_timeout: NonNegativeFloat | None = None
    operation_timeout: NonNegativeFloat | None = None
    follow_redirects: bool = True
    content_length_limit: PositiveInt | None = None
    content_length_required: bool = False
    cookie: str | None = None


class SummalyOptions(BaseModel):
    """Options accepted by :func:`summaly.summaly`."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    lang: str | None = None
    follow_redirects: bool = True
    plugins: list[SummalyPlugin] = Field(default_factory=list)
    user_agent: str | None = None
    response_timeout: NonNegativeFloat | None = None
    operation_timeout: NonNegativeFloat | None = None
    content_length_limit: PositiveInt | None = None
    content_length_required: bool = False

    def scraping_options(self) -> ScrapingOptions:
        return ScrapingOptions(
            lang=self.lang,
            user_agent=self.user_agent,
            response_timeout=self.response_timeout,
            operation_timeout=self.operation_timeout,
            follow_redirects=self.follow_redirects,
            content_length_limit=self.content_length_limit,
            content_length_required=self.content_length_required,
        )


class Player(BaseModel, frozen=True):
    """Embeddable player advertised by the page (twitter:player / og:video)."""

    url: str | None = None
    width: int | None = None
    height: int | None = None
    allow: list[str] = Field(default_factory=list)


class Summary(BaseModel, frozen=True, populate_by_name=True):
    """Normalized link preview."""

    title: str | None = None
    icon: str | None = None
    description: str | None = None
    thumbnail: str | None = None
    sitename: str | None = None
    player: Player = Field(default_factory=Player)
    sensitive: bool = False
    activity_pub: str | None = Field(default=None, alias="activityPub")
    fediverse_creator: str | None = Field(default=None, alias="fediverseCreator")
    url: str | None = None
