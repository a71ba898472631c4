"""Site stats: insights, time-bucketed data and the last post insight.

Insights describe a site in general, regardless of a time window. Time stats
cover one period (day, week, month or year) ending on a given date.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import date, datetime
import html
from typing import Any, Self

from pydantic import AliasPath, Field, StrictInt, StrictStr

from wpcom_remote.core.enums import StatsPeriodUnit, UnknownCaseEnum
from wpcom_remote.core.exceptions import FetchError
from wpcom_remote.core.types import Failure, Result, Success
from wpcom_remote.fetch.chain import ChainedFetch, ChainStep
from wpcom_remote.fetch.fetcher import TypedFetcher, format_query_date
from wpcom_remote.resources.registry import insight, resource, time_stats

from .base import SiteRemote, WireDate, WireDateTime, WireModel

# --- Insights ---


@insight()
class StatsAllTimesInsight(WireModel):
    """All-time totals for a site."""

    posts_count: StrictInt = Field(validation_alias=AliasPath("stats", "posts"))
    views_count: StrictInt = Field(validation_alias=AliasPath("stats", "views"))
    visitors_count: StrictInt = Field(validation_alias=AliasPath("stats", "visitors"))
    best_views_day: WireDate = Field(validation_alias=AliasPath("stats", "views_best_day"))
    best_views_per_day_count: StrictInt = Field(
        validation_alias=AliasPath("stats", "views_best_day_total")
    )


class StatsTopCommentsAuthor(WireModel):
    name: StrictStr
    comment_count: StrictInt = Field(alias="comments")
    avatar_url: StrictStr | None = Field(default=None, alias="gravatar")


class StatsTopCommentsPost(WireModel):
    post_id: StrictInt = Field(alias="id")
    name: StrictStr
    comment_count: StrictInt = Field(alias="comments")
    url: StrictStr | None = Field(default=None, alias="link")


@insight("stats/comments/", parameters={"max": "6"})
class StatsCommentsInsight(WireModel):
    """Most active commenters and most commented posts."""

    top_authors: tuple[StatsTopCommentsAuthor, ...] = Field(alias="authors")
    top_posts: tuple[StatsTopCommentsPost, ...] = Field(alias="posts")


# --- Time stats ---


class StatsTopPostKind(UnknownCaseEnum):
    POST = "post"
    PAGE = "page"
    HOMEPAGE = "homepage"
    UNKNOWN = "unknown"


class StatsTopPost(WireModel):
    post_id: StrictInt = Field(alias="id")
    title: StrictStr
    url: StrictStr | None = Field(default=None, alias="href")
    views_count: StrictInt = Field(alias="views")
    kind: StatsTopPostKind = Field(default=StatsTopPostKind.POST, alias="type")


class _TopPostsDay(WireModel):
    postviews: tuple[StatsTopPost, ...] = ()
    total_views: StrictInt = 0


class _TopPostsPayload(WireModel):
    days: dict[str, _TopPostsDay]


@time_stats("stats/top-posts/")
class StatsTopPostsTimeIntervalData(WireModel):
    """Most viewed posts and pages for one period."""

    period: StatsPeriodUnit
    period_end_date: date
    total_views_count: int
    top_posts: tuple[StatsTopPost, ...]

    @classmethod
    def from_time_stats(
        cls,
        raw: Mapping[str, Any],
        period_end_date: date,
        period: StatsPeriodUnit,
    ) -> Self:
        payload = _TopPostsPayload.model_validate(raw)
        day = payload.days.get(format_query_date(period_end_date))
        if day is None:
            day = next(iter(payload.days.values()), _TopPostsDay())
        return cls(
            period=period,
            period_end_date=period_end_date,
            total_views_count=day.total_views,
            top_posts=day.postviews,
        )


# --- Last post insight (two requests) ---


class _PostDiscussion(WireModel):
    comment_count: StrictInt


def _first_post(raw: Mapping[str, Any]) -> LastPostSummary | None:
    posts = _PostList.model_validate(raw).posts
    return posts[0] if posts else None


@resource(
    "sites/{site_id}/posts/",
    parameters={
        "order_by": "date",
        "number": "1",
        "type": "post",
        "fields": "ID, title, URL, discussion, like_count, date",
    },
    decoder=_first_post,
)
class LastPostSummary(WireModel):
    """The most recently published post, as listed by the posts endpoint."""

    post_id: StrictInt = Field(alias="ID")
    title: StrictStr
    url: StrictStr = Field(alias="URL")
    like_count: StrictInt
    published: WireDateTime = Field(alias="date")
    discussion: _PostDiscussion


class _PostList(WireModel):
    posts: tuple[LastPostSummary, ...]


@resource("sites/{site_id}/stats/post/{post_id}", parameters={"fields": "views"})
class PostViews(WireModel):
    views: StrictInt


class StatsLastPostInsight(WireModel):
    """The latest post merged with its separately fetched view count."""

    title: str
    url: str
    published_date: datetime
    likes_count: int
    comments_count: int
    views_count: int
    post_id: int

    @classmethod
    def combine(cls, post: LastPostSummary, views: PostViews) -> Self:
        """Merge leg results; the title arrives HTML-escaped."""
        return cls(
            title=html.unescape(post.title.strip()),
            url=post.url,
            published_date=post.published,
            likes_count=post.like_count,
            comments_count=post.discussion.comment_count,
            views_count=views.views,
            post_id=post.post_id,
        )


class StatsRemote(SiteRemote):
    """Stats for a single site."""

    def __init__(self, fetcher: TypedFetcher, site_id: int, *, default_limit: int = 10) -> None:
        super().__init__(fetcher, site_id)
        self.default_limit = default_limit

    async def get_insight[T](self, result_type: type[T]) -> Result[T, FetchError]:
        """Fetch an insight; see the `insight`-registered models above."""
        if issubclass(result_type, StatsLastPostInsight):
            return await self.get_last_post_insight()  # type: ignore[return-value]
        return await self.fetcher.fetch(result_type, self.site_id)

    async def get_data[T](
        self,
        result_type: type[T],
        period: StatsPeriodUnit,
        ending_on: date,
        *,
        limit: int | None = None,
    ) -> Result[T, FetchError]:
        """Fetch time stats for the ``period`` ending on ``ending_on``."""
        return await self.fetcher.fetch_time_stats(
            result_type,
            self.site_id,
            period,
            ending_on,
            limit=self.default_limit if limit is None else limit,
        )

    def last_post_chain(self) -> ChainedFetch[StatsLastPostInsight]:
        """Build the two-leg chain: latest post, then that post's views."""
        posts = self.fetcher.descriptor_for(LastPostSummary)
        views = self.fetcher.descriptor_for(PostViews)
        site_id = self.site_id
        return ChainedFetch(
            self.fetcher,
            [
                ChainStep(
                    tag="last_post",
                    build_request=lambda _prior: posts.request_for(site_id),
                    decode=posts.decode,
                ),
                ChainStep(
                    tag="post_views",
                    build_request=lambda prior: views.request_for(
                        site_id, path_args={"post_id": prior[0].post_id}
                    ),
                    decode=views.decode,
                ),
            ],
            StatsLastPostInsight.combine,
        )

    async def get_last_post_insight(self) -> Result[StatsLastPostInsight, FetchError]:
        """Fetch the last post insight; fails if the site has no posts."""
        return await self.last_post_chain().run()

    async def get_post_views(self, post_id: int) -> Result[int, FetchError]:
        """Fetch the view count of a single post."""
        result = await self.fetcher.fetch(
            PostViews, self.site_id, path_args={"post_id": post_id}
        )
        if isinstance(result, Failure):
            return result
        return Success(result.value.views)
