"""Meme discovery on Reddit.

Two listing backends share one selection algorithm:

- ``PublicRedditSource``: the public ``.json`` listings over httpx, no
  credentials needed
- ``AsyncPrawRedditSource``: app-only OAuth through asyncpraw, used when
  REDDIT_CLIENT_ID and REDDIT_CLIENT_SECRET are set

Selection: sources are tried in random order without repetition. From
each source's top posts of the day, one image post is picked at random
among the first five. A source that fails or has no image posts is
skipped.
"""

from __future__ import annotations

import logging
import os
import random
from abc import abstractmethod
from typing import Optional, Sequence

import asyncpraw
import httpx

from ..constants import (
    HTTP_LISTING_TIMEOUT_SECONDS,
    REDDIT_LISTING_LIMIT,
    REDDIT_PICK_FROM_TOP,
    REDDIT_TIME_FILTER,
)
from ..production.base import MemePost, MemeSource, SourceExhaustedError

_logger = logging.getLogger("reddit_api")

REDDIT_BASE_URL = "https://www.reddit.com"

DEFAULT_MEME_SOURCES = [
    "r/memes",
    "r/dankmemes",
    "r/funny",
    "r/rareinsults",
    "r/clevercomebacks",
    "r/murderedbywords",
    "r/facepalm",
    "r/HistoryMemes",
    "r/ProgrammerHumor",
    "r/MinecraftMemes",
    "r/ROBLOXmemes",
    "r/wholesomememes",
    "u/The-LSD-Sheet-Guy",
    "u/BoredomFestival",
    "u/misthi_S",
    "u/Idea99",
    "u/Beer_Is_Good_V_2",
]

DEFAULT_USER_AGENT = "MemeShorts/1.0 (meme video bot)"

IMAGE_HOSTS = ("i.redd.it", "i.imgur.com")
IMAGE_SUFFIXES = (".jpg", ".jpeg", ".png", ".gif")


def is_image_url(url: str) -> bool:
    """True for direct image links."""
    if not url:
        return False
    return any(host in url for host in IMAGE_HOSTS) or url.lower().endswith(IMAGE_SUFFIXES)


def parse_source(source: str) -> tuple[str, str]:
    """Split ``r/name`` or ``u/name`` into (kind, name).

    Raises:
        ValueError: If the prefix is neither r/ nor u/.
    """
    prefix, _, name = source.partition("/")
    if prefix not in ("r", "u") or not name:
        raise ValueError(f"Invalid meme source '{source}', expected r/<subreddit> or u/<user>")
    return prefix, name


def listing_url(source: str, limit: int = REDDIT_LISTING_LIMIT) -> str:
    """Public JSON listing of a source's top posts of the day."""
    kind, name = parse_source(source)
    if kind == "u":
        return f"{REDDIT_BASE_URL}/user/{name}/submitted.json?limit={limit}&sort=top&t={REDDIT_TIME_FILTER}"
    return f"{REDDIT_BASE_URL}/r/{name}/top.json?limit={limit}&t={REDDIT_TIME_FILTER}"


class RedditMemeSource(MemeSource):
    """Shared selection logic. Subclasses fetch raw listings."""

    def __init__(
        self,
        sources: Optional[Sequence[str]] = None,
        pick_from_top: int = REDDIT_PICK_FROM_TOP,
        rng: Optional[random.Random] = None,
    ):
        self.sources = list(sources or DEFAULT_MEME_SOURCES)
        for source in self.sources:
            parse_source(source)
        self.pick_from_top = pick_from_top
        self._rng = rng or random.Random()

    @abstractmethod
    async def _fetch_listing(self, source: str) -> list[MemePost]:
        """All posts of a source's listing, unfiltered, in listing order."""
        ...

    def pick_image_post(self, posts: Sequence[MemePost]) -> Optional[MemePost]:
        """Random image post among the first ``pick_from_top`` image posts."""
        image_posts = [p for p in posts if is_image_url(p.image_url)]
        if not image_posts:
            return None
        top = image_posts[: min(self.pick_from_top, len(image_posts))]
        return self._rng.choice(top)

    async def fetch_from_source(self, source: str) -> Optional[MemePost]:
        """One meme from a source, or None if the source yields nothing."""
        try:
            posts = await self._fetch_listing(source)
        except Exception as e:
            _logger.warning(f"Failed to fetch {source}: {e}")
            return None

        meme = self.pick_image_post(posts)
        if meme is None:
            _logger.info(f"No image posts in {source}")
        return meme

    async def fetch_memes(self, count: int) -> list[MemePost]:
        memes: list[MemePost] = []
        untried = list(self.sources)

        while len(memes) < count and untried:
            source = untried.pop(self._rng.randrange(len(untried)))
            meme = await self.fetch_from_source(source)
            if meme is not None:
                _logger.info(f"Picked meme from {source}: {meme.title[:60]}")
                memes.append(meme)

        if len(memes) < count:
            raise SourceExhaustedError(f"Could only find {len(memes)} memes, needed {count}")
        return memes


class PublicRedditSource(RedditMemeSource):
    """Reads the public JSON listings.

    Usage:
        source = PublicRedditSource()
        memes = await source.fetch_memes(2)
        await source.close()
    """

    def __init__(
        self,
        sources: Optional[Sequence[str]] = None,
        pick_from_top: int = REDDIT_PICK_FROM_TOP,
        rng: Optional[random.Random] = None,
        user_agent: str = DEFAULT_USER_AGENT,
        client: Optional[httpx.AsyncClient] = None,
    ):
        super().__init__(sources, pick_from_top, rng)
        self.user_agent = user_agent
        self._client = client

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=HTTP_LISTING_TIMEOUT_SECONDS,
                headers={"User-Agent": self.user_agent},
                follow_redirects=True,
            )
        return self._client

    async def close(self) -> None:
        """Close HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def _fetch_listing(self, source: str) -> list[MemePost]:
        client = await self._get_client()
        response = await client.get(listing_url(source))
        response.raise_for_status()

        children = response.json().get("data", {}).get("children", [])
        posts = []
        for child in children:
            data = child.get("data", {})
            posts.append(
                MemePost(
                    title=data.get("title", ""),
                    image_url=data.get("url", "") or "",
                    source=source,
                    author=data.get("author", "") or "",
                    score=int(data.get("score", 0) or 0),
                    permalink=data.get("permalink", "") or "",
                )
            )
        return posts


class AsyncPrawRedditSource(RedditMemeSource):
    """Reads listings through the authenticated Reddit API."""

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        sources: Optional[Sequence[str]] = None,
        pick_from_top: int = REDDIT_PICK_FROM_TOP,
        rng: Optional[random.Random] = None,
        user_agent: str = DEFAULT_USER_AGENT,
    ):
        super().__init__(sources, pick_from_top, rng)
        self.client_id = client_id
        self.client_secret = client_secret
        self.user_agent = user_agent
        self._reddit: asyncpraw.Reddit | None = None

    async def initialize(self) -> None:
        """Initialize the Reddit client."""
        self._reddit = asyncpraw.Reddit(
            client_id=self.client_id,
            client_secret=self.client_secret,
            user_agent=self.user_agent,
        )

    async def close(self) -> None:
        """Close the Reddit client."""
        if self._reddit:
            await self._reddit.close()
            self._reddit = None

    async def _fetch_listing(self, source: str) -> list[MemePost]:
        if not self._reddit:
            await self.initialize()

        kind, name = parse_source(source)
        if kind == "u":
            redditor = await self._reddit.redditor(name)
            listing = redditor.submissions.top(time_filter=REDDIT_TIME_FILTER, limit=REDDIT_LISTING_LIMIT)
        else:
            subreddit = await self._reddit.subreddit(name)
            listing = subreddit.top(time_filter=REDDIT_TIME_FILTER, limit=REDDIT_LISTING_LIMIT)

        posts = []
        async for submission in listing:
            posts.append(
                MemePost(
                    title=submission.title,
                    image_url=submission.url or "",
                    source=source,
                    author=str(submission.author) if submission.author else "",
                    score=submission.score,
                    permalink=submission.permalink,
                )
            )
        return posts


def create_meme_source(
    sources: Optional[Sequence[str]] = None,
    client_id: Optional[str] = None,
    client_secret: Optional[str] = None,
    user_agent: Optional[str] = None,
    pick_from_top: int = REDDIT_PICK_FROM_TOP,
    rng: Optional[random.Random] = None,
) -> RedditMemeSource:
    """Authenticated source when credentials exist, else the public one."""
    client_id = client_id or os.getenv("REDDIT_CLIENT_ID")
    client_secret = client_secret or os.getenv("REDDIT_CLIENT_SECRET")
    user_agent = user_agent or os.getenv("REDDIT_USER_AGENT") or DEFAULT_USER_AGENT

    if client_id and client_secret:
        _logger.info("Using authenticated Reddit API")
        return AsyncPrawRedditSource(
            client_id=client_id,
            client_secret=client_secret,
            sources=sources,
            pick_from_top=pick_from_top,
            rng=rng,
            user_agent=user_agent,
        )

    return PublicRedditSource(
        sources=sources,
        pick_from_top=pick_from_top,
        rng=rng,
        user_agent=user_agent,
    )
