"""Title, description and tags for uploaded shorts."""

from __future__ import annotations

import random
from typing import Optional, Sequence

from pydantic import BaseModel, Field

from ...constants import (
    YOUTUBE_CATEGORY_ENTERTAINMENT,
    YOUTUBE_DESCRIPTION_MEME_CHARS,
    YOUTUBE_TITLE_MAX_LENGTH,
    YOUTUBE_TITLE_MEME_CHARS,
    YOUTUBE_TITLE_MIN_MEME_CHARS,
)
from ...production.base import MemeCredits
from ...queue.pending import Artifact

SHORTS_SUFFIX = " #Shorts"

TITLE_OPTIONS = [
    "Daily Dose of Internet Memes #Shorts",
    "Memes That Hit Different 😂 #Shorts",
    "Try Not To Laugh Challenge #Shorts",
    "Funniest Memes of the Day #Shorts",
    "Meme Compilation That Will Make You Laugh #Shorts",
    "Best Memes To Cure Your Boredom #Shorts",
    "Viral Memes You Need To See #Shorts",
    "When The Memes Are Too Relatable #Shorts",
]

HASHTAG_LINE = "#shorts #memes #funny #meme #viral #comedy #lol #relatable #dankmemes #funnymemes"
SEPARATOR = "━" * 22

CALL_TO_ACTION = [
    "🎵 Subscribe for daily meme content!",
    "👍 Like if this made you laugh!",
    "💬 Comment your favorite meme!",
]

DEFAULT_TAGS = [
    "memes",
    "meme",
    "funny",
    "shorts",
    "youtube shorts",
    "short",
    "funny video",
    "meme compilation",
    "dank memes",
    "funny memes",
    "try not to laugh",
    "comedy",
    "viral",
    "trending",
    "relatable",
    "humor",
    "lol",
]


class VideoMetadata(BaseModel):
    """Snippet fields of a YouTube upload."""

    title: str = Field(max_length=YOUTUBE_TITLE_MAX_LENGTH)
    description: str = ""
    tags: list[str] = Field(default_factory=lambda: list(DEFAULT_TAGS))
    category_id: str = YOUTUBE_CATEGORY_ENTERTAINMENT
    default_language: str = "en"

    def to_snippet(self) -> dict:
        """Snippet body for videos.insert."""
        return {
            "title": self.title,
            "description": self.description,
            "tags": self.tags,
            "categoryId": self.category_id,
            "defaultLanguage": self.default_language,
            "defaultAudioLanguage": self.default_language,
        }


def build_title(meme_titles: Sequence[str], rng: Optional[random.Random] = None) -> str:
    """First meme title when it says something, else a stock title."""
    if meme_titles and len(meme_titles[0]) > YOUTUBE_TITLE_MIN_MEME_CHARS:
        return f"{meme_titles[0][:YOUTUBE_TITLE_MEME_CHARS].strip()}{SHORTS_SUFFIX}"
    return (rng or random).choice(TITLE_OPTIONS)


def build_description(meme_titles: Sequence[str]) -> str:
    lines = ["🔥 Daily meme compilation!", ""]

    if meme_titles:
        lines.append("Featured memes:")
        for i, title in enumerate(meme_titles, start=1):
            lines.append(f"{i}. {title[:YOUTUBE_DESCRIPTION_MEME_CHARS]}")
        lines.append("")

    lines.extend([SEPARATOR, HASHTAG_LINE, SEPARATOR, ""])
    lines.extend(CALL_TO_ACTION)
    return "\n".join(lines) + "\n"


def build_metadata(
    meme_titles: Sequence[str] = (),
    rng: Optional[random.Random] = None,
) -> VideoMetadata:
    """Build upload metadata from the titles of the memes in a video."""
    titles = [t for t in meme_titles if t]
    return VideoMetadata(
        title=build_title(titles, rng),
        description=build_description(titles),
    )


def metadata_for_artifact(artifact: Artifact) -> VideoMetadata:
    """Metadata for a queued video, crediting memes from its sidecar if present."""
    credits = MemeCredits.load(artifact.sidecar_path)
    return build_metadata(credits.titles if credits else ())
