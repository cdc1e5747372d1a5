"""YouTube embed helpers — video id extraction for the featured video widget."""

import re

_YOUTUBE_ID = re.compile(r"^.*(youtu\.be/|v/|u/\w/|embed/|watch\?v=|&v=)([^#&?]*).*")


def youtube_video_id(url: str | None) -> str | None:
    """11-char video id from any common YouTube URL form, else None."""
    if not url:
        return None
    match = _YOUTUBE_ID.match(url)
    if match and len(match.group(2)) == 11:
        return match.group(2)
    return None


def youtube_embed_url(url: str | None) -> str | None:
    video_id = youtube_video_id(url)
    if video_id is None:
        return None
    return f"https://www.youtube.com/embed/{video_id}"
