"""Media helpers shared by the lexer and the renderer.

- Extension sniffing for autolinked audio/video files
- Custom emoji CDN URLs
- Human-readable file names for media captions

"""

from urllib.parse import unquote

from chatmark.config import get_format_config
from chatmark.tokens import DiscordEmoji, TokenKind

AUDIO_EXTENSIONS: tuple[str, ...] = (".mp3", ".wav", ".ogg", ".m4a", ".flac")
VIDEO_EXTENSIONS: tuple[str, ...] = (".mp4", ".webm", ".mov", ".avi", ".mkv")


def url_path(url: str) -> str:
    """Return ``url`` with its query string and fragment cut off.

    Never raises, even for malformed bracketed hosts.
    """
    return url.split("#", 1)[0].split("?", 1)[0]


def classify_media_url(url: str) -> TokenKind:
    """Classify an autolinked URL by the extension of its path.

    Returns:
        TokenKind.AUDIO, TokenKind.VIDEO, or TokenKind.LINK

    Example:
        >>> classify_media_url("https://cdn.example.com/track.MP3")
        <TokenKind.AUDIO: 'audio'>
    """
    path = url_path(url).lower()
    if path.endswith(AUDIO_EXTENSIONS):
        return TokenKind.AUDIO
    if path.endswith(VIDEO_EXTENSIONS):
        return TokenKind.VIDEO
    return TokenKind.LINK


def emoji_image_url(token: DiscordEmoji, host: str | None = None) -> str:
    """Build the CDN image URL for a custom emoji.

    Animated emoji are served as GIF, static ones as PNG.

    Args:
        token: Emoji token
        host: CDN host (defaults to the configured emoji_cdn_host)
    """
    host = host or get_format_config().emoji_cdn_host
    ext = "gif" if token.animated else "png"
    return f"https://{host}/emojis/{token.emoji_id}.{ext}"


def media_filename(url: str, fallback: str) -> str:
    """Extract a display file name from a media URL.

    Takes the last segment of the URL path and percent-decodes it.
    """
    name = url_path(url).rsplit("/", 1)[-1]
    return unquote(name) if name else fallback


__all__ = [
    "AUDIO_EXTENSIONS",
    "VIDEO_EXTENSIONS",
    "classify_media_url",
    "emoji_image_url",
    "media_filename",
    "url_path",
]
