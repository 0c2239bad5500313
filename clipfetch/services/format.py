import re
from typing import Optional

# Shared by both directions: the label shown for an option and the selector
# built for it must come from the same parse.
RESOLUTION_PATTERN = re.compile(r"(\d+)x(\d+)")
HEIGHT_LABEL_PATTERN = re.compile(r"^\s*(\d+)p\s*$", re.IGNORECASE)

BEST_LABEL = "best"
BEST_SELECTOR = "best[ext=mp4]/best"


class QualityResolver:
    """Map quality labels to yt-dlp format selectors and back"""

    @staticmethod
    def display_label(resolution: Optional[str]) -> Optional[str]:
        """
        Display label for a resolution token, e.g. "1080x1920" -> "1920p".

        The second number is used: the supported platforms serve mostly
        portrait video, where height is the limiting dimension.
        """
        if not resolution:
            return None
        match = RESOLUTION_PATTERN.search(resolution)
        if not match:
            return None
        return f"{match.group(2)}p"

    @staticmethod
    def normalize_label(quality: Optional[str]) -> str:
        """Reduce any incoming label to "<height>p" or "best" """
        if quality is None or not quality.strip():
            return BEST_LABEL

        label = QualityResolver.display_label(quality)
        if label:
            return label

        match = HEIGHT_LABEL_PATTERN.match(quality)
        if match:
            return f"{int(match.group(1))}p"

        return BEST_LABEL

    @staticmethod
    def height_for(quality: Optional[str]) -> Optional[int]:
        label = QualityResolver.normalize_label(quality)
        if label == BEST_LABEL:
            return None
        # 0 means auto
        return int(label[:-1]) or None

    @staticmethod
    def to_format_selector(quality: Optional[str]) -> str:
        """
        Build the -f expression for a quality label.
        Never fails; unrecognized labels fall back to best.
        """
        height = QualityResolver.height_for(quality)
        if height is None:
            return BEST_SELECTOR

        # mp4 video <= height + best audio, then best mp4, then anything
        return (
            f"bestvideo[height<={height}][ext=mp4]+bestaudio/"
            f"best[ext=mp4]/best"
        )
