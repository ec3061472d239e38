"""Video recording indexes."""

import logging
import random
from datetime import datetime
from pathlib import Path
from typing import Dict, Mapping, Optional, Set

from ..types import CalendarDay
from .base import BaseVideoIndex

logger = logging.getLogger(__name__)

VIDEO_EXTENSION = ".mov"
VIDEO_NAME_FORMAT = "%m-%d-%Y"
DEFAULT_VIDEO_FOLDER = Path.home() / "Documents" / "calendr video blogs"


class FileSystemVideoIndex(BaseVideoIndex):
    """Recordings stored as ``<base>/<YYYY>/<MM>/<MM-dd-yyyy>.mov``."""

    def __init__(self, base_folder: Path = DEFAULT_VIDEO_FOLDER) -> None:
        self.base_folder = Path(base_folder).expanduser()

    def video_path_for(self, day: CalendarDay) -> Optional[Path]:
        path = (
            self.base_folder
            / f"{day.year:04d}"
            / f"{day.month:02d}"
            / f"{day.strftime(VIDEO_NAME_FORMAT)}{VIDEO_EXTENSION}"
        )
        return path if path.is_file() else None

    def video_url_for(self, day: CalendarDay) -> Optional[str]:
        path = self.video_path_for(day)
        return path.resolve().as_uri() if path is not None else None

    def dates_with_video(self) -> Set[CalendarDay]:
        if not self.base_folder.is_dir():
            logger.debug(f"Video folder does not exist: {self.base_folder}")
            return set()

        dates: Set[CalendarDay] = set()
        for path in self.base_folder.rglob(f"*{VIDEO_EXTENSION}"):
            relative = path.relative_to(self.base_folder)
            if any(part.startswith(".") for part in relative.parts):
                continue
            if not path.is_file():
                continue
            try:
                dates.add(datetime.strptime(path.stem, VIDEO_NAME_FORMAT).date())
            except ValueError:
                logger.debug(f"Skipping video with unrecognized name: {path.name}")
        logger.debug(f"Found {len(dates)} days with video in {self.base_folder}")
        return dates


class StaticVideoIndex(BaseVideoIndex):
    """Video index over a fixed mapping of days to URLs."""

    def __init__(self, videos: Optional[Mapping[CalendarDay, str]] = None) -> None:
        self._videos: Dict[CalendarDay, str] = dict(videos or {})

    @classmethod
    def random_around(
        cls, today: CalendarDay, count: int = 10, seed: Optional[int] = None
    ) -> "StaticVideoIndex":
        """Mock index with recordings scattered within 30 days of ``today``."""
        rng = random.Random(seed)
        videos: Dict[CalendarDay, str] = {}
        for _ in range(count):
            day = today.fromordinal(today.toordinal() + rng.randint(-30, 30))
            videos[day] = f"https://example.com/video_{day.isoformat()}.mp4"
        return cls(videos)

    def set_video(self, day: CalendarDay, url: str) -> None:
        self._videos[day] = url

    def remove_video(self, day: CalendarDay) -> None:
        self._videos.pop(day, None)

    def video_url_for(self, day: CalendarDay) -> Optional[str]:
        return self._videos.get(day)

    def dates_with_video(self) -> Set[CalendarDay]:
        return set(self._videos)
