"""The application object that owns every manager."""

from __future__ import annotations

import os
from typing import ClassVar, Optional, Union

from .digits import DigitManager
from .entitymanager import EntityManager
from .filemanager import FileManager
from .fonts import FontManager
from .render import RenderManager
from .sprites import SpriteManager
from .state import State
from .surfaces import SurfaceManager

PathLike = Union[str, "os.PathLike[str]"]


class App:
    """Wires the managers together and advances the game one frame per run."""

    _instance: ClassVar[Optional[App]] = None

    def __init__(
        self,
        data_directory: PathLike = "Data",
        archive_path: PathLike = "data.pak",
        *,
        width: int = 320,
        height: int = 240,
        title: str = "SDL Game",
        timestep: int = 1000 // 60,
    ) -> None:
        self.state = State()
        self.file_manager = FileManager(data_directory, archive_path)
        self.surface_manager = SurfaceManager(self.file_manager)
        self.render_manager = RenderManager(self.surface_manager, width, height, title)
        self.sprite_manager = SpriteManager(self.file_manager, self.render_manager)
        self.entity_manager = EntityManager(self.render_manager, timestep)
        self.font_manager = FontManager(self.sprite_manager)
        self.digit_manager = DigitManager(self.sprite_manager)

    @classmethod
    def instance(cls) -> App:
        """The shared application, created with defaults on first use."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    def run(self) -> int:
        """Process one frame; exit once the window has been closed."""
        if not self.render_manager.is_running:
            raise SystemExit(0)
        self.entity_manager.run()
        self.render_manager.run()
        return 0