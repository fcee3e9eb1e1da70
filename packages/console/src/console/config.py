"""
Console Configuration

Settings for the console interpreter, built from environment variables,
and the context object every invocation receives explicitly.
"""

import logging
import os
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from sim.gateway import CommandGateway, RecordingViewport, Viewport, WorldGateway
from sim.world import World

from .output import BufferedOutput, ConsoleOutput

logger = logging.getLogger(__name__)

DEFAULT_WAGON_BATCH = 100
DEFAULT_MAX_CLONES = 100


class GameMode(str, Enum):
    """Mode the game is running in."""

    NORMAL = "normal"
    EDITOR = "editor"


@dataclass
class ConsoleConfig:
    """Configuration for the console interpreter."""

    game_mode: GameMode = GameMode.NORMAL
    # Most wagons one wsell can sell
    wagon_batch: int = DEFAULT_WAGON_BATCH
    # Most copies one clone command can request
    max_clones: int = DEFAULT_MAX_CLONES
    log_level: str = "INFO"
    scenario_path: Optional[str] = None
    random_seed: Optional[int] = None

    @property
    def in_editor(self) -> bool:
        return self.game_mode == GameMode.EDITOR


def _positive_int(name: str, default: int) -> int:
    """Read a count setting; anything below 1 falls back to the default."""
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        value = 0
    if value < 1:
        logger.warning(f"Invalid {name} value: {raw}, using {default}")
        return default
    return value


def get_console_config() -> ConsoleConfig:
    """Build console config from environment variables."""
    seed = os.environ.get("CONSOLE_RANDOM_SEED")
    mode = os.environ.get("CONSOLE_GAME_MODE", GameMode.NORMAL.value).lower()
    try:
        game_mode = GameMode(mode)
    except ValueError:
        logger.warning(f"Unknown CONSOLE_GAME_MODE value: {mode}, using normal")
        game_mode = GameMode.NORMAL

    wagon_batch = _positive_int("CONSOLE_WAGON_BATCH", DEFAULT_WAGON_BATCH)
    max_clones = _positive_int("CONSOLE_MAX_CLONES", DEFAULT_MAX_CLONES)

    return ConsoleConfig(
        game_mode=game_mode,
        wagon_batch=wagon_batch,
        max_clones=max_clones,
        log_level=os.environ.get("CONSOLE_LOG_LEVEL", "INFO").upper(),
        scenario_path=os.environ.get("CONSOLE_SCENARIO"),
        random_seed=int(seed) if seed else None,
    )


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging for the console entry point."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


@dataclass
class ConsoleContext:
    """
    Everything one invocation may read or call: the live world, the
    command gateway, the viewport and the output sink.
    """

    world: World
    gateway: CommandGateway
    viewport: Viewport = field(default_factory=RecordingViewport)
    output: ConsoleOutput = field(default_factory=BufferedOutput)
    config: ConsoleConfig = field(default_factory=ConsoleConfig)
    rng: random.Random = field(default_factory=random.Random)

    @classmethod
    def for_world(cls, world: World, config: Optional[ConsoleConfig] = None) -> "ConsoleContext":
        """Context that applies commands to the given world."""
        config = config or ConsoleConfig()
        return cls(
            world=world,
            gateway=WorldGateway(world),
            config=config,
            rng=random.Random(config.random_seed),
        )

    @property
    def local_company(self) -> Optional[int]:
        return self.world.local_company
