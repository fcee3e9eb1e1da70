"""
Main Entry Point

Loads the scenario named by CONSOLE_SCENARIO (or starts with an empty
world) and runs one console line per line of standard input:

    town population>=500 count
    train age<5 & depot info
"""

import logging
import sys

from sim.loader import ScenarioError, ScenarioLoader
from sim.world import World

from .config import ConsoleContext, configure_logging, get_console_config
from .orchestrator import Interpreter
from .output import StreamOutput
from .targets import get_target

logger = logging.getLogger(__name__)


def run_line(interpreter: Interpreter, line: str) -> None:
    """Run one console line. Lines naming no target are reported and ignored."""
    tokens = line.split()
    if not tokens:
        return
    kind, args = tokens[0], tokens[1:]
    if get_target(kind) is None:
        interpreter.ctx.output.error(f"Unknown command: {kind}")
        return
    result = interpreter.run(kind, args)
    if not result.handled:
        interpreter.run(kind, [])


def main() -> None:
    """Entry point for the console."""
    config = get_console_config()
    configure_logging(config.log_level)

    if config.scenario_path:
        try:
            world = ScenarioLoader(config.scenario_path).load()
        except ScenarioError as e:
            logger.error(f"Failed to load scenario: {e}")
            sys.exit(1)
    else:
        logger.info("No scenario given, starting with an empty world")
        world = World()

    ctx = ConsoleContext.for_world(world, config)
    ctx.output = StreamOutput(sys.stdout)
    interpreter = Interpreter(ctx)

    try:
        for line in sys.stdin:
            run_line(interpreter, line)
    except KeyboardInterrupt:
        logger.info("Interrupted by user")


if __name__ == "__main__":
    main()
