"""
Console Query Interpreter

Selects vehicles, towns or industries with chained criteria and runs
one command on every match:

    train age<5 & depot info
    town population>=500 count
    industry percent<30 center

Components:
- descriptors: command and criterion tables per target kind
- resolver: case-insensitive exact / unique prefix name lookup
- expression, chain: criterion parsing and the AND chain
- targets: per-kind criteria and commands
- orchestrator: the Interpreter that runs an invocation
"""

from .config import ConsoleConfig, ConsoleContext, GameMode, configure_logging, get_console_config
from .errors import ConsoleError
from .orchestrator import InvocationResult, Interpreter, run
from .output import BufferedOutput, ConsoleOutput, OutputLevel, StreamOutput
from .targets import TargetKind

__all__ = [
    "ConsoleConfig",
    "ConsoleContext",
    "GameMode",
    "configure_logging",
    "get_console_config",
    "ConsoleError",
    "InvocationResult",
    "Interpreter",
    "run",
    "BufferedOutput",
    "ConsoleOutput",
    "OutputLevel",
    "StreamOutput",
    "TargetKind",
]
