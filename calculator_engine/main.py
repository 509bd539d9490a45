"""
Command-line entrypoint replaying key presses through the calculator engine.

This script:
- Reads a file of whitespace-separated keys (e.g. ``5 + 3 n =``)
- Feeds every key through the action reducer, starting from a fresh session
- Prints the final expression and notation

Keys without a binding are skipped, the way a calculator ignores keys it has
no button for.
"""

import argparse
from pathlib import Path
from typing import Iterable, List, Optional

from pydantic import BaseModel, Field, FilePath, ValidationError

from calculator_engine.common.config import DEFAULT_DIGIT_LIMIT, EngineSettings, LogLevel
from calculator_engine.common.logger import configure_logger, logger
from calculator_engine.common.models import SessionState
from calculator_engine.engine.input_processor import InputProcessor
from calculator_engine.engine.reducer import action_for_key, reduce


class CliArgs(BaseModel):
    """
    Pydantic model used to validate CLI arguments.

    Attributes
    ----------
    file_path : FilePath
        Path to the file containing the keys to replay.
    digit_limit : int
        Digit limit of the engine.
    log_level : LogLevel
        Level of the package logger.
    """

    file_path: FilePath
    digit_limit: int = Field(..., ge=1)
    log_level: LogLevel = "WARNING"


def parse_args(argv: Optional[List[str]] = None) -> CliArgs:
    """
    Parse and validate command-line arguments.

    ``--digit-limit`` overrides ``CALCULATOR_DIGIT_LIMIT``; the log level comes
    from ``CALCULATOR_LOG_LEVEL``. Invalid values in either place are reported
    through ``parser.error``.

    :param argv: Arguments to parse, defaults to ``sys.argv[1:]``

    :return: Validated CLI arguments
    :rtype: CliArgs
    """
    parser = argparse.ArgumentParser(
        description="Replay calculator key presses and print the resulting display"
    )

    parser.add_argument(
        "file_path",
        help="Path to the file containing whitespace-separated keys",
    )
    parser.add_argument(
        "--digit-limit",
        default=None,
        help=f"Maximum digits per entry or result (default: CALCULATOR_DIGIT_LIMIT or {DEFAULT_DIGIT_LIMIT})",
    )

    args = parser.parse_args(argv)

    try:
        settings = EngineSettings()
        return CliArgs(
            file_path=args.file_path,
            digit_limit=settings.digit_limit if args.digit_limit is None else args.digit_limit,
            log_level=settings.log_level,
        )
    except ValidationError as exc:
        parser.error(str(exc))


def replay(processor: InputProcessor, keys: Iterable[str]) -> SessionState:
    """
    Apply a sequence of keys to a fresh session.

    :param InputProcessor processor: Processor to drive
    :param keys: Keys to press in order

    :return: Final session state
    :rtype: SessionState
    """
    state = processor.reset()
    for key in keys:
        action = action_for_key(key)
        if action is None:
            logger.warning(f"⌨️ Ignoring unbound key {key!r}")
            continue
        state = reduce(processor, state, action)
        logger.debug(f"⌨️ {key!r} -> {state.expression!r} [{state.notation}]")
    return state


def main(argv: Optional[List[str]] = None) -> None:
    """
    Main function executed by the ``calculator-engine`` console script.
    """
    cli_args = parse_args(argv)
    configure_logger(cli_args.log_level)
    keys: List[str] = Path(cli_args.file_path).read_text(encoding="utf-8").split()

    processor = InputProcessor(digit_limit=cli_args.digit_limit)
    state = replay(processor, keys)

    print(state.expression)
    print(state.notation)


if __name__ == "__main__":
    main()
