"""CLI entry point for pi-console. Uses Click for argument parsing."""

from __future__ import annotations

import logging
import sys

import click

from pi.console.config import ConsoleConfig
from pi.console.trie import InvalidCharacterError


def _configure_logging(level: str, log_file: str | None) -> None:
    # The terminal is in raw mode while the console runs, so records only
    # reach stderr when they are worth the broken layout.
    logging.basicConfig(
        level=getattr(logging, level.upper()) if log_file else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        filename=log_file,
    )


@click.command()
@click.option("--prompt", default=None, help="Prompt shown before each line")
@click.option("--word", "words", multiple=True, help="Extra word for tab completion (repeatable)")
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error"]),
    default="info",
    help="Log level for --log-file",
)
@click.option("--log-file", default=None, help="Write log records to this file")
@click.option("--dump-vocabulary", is_flag=True, help="Print the completion trie and exit")
def main(prompt, words, log_level, log_file, dump_vocabulary):
    """Interactive line-editing console with history and tab completion."""
    _configure_logging(log_level, log_file)

    config = ConsoleConfig.from_env()
    if prompt is not None:
        config.prompt = prompt

    config.extra_words = list(words)

    from pi.console.console import Console
    from pi.console.terminal import create_terminal

    terminal = create_terminal(write_log_path=config.write_log_path)
    try:
        console = Console(config, terminal)
    except InvalidCharacterError as e:
        raise click.BadParameter(str(e), param_hint="--word") from e

    if dump_vocabulary:
        click.echo(console.session.vocabulary.dump())
        return

    with terminal:
        code = console.run()
    sys.exit(code)


if __name__ == "__main__":
    main()
