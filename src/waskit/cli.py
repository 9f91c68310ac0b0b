"""Main CLI entry point for create-waskit."""

import logging

import click
from rich.logging import RichHandler

from waskit import __version__
from waskit.commands.create import create_cmd
from waskit.commands.list_templates import list_cmd
from waskit.ui.theme import make_console

DEFAULT_COMMAND = "create"


class DefaultCommandGroup(click.Group):
    """Group that runs `create` when no subcommand is named.

    Lets `create-waskit my-app -f` and `create-waskit list` share one
    entry point.
    """

    def parse_args(self, ctx, args):
        first_positional = next((arg for arg in args if not arg.startswith("-")), None)
        group_flags = set(ctx.help_option_names) | {"--version"}
        group_only = first_positional is None and any(arg in group_flags for arg in args)

        if first_positional not in self.commands and not group_only:
            args = self._with_default_command(args)
        return super().parse_args(ctx, args)

    def _with_default_command(self, args):
        # Group options stay in front of the command name
        group_opts = []
        rest = list(args)
        while rest and rest[0] in ("-v", "--verbose"):
            group_opts.append(rest.pop(0))
        return group_opts + [DEFAULT_COMMAND] + rest


def configure_logging(verbose: bool) -> None:
    """Send waskit log records to stderr through rich."""
    logger = logging.getLogger("waskit")
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(console=make_console(stderr=True), show_path=False)
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)


@click.group(cls=DefaultCommandGroup)
@click.version_option(version=__version__, prog_name="create-waskit")
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging")
def main(verbose: bool):
    """create-waskit - Create modern web projects with minimal setup.

    \b
    Quick Start:
      create-waskit my-app                          Interactive setup
      create-waskit my-app -t react-typescript      Pick a template
      create-waskit my-app -t vanilla-typescript -g Also init git
      create-waskit list                            Show templates

    \b
    Options for project creation:
      -f, --force         Overwrite an existing directory
      -s, --skip-install  Do not install dependencies
      -g, --git           Initialize a git repository
      -t, --template ID   Use a template without prompting
      --css / --no-css    Keep or drop Tailwind CSS
    """
    configure_logging(verbose)


main.add_command(create_cmd, name="create")
main.add_command(list_cmd, name="list")


if __name__ == "__main__":
    main()
