"""create-waskit [DIRECTORY] - Create a new project from a template."""

import sys
from pathlib import Path

import click
from rich.markup import escape
from rich.panel import Panel

from waskit.core.config import load_config
from waskit.core.copier import FileTreeCopier
from waskit.core.errors import CopyError, WaskitError
from waskit.core.installer import InstallationOrchestrator
from waskit.core.mutator import ConfigMutator
from waskit.core.registry import TemplateRegistry
from waskit.core.scaffold import ScaffoldCoordinator, ScaffoldRequest
from waskit.prompts import confirm_overwrite, prompt_project_directory, prompt_template_choice
from waskit.ui.theme import make_console

console = make_console()
err_console = make_console(stderr=True)


@click.command()
@click.argument("directory", required=False)
@click.option(
    "--force",
    "-f",
    is_flag=True,
    help="Overwrite the target directory if it exists",
)
@click.option(
    "--skip-install",
    "-s",
    is_flag=True,
    help="Skip dependency installation",
)
@click.option(
    "--git",
    "-g",
    "init_git",
    is_flag=True,
    help="Initialize a git repository",
)
@click.option(
    "--template",
    "-t",
    help="Template id to use (see 'create-waskit list')",
)
@click.option(
    "--css/--no-css",
    default=None,
    help="Include or drop Tailwind CSS without asking",
)
@click.option(
    "--quiet",
    "-q",
    is_flag=True,
    help="Hide the copy progress bar",
)
def create_cmd(
    directory: str,
    force: bool,
    skip_install: bool,
    init_git: bool,
    template: str,
    css: bool,
    quiet: bool,
):
    """Create a new project in DIRECTORY.

    DIRECTORY is asked for when omitted. Without --template you choose a
    language, a framework and whether to keep Tailwind CSS.

    \b
    Examples:
      create-waskit my-app
      create-waskit my-app -t react-typescript --no-css -g
      create-waskit my-app -t vanilla-javascript -f -s
    """
    config = load_config()

    try:
        registry = TemplateRegistry.load(config.templates_dir)
    except WaskitError as e:
        err_console.print(f"[error]Error:[/] {escape(str(e))}")
        sys.exit(1)

    if not directory:
        directory = prompt_project_directory()

    if template:
        include_css = True if css is None else css
    else:
        choice = prompt_template_choice(ask_css=css is None)
        template = choice.template_id
        include_css = choice.include_css_framework if css is None else css

    request = ScaffoldRequest(
        target_directory=Path(directory),
        template_id=template,
        include_css_framework=include_css,
        init_version_control=init_git,
        force=force,
        skip_install=skip_install,
    )

    console.print(Panel.fit(
        f"[title]create-waskit[/] - [accent]{escape(request.project_name)}[/] ({escape(template)})",
        border_style="blue",
    ))

    coordinator = ScaffoldCoordinator(
        registry,
        copier=FileTreeCopier(),
        mutator=ConfigMutator(
            css_dependencies=config.css_dependencies,
            manifest_name=config.manifest_name,
        ),
        installer=InstallationOrchestrator(
            primary=config.primary_manager,
            fallback=config.fallback_manager,
        ),
        confirm_overwrite=confirm_overwrite,
        commit_message=config.commit_message,
        console=console,
        show_progress=not quiet,
    )

    try:
        result = coordinator.run(request)
    except CopyError as e:
        err_console.print(f"[error]Error:[/] {escape(str(e))}")
        err_console.print(
            f"Files copied before the failure were left in {escape(str(request.project_dir))}."
        )
        sys.exit(1)
    except WaskitError as e:
        err_console.print(f"[error]Error:[/] {escape(str(e))}")
        if template not in registry:
            err_console.print("Try 'create-waskit list' to see available templates.")
        sys.exit(1)

    if result.cancelled:
        return

    _print_next_steps(result.next_steps, result.warnings)


def _print_next_steps(steps: list, warnings: list):
    """Print next steps after creation."""
    if warnings:
        console.print(f"\n[warning]Project created with {len(warnings)} warning(s).[/]")
    console.print("\n[success]Project setup complete![/] Next steps:")
    for step in steps:
        console.print(f"  {escape(step)}")
