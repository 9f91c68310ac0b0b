"""Interactive prompts for create-waskit.

Each prompt returns plain values; validation happens here so the
scaffold engine only ever sees a complete request.
"""

from dataclasses import dataclass
from pathlib import Path

import click

LANGUAGES = ["JavaScript", "TypeScript"]
FRAMEWORKS = ["Vanilla", "React"]


@dataclass(frozen=True)
class TemplateChoice:
    """Answers to the template questions."""
    template_id: str
    include_css_framework: bool


def _not_empty(value: str) -> str:
    value = value.strip()
    if not value:
        raise click.BadParameter("Project name cannot be empty.")
    return value


def prompt_project_directory() -> str:
    """Ask for the new project's directory name."""
    return click.prompt(
        "What is the name of your new project?",
        value_proc=_not_empty,
    )


def prompt_template_choice(ask_css: bool = True) -> TemplateChoice:
    """Ask for language, framework and, optionally, the CSS framework."""
    language = click.prompt(
        "Select a language",
        type=click.Choice(LANGUAGES, case_sensitive=False),
        default=LANGUAGES[0],
    )
    framework = click.prompt(
        "Select a framework",
        type=click.Choice(FRAMEWORKS, case_sensitive=False),
        default=FRAMEWORKS[0],
    )
    include_css = click.confirm("Include Tailwind CSS?", default=True) if ask_css else True
    return TemplateChoice(
        template_id=f"{framework.lower()}-{language.lower()}",
        include_css_framework=include_css,
    )


def confirm_overwrite(path: Path) -> bool:
    """Ask before writing into an existing directory."""
    return click.confirm(
        f'Directory "{path.name}" already exists. Overwrite?',
        default=False,
    )
