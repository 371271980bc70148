import logging
from pathlib import Path

import typer

from patchxref.config import PatchXrefConfig, load_config
from patchxref.logging import get_logger, setup_logging
from patchxref.patches.session import PatchSession
from patchxref.rendering.report import render_comparison_page, render_overview

logger = get_logger(__name__)

app = typer.Typer(no_args_is_help=True)

_state: dict[str, PatchXrefConfig] = {}


@app.callback()
def main(
    config: Path | None = typer.Option(None, "--config", help="YAML config file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
):
    """
    Cross-reference several versions of the same patch series.
    """
    try:
        settings = load_config(config)
    except (FileNotFoundError, ValueError) as exc:
        raise typer.BadParameter(str(exc), param_hint="--config")
    setup_logging(logging.DEBUG if verbose else settings.log_level)
    _state["config"] = settings


def _load(patches: list[Path]) -> PatchSession:
    session = PatchSession(config=_state.get("config"))
    logger.debug("Loading %d patch files", len(patches))
    session.load_files(patches)
    if session.error:
        typer.echo(session.error, err=True)
        raise typer.Exit(code=1)
    return session


@app.command("summary")
def summary_cmd(
    patches: list[Path] = typer.Argument(..., help="Patch or diff files"),
):
    """Show which files are present in all patches."""
    session = _load(patches)
    typer.echo(render_overview(session.overview(), session.summaries()), nl=False)


@app.command("show")
def show_cmd(
    patch: Path = typer.Argument(..., help="Patch or diff file"),
    file_list: bool = typer.Option(True, "--file-list/--no-file-list"),
):
    """Render one patch file."""
    session = _load([patch])
    active = session.active
    if active is None:
        raise typer.Exit(code=1)
    config = session.config.render.model_copy(update={"draw_file_list": file_list})
    typer.echo(session.renderer.render(list(active.diffs), config), nl=False)


@app.command("compare")
def compare_cmd(
    filename: str = typer.Argument(..., help="File path as it appears in the patches"),
    patches: list[Path] = typer.Argument(..., help="Patch or diff files"),
):
    """Compare one file across the given patches."""
    session = _load(patches)
    result = session.compare(filename)
    typer.echo(
        render_comparison_page(result, session.renderer, session.config.render),
        nl=False,
    )
