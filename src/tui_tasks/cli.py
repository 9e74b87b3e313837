"""CLI entry point using Click."""

from __future__ import annotations

import logging
from pathlib import Path

import click

from tui_tasks.config import DEFAULT_CONFIG_DIR

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class _DefaultGroup(click.Group):
    """Insert 'run' when the first arg is not a registered subcommand."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.no_args_is_help = False  # bare `tui-tasks` routes to run

    def invoke(self, ctx):
        if not ctx._protected_args and not ctx.args:
            ctx._protected_args = ["run"]
        return super().invoke(ctx)

    def resolve_command(self, ctx, args):
        cmd_name = args[0] if args else None
        if cmd_name and cmd_name in self.commands:
            return super().resolve_command(ctx, args)
        return super().resolve_command(ctx, ["run"] + list(args))


def _configure_logging(log_file: str | None) -> None:
    # The TUI owns the terminal, so logs only ever go to a file.
    if not log_file:
        logging.getLogger("tui_tasks").addHandler(logging.NullHandler())
        return
    handler = logging.FileHandler(log_file, encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root = logging.getLogger("tui_tasks")
    root.addHandler(handler)
    root.setLevel(logging.DEBUG)


@click.group(cls=_DefaultGroup)
@click.option(
    "--config-dir",
    default=str(DEFAULT_CONFIG_DIR),
    type=click.Path(file_okay=False),
    help="Directory holding config.toml, theme.yaml and tasks.json",
)
@click.option("--no-color", is_flag=True, help="Disable color output")
@click.option("--log-file", default=None, type=click.Path(dir_okay=False), help="Write debug log to this file")
@click.version_option(package_name="tui-tasks")
@click.pass_context
def main(ctx, config_dir: str, no_color: bool, log_file: str | None) -> None:
    """TUI Tasks - Terminal UI personal task manager."""
    _configure_logging(log_file)
    ctx.ensure_object(dict)
    ctx.obj["config_dir"] = Path(config_dir).expanduser()
    ctx.obj["no_color"] = no_color


@main.command()
@click.option("--data", "data_file", default=None, type=click.Path(dir_okay=False), help="Task file (JSON)")
@click.pass_context
def run(ctx, data_file: str | None) -> None:
    """Open the task list. Tasks are read from and saved to the data file."""
    from tui_tasks.app import TaskApp
    from tui_tasks.config import load_config
    from tui_tasks.store import JsonTaskStore, TaskStoreError

    config = load_config(ctx.obj["config_dir"])
    if data_file:
        config.data_file = Path(data_file).expanduser().resolve()

    try:
        store = JsonTaskStore(config.data_path)
    except TaskStoreError as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)

    app = TaskApp(config=config, store=store, no_color=ctx.obj["no_color"])
    app.run()


@main.command("init")
@click.option("--data", "data_file", default=None, help="Task file to record in config.toml")
@click.option("--force", is_flag=True, help="Overwrite an existing config.toml")
@click.pass_context
def init_cmd(ctx, data_file: str | None, force: bool) -> None:
    """Write a default config.toml to the config directory."""
    from tui_tasks.config import CONFIG_FILE, AppConfig, save_config

    config_dir: Path = ctx.obj["config_dir"]
    config_path = config_dir / CONFIG_FILE
    if config_path.exists() and not force:
        click.echo(f"Already exists: {config_path}", err=True)
        raise SystemExit(1)

    config = AppConfig(config_dir=config_dir)
    if data_file:
        config.data_file = Path(data_file).expanduser()
    dest = save_config(config)
    click.echo(f"Created {dest}")
    click.echo("Run 'tui-tasks' to open your tasks.")


@main.command("init-theme")
@click.pass_context
def init_theme_cmd(ctx) -> None:
    """Copy the default theme to <config-dir>/theme.yaml for customization."""
    from tui_tasks.theme import init_theme

    try:
        dest = init_theme(ctx.obj["config_dir"])
    except FileExistsError as e:
        click.echo(f"Already exists: {e}", err=True)
        raise SystemExit(1)
    click.echo(f"Created {dest}")
