"""CLI interface for the clock provisioning tool."""
import typer
from . import utils
from . import steps
from .config import ProvisionConfig
from .sync import TimeSyncUnavailableError


def setup(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose output"),
):
    """Install ntpdate, set the Asia/Shanghai timezone and synchronize the clock."""
    utils.setup_logging(verbose)

    if not utils.is_root():
        typer.echo("❗ Clock provisioning requires root. Run with sudo.")
        raise typer.Exit(1)

    config = ProvisionConfig()
    try:
        steps.provision_system(config)
    except (TimeSyncUnavailableError, NotImplementedError) as e:
        typer.echo(f"❌ {e}")
        raise typer.Exit(1)
    typer.echo("✅ Clock provisioning complete!")


app = typer.Typer(
    name="clocksetup",
    help="A clock provisioning tool: timezone, NTP sync and hardware clock.",
    add_completion=False,
    invoke_without_command=True,
    callback=setup,
)


if __name__ == "__main__":
    app()
