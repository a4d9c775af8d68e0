"""Doctor command for environment diagnostics."""

from __future__ import annotations

import typer
from rich.console import Console
from rich.table import Table

from adapters.arpio_client import ArpioClient
from core.config import ARPIO_URL, ArpioSettings, write_user_env_vars
from core.errors import ArpioError

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


def _check_api(settings: ArpioSettings) -> tuple[bool, str]:
    """Authenticated round-trip: list the account's applications."""

    try:
        with ArpioClient.from_settings(settings) as client:
            apps = client.apps.list()
        return True, f"{len(apps)} application(s) visible"
    except ArpioError as exc:
        return False, str(exc)


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = ArpioSettings()

    table = Table(title="Arpio Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    # Config
    table.add_row("API URL", "OK", settings.api_url)
    table.add_row("User-Agent", "OK", settings.user_agent)
    missing = [
        name
        for name, value in (
            ("account_id", settings.account_id),
            ("api_key_id", settings.api_key_id),
            ("api_key_secret", settings.api_key_secret),
        )
        if not value
    ]
    if missing:
        table.add_row("Credentials", "FAIL", f"Missing: {', '.join(missing)}")
    else:
        table.add_row("Credentials", "OK", f"Account {settings.account_id}")
    if settings.tls_insecure_skip_verify:
        table.add_row("TLS", "WARN", "Certificate verification disabled")

    ok_api = False
    if not missing:
        ok_api, detail_api = _check_api(settings)
        table.add_row("API access", "OK" if ok_api else "FAIL", detail_api)

    _console.print(table)

    if missing:
        _console.print("\n[yellow]Note:[/yellow] Run `arpio doctor setup` to store credentials.")
    if missing or not ok_api:
        raise typer.Exit(code=1)


@app.command()
def setup() -> None:
    """Interactive credential setup (stores config in the user config .env)."""

    api_url = typer.prompt("Arpio API URL", default=ARPIO_URL, show_default=True).strip()
    account_id = typer.prompt("Arpio account ID").strip()
    api_key_id = typer.prompt("API key ID").strip()
    api_key_secret = typer.prompt("API key secret", hide_input=True, confirmation_prompt=False).strip()

    if not account_id or not api_key_id or not api_key_secret:
        raise typer.BadParameter("account ID, API key ID and API key secret are required")
    if ":" in api_key_id:
        raise typer.BadParameter("API key ID must not contain ':'")

    env_path = write_user_env_vars(
        {
            "ARPIO_API_URL": api_url,
            "ARPIO_ACCOUNT_ID": account_id,
            "ARPIO_API_KEY_ID": api_key_id,
            "ARPIO_API_KEY_SECRET": api_key_secret,
        }
    )

    _console.print(f"[green]Saved Arpio config to:[/green] {env_path}")
