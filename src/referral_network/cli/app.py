from __future__ import annotations

import typer

from referral_network.cli.commands.export import export_command
from referral_network.cli.commands.stats import stats_command

app = typer.Typer(
    name="referral-network",
    help="Referral network tree builder, inspector, and exporter",
    add_completion=False,
)

app.command("export")(export_command)
app.command("stats")(stats_command)


def main():
    app()


if __name__ == "__main__":
    main()
