"""AppContext: shared Click context for all commands.

Created once by the root CLI group and passed to subcommands via
``@click.pass_obj``. Provides lazy Vault initialization and centralized
result emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from tasknotes.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from tasknotes.config.settings import TaskNotesSettings
    from tasknotes.infrastructure.vault import Vault
    from tasknotes.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    The vault is created on first use so ``--help`` and ``--version`` never
    load plugins.
    """

    def __init__(self, settings: TaskNotesSettings) -> None:
        self.settings = settings
        self._vault: Vault | None = None

        from tasknotes.config.logging import configure_logging

        configure_logging(
            verbose=settings.verbose,
            quiet=settings.quiet,
            log_json=settings.log_json,
            vault_name=settings.vault.name,
        )

        if settings.verbose:
            from tasknotes.services.telemetry import enable_telemetry

            enable_telemetry()

    @property
    def vault(self) -> Vault:
        """The vault instance (created lazily on first access)."""
        if self._vault is None:
            from tasknotes.infrastructure.vault import Vault

            self._vault = Vault(self.settings)
            self._vault.init_event_bus(sync=self.settings.sync)
        return self._vault

    @property
    def output_settings(self) -> OutputSettings:
        return OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )

    def emit(self, result: ServiceResult, *, exit_on_error: bool = True) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success: writes to stdout. Warnings go to stderr so they don't
          pollute piped output.
        * Failure: writes to stderr and exits with code 1, unless
          *exit_on_error* is False (long-running commands).
        """
        settings = self.output_settings
        output = format_result(result, settings=settings)
        if result.ok:
            if output:
                click.echo(output)
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
            return

        click.echo(output, err=True)
        if exit_on_error:
            raise SystemExit(1)

    def report_plugin_failures(self) -> None:
        """Wait for dispatched hooks and warn on stderr about the ones that failed."""
        if self._vault is None or self._vault.event_bus is None:
            return
        for failed in self._vault.event_bus.drain():
            click.echo(
                f"WARNING: Plugin hook {failed['hook_name']} failed: {failed['error']}",
                err=True,
            )

    def close(self) -> None:
        """Wait for plugin hooks and release the vault."""
        if self._vault is not None:
            self.report_plugin_failures()
            self._vault.close()
            self._vault = None
