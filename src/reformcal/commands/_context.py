"""AppContext: shared Click context for all commands.

Created once by the root CLI group and handed to subcommands via
``@click.pass_obj``.  Services are built on first use so ``--help`` and
``--version`` never touch the calendar engine.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from reformcal.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from reformcal.config.settings import CalendarSettings
    from reformcal.services.convert import ConvertService
    from reformcal.services.parse import ParseService
    from reformcal.services.result import ServiceResult


class AppContext:
    """Settings, lazily built services, and result emission."""

    def __init__(self, settings: CalendarSettings) -> None:
        self.settings = settings
        self._parse: ParseService | None = None
        self._convert: ConvertService | None = None

        from reformcal.config.logging import configure_logging

        configure_logging(
            verbose=settings.verbose,
            log_json=settings.log_json,
            reform=str(settings.effective_reform),
        )

        if settings.verbose:
            from reformcal.services.telemetry import enable_telemetry

            enable_telemetry()

    @property
    def parse_service(self) -> ParseService:
        if self._parse is None:
            from reformcal.services.parse import ParseService

            self._parse = ParseService(self.settings)
        return self._parse

    @property
    def convert_service(self) -> ConvertService:
        if self._convert is None:
            from reformcal.services.convert import ConvertService

            self._convert = ConvertService(self.settings)
        return self._convert

    def emit(self, result: ServiceResult) -> None:
        """Print *result*; a failure goes to stderr and exits 1.

        Warnings of a successful human or quiet result go to stderr so
        piped output stays a single value.  JSON carries them inline.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if not result.ok:
            click.echo(output, err=True)
            raise SystemExit(1)
        click.echo(output)
        if not settings.json_output:
            for warning in result.warnings:
                click.echo(f"WARNING: {warning}", err=True)
