"""BaseService: shared foundation for the calendar services.

Every service receives :class:`CalendarSettings` at construction time.
The settings supply the default reform policy, the parser limits, and the
output precision.  The host clock is read here and nowhere below.
"""

from __future__ import annotations

import datetime
import logging
from typing import TYPE_CHECKING, Any

from reformcal.domain.reform import CalendarReform
from reformcal.domain.value import DateValue

if TYPE_CHECKING:
    from reformcal.config.settings import CalendarSettings
    from reformcal.domain.completion import ReferenceProvider

logger = logging.getLogger(__name__)


class BaseService:
    """Base for service-layer classes.

    Usage::

        class ParseService(BaseService):
            def parse(self, text: str) -> ServiceResult:
                reform = self._reform(None, warnings)
                ...
    """

    def __init__(self, settings: CalendarSettings) -> None:
        self._settings = settings

    def _reform(self, override: Any, warnings: list[str]) -> CalendarReform:
        """Reform policy from *override*, else the configured one.

        Raises:
            InvalidReformError: When the value is not a reform at all.
        """
        value = override if override is not None else self._settings.effective_reform
        return CalendarReform.coerce(value, warnings)

    def _reference(self, reform: CalendarReform, today: datetime.date | None = None) -> ReferenceProvider:
        """Lazy provider of the reference date used to complete partial input."""

        def provide() -> DateValue:
            day = today or datetime.date.today()
            logger.debug("reference date %s", day.isoformat())
            return DateValue.from_date(day, reform)

        return provide
