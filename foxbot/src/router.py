"""
Command router: maps a menu action token to its report.

The token set is closed (``real_time``, ``energy``, ``status``,
``history``). Exactly one report runs per routed action; an unknown token
is ignored without a reply or an error.

CHANGELOG:
- 2026-10-19: Add history action to the menu
- 2026-10-19: Initial creation (STORY-008)

TODO:
- None
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

from foxbot.src.reports import REPORTS, ReportFormatter

if TYPE_CHECKING:
    from foxbot.src.context import BotContext

logger = logging.getLogger(__name__)

GREETING = "Bem-vindo ao Bot da FoxESS! Escolha uma opção:"

MENU_LABELS: dict[str, str] = {
    "real_time": "📊 Dados em tempo real",
    "energy": "⚡ Produção de energia",
    "status": "🔄 Atualizar Status",
    "history": "📈 Histórico do dia",
}
"""Menu button label per action token, in display order."""


class CommandRouter:
    """Dispatch action tokens to report formatters.

    Args:
        context: Application context providing the client and serial number.
        reports: Formatters to route to; defaults to :data:`REPORTS`.
    """

    def __init__(
        self,
        context: BotContext,
        reports: Iterable[ReportFormatter] = REPORTS,
    ) -> None:
        self._context = context
        self._reports: dict[str, ReportFormatter] = {r.name: r for r in reports}

    @property
    def actions(self) -> list[str]:
        return list(self._reports)

    def greeting(self) -> str:
        return GREETING

    def menu(self) -> list[tuple[str, str]]:
        """Return ``(label, token)`` pairs for the routable actions."""
        return [(MENU_LABELS.get(token, token), token) for token in self._reports]

    async def route(self, action: str | None) -> str | None:
        """Run the report bound to *action* and return its text.

        Returns:
            The report text (possibly a failure message), or ``None`` when
            *action* is empty or unknown.
        """
        report = self._reports.get(action) if action else None
        if report is None:
            logger.debug("Ignoring unknown action %r", action)
            return None

        logger.info("Routing action '%s'", action)
        return await report.run(self._context.client, self._context.device_sn)
