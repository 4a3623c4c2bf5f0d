"""In-memory store for the deal draft being built up across the development
calculators.

Updates before a draft exists are ignored. Each completed section advances
``current_step`` but never moves it back.
"""

import dataclasses
import logging
from typing import Optional

from propcalc.models.deal import (
    BUILD_COST_STEP,
    FINANCE_STEP,
    GDV_STEP,
    PD_STEP,
    BuildCostSection,
    DealDraft,
    FinanceSection,
    GdvSection,
    PdSection,
)

logger = logging.getLogger(__name__)


class DealStore:
    def __init__(self, draft: Optional[DealDraft] = None):
        self._draft = draft

    @property
    def current_deal(self) -> Optional[DealDraft]:
        return self._draft

    def set_current_deal(self, draft: Optional[DealDraft]) -> None:
        self._draft = draft

    def start_new_deal(self, address: str, local_authority: str) -> DealDraft:
        self._draft = DealDraft(address=address, local_authority=local_authority)
        return self._draft

    def clear_deal(self) -> None:
        self._draft = None

    def _update(self, section: str, data, step: int) -> Optional[DealDraft]:
        if self._draft is None:
            logger.debug("No deal in progress, ignoring %s update", section)
            return None
        self._draft = dataclasses.replace(
            self._draft,
            **{section: data},
            current_step=max(self._draft.current_step, step),
        )
        return self._draft

    def update_pd_data(self, data: Optional[PdSection]) -> Optional[DealDraft]:
        return self._update("pd", data, PD_STEP)

    def update_gdv_data(self, data: Optional[GdvSection]) -> Optional[DealDraft]:
        return self._update("gdv", data, GDV_STEP)

    def update_build_cost_data(self, data: Optional[BuildCostSection]) -> Optional[DealDraft]:
        return self._update("build_cost", data, BUILD_COST_STEP)

    def update_finance_data(self, data: Optional[FinanceSection]) -> Optional[DealDraft]:
        return self._update("finance", data, FINANCE_STEP)
