"""
Offseason Module

Draft pick inventory between seasons:
- Initial five-year pick generation and yearly roll-forward
- Draft order from standings and one-time pick numbering
- Pick trade values for the trade AI
"""

from offseason.draft_pick_service import (
    DraftOrder,
    DraftPickService,
    calculate_pick_value,
    order_for_draft,
)

__all__ = [
    'DraftOrder',
    'DraftPickService',
    'calculate_pick_value',
    'order_for_draft',
]
