"""Domain layer for fundplan application.

Only the pure engine is re-exported here; the services import the database
layer and are imported from their own modules.
"""

from fundplan.domain.allocation import recompute, validate_investment
from fundplan.domain.currency import CurrencyConverter
from fundplan.domain.groups import GroupHierarchy
from fundplan.domain.ledger import completion_count, toggle_completion
from fundplan.domain.schedule import generate_schedule
from fundplan.domain.snapshot import snapshot_from_dict, snapshot_to_dict

__all__ = [
    "recompute",
    "validate_investment",
    "CurrencyConverter",
    "GroupHierarchy",
    "completion_count",
    "toggle_completion",
    "generate_schedule",
    "snapshot_from_dict",
    "snapshot_to_dict",
]
