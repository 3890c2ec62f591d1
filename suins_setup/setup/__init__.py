"""Setup orchestration for SuiNS on-chain types."""

from .day_one import (  # noqa: F401
    DISPLAY_FIELDS,
    DayOneSetupReport,
    PolicyOutcome,
    PolicySetupResult,
    asset_type,
    create_day_one_display,
    create_day_one_transfer_policy,
    run_day_one_setup,
)

__all__ = [
    "DISPLAY_FIELDS",
    "DayOneSetupReport",
    "PolicyOutcome",
    "PolicySetupResult",
    "asset_type",
    "create_day_one_display",
    "create_day_one_transfer_policy",
    "run_day_one_setup",
]
