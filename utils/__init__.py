"""Utility modules for cross-cutting concerns."""

from utils.timezone import (
    now_utc,
    format_display_date,
    parse_display_date,
    parse_timestamp,
)
from utils.admin_context import (
    get_current_admin,
    set_current_admin,
    clear_current_admin,
    admin_context,
)
