# Core module exports
from flagspec.core.config import settings, get_settings
from flagspec.core.logging import (
    configure_logging,
    get_logger,
    bind_context,
    clear_context,
    parser_logger,
    messages_logger,
    cli_logger,
)
