"""Root logger configuration, including the custom TRACE level."""

import logging

# Custom TRACE level
TRACE = 5
logging.TRACE = TRACE
logging.addLevelName(TRACE, "TRACE")


def trace_method(self, msg, *args, **kwargs):
    if self.isEnabledFor(TRACE):
        self._log(TRACE, msg, args, **kwargs)


logging.Logger.trace = trace_method


def configure_logging(log_level_str: str) -> None:
    """Configure the root logger once; later calls are no-ops."""
    log_level_str = log_level_str.upper()
    if logging.getLogger().hasHandlers():
        return

    if log_level_str == "TRACE":
        root_level = TRACE
    elif log_level_str == "VERBOSE":
        root_level = logging.DEBUG
    else:
        root_level = getattr(logging, log_level_str, logging.INFO)

    logging.basicConfig(
        level=root_level,
        format='%(asctime)s - %(name)s - %(levelname)-8s - %(message)s'
    )
    root = logging.getLogger()

    # Handle VERBOSE mode: HTTP client details for debugging the email provider
    if log_level_str in ("VERBOSE", "TRACE"):
        http_level = logging.DEBUG if log_level_str == "VERBOSE" else TRACE
        root.info(f"{log_level_str} mode enabled: HTTP client details active for debugging.")
    else:
        http_level = logging.WARNING

    root.setLevel(root_level)
    logging.getLogger("httpcore").setLevel(http_level)
    logging.getLogger("httpx").setLevel(http_level)
    root.debug("Debug logging enabled at startup.")
