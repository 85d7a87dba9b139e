# src/fxsync/app.py
"""
Application Entry Point - Service Wiring and One-Shot Refresh

This module is the composition root: it builds the LocalStore, the
ProviderClient and the SyncService from Settings. Running it as a module
performs a single rates refresh and logs the outcome, which is handy for
checking provider connectivity from a shell.

Files that USE this module:
- python -m fxsync (module entry point)
- embedding applications (build_sync_service)

Files that this module USES:
- fxsync.shared.logging_conf (setup_logging for logging configuration)
- fxsync.config (settings for configuration management)
- fxsync.adapters.persistence (LocalStore)
- fxsync.adapters.providers (ProviderClient)
- fxsync.application (SyncService)
"""

from __future__ import annotations

import asyncio  # Runs the one-shot refresh
import logging
import sys  # Process exit code
from typing import Optional

from fxsync.adapters.persistence import LocalStore
from fxsync.adapters.providers import ProviderClient
from fxsync.application import SyncService
from fxsync.config import Settings, settings as default_settings
from fxsync.shared.logging_conf import setup_logging  # Logging configuration

logger = logging.getLogger(__name__)


def build_sync_service(settings: Optional[Settings] = None) -> SyncService:
    """
    Wire a SyncService with its store and provider client.

    Args:
        settings: Settings to use (read from the environment when None)

    Returns:
        Ready-to-use SyncService; its store persists under settings.data_dir
    """
    settings = settings or Settings()
    store = LocalStore(settings.data_dir, default_provider=settings.default_provider_selection)
    client = ProviderClient(settings)
    return SyncService(store, client, settings)


async def refresh_once(service: SyncService) -> bool:
    """
    Refresh rates once and wait for the result.

    Returns:
        True if no error was published during the refresh
    """
    errors = []
    subscription = service.observe_error().subscribe(errors.append)
    errors.clear()  # drop the value replayed on subscribe
    try:
        service.refresh_rates()
        await service.wait_idle()
    finally:
        subscription.dispose()

    if errors:
        logger.error("Refresh failed: %s", errors[-1])
        return False

    rates = service.observe_rates().value
    if rates is not None:
        logger.info(
            "Rates for %s as of %s: %d currencies (provider=%s)",
            rates.base, rates.date, len(rates.rates),
            rates.provider.label if rates.provider is not None else "unknown",
        )
    return True


def main() -> None:
    """
    Configure logging, build the service and run one refresh.

    Exits with status 1 when the refresh publishes an error.
    """
    settings = default_settings
    setup_logging(
        level=settings.log_level,
        log_file=settings.log_file,
        log_dir=settings.log_dir,
        max_bytes=settings.log_max_bytes,
        backup_count=settings.log_backup_count,
    )
    service = build_sync_service(settings)
    logger.info("Using provider %s, data dir %s",
                service.store.get_provider_selection().label, settings.data_dir)
    try:
        ok = asyncio.run(refresh_once(service))
    finally:
        service.client.close()
    if not ok:
        sys.exit(1)


if __name__ == "__main__":
    main()
