"""Compose HeatwaveService from a repository and the external sources."""

from functools import partial

from heatwave.application import AliasResolver, CallHistoryScanner, HeatwaveService
from heatwave.application.ports import CallLog, WaveContactRepository
from heatwave.config import Settings
from heatwave.infrastructure.external import InMemoryCallLog, InMemoryContactDirectory
from heatwave.infrastructure.phone import dial_uri
from heatwave.infrastructure.snapshot import load_snapshot


def build_service(
    repository: WaveContactRepository,
    directory,
    call_log: CallLog,
    settings: Settings | None = None,
) -> HeatwaveService:
    """directory must implement ContactDirectory, RawContactDirectory and PhoneNumberStore."""
    settings = settings or Settings()
    return HeatwaveService(
        repository,
        directory,
        AliasResolver(directory, directory),
        CallHistoryScanner(call_log, default_min_duration=settings.min_call_duration),
        format_dial_uri=partial(dial_uri, default_region=settings.default_region),
    )


def load_external_sources(settings: Settings):
    """Directory and call log from the configured snapshot, or empty ones when none is set."""
    if settings.directory_path is None:
        return InMemoryContactDirectory(), InMemoryCallLog()
    return load_snapshot(settings.directory_path)
