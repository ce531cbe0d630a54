from __future__ import annotations
from pydantic import AnyUrl, TypeAdapter, ValidationError
from ..config_resolver import ConfigResolver
from ..logging_setup import get_logger

log = get_logger("valheim.launcher.notify")

WEBHOOK_URL = "WEBHOOK_URL"

_url_adapter = TypeAdapter(AnyUrl)

def fetch_webhook_url(resolver: ConfigResolver) -> str:
    url = resolver.resolve(WEBHOOK_URL, "")
    # docker env files often keep the surrounding quotes
    if url.startswith('"'):
        url = url[1:]
    if url.endswith('"'):
        url = url[:-1]
    return url

def is_valid_url(url: str) -> bool:
    try:
        _url_adapter.validate_python(url)
    except ValidationError:
        return False
    return True

def is_webhook_enabled(resolver: ConfigResolver) -> bool:
    url = fetch_webhook_url(resolver)
    if not url:
        return False
    log.debug("Webhook Url found!: %s", url)
    if not is_valid_url(url):
        log.warning("Webhook provided but does not look valid!! Is this right? %s", url)
        return False
    return True
