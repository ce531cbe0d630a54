from __future__ import annotations
from fastapi import FastAPI
from pydantic import BaseModel
from . import __version__
from .bepinex import compose_environment, is_installed, missing_files
from .config_resolver import ConfigResolver
from .notifications import NotificationDispatcher, NotificationEvent, fetch_webhook_url
from .server import ServerLauncher
from .settings import Settings

class ActionResult(BaseModel):
    ok: bool
    detail: str | None = None
    data: dict | None = None

class NotifyRequest(BaseModel):
    message: str
    webhook: str | None = None

def create_app(settings: Settings, resolver: ConfigResolver) -> FastAPI:
    app = FastAPI(title="Valheim Launcher API", version=__version__)
    server = ServerLauncher(settings, resolver)
    dispatcher = NotificationDispatcher.from_settings(settings, resolver)

    @app.get("/health")
    def health():
        return {"ok": True}

    @app.get("/status", response_model=ActionResult)
    def status():
        return ActionResult(ok=True, data=server.status())

    @app.get("/bepinex", response_model=ActionResult)
    def bepinex():
        # composed per request, overrides may have changed
        env = compose_environment(settings.working_dir, resolver)
        return ActionResult(ok=True, data={
            "installed": is_installed(env),
            "missing": missing_files(env),
            "environment": env.as_environ(),
        })

    @app.post("/notify", response_model=ActionResult)
    def notify(req: NotifyRequest):
        event = NotificationEvent.broadcast()
        if req.webhook:
            sent = dispatcher.send_custom(event, req.webhook, req.message)
        elif dispatcher.is_enabled():
            sent = dispatcher.send_custom(event, fetch_webhook_url(resolver), req.message)
        else:
            return ActionResult(ok=False, detail="webhook_not_configured")
        return ActionResult(ok=sent, detail="sent" if sent else "delivery_failed")

    return app
