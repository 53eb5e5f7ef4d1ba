import time

import httpx
import jwt

from pr_reviewer.config import Settings


def create_app_jwt(app_id: str, private_key: str, now: int | None = None) -> str:
    """JWT приложения GitHub, живёт 10 минут."""
    now = int(time.time()) if now is None else now
    payload = {"iat": now - 60, "exp": now + 600, "iss": app_id}
    # В переменных окружения ключ часто лежит с экранированными переводами строк
    return jwt.encode(payload, private_key.replace("\\n", "\n"), algorithm="RS256")


def get_installation_token(settings: Settings, installation_id: int) -> str:
    settings.require("github_app_id", "github_private_key")
    app_jwt = create_app_jwt(settings.github_app_id, settings.github_private_key)
    resp = httpx.post(
        f"{settings.github_api_url.rstrip('/')}/app/installations/{installation_id}/access_tokens",
        headers={
            "Authorization": f"Bearer {app_jwt}",
            "Accept": "application/vnd.github+json",
        },
        timeout=settings.github_timeout,
    )
    resp.raise_for_status()
    return resp.json()["token"]
