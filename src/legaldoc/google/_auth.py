from __future__ import annotations

import json
import os
from dataclasses import dataclass
from typing import Any

import google.auth
from google.auth.transport.requests import AuthorizedSession
from google.oauth2 import service_account
from googleapiclient.discovery import build

from legaldoc import logger as log

log = log.get_logger()


STORAGE_SCOPES = ("https://www.googleapis.com/auth/devstorage.read_write",)


@dataclass(frozen=True)
class AuthConfig:
    """How Google credentials should be loaded."""

    scopes: tuple[str, ...] = STORAGE_SCOPES
    credentials_json_env: str = "GOOGLE_CREDENTIALS_JSON"
    credentials_file: str = "credentials.json"


def load_credentials(config: AuthConfig | None = None):
    """Load service account credentials from env, file, or the environment default.

    An invalid JSON env var falls back to the credentials file; a missing
    file falls back to Application Default Credentials.
    """

    config = config or AuthConfig()
    creds_json = os.getenv(config.credentials_json_env)

    if creds_json:
        try:
            creds_dict = json.loads(creds_json)
            if not isinstance(creds_dict, dict):
                raise ValueError("Decoded credentials JSON is not a dict")
            return service_account.Credentials.from_service_account_info(
                creds_dict,
                scopes=list(config.scopes),
            )
        except Exception as e:
            log.warning(
                f"Invalid {config.credentials_json_env} ({e}); falling back to {config.credentials_file}"
            )

    if os.path.exists(config.credentials_file):
        return service_account.Credentials.from_service_account_file(
            config.credentials_file,
            scopes=list(config.scopes),
        )

    log.debug(
        f"{config.credentials_file} not found; using application default credentials"
    )
    creds, _project = google.auth.default(scopes=list(config.scopes))
    return creds


def build_storage_service(creds) -> Any:
    return build("storage", "v1", credentials=creds, cache_discovery=False)


def build_authorized_session(creds) -> AuthorizedSession:
    return AuthorizedSession(creds)
