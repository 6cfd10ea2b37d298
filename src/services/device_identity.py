"""Anonymous device identity and session persistence for rider clients.

A rider client gets a stable pseudo-unique device id without any server-issued
credential, plus a small session record with a rolling time-to-live.

This is a convenience identity, not an authentication boundary: the id is
generated and stored by the client, and clearing local storage resets it. It is
kept separate from rider profiles so a server-verified identity can replace it
without touching the rest of the system.

Persisted state is two independent key-value slots:
- rider_device_id: permanent device id string
- rider_session: JSON session record, treated as absent once its timestamp is
  more than 30 days old
"""

import base64
import json
import logging
import platform
import re
import secrets
import shutil
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from pathlib import Path
from typing import Any, Protocol

from pydantic import ValidationError

from src.core.config import constants, settings
from src.core.validators import is_valid_mobile
from src.domain.session import DeviceSession


logger = logging.getLogger(__name__)

_NON_ALPHANUMERIC = re.compile(r"[^A-Za-z0-9]")


class KeyValueStorage(Protocol):
    """Minimal string key-value store, shaped like browser local storage."""

    def get_item(self, key: str) -> str | None: ...

    def set_item(self, key: str, value: str) -> None: ...

    def remove_item(self, key: str) -> None: ...


class InMemoryStorage:
    """Storage scoped to the current process."""

    def __init__(self, initial: dict[str, str] | None = None):
        self._items: dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> str | None:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)


class FileStorage:
    """Storage backed by a single JSON file, surviving process restarts.

    An unreadable or corrupted file reads as empty; the next write replaces it.
    """

    def __init__(self, path: str | Path):
        self._path = Path(path).expanduser()

    def _load(self) -> dict[str, str]:
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return {}
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            logger.warning("Device storage unreadable, treating as empty", extra={"path": str(self._path), "error": str(e)})
            return {}
        if not isinstance(data, dict):
            logger.warning("Device storage has unexpected shape, treating as empty", extra={"path": str(self._path)})
            return {}
        return {str(key): value for key, value in data.items() if isinstance(value, str)}

    def _save(self, items: dict[str, str]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self._path.with_suffix(self._path.suffix + ".tmp")
        tmp_path.write_text(json.dumps(items), encoding="utf-8")
        tmp_path.replace(self._path)

    def get_item(self, key: str) -> str | None:
        return self._load().get(key)

    def set_item(self, key: str, value: str) -> None:
        items = self._load()
        items[key] = value
        self._save(items)

    def remove_item(self, key: str) -> None:
        items = self._load()
        if items.pop(key, None) is not None:
            self._save(items)


@dataclass(frozen=True)
class ClientEnvironment:
    """Ambient client details mixed into a freshly generated device id."""

    user_agent: str
    screen_width: int
    screen_height: int

    @classmethod
    def from_host(cls) -> "ClientEnvironment":
        """Describe the machine the client runs on."""
        size = shutil.get_terminal_size()
        return cls(
            user_agent=f"ridertrack/0.1.0 ({platform.platform()}; Python {platform.python_version()})",
            screen_width=size.columns,
            screen_height=size.lines,
        )


def _epoch_ms() -> int:
    return int(datetime.now(UTC).timestamp() * 1000)


class DeviceIdentity:
    """Stable device id plus a bounded-lifetime session for an anonymous client."""

    is_valid_mobile = staticmethod(is_valid_mobile)

    def __init__(
        self,
        storage: KeyValueStorage,
        environment: ClientEnvironment | None = None,
        *,
        clock: Callable[[], int] | None = None,
    ):
        """
        Initialize the device identity.

        Args:
            storage: Where the device id and session are persisted
            environment: Client details used when generating a device id
            clock: Callable returning the current time in epoch milliseconds
        """
        self._storage = storage
        self._environment = environment or ClientEnvironment.from_host()
        self._clock = clock or _epoch_ms

    def generate_device_id(self) -> str:
        """Generate a new device id without persisting it.

        Combines a timestamp, a random token, the tail of the user agent and the
        screen size, base64-encodes them, strips non-alphanumerics and keeps the
        first 32 characters. Collisions are possible in principle and accepted.
        """
        user_agent_tail = self._environment.user_agent[-constants.USER_AGENT_TAIL_LENGTH :]
        screen_size = f"{self._environment.screen_width}x{self._environment.screen_height}"
        raw = f"{self._clock()}_{secrets.token_hex(8)}_{user_agent_tail}_{screen_size}"

        encoded = base64.b64encode(raw.encode("utf-8")).decode("ascii")
        return _NON_ALPHANUMERIC.sub("", encoded)[: constants.DEVICE_ID_LENGTH]

    def get_device_id(self) -> str:
        """Return the persisted device id, generating and persisting one on first use."""
        device_id = self._storage.get_item(constants.DEVICE_ID_KEY)
        if device_id:
            return device_id

        device_id = self.generate_device_id()
        self._storage.set_item(constants.DEVICE_ID_KEY, device_id)
        logger.info("Generated new device id", extra={"device_id": device_id})
        return device_id

    def set_session(self, **fields: Any) -> DeviceSession:
        """Persist a session, overwriting any previous one.

        The device id and timestamp are always set here; any values for them in
        `fields` are ignored.

        Returns:
            The session that was written
        """
        payload = {key: value for key, value in fields.items() if key not in {"device_id", "deviceId", "timestamp"}}
        session = DeviceSession.model_validate(
            {**payload, "deviceId": self.get_device_id(), "timestamp": self._clock()},
        )
        self._storage.set_item(constants.SESSION_KEY, session.model_dump_json(by_alias=True))
        logger.info(
            "Device session saved",
            extra={"device_id": session.device_id, "rider_profile_id": session.rider_profile_id},
        )
        return session

    def get_session(self) -> DeviceSession | None:
        """Return the persisted session, or None if absent, unreadable or expired.

        Never raises: storage and parse failures read as "no session". Expired
        sessions are removed from storage.
        """
        try:
            raw = self._storage.get_item(constants.SESSION_KEY)
        except OSError as e:
            logger.warning("Device session storage read failed", extra={"error": str(e)})
            return None

        if not raw:
            return None

        try:
            session = DeviceSession.model_validate(json.loads(raw))
        except (json.JSONDecodeError, ValidationError, TypeError) as e:
            logger.debug("Ignoring unreadable device session", extra={"error": str(e)})
            return None

        ttl_ms = timedelta(days=constants.SESSION_TTL_DAYS) // timedelta(milliseconds=1)
        if session.timestamp < self._clock() - ttl_ms:
            logger.info("Device session expired, clearing", extra={"device_id": session.device_id})
            try:
                self.clear_session()
            except OSError as e:
                logger.warning("Failed to purge expired device session", extra={"error": str(e)})
            return None

        return session

    def clear_session(self) -> None:
        """Remove the session. The device id is kept."""
        self._storage.remove_item(constants.SESSION_KEY)


def default_identity() -> DeviceIdentity:
    """Device identity persisted at the configured storage path."""
    return DeviceIdentity(FileStorage(settings.device_storage_path))
