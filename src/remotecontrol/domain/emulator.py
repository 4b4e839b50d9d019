"""Stub emulator, UE and gNB back-ends with fixed data."""

from __future__ import annotations

import logging
import threading

log = logging.getLogger(__name__)

DEFAULT_UES = ("ue1", "ue2", "ue3")
DEFAULT_GNBS = ("gnb1", "gnb2")


class StubEmulator:
    """In-memory emulator holding UE and gNB names."""

    def __init__(
        self,
        ues: list[str] | None = None,
        gnbs: list[str] | None = None,
    ) -> None:
        self._ues = list(DEFAULT_UES if ues is None else ues)
        self._gnbs = list(DEFAULT_GNBS if gnbs is None else gnbs)
        self._lock = threading.Lock()

    def list_ues(self) -> list[str]:
        with self._lock:
            return list(self._ues)

    def list_gnbs(self) -> list[str]:
        with self._lock:
            return list(self._gnbs)

    def add_ue(self, supi: str, trigger_register: bool) -> bool:
        suffix = " with auto-registration" if trigger_register else ""
        log.info("Adding UE with SUPI: %s%s", supi, suffix)
        with self._lock:
            if supi not in self._ues:
                self._ues.append(supi)
        return True


class StubUe:
    """UE back-end; every procedure succeeds."""

    def register(self, is_emergency: bool) -> bool:
        log.info("UE registering with %sservices", "emergency " if is_emergency else "")
        return True

    def deregister(self, deregister_type: int) -> bool:
        log.info("UE deregistering with type: %d", deregister_type)
        return True

    def create_session(self, slice_name: str, dn_name: str, session_type: int) -> bool:
        log.info(
            "Creating session with slice: %s and DN name: %s of type: %d",
            slice_name, dn_name, session_type,
        )
        return True


class StubGnb:
    """gNB back-end; every release succeeds."""

    def release_ue(self, ue_id: str) -> bool:
        log.info("Releasing UE with ID: %s from gNB", ue_id)
        return True

    def release_session(self, ue_id: str, session_id: int) -> bool:
        log.info("Releasing session %d for UE: %s from gNB", session_id, ue_id)
        return True
