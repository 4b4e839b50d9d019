"""Stub AMF back-end used by the direct-connect personality."""

from __future__ import annotations

import logging
import threading
from typing import Any

log = logging.getLogger(__name__)

DEFAULT_UE_CONTEXTS = (
    "imsi-123456789012345",
    "imsi-234567890123456",
    "imsi-345678901234567",
)


class StubAmf:
    """In-memory AMF holding registered UE contexts and handover history."""

    def __init__(self, ue_contexts: list[str] | None = None) -> None:
        self._ue_contexts = list(DEFAULT_UE_CONTEXTS if ue_contexts is None else ue_contexts)
        self._handovers: dict[str, list[dict[str, str]]] = {}
        self._lock = threading.Lock()

    def list_ue_contexts(self) -> list[str]:
        log.info("Listing all UE contexts in AMF")
        with self._lock:
            return list(self._ue_contexts)

    def register_ue(self, imsi: str) -> bool:
        log.info("AMF registering UE with IMSI: %s", imsi)
        with self._lock:
            if imsi not in self._ue_contexts:
                self._ue_contexts.append(imsi)
        return True

    def deregister_ue(self, imsi: str, cause: int) -> bool:
        log.info("AMF deregistering UE with IMSI: %s and cause: %d", imsi, cause)
        with self._lock:
            if imsi not in self._ue_contexts:
                return False
            self._ue_contexts.remove(imsi)
        return True

    def get_service_status(self) -> dict[str, str]:
        with self._lock:
            registered = len(self._ue_contexts)
        return {
            "state": "running",
            "registeredUes": str(registered),
            "n2Associations": "2",
        }

    def get_configuration(self) -> dict[str, Any]:
        return {
            "amfName": "AMF-01",
            "plmnId": {"mcc": "208", "mnc": "93"},
            "servedGuamiList": "208-93-cafe00",
            "sbiPort": 8000,
        }

    def send_n1n2_message(self, ue_id: str, message_type: str, content: str) -> bool:
        log.info("AMF sending %s message to UE %s: %s", message_type, ue_id, content)
        with self._lock:
            return ue_id in self._ue_contexts

    def list_n1n2_subscriptions(self, ue_id: str) -> list[str]:
        with self._lock:
            if ue_id not in self._ue_contexts:
                return []
        return [f"{ue_id}/n1-sm", f"{ue_id}/n2-info"]

    def initiate_handover(self, ue_id: str, target_gnb: str) -> bool:
        log.info("AMF initiating handover for UE %s to gNB %s", ue_id, target_gnb)
        with self._lock:
            if ue_id not in self._ue_contexts:
                return False
            history = self._handovers.setdefault(ue_id, [])
            source = history[-1]["target"] if history else "gnb1"
            history.append({
                "time": f"t+{len(history)}",
                "source": source,
                "target": target_gnb,
                "status": "completed",
            })
        return True

    def list_handover_history(self, ue_id: str) -> list[dict[str, str]]:
        with self._lock:
            return [dict(entry) for entry in self._handovers.get(ue_id, [])]

    def get_nf_subscriptions(self) -> list[str]:
        return ["nrf/nf-status", "udm/sdm-change"]

    def get_sbi_endpoints(self) -> dict[str, str]:
        return {
            "namf-comm": "http://127.0.0.1:8000/namf-comm/v1",
            "namf-evts": "http://127.0.0.1:8000/namf-evts/v1",
        }
