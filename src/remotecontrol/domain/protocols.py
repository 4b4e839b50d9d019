"""Contracts between the command catalog and the domain back-ends.

The catalog only ever talks to these protocols; the stubs in this package
are one implementation, a real emulator engine would be another.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class EmulatorApi(Protocol):
    """Emulator-wide operations and object listings."""

    def list_ues(self) -> list[str]: ...

    def list_gnbs(self) -> list[str]: ...

    def add_ue(self, supi: str, trigger_register: bool) -> bool: ...


@runtime_checkable
class UeApi(Protocol):
    """Operations on a simulated UE."""

    def register(self, is_emergency: bool) -> bool: ...

    def deregister(self, deregister_type: int) -> bool: ...

    def create_session(self, slice_name: str, dn_name: str, session_type: int) -> bool: ...


@runtime_checkable
class GnbApi(Protocol):
    """Operations on a simulated gNB."""

    def release_ue(self, ue_id: str) -> bool: ...

    def release_session(self, ue_id: str, session_id: int) -> bool: ...


@runtime_checkable
class AmfApi(Protocol):
    """Operations exposed by the AMF personality."""

    def list_ue_contexts(self) -> list[str]: ...

    def register_ue(self, imsi: str) -> bool: ...

    def deregister_ue(self, imsi: str, cause: int) -> bool: ...

    def get_service_status(self) -> dict[str, str]: ...

    def get_configuration(self) -> dict[str, Any]: ...

    def send_n1n2_message(self, ue_id: str, message_type: str, content: str) -> bool: ...

    def list_n1n2_subscriptions(self, ue_id: str) -> list[str]: ...

    def initiate_handover(self, ue_id: str, target_gnb: str) -> bool: ...

    def list_handover_history(self, ue_id: str) -> list[dict[str, str]]: ...

    def get_nf_subscriptions(self) -> list[str]: ...

    def get_sbi_endpoints(self) -> dict[str, str]: ...
