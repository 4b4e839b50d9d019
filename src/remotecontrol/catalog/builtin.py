"""Commands of the context-tree personality: emulator, UE and gNB."""

from __future__ import annotations

from remotecontrol.catalog.catalog import CommandCatalog
from remotecontrol.catalog.spec import CommandSpec, FlagSpec, Invocation
from remotecontrol.domain import EmulatorApi, GnbApi, UeApi
from remotecontrol.types import FlagKind

EMULATOR = "emulator"
UE = "ue"
GNB = "gnb"


def _emulator_commands(emulator: EmulatorApi) -> list[CommandSpec]:
    def list_ue(inv: Invocation) -> str:
        return "\n".join(emulator.list_ues())

    def list_gnb(inv: Invocation) -> str:
        return "\n".join(emulator.list_gnbs())

    def add_ue(inv: Invocation) -> str:
        supi = inv.arg(0)
        if not supi:
            return "Error: SUPI is required"
        if emulator.add_ue(supi, inv.flag("register")):
            return f"UE {supi} added successfully to emulator"
        return f"Failed to add UE {supi} to emulator"

    return [
        CommandSpec(name="list-ue", usage="List all UEs", action=list_ue),
        CommandSpec(name="list-gnb", usage="List all GnBs", action=list_gnb),
        CommandSpec(
            name="add-ue",
            usage="Add a new UE with SUPI",
            args_usage="<supi>",
            description="Add a new UE to the emulator with the specified SUPI",
            flags=(FlagSpec("register", FlagKind.BOOL, "Trigger registration after adding"),),
            action=add_ue,
        ),
    ]


def _ue_label(inv: Invocation) -> str:
    return f"UE {inv.node_name}" if inv.node_name else "UE"


def _ue_commands(ue: UeApi) -> list[CommandSpec]:
    def register(inv: Invocation) -> str:
        if ue.register(inv.flag("emergency")):
            return f"{_ue_label(inv)} registered successfully"
        return f"Failed to register {_ue_label(inv)}"

    def deregister(inv: Invocation) -> str:
        if ue.deregister(inv.flag("type")):
            return f"{_ue_label(inv)} deregistered successfully"
        return f"Failed to deregister {_ue_label(inv)}"

    def create_session(inv: Invocation) -> str:
        ok = ue.create_session(inv.flag("slice"), inv.flag("dn"), inv.flag("type"))
        suffix = f" for UE {inv.node_name}" if inv.node_name else ""
        if ok:
            return f"Session created successfully{suffix}"
        return f"Failed to create session{suffix}"

    return [
        CommandSpec(
            name="register",
            usage="Register UE to the network",
            description="Register the UE to the network with optional emergency services",
            flags=(FlagSpec("emergency", FlagKind.BOOL, "Register for emergency services"),),
            action=register,
        ),
        CommandSpec(
            name="deregister",
            usage="Deregister UE from the network",
            description="Deregister the UE from the network with specified type",
            flags=(FlagSpec("type", FlagKind.INT, "Deregistration type (0-3)"),),
            action=deregister,
        ),
        CommandSpec(
            name="create-session",
            usage="Create a new session",
            description="Create a new PDU session with specified parameters",
            flags=(
                FlagSpec("slice", FlagKind.STRING, "Network slice", default="default"),
                FlagSpec("dn", FlagKind.STRING, "Data Network name", default="internet"),
                FlagSpec("type", FlagKind.INT, "Session type (0-3)"),
            ),
            action=create_session,
        ),
    ]


def _gnb_commands(gnb: GnbApi) -> list[CommandSpec]:
    def release_ue(inv: Invocation) -> str:
        ue_id = inv.arg(0)
        if not ue_id:
            return "Error: UE ID is required"
        where = f" from gNB {inv.node_name}" if inv.node_name else ""
        if gnb.release_ue(ue_id):
            return f"UE {ue_id} released successfully{where}"
        return f"Failed to release UE {ue_id}{where}"

    def release_session(inv: Invocation) -> str:
        ue_id = inv.arg(0)
        if not ue_id:
            return "Error: UE ID is required"
        session_id = inv.flag("id")
        where = f" from gNB {inv.node_name}" if inv.node_name else ""
        if gnb.release_session(ue_id, session_id):
            return f"Session {session_id} for UE {ue_id} released successfully{where}"
        return f"Failed to release session {session_id} for UE {ue_id}{where}"

    return [
        CommandSpec(
            name="release-ue",
            usage="Release a UE from the gNB",
            args_usage="<ue-id>",
            description="Release a UE connection from the gNB",
            action=release_ue,
        ),
        CommandSpec(
            name="release-session",
            usage="Release a session",
            args_usage="<ue-id>",
            description="Release a PDU session for the specified UE",
            flags=(FlagSpec("id", FlagKind.INT, "Session ID", default=1),),
            action=release_session,
        ),
    ]


def build_node_catalog(emulator: EmulatorApi, ue: UeApi, gnb: GnbApi) -> CommandCatalog:
    """Build the catalog served by the context-tree personality."""
    catalog = CommandCatalog()
    catalog.register(EMULATOR, _emulator_commands(emulator))
    catalog.register(UE, _ue_commands(ue))
    catalog.register(GNB, _gnb_commands(gnb))
    return catalog
