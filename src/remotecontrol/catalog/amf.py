"""Commands of the AMF personality."""

from __future__ import annotations

from remotecontrol.catalog.catalog import CommandCatalog
from remotecontrol.catalog.spec import CommandSpec, FlagSpec, Invocation
from remotecontrol.domain import AmfApi
from remotecontrol.types import FlagKind

AMF = "amf"


def _amf_commands(amf: AmfApi) -> list[CommandSpec]:
    def list_ues(inv: Invocation) -> str:
        ues = amf.list_ue_contexts()
        if not ues:
            return "No UE contexts found"
        return "UE contexts:\n" + "\n".join(ues)

    def register_ue(inv: Invocation) -> str:
        imsi = inv.arg(0)
        if not imsi:
            return "Error: IMSI is required"
        if amf.register_ue(imsi):
            return f"UE {imsi} registered successfully"
        return f"Failed to register UE {imsi}"

    def deregister_ue(inv: Invocation) -> str:
        imsi = inv.arg(0)
        if not imsi:
            return "Error: IMSI is required"
        if amf.deregister_ue(imsi, inv.flag("cause")):
            return f"UE {imsi} deregistered successfully"
        return f"Failed to deregister UE {imsi}"

    def status(inv: Invocation) -> str:
        lines = ["AMF Service Status:"]
        lines += [f"  {key}: {value}" for key, value in amf.get_service_status().items()]
        return "\n".join(lines) + "\n"

    def config(inv: Invocation) -> str:
        settings = dict(amf.get_configuration())
        lines = ["AMF Configuration:"]
        plmn = settings.pop("plmnId", None)
        if isinstance(plmn, dict):
            lines.append(f"  plmnId: MCC {plmn.get('mcc', '')}, MNC {plmn.get('mnc', '')}")
        lines += [f"  {key}: {value}" for key, value in settings.items()]
        return "\n".join(lines) + "\n"

    def send_n1n2_message(inv: Invocation) -> str:
        if len(inv.args) < 3:
            return "Error: UE ID, message type and content are required"
        ue_id, message_type, content = inv.args[:3]
        if amf.send_n1n2_message(ue_id, message_type, content):
            return f"Message sent successfully to UE {ue_id}"
        return f"Failed to send message to UE {ue_id}"

    def list_n1n2_subscriptions(inv: Invocation) -> str:
        ue_id = inv.arg(0)
        if not ue_id:
            return "Error: UE ID is required"
        subs = amf.list_n1n2_subscriptions(ue_id)
        if not subs:
            return f"No N1/N2 subscriptions found for UE {ue_id}"
        return f"N1/N2 subscriptions for UE {ue_id}:\n" + "\n".join(subs)

    def initiate_handover(inv: Invocation) -> str:
        if len(inv.args) < 2:
            return "Error: UE ID and target gNB are required"
        ue_id, target = inv.args[:2]
        if amf.initiate_handover(ue_id, target):
            return f"Handover initiated for UE {ue_id} to gNB {target}"
        return f"Failed to initiate handover for UE {ue_id}"

    def handover_history(inv: Invocation) -> str:
        ue_id = inv.arg(0)
        if not ue_id:
            return "Error: UE ID is required"
        history = amf.list_handover_history(ue_id)
        if not history:
            return f"No handover history found for UE {ue_id}"
        lines = [f"Handover history for UE {ue_id}:"]
        for i, entry in enumerate(history, 1):
            lines.append(
                f"{i}. Time: {entry.get('time', '')}, Source: {entry.get('source', '')}, "
                f"Target: {entry.get('target', '')}, Status: {entry.get('status', '')}"
            )
        return "\n".join(lines) + "\n"

    def nf_subscriptions(inv: Invocation) -> str:
        subs = amf.get_nf_subscriptions()
        if not subs:
            return "No NF subscriptions found"
        return "NF subscriptions:\n" + "\n".join(subs)

    def sbi_endpoints(inv: Invocation) -> str:
        lines = ["SBI Endpoints:"]
        lines += [f"  {name}: {url}" for name, url in amf.get_sbi_endpoints().items()]
        return "\n".join(lines) + "\n"

    return [
        CommandSpec(name="list-ues", usage="List all UE contexts", action=list_ues),
        CommandSpec(
            name="register-ue",
            usage="Register a UE with IMSI",
            args_usage="<imsi>",
            description="Register a UE to the network with the specified IMSI",
            action=register_ue,
        ),
        CommandSpec(
            name="deregister-ue",
            usage="Deregister a UE with IMSI",
            args_usage="<imsi>",
            description="Deregister a UE from the network with the specified IMSI",
            flags=(FlagSpec("cause", FlagKind.INT, "Deregistration cause (0-255)"),),
            action=deregister_ue,
        ),
        CommandSpec(name="status", usage="Get AMF service status", action=status),
        CommandSpec(name="config", usage="Get AMF configuration", action=config),
        CommandSpec(
            name="send-n1n2-message",
            usage="Send N1/N2 message to a UE",
            args_usage="<ue-id> <message-type> <content>",
            description="Send an N1/N2 message to a specific UE",
            action=send_n1n2_message,
        ),
        CommandSpec(
            name="list-n1n2-subscriptions",
            usage="List N1/N2 message subscriptions for a UE",
            args_usage="<ue-id>",
            description="List all N1/N2 message subscriptions for a specific UE",
            action=list_n1n2_subscriptions,
        ),
        CommandSpec(
            name="initiate-handover",
            usage="Initiate handover for a UE",
            args_usage="<ue-id> <target-gnb>",
            description="Initiate handover procedure for a UE to a target gNB",
            action=initiate_handover,
        ),
        CommandSpec(
            name="handover-history",
            usage="Show handover history for a UE",
            args_usage="<ue-id>",
            description="Display handover history for a specific UE",
            action=handover_history,
        ),
        CommandSpec(name="nf-subscriptions", usage="List NF subscriptions", action=nf_subscriptions),
        CommandSpec(name="sbi-endpoints", usage="List SBI endpoints", action=sbi_endpoints),
    ]


def build_amf_catalog(amf: AmfApi) -> CommandCatalog:
    """Build the catalog served by the AMF personality."""
    catalog = CommandCatalog()
    catalog.register(AMF, _amf_commands(amf))
    return catalog
