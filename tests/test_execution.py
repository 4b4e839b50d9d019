"""Tests for token parsing and the command execution engine."""

from __future__ import annotations

import time

import pytest

from remotecontrol.catalog import CommandCatalog, CommandSpec, FlagSpec, Invocation
from remotecontrol.errors import ExecutionError
from remotecontrol.execution import CommandExecutor, command_tokens, parse_arguments
from remotecontrol.types import CommandRequest, FlagKind

SPEC = CommandSpec(
    name="create-session",
    usage="",
    action=lambda inv: "",
    flags=(
        FlagSpec("slice", FlagKind.STRING, default="default"),
        FlagSpec("type", FlagKind.INT),
        FlagSpec("emergency", FlagKind.BOOL),
    ),
)


class TestParseArguments:
    """Flag classification and typing."""

    def test_defaults_fill_missing(self) -> None:
        args, flags = parse_arguments(SPEC, [])
        assert args == ()
        assert flags == {"slice": "default", "type": 0, "emergency": False}

    def test_equals_form(self) -> None:
        _, flags = parse_arguments(SPEC, ["--slice=embb", "--type=2"])
        assert flags["slice"] == "embb"
        assert flags["type"] == 2

    def test_value_consumed_from_next_token(self) -> None:
        args, flags = parse_arguments(SPEC, ["-slice", "urllc", "rest"])
        assert flags["slice"] == "urllc"
        assert args == ("rest",)

    def test_bool_flag_never_consumes(self) -> None:
        args, flags = parse_arguments(SPEC, ["--emergency", "ue7"])
        assert flags["emergency"] is True
        assert args == ("ue7",)

    def test_bool_explicit_value(self) -> None:
        _, flags = parse_arguments(SPEC, ["--emergency=false"])
        assert flags["emergency"] is False

    def test_unknown_flag(self) -> None:
        with pytest.raises(ExecutionError, match="flag provided but not defined: -bogus"):
            parse_arguments(SPEC, ["--bogus"])

    def test_bad_int(self) -> None:
        with pytest.raises(ExecutionError, match="invalid value"):
            parse_arguments(SPEC, ["--type", "x"])

    def test_missing_value(self) -> None:
        with pytest.raises(ExecutionError, match="needs an argument"):
            parse_arguments(SPEC, ["--type", "--emergency"])

    def test_double_dash_ends_flags(self) -> None:
        args, _ = parse_arguments(SPEC, ["--", "--type"])
        assert args == ("--type",)

    def test_structured_flags_merged(self) -> None:
        _, flags = parse_arguments(SPEC, ["--type=3"], {"slice": "mmtc", "type": "1"})
        assert flags["slice"] == "mmtc"
        assert flags["type"] == 3


class TestCommandTokens:
    def test_raw_command_wins(self) -> None:
        req = CommandRequest(raw_command="add-ue  imsi-1 --register", command_path="x", args=["y"])
        assert command_tokens(req) == ["add-ue", "imsi-1", "--register"]

    def test_path_and_args(self) -> None:
        req = CommandRequest(command_path="release-ue", args=["ue1"])
        assert command_tokens(req) == ["release-ue", "ue1"]

    def test_empty(self) -> None:
        assert command_tokens(CommandRequest()) == []


class TestCommandExecutor:
    """Routing, help short-circuit, timeout and failure rules."""

    @pytest.fixture
    def executor(self, node_catalog: CommandCatalog) -> CommandExecutor:
        return CommandExecutor(node_catalog, timeout=1.0)

    async def test_add_ue_with_register(self, executor: CommandExecutor) -> None:
        """Scenario: add-ue with a bool flag on the emulator node."""
        req = CommandRequest(
            node_type="emulator",
            node_name="emulator",
            command_path="add-ue",
            args=["imsi-001", "--register"],
        )
        response = await executor.execute(req)
        assert response.response == "UE imsi-001 added successfully to emulator"
        assert response.error is None

    async def test_help_short_circuits(self) -> None:
        """Scenario: --help returns help text and never runs the action."""
        calls: list[Invocation] = []
        catalog = CommandCatalog()
        catalog.register(
            "ue",
            [
                CommandSpec(
                    name="register",
                    usage="Register UE to the network",
                    description="Register the UE to the network with optional emergency services",
                    flags=(FlagSpec("emergency", FlagKind.BOOL, "Register for emergency services"),),
                    action=lambda inv: calls.append(inv) or "",
                )
            ],
        )
        executor = CommandExecutor(catalog)
        req = CommandRequest(node_type="ue", node_name="ue1", command_path="register", args=["--help"])

        response = await executor.execute(req)

        assert response.response == (
            "register [command [command options]]\n\n"
            "Register the UE to the network with optional emergency services\n\n"
            "Options:\n"
            "   --emergency:  Register for emergency services (default: false)\n"
        )
        assert calls == []

    @pytest.mark.parametrize("name", ["h", "help"])
    async def test_structured_help_flag(self, executor: CommandExecutor, name: str) -> None:
        req = CommandRequest(node_type="ue", node_name="ue1", command_path="register", flags={name: "true"})
        response = await executor.execute(req)
        assert response.response.startswith("register [command [command options]]\n")
        assert "--emergency:" in response.response

    async def test_help_for_unknown_command(self, executor: CommandExecutor) -> None:
        req = CommandRequest(node_type="ue", command_path="nope", args=["-h"])
        response = await executor.execute(req)
        assert response.response == "No help available for this command"

    async def test_invalid_node_type(self, executor: CommandExecutor) -> None:
        req = CommandRequest(node_type="router", command_path="list-ue")
        with pytest.raises(ExecutionError) as exc:
            await executor.execute(req)
        assert exc.value.message == "invalid node type"
        assert exc.value.status_code == 400

    async def test_command_not_found(self, executor: CommandExecutor) -> None:
        req = CommandRequest(node_type="ue", command_path="fly")
        with pytest.raises(ExecutionError, match="command not found: fly"):
            await executor.execute(req)

    async def test_empty_request(self, executor: CommandExecutor) -> None:
        with pytest.raises(ExecutionError):
            await executor.execute(CommandRequest(node_type="ue"))

    async def test_timeout(self) -> None:
        catalog = CommandCatalog()
        catalog.register("slow", [CommandSpec("wait", "", lambda inv: time.sleep(0.5) or "late")])
        executor = CommandExecutor(catalog, timeout=0.05)

        with pytest.raises(ExecutionError) as exc:
            await executor.execute(CommandRequest(node_type="slow", command_path="wait"))

        assert exc.value.status_code == 504
        assert exc.value.message == "command timed out after 0.05s"

    async def test_action_exception(self) -> None:
        def broken(inv: Invocation) -> str:
            raise RuntimeError("backend down")

        catalog = CommandCatalog()
        catalog.register("x", [CommandSpec("run", "", broken)])
        executor = CommandExecutor(catalog)

        with pytest.raises(ExecutionError) as exc:
            await executor.execute(CommandRequest(node_type="x", command_path="run"))

        assert exc.value.status_code == 500
        assert exc.value.message == "command failed: backend down"

    async def test_node_name_reaches_action(self, executor: CommandExecutor) -> None:
        req = CommandRequest(node_type="gnb", node_name="gnb2", raw_command="release-ue ue3")
        response = await executor.execute(req)
        assert response.response == "UE ue3 released successfully from gNB gnb2"
