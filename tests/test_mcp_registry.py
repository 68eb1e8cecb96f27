import asyncio

import pytest

from svm_mcp import mcp
from svm_mcp.config import TOKEN_PROGRAM_ID
from svm_mcp.metrics import default_metrics
from svm_mcp.svm_rpc import InvalidAddressError, RpcResponseError

ADDRESS = "So11111111111111111111111111111111111111112"
EXPECTED_TOOLS = {
    "get-soon-testnet-balance",
    "get-soon-testnet-last-transaction",
    "get-soon-testnet-account-tokens",
    "get-soon-mainnet-balance",
    "get-soon-mainnet-last-transaction",
    "get-soon-mainnet-account-tokens",
}


class StubClient:
    def __init__(self, label, balance=0):
        self.label = label
        self.balance = balance
        self.calls = []

    async def get_balance(self, address):
        self.calls.append("get_balance")
        return self.balance

    async def get_signatures_for_address(self, address, *, limit=None):
        self.calls.append("get_signatures_for_address")
        return []

    async def get_transaction(self, signature):
        self.calls.append("get_transaction")
        return None

    async def get_token_accounts_by_owner(self, owner, *, program_id):
        self.calls.append(("get_token_accounts_by_owner", program_id))
        return {"context": {"slot": 1}, "value": []}


@pytest.fixture
def stub_registry():
    clients = {"testnet": StubClient("testnet", 11), "mainnet": StubClient("mainnet", 22)}
    return clients, mcp.build_registry(clients)


def test_default_registry_has_six_tools():
    assert set(mcp.TOOL_REGISTRY) == EXPECTED_TOOLS


def test_list_tools_shape():
    tools = mcp.list_tools()
    assert {tool["name"] for tool in tools} == EXPECTED_TOOLS
    for tool in tools:
        schema = tool["inputSchema"]
        assert schema["type"] == "object"
        assert schema["required"] == ["address"]
        assert schema["properties"]["address"]["type"] == "string"
        assert schema["properties"]["address"]["description"]
        assert tool["description"]


def test_descriptions_name_the_network():
    tools = {tool["name"]: tool for tool in mcp.list_tools()}
    assert tools["get-soon-testnet-balance"]["description"] == "Get the balance of a address on the Soon testnet"
    assert (
        tools["get-soon-mainnet-last-transaction"]["description"]
        == "Get the last transaction of an address on the Soon mainnet"
    )


def test_tool_name_helper():
    assert mcp.tool_name("testnet", "balance") == "get-soon-testnet-balance"


@pytest.mark.asyncio
async def test_network_variants_use_their_own_client(stub_registry):
    clients, registry = stub_registry

    testnet = await mcp.call_tool("get-soon-testnet-balance", {"address": ADDRESS}, registry=registry)
    assert testnet["content"][0]["text"] == "Balance: 11"
    assert clients["testnet"].calls == ["get_balance"]
    assert clients["mainnet"].calls == []

    mainnet = await mcp.call_tool("get-soon-mainnet-balance", {"address": ADDRESS}, registry=registry)
    assert mainnet["content"][0]["text"] == "Balance: 22"
    assert clients["mainnet"].calls == ["get_balance"]
    assert clients["testnet"].calls == ["get_balance"]


@pytest.mark.asyncio
@pytest.mark.parametrize("network", ["testnet", "mainnet"])
async def test_account_tokens_program_is_fixed_on_every_network(stub_registry, network):
    clients, registry = stub_registry
    await mcp.call_tool(f"get-soon-{network}-account-tokens", {"address": ADDRESS}, registry=registry)
    assert clients[network].calls == [("get_token_accounts_by_owner", TOKEN_PROGRAM_ID)]


@pytest.mark.asyncio
async def test_last_transaction_through_dispatcher(stub_registry):
    clients, registry = stub_registry
    result = await mcp.call_tool("get-soon-mainnet-last-transaction", {"address": ADDRESS}, registry=registry)
    assert result["content"][0]["text"] == "No transactions found for this address"
    assert clients["mainnet"].calls == ["get_signatures_for_address"]


@pytest.mark.asyncio
async def test_unknown_tool(stub_registry):
    _, registry = stub_registry
    result = await mcp.call_tool("get-soon-devnet-balance", {"address": ADDRESS}, registry=registry)
    assert result["isError"] is True
    assert result["content"][0]["text"] == "Unknown tool: get-soon-devnet-balance"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "arguments, detail",
    [
        ({}, "missing required argument 'address'"),
        ({"address": 42}, "argument 'address' must be of type string"),
        ({"address": ADDRESS, "limit": 5}, "unexpected argument 'limit'"),
    ],
)
async def test_invalid_arguments(stub_registry, arguments, detail):
    clients, registry = stub_registry
    result = await mcp.call_tool("get-soon-testnet-balance", arguments, registry=registry)
    assert result["isError"] is True
    assert result["content"][0]["text"] == f"Invalid parameters: {detail}"
    assert clients["testnet"].calls == []


@pytest.mark.asyncio
async def test_balance_errors_become_error_envelopes(stub_registry):
    clients, registry = stub_registry

    async def boom(address):
        raise RpcResponseError("failed to get balance of account X: Invalid param")

    clients["testnet"].get_balance = boom
    result = await mcp.call_tool("get-soon-testnet-balance", {"address": ADDRESS}, registry=registry)
    assert result == {
        "content": [{"type": "text", "text": "failed to get balance of account X: Invalid param"}],
        "isError": True,
    }

    invalid = await mcp.call_tool("get-soon-testnet-balance", {"address": "bad"}, registry=registry)
    assert invalid["isError"] is True
    assert invalid["content"][0]["text"] == "Invalid public key input"


@pytest.mark.asyncio
async def test_balance_handler_itself_still_raises(stub_registry):
    _, registry = stub_registry
    with pytest.raises(InvalidAddressError):
        await registry["get-soon-testnet-balance"].callable(address="bad")


@pytest.mark.asyncio
async def test_dispatch_records_metrics(stub_registry):
    _, registry = stub_registry
    await mcp.call_tool("get-soon-testnet-balance", {"address": ADDRESS}, registry=registry)
    await mcp.call_tool("get-soon-testnet-balance", {"address": "bad"}, registry=registry)
    snapshot = default_metrics.snapshot()
    assert snapshot["tool_success"] == {"get-soon-testnet-balance": 1}
    assert snapshot["tool_error"] == {"get-soon-testnet-balance": 1}


@pytest.mark.asyncio
async def test_concurrent_invocations_are_independent():
    release_slow = asyncio.Event()

    class SlowClient(StubClient):
        async def get_balance(self, address):
            await release_slow.wait()
            return 7

    class FastClient(StubClient):
        async def get_token_accounts_by_owner(self, owner, *, program_id):
            release_slow.set()
            return {"context": {"slot": 2}, "value": []}

    registry = mcp.build_registry({"testnet": SlowClient("testnet"), "mainnet": FastClient("mainnet")})
    balance, tokens = await asyncio.gather(
        mcp.call_tool("get-soon-testnet-balance", {"address": ADDRESS}, registry=registry),
        mcp.call_tool("get-soon-mainnet-account-tokens", {"address": ADDRESS}, registry=registry),
    )
    assert balance["content"][0]["text"] == "Balance: 7"
    assert tokens["content"][0]["text"] == '{"context":{"slot":2},"value":[]}'


def test_validate_arguments_rejects_bool_for_integer():
    schema = {"type": "object", "properties": {"n": {"type": "integer"}}, "required": []}
    with pytest.raises(mcp.InvalidArgumentsError):
        mcp.validate_arguments(schema, {"n": True})
    assert mcp.validate_arguments(schema, {"n": 3}) == {"n": 3}
    with pytest.raises(mcp.InvalidArgumentsError, match="arguments must be an object"):
        mcp.validate_arguments(schema, ["n"])
