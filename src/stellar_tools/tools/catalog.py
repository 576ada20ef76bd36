"""The tools exposed by the server.

Every contract tool runs::

    stellar contract invoke --id <contractId> --network <network> \
        --source <sourceS> -- <function> [--flag value ...]

against the lending-NFT contract.  ``hello`` is answered locally.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING

from stellar_tools.tools.base import ToolSpec
from stellar_tools.tools.registry import ToolRegistry
from stellar_tools.tools.schema import (
    EnumField,
    FieldConstraint,
    IntegerField,
    StringField,
)

if TYPE_CHECKING:
    from stellar_tools.tools.base import CommandBuilder
    from stellar_tools.tools.schema import ValidatedParams

NETWORKS = ("testnet", "futurenet", "mainnet", "local")

NETWORK = EnumField(choices=NETWORKS, default="testnet")
CONTRACT_ID = StringField(description="Contract ID")
TOKEN_ID = IntegerField(non_negative=True)
LOAN_ID = IntegerField(non_negative=True)
I128_AMOUNT = StringField(description="i128 as string")

# Maps a field name to the contract argument flag it fills.
ContractArgs = Mapping[str, tuple[str, FieldConstraint]]


def _contract_command(function: str, args: ContractArgs) -> CommandBuilder:
    def build(params: ValidatedParams) -> list[str]:
        argv = [
            "contract",
            "invoke",
            "--id",
            params["contractId"],
            "--network",
            params["network"],
            "--source",
            params["sourceS"],
            "--",
            function,
        ]
        for field, (flag, _) in args.items():
            argv += [flag, str(params[field])]
        return argv

    return build


def contract_tool(
    name: str,
    title: str,
    description: str,
    function: str,
    args: ContractArgs,
    source: str | None = None,
) -> ToolSpec:
    """Declare a tool that invokes one contract function.

    The schema is derived from ``args`` so the command builder can
    only reference fields that were validated.
    """
    parameters: dict[str, FieldConstraint] = {"contractId": CONTRACT_ID}
    parameters.update({field: constraint for field, (_, constraint) in args.items()})
    parameters["sourceS"] = StringField(description=source)
    parameters["network"] = NETWORK
    return ToolSpec(
        name=name,
        title=title,
        description=description,
        parameters=parameters,
        build_command=_contract_command(function, args),
    )


def _hello(params: ValidatedParams) -> str:
    return f"Hello, {params['name']}!"


CONTRACT_TOOLS: tuple[ToolSpec, ...] = (
    contract_tool(
        "contract_constructor",
        "Initialize contract (__constructor)",
        "Sets the owner in contract storage",
        "__constructor",
        {"ownerG": ("--owner", StringField("Owner public address (G...)", min_length=3))},
        source="Seed (S...) to sign",
    ),
    contract_tool(
        "nft_mint",
        "Mint NFT (owner-only)",
        "Mints an NFT to a target address",
        "mint",
        {
            "toG": ("--to", StringField("Recipient address (G...)")),
            "tokenId": ("--token_id", TOKEN_ID),
            "callerG": ("--caller", StringField("Caller address (must be owner)")),
        },
        source="Seed (S...) of owner",
    ),
    contract_tool(
        "nft_owner_of",
        "Get token owner",
        "Returns the owner of a token_id",
        "owner_of",
        {"tokenId": ("--token_id", TOKEN_ID)},
        source="Seed (S...) of any funded account",
    ),
    contract_tool(
        "nft_balance",
        "Get NFT balance",
        "Returns how many tokens an address owns",
        "balance",
        {"accountG": ("--account", StringField("Account address (G...)"))},
        source="Seed (S...) of any funded account",
    ),
    contract_tool(
        "nft_transfer",
        "Transfer NFT",
        "Transfers a token between addresses (blocked while paused)",
        "transfer",
        {
            "fromG": ("--from", StringField("Current owner address (G...)")),
            "toG": ("--to", StringField("Recipient address (G...)")),
            "tokenId": ("--token_id", TOKEN_ID),
        },
        source="Seed (S...) of the current owner",
    ),
    contract_tool(
        "nft_burn",
        "Burn NFT",
        "Destroys a token (blocked while paused)",
        "burn",
        {
            "fromG": ("--from", StringField("Owner address (G...)")),
            "tokenId": ("--token_id", TOKEN_ID),
        },
        source="Seed (S...) of the owner",
    ),
    contract_tool(
        "lend_create_loan",
        "Create loan using NFT as collateral",
        "Borrower must own the NFT",
        "create_loan",
        {
            "borrowerG": ("--borrower", StringField()),
            "tokenId": ("--token_id", TOKEN_ID),
            "amount": ("--amount", I128_AMOUNT),
            "interestRate": ("--interest_rate", IntegerField("bps", non_negative=True)),
            "durationDays": ("--duration_days", IntegerField(non_negative=True)),
            "callerG": ("--caller", StringField()),
        },
        source="Seed (S...) of borrower",
    ),
    contract_tool(
        "lend_get_loan_info",
        "Get loan info",
        "Reads current loan info",
        "get_loan_info",
        {"loanId": ("--loan_id", LOAN_ID)},
    ),
    contract_tool(
        "lend_is_collateral",
        "Check if token is collateral",
        "Returns true/false",
        "is_collateral",
        {"tokenId": ("--token_id", TOKEN_ID)},
    ),
    contract_tool(
        "lend_repay_loan",
        "Repay loan (borrower-only)",
        "Repays amount towards the loan",
        "repay_loan",
        {
            "loanId": ("--loan_id", LOAN_ID),
            "amount": ("--amount", I128_AMOUNT),
            "callerG": ("--caller", StringField()),
        },
        source="Seed (S...) of borrower",
    ),
    contract_tool(
        "contract_pause",
        "Pause contract (owner-only)",
        "Activates pause flag",
        "pause",
        {"callerG": ("--caller", StringField())},
        source="Seed (S...) of owner",
    ),
    contract_tool(
        "contract_unpause",
        "Unpause contract (owner-only)",
        "Deactivates pause flag",
        "unpause",
        {"callerG": ("--caller", StringField())},
        source="Seed (S...) of owner",
    ),
    contract_tool(
        "contract_paused",
        "Check pause flag",
        "Returns true if the contract is paused",
        "paused",
        {},
    ),
)

HELLO = ToolSpec(
    name="hello",
    title="Hello Tool",
    description="Say hello to someone",
    parameters={"name": StringField("Name to greet")},
    respond=_hello,
)


def default_registry() -> ToolRegistry:
    """Build the registry of every tool the server exposes."""
    return ToolRegistry((*CONTRACT_TOOLS, HELLO))
