"""Well-known token standard events, built from signatures.

Available schema sets:
- ERC-20: erc20_schemas() (Transfer, Approval)
- ERC-721: erc721_schemas() (Transfer, Approval, ApprovalForAll)
- ERC-1155: erc1155_schemas() (TransferSingle, TransferBatch, ApprovalForAll, URI)

ERC-20 and ERC-721 `Transfer` share a topic0 (the signature ignores the
indexed flag), so `make_standard_registry()` only combines ERC-20 and ERC-1155.

Example
-------
>>> from abilog.decoding.registries import make_standard_registry
>>> reg = make_standard_registry()
"""

from __future__ import annotations

from abilog.decoding.registry import EventRegistry
from abilog.decoding.registry_builder import make_registry, schema_from_signature
from abilog.decoding.specs import EventSchema

ERC20_EVENTS = [
    "Transfer(address indexed from, address indexed to, uint256 value)",
    "Approval(address indexed owner, address indexed spender, uint256 value)",
]

ERC721_EVENTS = [
    "Transfer(address indexed from, address indexed to, uint256 indexed tokenId)",
    "Approval(address indexed owner, address indexed approved, uint256 indexed tokenId)",
    "ApprovalForAll(address indexed owner, address indexed operator, bool approved)",
]

ERC1155_EVENTS = [
    "TransferSingle(address indexed operator, address indexed from, address indexed to, uint256 id, uint256 value)",
    "TransferBatch(address indexed operator, address indexed from, address indexed to, uint256[] ids, uint256[] values)",
    "ApprovalForAll(address indexed account, address indexed operator, bool approved)",
    "URI(string value, uint256 indexed id)",
]


# -------------------------
# Token standards
# -------------------------

def erc20_schemas() -> list[EventSchema]:
    """Return ERC-20 Transfer/Approval schemas."""
    return [schema_from_signature(s) for s in ERC20_EVENTS]


def erc721_schemas() -> list[EventSchema]:
    """Return ERC-721 Transfer/Approval/ApprovalForAll schemas."""
    return [schema_from_signature(s) for s in ERC721_EVENTS]


def erc1155_schemas() -> list[EventSchema]:
    """Return ERC-1155 transfer, approval and URI schemas."""
    return [schema_from_signature(s) for s in ERC1155_EVENTS]


def make_standard_registry() -> EventRegistry:
    """Dispatch registry for ERC-20 and ERC-1155 events."""
    return make_registry(ERC20_EVENTS + ERC1155_EVENTS)
