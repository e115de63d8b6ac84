"""Shared constants and word builders for tests."""

TRANSFER_TOPIC0 = bytes.fromhex("ddf252ad1be2c89b69c2b068fc378daa952ba7f163c4a11628f55a4df523b3ef")
APPROVAL_TOPIC0 = bytes.fromhex("8c5be1e5ebec7d5bd14f71427d1e84f3dd0314c0f7b2291e5b200ac8c7c3b925")
TRANSFER_SINGLE_TOPIC0 = bytes.fromhex("c3d58168c5ae7397731d063d5bbf3d657854427343f4c083240f7aacaa2d0f62")

ALICE = "0x1234567890123456789012345678901234567890"
BOB = "0xd8da6bf26964af9d7eed9e03e53415d37aa96045"


def word(value: int) -> bytes:
    return value.to_bytes(32, "big")


def address_word(address: str) -> bytes:
    return bytes(12) + bytes.fromhex(address[2:])


def transfer_line(frm: str, to: str, value: int) -> str:
    topics = ["0x" + TRANSFER_TOPIC0.hex(), "0x" + address_word(frm).hex(), "0x" + address_word(to).hex()]
    return '{"topics":[%s],"data":"0x%s"}' % (",".join(f'"{t}"' for t in topics), word(value).hex())
