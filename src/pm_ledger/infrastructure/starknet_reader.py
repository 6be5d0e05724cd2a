"""StarknetLedgerReader — concrete implementation of LedgerReaderProtocol.

Calls the contract's `list()` view through the node's JSON-RPC endpoint
(`starknet_call`, block "latest") and decodes the returned felt array.

Felt layout of `Array<Question>`:
    [n, q0..., q1..., ...]
    Question = id: u64, question_title_hash: u128, expiration: u64,
               creator: ContractAddress, total_amount: u256 (low, high)

The contract ABI was not available to check this layout against. If the
deployed struct differs (e.g. a u128 total, one felt shorter), every fetch
fails the length check and raises LedgerTransportError.
"""

import logging
from typing import Any

import httpx

from config.settings import settings
from src.pm_common.errors import LedgerTransportError
from src.pm_ledger.domain.models import LedgerQuestion

logger = logging.getLogger(__name__)

_QUESTION_WIDTH = 6  # felts per serialized Question


def _felt(value: str) -> int:
    return int(value, 16) if value.startswith(("0x", "0X")) else int(value)


def decode_question_list(felts: list[str]) -> list[LedgerQuestion]:
    """Decode a serialized `Array<Question>`. Raises LedgerTransportError if malformed."""
    try:
        values = [_felt(f) for f in felts]
        if not values:
            raise ValueError("empty result")
        count = values[0]
        body = values[1:]
        if len(body) != count * _QUESTION_WIDTH:
            raise ValueError(
                f"expected {count} questions ({count * _QUESTION_WIDTH} felts), got {len(body)} felts"
            )
    except (TypeError, ValueError, AttributeError) as e:
        raise LedgerTransportError(f"malformed list() result: {e}") from e

    questions: list[LedgerQuestion] = []
    for offset in range(0, len(body), _QUESTION_WIDTH):
        q_id, title_hash, expiration, creator, amount_low, amount_high = body[
            offset : offset + _QUESTION_WIDTH
        ]
        questions.append(
            LedgerQuestion(
                identity=str(q_id),
                fingerprint=title_hash,
                expiration_time=str(expiration),
                creator_address=f"0x{creator:064x}",
                total_staked=(amount_high << 128) | amount_low,
            )
        )
    return questions


class StarknetLedgerReader:
    def __init__(
        self,
        rpc_url: str,
        contract_address: str,
        list_selector: str,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._rpc_url = rpc_url
        self._contract_address = contract_address
        self._list_selector = list_selector
        self._timeout = timeout
        self._transport = transport

    def _payload(self) -> dict[str, Any]:
        return {
            "jsonrpc": "2.0",
            "id": 1,
            "method": "starknet_call",
            "params": {
                "request": {
                    "contract_address": self._contract_address,
                    "entry_point_selector": self._list_selector,
                    "calldata": [],
                },
                "block_id": "latest",
            },
        }

    async def fetch_questions(self) -> list[LedgerQuestion]:
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport
            ) as client:
                resp = await client.post(self._rpc_url, json=self._payload())
                resp.raise_for_status()
                body = resp.json()
        except httpx.HTTPError as e:
            logger.error("Starknet RPC request failed: %s", e)
            raise LedgerTransportError(str(e)) from e
        except ValueError as e:
            raise LedgerTransportError(f"non-JSON RPC response: {e}") from e

        if not isinstance(body, dict):
            raise LedgerTransportError("unexpected RPC response shape")
        if body.get("error") is not None:
            err = body["error"]
            logger.error("Starknet RPC returned error: %s", err)
            if isinstance(err, dict):
                raise LedgerTransportError(f"RPC error {err.get('code')}: {err.get('message')}")
            raise LedgerTransportError(f"RPC error: {err}")
        result = body.get("result")
        if not isinstance(result, list):
            raise LedgerTransportError("RPC response has no result array")

        questions = decode_question_list(result)
        logger.info("Fetched %d on-chain questions", len(questions))
        return questions


def build_ledger_reader() -> StarknetLedgerReader:
    """Reader wired from application settings."""
    return StarknetLedgerReader(
        rpc_url=settings.STARKNET_RPC_URL,
        contract_address=settings.LEDGER_CONTRACT_ADDRESS,
        list_selector=settings.LEDGER_LIST_SELECTOR,
        timeout=settings.LEDGER_RPC_TIMEOUT_SECONDS,
    )
