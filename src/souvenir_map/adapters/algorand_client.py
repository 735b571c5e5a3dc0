"""Algorand asset creation through an algod node."""

import logging
from dataclasses import dataclass

from algosdk import account, mnemonic, transaction
from algosdk.v2client import algod

from souvenir_map.services.minting import LedgerClient

logger = logging.getLogger(__name__)

CONFIRMATION_ROUNDS = 4


@dataclass
class AlgorandMintingClient(LedgerClient):
    """Creates one-of-one assets signed by the configured account."""

    client: algod.AlgodClient
    private_key: str

    @classmethod
    def create(
        cls, node_url: str, api_token: str, account_mnemonic: str
    ) -> "AlgorandMintingClient":
        """Create a client for a token-authenticated algod node."""
        return cls(
            client=algod.AlgodClient(
                "", node_url, headers={"X-Algo-API-Token": api_token}
            ),
            private_key=mnemonic.to_private_key(account_mnemonic),
        )

    @property
    def address(self) -> str:
        return account.address_from_private_key(self.private_key)

    def create_asset(
        self, *, unit_name: str, asset_name: str, url: str, note: bytes
    ) -> str:
        """Submit an asset config transaction and wait for confirmation."""
        sender = self.address
        txn = transaction.AssetConfigTxn(
            sender=sender,
            sp=self.client.suggested_params(),
            total=1,
            decimals=0,
            default_frozen=False,
            unit_name=unit_name,
            asset_name=asset_name,
            url=url,
            note=note,
            manager=sender,
            reserve=sender,
            freeze=sender,
            clawback=sender,
            strict_empty_address_check=False,
        )
        tx_id = self.client.send_transaction(txn.sign(self.private_key))
        confirmed = transaction.wait_for_confirmation(
            self.client, tx_id, CONFIRMATION_ROUNDS
        )
        logger.info(
            "Asset confirmed",
            extra={
                "tx_id": tx_id,
                "asset_id": confirmed.get("asset-index"),
                "round": confirmed.get("confirmed-round"),
            },
        )
        return tx_id
