"""
Ledger Wallet

Signing identity for table service writes.
Derives the payment key from a mnemonic and signs write statements.
"""

import json
import secrets
from typing import Any, Dict

import pycardano as pc


class LedgerWallet:
    """Signs table service statements with a Cardano payment key"""

    def __init__(self, wallet_mnemonic: str, network: str = "testnet"):
        """
        Initialize wallet from mnemonic

        Args:
            wallet_mnemonic: BIP39 mnemonic phrase
            network: Network type ("testnet" or "mainnet")
        """
        self.network = network
        self.cardano_network = pc.Network.TESTNET if network == "testnet" else pc.Network.MAINNET

        self.wallet = pc.crypto.bip32.HDWallet.from_mnemonic(wallet_mnemonic)
        self.payment_key = self.wallet.derive_from_path("m/1852'/1815'/0'/0/0")
        self.payment_skey = pc.ExtendedSigningKey.from_hdwallet(self.payment_key)
        self.payment_vkey = self.payment_skey.to_verification_key()

        self.enterprise_address = pc.Address(
            payment_part=self.payment_vkey.hash(),
            network=self.cardano_network,
        )

    @property
    def address(self) -> str:
        """Bech32 address used as the caller identity"""
        return str(self.enterprise_address)

    @property
    def key_hash(self) -> str:
        """Payment key hash as hex"""
        return self.payment_vkey.hash().payload.hex()

    def sign(self, payload: bytes) -> bytes:
        """Sign raw bytes with the payment key"""
        return self.payment_skey.sign(payload)

    def sign_statement(self, network_id: int, statement: str) -> Dict[str, Any]:
        """
        Build a signed write envelope for the gateway

        Args:
            network_id: Table service network identifier
            statement: Fully bound statement text

        Returns:
            Envelope with statement, caller, nonce, signature and verification key
        """
        body = {
            "network": network_id,
            "caller": self.address,
            "statement": statement,
            "nonce": secrets.token_hex(8),
        }
        payload = json.dumps(body, sort_keys=True, separators=(",", ":")).encode("utf-8")

        return {
            **body,
            "signature": self.sign(payload).hex(),
            "vkey": self.payment_vkey.payload.hex(),
        }

    def get_wallet_info(self) -> Dict[str, Any]:
        """Get wallet information"""
        return {
            "network": self.network,
            "address": self.address,
            "key_hash": self.key_hash,
        }
