"""
Ledger Chain Context

Network configuration for the ledger-backed table service.
Resolves the network identifier used in generated table names and in
receipt lookups.
"""

import pycardano as pc


# Cardano network magic, used as the table service network identifier
NETWORK_MAGIC = {
    "testnet": 2,  # preview
    "mainnet": 764824073,
}


class LedgerChainContext:
    """Manages ledger network configuration for the table service"""

    def __init__(self, network: str = "testnet", gateway_url: str | None = None):
        """
        Initialize chain context

        Args:
            network: Network type ("testnet" or "mainnet")
            gateway_url: Base URL of the table service gateway
        """
        if network not in NETWORK_MAGIC:
            raise ValueError(f"Unknown network: {network}")
        if not gateway_url:
            raise ValueError("Table service gateway URL required for chain context")

        self.network = network
        self.network_id = NETWORK_MAGIC[network]
        self.base_url = gateway_url.rstrip("/")

        if network == "testnet":
            self.cardano_network = pc.Network.TESTNET
            self.cardanoscan = "https://preview.cardanoscan.io"
        else:
            self.cardano_network = pc.Network.MAINNET
            self.cardanoscan = "https://cardanoscan.io"

    def get_network_info(self) -> dict:
        """
        Get network configuration information

        Returns:
            Dictionary containing network information
        """
        return {
            "network": self.network,
            "network_id": self.network_id,
            "cardano_network": self.cardano_network,
            "base_url": self.base_url,
            "cardanoscan": self.cardanoscan,
        }

    def get_explorer_url(self, tx_hash: str) -> str:
        """Get explorer URL for a transaction"""
        return f"{self.cardanoscan}/transaction/{tx_hash}"

    def table_prefix(self, logical_name: str) -> str:
        """Name used in CREATE TABLE, before the service assigns a table id"""
        return f"{logical_name}_{self.network_id}"

    def table_name(self, logical_name: str, table_id: int | str) -> str:
        """Full generated table name: <logical>_<network_id>_<table_id>"""
        return f"{self.table_prefix(logical_name)}_{table_id}"
