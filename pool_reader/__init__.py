"""
Solana Pool Reader
Finds the deepest liquidity pool for a token pair across Raydium, Orca and Meteora.
"""

__version__ = "1.0.0"
__author__ = "Solana Pool Reader Team"
__description__ = "Concurrent liquidity pool lookup across Solana DEX providers"
