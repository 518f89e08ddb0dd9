"""
Utility functions for StakeFlow
"""

import logging


def setup_logger(name: str = "stakeflow_sdk", level: int = logging.INFO) -> logging.Logger:
    """
    Attach a console handler to the SDK logger.

    The SDK never configures logging on its own; call this from an
    application to see warnings about stale stake data.

    Args:
        name: Logger name (default: the SDK root logger)
        level: Log level (default: INFO)

    Returns:
        Configured logger
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    if not logger.handlers:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(level)
        formatter = logging.Formatter('%(asctime)s [%(levelname)s] %(message)s')
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    return logger


class Utils:
    """Helper utilities for stake and window values"""

    @staticmethod
    def max_sized_transactions(receive_window: int, packet_size: int) -> int:
        """
        Number of max sized packets a receive window can hold.

        Args:
            receive_window: Window size in bytes
            packet_size: Max packet payload in bytes

        Returns:
            Whole packets that fit
        """
        return receive_window // packet_size

    @staticmethod
    def format_pubkey(pubkey, length: int = 8) -> str:
        """
        Format a public key for display (shortened).

        Args:
            pubkey: Pubkey or base58 string
            length: Number of characters to show from start

        Returns:
            Shortened key with ellipsis
        """
        text = str(pubkey)
        if len(text) <= length:
            return text
        return f"{text[:length]}..."
