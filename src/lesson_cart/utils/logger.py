"""
Logging utilities with security features.

This module provides logging setup with:
- Configurable log levels and output destinations
- Log rotation for file handlers
- Masking of card numbers, CVC codes and phone numbers
"""

import logging
import re
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional


def mask_card_number(card_number: str) -> str:
    """
    Mask a card number, keeping the last four digits.

    Examples:
        >>> mask_card_number("4111 1111 1111 1234")
        '************1234'
        >>> mask_card_number("12")
        '****'
    """
    digits = re.sub(r"\D", "", card_number or "")
    if len(digits) < 4:
        return "****"
    return "*" * (len(digits) - 4) + digits[-4:]


def mask_phone(phone: str) -> str:
    """
    Mask a phone number, keeping the last two digits.

    Examples:
        >>> mask_phone("5551234")
        '*****34'
        >>> mask_phone("")
        '***'
    """
    if not phone or len(phone) <= 2:
        return "***"
    return "*" * (len(phone) - 2) + phone[-2:]


class SensitiveDataFilter(logging.Filter):
    """
    Logging filter that masks payment and contact details.

    Scans the rendered message for card-number-like digit runs, CVC
    assignments and phone assignments and masks them before output.
    """

    _CARD_PATTERN = re.compile(r'\b(?:\d[ -]?){12,18}\d\b')
    _CVC_PATTERN = re.compile(r'(cvc|cvv)["\']?\s*[:=]\s*["\']?(\d+)', re.IGNORECASE)
    _PHONE_PATTERN = re.compile(r'(phone)["\']?\s*[:=]\s*["\']?(\d+)', re.IGNORECASE)

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()

        message = self._CARD_PATTERN.sub(
            lambda m: mask_card_number(m.group(0)), message
        )
        message = self._CVC_PATTERN.sub(r'\1: ***', message)
        message = self._PHONE_PATTERN.sub(
            lambda m: f"{m.group(1)}: {mask_phone(m.group(2))}", message
        )

        record.msg = message
        record.args = None
        return True


def setup_logger(
    name: str = "lesson_cart",
    level: int = logging.INFO,
    log_file: Optional[str] = None
) -> logging.Logger:
    """
    Set up and configure a logger instance.

    Args:
        name: Logger name (default: "lesson_cart")
        level: Logging level (default: logging.INFO)
        log_file: Optional path to log file for file output

    Returns:
        Configured logger instance

    Examples:
        >>> logger = setup_logger()
        >>> logger.info("Cart client started")

        >>> logger = setup_logger(level=logging.DEBUG, log_file="output/logs/cart.log")
    """
    logger = logging.getLogger(name)

    # Avoid duplicate handlers
    if logger.handlers:
        logger.setLevel(level)
        return logger

    logger.setLevel(level)

    formatter = logging.Formatter(
        fmt='%(asctime)s [%(levelname)s] %(name)s:%(funcName)s:%(lineno)d %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    sensitive_filter = SensitiveDataFilter()

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    console_handler.addFilter(sensitive_filter)
    logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=10 * 1024 * 1024,  # 10MB
            backupCount=5,
            encoding='utf-8'
        )
        file_handler.setFormatter(formatter)
        file_handler.addFilter(sensitive_filter)
        logger.addHandler(file_handler)

    return logger
