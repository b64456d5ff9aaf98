"""Configuration for the yaswf companion"""
import os

from dotenv import load_dotenv

load_dotenv()


class Config:
    """Minimal configuration"""

    # Local runtime: open a real browser, or only log the URL
    OPEN_BROWSER = os.getenv("YASWF_OPEN_BROWSER", "true").lower() == "true"

    # Simulated message channel (seconds)
    SEND_LATENCY = float(os.getenv("YASWF_SEND_LATENCY", "0.05"))
    SEND_TIMEOUT = float(os.getenv("YASWF_SEND_TIMEOUT", "5.0"))

    DEBUG = os.getenv("DEBUG", "false").lower() == "true"


config = Config()
